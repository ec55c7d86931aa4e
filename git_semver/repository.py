"""Read-only access to a git repository.

The resolution engine only talks to the Repository protocol; GitRepository
implements it on top of the git command line.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Protocol

from .errors import RepositoryUnavailable
from .models import Commit, Tag
from .shell import git, git_status

# refname, object and its type, then the same for the object an annotated
# tag points at (empty for lightweight tags)
_TAG_FORMAT = (
    "%(refname:strip=2)%00%(objectname)%00%(objecttype)"
    "%00%(*objectname)%00%(*objecttype)"
)


class Repository(Protocol):
    def current_branch_name(self) -> str: ...

    def head_commit(self) -> Commit: ...

    def list_tags(self) -> list[Tag]: ...

    def is_ancestor(self, candidate: str, of: str) -> bool: ...

    def short_id(self, commit: str) -> str: ...


class GitRepository:
    """Repository backed by the `git` executable.

    Raises:
        RepositoryUnavailable: On construction if `path` is not inside a git
                               work tree, and from any query git fails on.
    """

    def __init__(self, path: str | Path = ".") -> None:
        self.path = str(path)
        inside = self._git("rev-parse", "--is-inside-work-tree")
        if inside != "true":
            raise RepositoryUnavailable(f"{self.path} is not inside a git work tree")

    def _git(self, *args: str) -> str:
        try:
            return git(*args, cwd=self.path)
        except FileNotFoundError as exc:
            raise RepositoryUnavailable(
                f"cannot run git in {self.path}: {exc}"
            ) from exc
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
            raise RepositoryUnavailable(
                f"git {' '.join(args)} failed: {detail}"
            ) from exc

    def current_branch_name(self) -> str:
        """Short name of the checked out branch, "HEAD" when detached."""
        return self._git("rev-parse", "--abbrev-ref", "HEAD")

    def head_commit(self) -> Commit:
        out = self._git("log", "-1", "--format=%H%n%P%n%s", "HEAD")
        lines = out.split("\n")
        commit_id = lines[0]
        parents = tuple(lines[1].split()) if len(lines) > 1 else ()
        summary = lines[2] if len(lines) > 2 else ""
        return Commit(id=commit_id, summary=summary, parents=parents)

    def list_tags(self) -> list[Tag]:
        """All tags that point at a commit, each mapped to that commit.

        Tags on trees or blobs can never be reachable from HEAD and are left out.
        """
        out = self._git("for-each-ref", f"--format={_TAG_FORMAT}", "refs/tags")
        tags: list[Tag] = []
        for line in out.splitlines():
            if not line:
                continue
            name, obj, obj_type, peeled, peeled_type = line.split("\0")
            if (peeled_type or obj_type) != "commit":
                continue
            tags.append(Tag(name=name, target=peeled or obj))
        return tags

    def is_ancestor(self, candidate: str, of: str) -> bool:
        try:
            status = git_status(
                "merge-base", "--is-ancestor", candidate, of, cwd=self.path
            )
        except FileNotFoundError as exc:
            raise RepositoryUnavailable(
                f"cannot run git in {self.path}: {exc}"
            ) from exc
        if status == 0:
            return True
        if status == 1:
            return False
        raise RepositoryUnavailable(
            f"git merge-base --is-ancestor {candidate} {of} failed "
            f"(exit status {status})"
        )

    def short_id(self, commit: str) -> str:
        return self._git("rev-parse", "--short", commit)
