"""Shared test fixtures."""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Iterable
from pathlib import Path

import pytest

from git_semver.models import Commit, Tag


class FakeRepository:
    """In-memory Repository: a commit graph, a branch name and some tags."""

    def __init__(
        self,
        commits: Iterable[Commit],
        head: str,
        branch: str = "main",
        tags: dict[str, str] | None = None,
    ) -> None:
        self.commits = {c.id: c for c in commits}
        self.head = head
        self.branch = branch
        self.tags = [Tag(name=n, target=t) for n, t in (tags or {}).items()]
        self.ancestry_queries: list[tuple[str, str]] = []

    def current_branch_name(self) -> str:
        return self.branch

    def head_commit(self) -> Commit:
        return self.commits[self.head]

    def list_tags(self) -> list[Tag]:
        return list(self.tags)

    def is_ancestor(self, candidate: str, of: str) -> bool:
        self.ancestry_queries.append((candidate, of))
        seen: set[str] = set()
        queue = [of]
        while queue:
            node = queue.pop(0)
            if node == candidate:
                return True
            if node in seen or node not in self.commits:
                continue
            seen.add(node)
            queue.extend(self.commits[node].parents)
        return False

    def short_id(self, commit: str) -> str:
        return commit[:7]


@pytest.fixture
def linear_history() -> list[Commit]:
    """a1 ← b2 ← c3, with c3 a plain commit."""
    return [
        Commit(id="a1" * 20, summary="Initial commit"),
        Commit(id="b2" * 20, summary="Add feature", parents=("a1" * 20,)),
        Commit(id="c3" * 20, summary="Fix typo", parents=("b2" * 20,)),
    ]


@pytest.fixture
def merge_history() -> list[Commit]:
    """Main line a1 ← m1, side line a1 ← s1, and a merge m2 of s1 into m1.

    s1 is reachable from m2; d1 hangs off a1 on a divergent branch.
    """
    a1, m1, s1, m2, d1 = "a1" * 20, "e1" * 20, "5a" * 20, "e2" * 20, "d1" * 20
    return [
        Commit(id=a1, summary="Initial commit"),
        Commit(id=m1, summary="Direct fix", parents=(a1,)),
        Commit(id=s1, summary="Work on feature", parents=(a1,)),
        Commit(
            id=m2,
            summary="Merge pull request #9 from org/minor/x",
            parents=(m1, s1),
        ),
        Commit(id=d1, summary="Elsewhere", parents=(a1,)),
    ]


@pytest.fixture
def make_repo() -> type[FakeRepository]:
    """Factory for in-memory repositories."""
    return FakeRepository


def run_git(path: Path, *args: str) -> str:
    """Run git in `path` with a fixed identity and no signing."""
    result = subprocess.run(
        [
            "git",
            "-c",
            "user.name=Test",
            "-c",
            "user.email=test@example.com",
            "-c",
            "commit.gpgsign=false",
            "-c",
            "tag.gpgsign=false",
            *args,
        ],
        cwd=path,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """A real repository on main with two commits and 1.0.0 on the first."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    run_git(tmp_path, "init", "-q")
    run_git(tmp_path, "symbolic-ref", "HEAD", "refs/heads/main")
    (tmp_path / "README").write_text("one\n")
    run_git(tmp_path, "add", "README")
    run_git(tmp_path, "commit", "-q", "-m", "Initial commit")
    run_git(tmp_path, "tag", "1.0.0")
    (tmp_path / "README").write_text("two\n")
    run_git(tmp_path, "commit", "-q", "-am", "Fix typo")
    return tmp_path


@pytest.fixture
def git_cmd():
    """run_git(path, *args) for tests that shape a real repository."""
    return run_git
