"""Data models for git-semver.

These Pydantic models represent the values passed between the stages of a
version resolution. All of them are built once per invocation and never
mutated afterwards.
"""

from __future__ import annotations

import re
from enum import Enum

import semver
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MATCH_EXPRESSION = r"^Merge .*(patch|minor|major)/[\w-]+"


class IncrementLevel(str, Enum):
    """Which version component to bump."""

    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"


class Tag(BaseModel):
    """A git tag and the commit it points at (annotated tags are peeled)."""

    model_config = ConfigDict(frozen=True)

    name: str
    target: str


class Commit(BaseModel):
    """A commit as seen by the engine.

    Attributes:
        id: Full object id.
        summary: First line of the commit message.
        parents: Parent ids, first parent first.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    summary: str = ""
    parents: tuple[str, ...] = ()

    @property
    def is_merge(self) -> bool:
        return len(self.parents) >= 2


class BranchContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    is_main: bool

    @classmethod
    def for_branch(cls, name: str, main_branch: str) -> BranchContext:
        return cls(name=name, is_main=name == main_branch)


class Config(BaseModel):
    """Immutable snapshot of the command line inputs.

    Attributes:
        main_branch: Branch name treated as the main line.
        prerelease_id: Explicit prerelease identifier for non-main builds.
        prerelease_revision: Explicit prerelease revision for non-main builds.
        increment: Forced increment level for main branch builds.
        default_increment: Level used for main branch commits whose summary
                           does not name one.
        match_expression: Compiled regex that extracts a level from the
                          summary of a merge commit on main.
        tag_prefix: Optional literal accepted in front of version tags
                    (e.g. "v" for "v1.2.3"). Never part of the output.
        reuse_tag: Print the version of a tag already on HEAD unchanged.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    main_branch: str = "main"
    prerelease_id: str | None = None
    prerelease_revision: str | None = None
    increment: IncrementLevel | None = None
    default_increment: IncrementLevel = IncrementLevel.PATCH
    match_expression: re.Pattern[str] = Field(
        default_factory=lambda: re.compile(DEFAULT_MATCH_EXPRESSION)
    )
    tag_prefix: str = "v"
    reuse_tag: bool = False


class Prerelease(BaseModel):
    """Prerelease component of a branch build: "{id}.{revision}"."""

    model_config = ConfigDict(frozen=True)

    id: str
    revision: str

    def __str__(self) -> str:
        return f"{self.id}.{self.revision}"


class Baseline(BaseModel):
    """Result of tag discovery.

    Attributes:
        version: Highest-precedence version reachable from HEAD, or 0.0.0.
        tag: Name of the tag the version came from, None when untagged.
        ties: Other reachable tags with the same precedence as `tag`.
        skipped: Tag names that do not parse as versions.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    version: semver.Version
    tag: str | None = None
    ties: tuple[str, ...] = ()
    skipped: tuple[str, ...] = ()


class AmbiguousIncrementMatch(BaseModel):
    """The match expression named more than one level in a commit summary.

    Not an error: `used` (the first literal, left to right) wins and the
    other distinct literals are listed in `ignored`.
    """

    model_config = ConfigDict(frozen=True)

    summary: str
    used: IncrementLevel
    ignored: tuple[IncrementLevel, ...]

    def __str__(self) -> str:
        return (
            f"commit summary names several increment levels; using "
            f"{self.used.value}, ignoring "
            f"{', '.join(lvl.value for lvl in self.ignored)}"
        )


class IncrementDecision(BaseModel):
    """Chosen increment level and where it came from.

    `source` is one of "override", "summary", "default" or "branch".
    """

    model_config = ConfigDict(frozen=True)

    level: IncrementLevel
    source: str
    ambiguous: AmbiguousIncrementMatch | None = None


class Resolution(BaseModel):
    """Everything decided while resolving the version for HEAD."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    version: semver.Version
    branch: BranchContext
    baseline: Baseline
    increment: IncrementDecision | None = None
    prerelease: Prerelease | None = None
    head_tag: str | None = None
    diagnostics: tuple[str, ...] = ()

    def __str__(self) -> str:
        return str(self.version)
