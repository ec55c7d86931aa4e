"""Error taxonomy for git-semver.

Every failure that reaches the command line is a GitSemverError carrying the
exit status the process should end with. Exit statuses follow the
sysexits-style ranges used by other command line tools.
"""

from __future__ import annotations

GENERAL_ERROR = 1
USAGE_ERROR = 2
REPOSITORY_ERROR = 3
DATA_ERROR = 65
CONFIG_ERROR = 66


class GitSemverError(Exception):
    """Base class for all errors raised while resolving a version."""

    exit_code = GENERAL_ERROR


class RepositoryUnavailable(GitSemverError):
    """The repository cannot be read (not a repository, permissions, corruption)."""

    exit_code = REPOSITORY_ERROR


class InvalidVersionFormat(GitSemverError, ValueError):
    """Text does not follow the semantic version grammar.

    Tag discovery treats this as routine filtering; anywhere else it is fatal.
    """

    exit_code = DATA_ERROR


class EmptyPrereleaseIdentifier(GitSemverError):
    """The branch name slugs to nothing and no --prerelease-id was given."""

    exit_code = DATA_ERROR

    def __init__(self, branch: str) -> None:
        super().__init__(
            f"branch name {branch!r} yields an empty prerelease identifier; "
            "pass --prerelease-id explicitly"
        )
        self.branch = branch


class MalformedMatchExpression(GitSemverError):
    """The configured match expression is not a usable regex."""

    exit_code = USAGE_ERROR


class ConfigError(GitSemverError):
    """The [tool.git-semver] table in pyproject.toml is invalid."""

    exit_code = CONFIG_ERROR
