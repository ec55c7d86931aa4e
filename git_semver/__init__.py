"""git-semver: a semantic version for HEAD, derived from tags and branch."""

from .pipeline import build_version, resolve_version

__all__ = ["build_version", "resolve_version"]
