"""Version parsing, ordering and bumping utilities.

Thin layer over semver.Version that enforces the strict semver 2.0.0 grammar
(no padding of partial versions) and knows how version tags are spelled.
"""

from __future__ import annotations

import semver

from .errors import InvalidVersionFormat
from .models import IncrementLevel

ZERO = semver.Version(0, 0, 0)


def parse_version(text: str) -> semver.Version:
    """Parse a strict semantic version string.

    Examples:
        "1.2.3" → Version(1, 2, 3)
        "1.2.3-rc.1+build.5" → Version(1, 2, 3, "rc.1", "build.5")

    Raises:
        InvalidVersionFormat: For anything else, including "1.2", "01.2.3"
                              and "1.0.0abc".
    """
    try:
        return semver.Version.parse(text)
    except (ValueError, TypeError) as exc:
        raise InvalidVersionFormat(f"not a semantic version: {text!r}") from exc


def parse_tag_version(name: str, prefix: str = "v") -> semver.Version:
    """Parse a tag name as a version, allowing one leading `prefix`.

    Examples (prefix "v"):
        "1.2.3" → 1.2.3
        "v1.2.3" → 1.2.3
        "vv1.2.3" → InvalidVersionFormat
    """
    if prefix and name.startswith(prefix):
        return parse_version(name[len(prefix) :])
    return parse_version(name)


def render(version: semver.Version) -> str:
    """Canonical string form, the inverse of parse_version()."""
    return str(version)


def compare(a: semver.Version, b: semver.Version) -> int:
    """Compare by semver precedence: -1, 0 or 1. Build metadata is ignored."""
    return a.compare(b)


def bump(version: semver.Version, level: IncrementLevel) -> semver.Version:
    """Bump one component, zeroing the ones below it.

    The result is always a release version: prerelease and build metadata
    are dropped.

    Examples:
        bump(1.2.3, patch) → 1.2.4
        bump(1.2.3, minor) → 1.3.0
        bump(1.2.3-rc.1, major) → 2.0.0
    """
    if level is IncrementLevel.MAJOR:
        return version.bump_major()
    if level is IncrementLevel.MINOR:
        return version.bump_minor()
    return version.bump_patch()


def is_valid_prerelease(text: str) -> bool:
    """Check that `text` is a legal semver prerelease component.

    Dot-separated identifiers, each non-empty and made of [0-9A-Za-z-];
    numeric identifiers must not have leading zeros. A "+" is rejected: it
    would start build metadata instead.
    """
    if not text:
        return False
    try:
        version = semver.Version.parse(f"0.0.0-{text}")
    except ValueError:
        return False
    return version.build is None
