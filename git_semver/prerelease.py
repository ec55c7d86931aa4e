"""Prerelease composition for builds off the main branch."""

from __future__ import annotations

import re

from .errors import EmptyPrereleaseIdentifier, InvalidVersionFormat
from .models import BranchContext, Config, Prerelease
from .versions import is_valid_prerelease

_NON_ALNUM = re.compile(r"[^0-9a-z]+")


def slugify(name: str) -> str:
    """Reduce a branch name to a semver-legal identifier.

    Examples:
        "feature/login" → "feature-login"
        "Fix_Bug--42" → "fix-bug-42"
        "///" → ""
    """
    return _NON_ALNUM.sub("-", name.lower()).strip("-")


def compose_prerelease(
    config: Config, branch: BranchContext, short_id: str
) -> Prerelease | None:
    """Build the "{id}.{revision}" prerelease for a branch build.

    Returns None on the main branch. Explicit --prerelease-id and
    --prerelease-revision values are used verbatim; otherwise the id is the
    branch name slug and the revision is the abbreviated HEAD commit id.

    Raises:
        EmptyPrereleaseIdentifier: No explicit id and the slug is empty.
        InvalidVersionFormat: The composed value is not a legal prerelease,
                              e.g. an all-digit short hash with a leading zero.
    """
    if branch.is_main:
        return None

    if config.prerelease_id is not None:
        ident = config.prerelease_id
    else:
        ident = slugify(branch.name)
        if not ident:
            raise EmptyPrereleaseIdentifier(branch.name)

    revision = (
        config.prerelease_revision
        if config.prerelease_revision is not None
        else short_id
    )

    if not is_valid_prerelease(ident):
        raise InvalidVersionFormat(
            f"prerelease identifier {ident!r} is not valid semver; "
            "pass a different --prerelease-id"
        )
    if not is_valid_prerelease(revision):
        raise InvalidVersionFormat(
            f"prerelease revision {revision!r} is not valid semver; "
            "pass a different --prerelease-revision"
        )
    return Prerelease(id=ident, revision=revision)
