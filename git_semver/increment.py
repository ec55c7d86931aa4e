"""Increment resolution: decide which component of the baseline to bump.

On the main branch the level comes, in order, from an explicit --increment,
from the summary of a merge commit (via the match expression), or from
--default-increment. Branch builds always bump the patch component and are
marked as prereleases elsewhere.
"""

from __future__ import annotations

import re

from .errors import MalformedMatchExpression
from .models import (
    AmbiguousIncrementMatch,
    BranchContext,
    Commit,
    Config,
    IncrementDecision,
    IncrementLevel,
)


def compile_match_expression(pattern: str) -> re.Pattern[str]:
    """Compile the summary match expression.

    Raises:
        MalformedMatchExpression: If the pattern does not compile or has no
                                  capture group to read the level from.
    """
    try:
        compiled = re.compile(pattern)
    except re.error as exc:
        raise MalformedMatchExpression(
            f"invalid match expression {pattern!r}: {exc}"
        ) from exc
    if compiled.groups < 1:
        raise MalformedMatchExpression(
            f"match expression {pattern!r} has no capture group"
        )
    return compiled


def levels_in_summary(
    expression: re.Pattern[str], summary: str
) -> list[IncrementLevel]:
    """Collect increment levels captured from a commit summary.

    Scans every capture group of every non-overlapping match, left to right.
    Captures that are not a level literal are ignored.

    Examples (default expression):
        "Merge pull request #9 from org/minor/x" → [MINOR]
        "Fix typo" → []
    """
    levels: list[IncrementLevel] = []
    for match in expression.finditer(summary):
        for captured in match.groups():
            if captured is None:
                continue
            try:
                levels.append(IncrementLevel(captured.lower()))
            except ValueError:
                continue
    return levels


def resolve_increment(
    config: Config, branch: BranchContext, head: Commit
) -> IncrementDecision:
    """Decide the increment level for this build.

    Order, first match wins:
    1. main branch with config.increment set → that level
    2. main branch, HEAD is a merge and the summary names a level → it
    3. main branch → config.default_increment
    4. any other branch → patch

    When the summary names more than one distinct level the first one is
    used and the rest are reported as an AmbiguousIncrementMatch.
    """
    if not branch.is_main:
        return IncrementDecision(level=IncrementLevel.PATCH, source="branch")

    if config.increment is not None:
        return IncrementDecision(level=config.increment, source="override")

    if head.is_merge:
        levels = levels_in_summary(config.match_expression, head.summary)
        if levels:
            first, *rest = levels
            extra = tuple(dict.fromkeys(lvl for lvl in rest if lvl is not first))
            ambiguous = None
            if extra:
                ambiguous = AmbiguousIncrementMatch(
                    summary=head.summary, used=first, ignored=extra
                )
            return IncrementDecision(
                level=first, source="summary", ambiguous=ambiguous
            )

    return IncrementDecision(level=config.default_increment, source="default")
