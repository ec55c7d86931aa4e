"""Tag discovery: find the baseline version for HEAD.

The baseline is the highest-precedence version tag whose commit is HEAD or
one of its ancestors. Tags on divergent history are ignored, as are tags
whose names are not versions.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from functools import cmp_to_key

import semver

from .errors import InvalidVersionFormat
from .models import Baseline, Tag
from .versions import ZERO, compare, parse_tag_version


def parse_tags(
    tags: Iterable[Tag], prefix: str = "v"
) -> tuple[list[tuple[Tag, semver.Version]], list[str]]:
    """Split tags into (tag, version) pairs and names that failed to parse.

    Input order is preserved in both lists.
    """
    parsed: list[tuple[Tag, semver.Version]] = []
    skipped: list[str] = []
    for tag in tags:
        try:
            parsed.append((tag, parse_tag_version(tag.name, prefix)))
        except InvalidVersionFormat:
            skipped.append(tag.name)
    return parsed, skipped


def find_baseline(
    tags: Iterable[Tag],
    head_id: str,
    is_ancestor: Callable[[str, str], bool],
    prefix: str = "v",
) -> Baseline:
    """Select the highest valid version tag reachable from HEAD.

    Candidates are checked in descending precedence, so ancestry is only
    queried until the first reachable one is found (plus any candidates of
    equal precedence, which are reported as ties).

    Args:
        tags: All tags in the repository.
        head_id: Commit id of HEAD.
        is_ancestor: is_ancestor(candidate, of) → True if `candidate` is
                     reachable from `of` by following parents.
        prefix: Literal accepted once in front of the version in tag names.

    Returns:
        Baseline with version 0.0.0 and tag None when nothing is reachable.

    Example:
        Tags 1.0.0 (ancestor), 2.0.0 (other branch), junk (ancestor)
        → Baseline(version=1.0.0, tag="1.0.0", skipped=("junk",))
    """
    parsed, skipped = parse_tags(tags, prefix)
    # sorted() is stable: equal versions stay in tag-list order
    candidates = sorted(parsed, key=cmp_to_key(lambda a, b: compare(b[1], a[1])))

    reachable: dict[str, bool] = {}

    def _reachable(target: str) -> bool:
        if target not in reachable:
            reachable[target] = target == head_id or is_ancestor(target, head_id)
        return reachable[target]

    for i, (tag, version) in enumerate(candidates):
        if not _reachable(tag.target):
            continue
        ties = tuple(
            other.name
            for other, other_version in candidates[i + 1 :]
            if compare(other_version, version) == 0 and _reachable(other.target)
        )
        return Baseline(
            version=version, tag=tag.name, ties=ties, skipped=tuple(skipped)
        )

    return Baseline(version=ZERO, skipped=tuple(skipped))


def find_head_tag(
    tags: Iterable[Tag], head_id: str, prefix: str = "v"
) -> tuple[Tag, semver.Version] | None:
    """Return the highest version tag pointing at HEAD itself, if any."""
    parsed, _ = parse_tags((t for t in tags if t.target == head_id), prefix)
    best: tuple[Tag, semver.Version] | None = None
    for tag, version in parsed:
        if best is None or compare(version, best[1]) > 0:
            best = (tag, version)
    return best
