"""Version resolution: tags → increment → prerelease → version.

This module ties the stages together:
1. Read branch, HEAD and tags from the repository
2. Find the baseline version among tags reachable from HEAD
3. Decide the increment level (main branch) or patch (other branches)
4. Compose the prerelease for non-main branches
5. Bump the baseline and attach the prerelease

The repository is only queried, never modified.
"""

from __future__ import annotations

import semver

from .increment import resolve_increment
from .models import (
    Baseline,
    BranchContext,
    Config,
    IncrementLevel,
    Prerelease,
    Resolution,
)
from .prerelease import compose_prerelease
from .repository import Repository
from .tags import find_baseline, find_head_tag
from .versions import bump


def build_version(
    baseline: semver.Version,
    level: IncrementLevel,
    prerelease: Prerelease | None = None,
) -> semver.Version:
    """Bump the baseline and attach the prerelease, if any.

    Examples:
        build_version(1.4.2, minor) → 1.5.0
        build_version(2.0.0, patch, feature-login.abc1234)
            → 2.0.1-feature-login.abc1234
    """
    bumped = bump(baseline, level)
    if prerelease is None:
        return bumped
    return bumped.replace(prerelease=str(prerelease))


def _ignored_overrides(config: Config, branch: BranchContext) -> list[str]:
    """Describe flags that do not apply to this kind of build."""
    notes: list[str] = []
    if branch.is_main:
        if config.prerelease_id is not None:
            notes.append(f"--prerelease-id ignored on main branch {branch.name!r}")
        if config.prerelease_revision is not None:
            notes.append(
                f"--prerelease-revision ignored on main branch {branch.name!r}"
            )
    elif config.increment is not None:
        notes.append(f"--increment ignored on non-main branch {branch.name!r}")
    return notes


def _baseline_notes(baseline: Baseline) -> list[str]:
    if not baseline.ties:
        return []
    return [
        f"tags {', '.join((baseline.tag or '', *baseline.ties))} share version "
        f"{baseline.version}; using {baseline.tag}"
    ]


def resolve_version(repo: Repository, config: Config) -> Resolution:
    """Compute the version for HEAD.

    Args:
        repo: Read-only repository queries.
        config: Command line inputs.

    Returns:
        Resolution whose `version` is the result; the other fields record
        how it was reached.

    Raises:
        RepositoryUnavailable: If the repository cannot be read.
        EmptyPrereleaseIdentifier: On a branch whose name slugs to nothing.
        InvalidVersionFormat: If the composed prerelease is not valid semver.
    """
    branch = BranchContext.for_branch(repo.current_branch_name(), config.main_branch)
    head = repo.head_commit()
    tags = repo.list_tags()

    if config.reuse_tag:
        found = find_head_tag(tags, head.id, config.tag_prefix)
        if found is not None:
            tag, version = found
            return Resolution(
                version=version,
                branch=branch,
                baseline=Baseline(version=version, tag=tag.name),
                head_tag=tag.name,
            )

    baseline = find_baseline(tags, head.id, repo.is_ancestor, config.tag_prefix)
    decision = resolve_increment(config, branch, head)

    diagnostics = _baseline_notes(baseline) + _ignored_overrides(config, branch)
    if decision.ambiguous is not None:
        diagnostics.append(str(decision.ambiguous))

    prerelease = None
    if not branch.is_main:
        prerelease = compose_prerelease(config, branch, repo.short_id(head.id))

    return Resolution(
        version=build_version(baseline.version, decision.level, prerelease),
        branch=branch,
        baseline=baseline,
        increment=decision,
        prerelease=prerelease,
        diagnostics=tuple(diagnostics),
    )
