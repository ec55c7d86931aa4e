"""CLI entry point for git-semver."""

from __future__ import annotations

from pathlib import Path

import click

from git_semver.errors import GitSemverError
from git_semver.increment import compile_match_expression
from git_semver.models import (
    DEFAULT_MATCH_EXPRESSION,
    Config,
    IncrementLevel,
    Resolution,
)
from git_semver.pipeline import resolve_version
from git_semver.repository import GitRepository
from git_semver.shell import step, warn
from git_semver.toml import load_defaults
from git_semver.versions import render

LEVELS = [level.value for level in IncrementLevel]


class CommandError(click.ClickException):
    """ClickException that keeps the exit status of a GitSemverError."""

    def __init__(self, error: GitSemverError) -> None:
        super().__init__(str(error))
        self.exit_code = error.exit_code


def _load_project_defaults(
    ctx: click.Context, param: click.Parameter, value: str
) -> str:
    """Install [tool.git-semver] values as defaults for the other options."""
    try:
        defaults = load_defaults(Path(value))
    except GitSemverError as exc:
        raise CommandError(exc) from exc
    if defaults:
        ctx.default_map = {**defaults, **(ctx.default_map or {})}
    return value


def _report(resolution: Resolution) -> None:
    """Print how the version was reached (stderr)."""
    if resolution.head_tag:
        step(f"HEAD is tagged {resolution.head_tag}; reusing it")
        return
    baseline = resolution.baseline
    step(f"branch: {resolution.branch.name} (main: {resolution.branch.is_main})")
    step(f"baseline: {baseline.version} ({baseline.tag or 'no reachable tag'})")
    if baseline.skipped:
        step(f"not versions: {', '.join(baseline.skipped)}")
    if resolution.increment is not None:
        step(
            f"increment: {resolution.increment.level.value} "
            f"(from {resolution.increment.source})"
        )
    if resolution.prerelease is not None:
        step(f"prerelease: {resolution.prerelease}")


@click.command()
@click.version_option(package_name="git-semver")
@click.option(
    "-C",
    "--repo",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    show_default=True,
    is_eager=True,
    callback=_load_project_defaults,
    help="Repository to inspect.",
)
@click.option(
    "-m",
    "--main-branch",
    default="main",
    show_default=True,
    help='Name of the main branch. Useful if you still use "master" or "trunk".',
)
@click.option(
    "-p",
    "--prerelease-id",
    default=None,
    help="Prerelease identifier for non-main branches. [default: branch name slug]",
)
@click.option(
    "-r",
    "--prerelease-revision",
    default=None,
    help="Prerelease revision for non-main branches. [default: short commit hash]",
)
@click.option(
    "-i",
    "--increment",
    type=click.Choice(LEVELS, case_sensitive=False),
    default=None,
    help="Force the increment level on the main branch, ignoring the commit summary.",
)
@click.option(
    "--default-increment",
    type=click.Choice(LEVELS, case_sensitive=False),
    default=IncrementLevel.PATCH.value,
    show_default=True,
    help="Increment level for commits to the main branch that are not merges "
    "naming a level.",
)
@click.option(
    "-e",
    "--match-expression",
    default=DEFAULT_MATCH_EXPRESSION,
    show_default=True,
    help="Regex whose capture group extracts the increment level from a merge "
    "commit summary on the main branch.",
)
@click.option(
    "--tag-prefix",
    default="v",
    show_default=True,
    help='Prefix allowed in front of version tags (e.g. "v1.2.3"). '
    'Use "" to accept bare versions only.',
)
@click.option(
    "--reuse-tag",
    is_flag=True,
    help="If HEAD already carries a version tag, print that version unchanged.",
)
@click.option("-v", "--verbose", is_flag=True, help="Explain the result on stderr.")
def cli(
    repo: str,
    main_branch: str,
    prerelease_id: str | None,
    prerelease_revision: str | None,
    increment: str | None,
    default_increment: str,
    match_expression: str,
    tag_prefix: str,
    reuse_tag: bool,
    verbose: bool,
) -> None:
    """Generate a semantic versioning compliant tag for your HEAD commit."""
    try:
        # Checked before the repository is touched
        expression = compile_match_expression(match_expression)
        config = Config(
            main_branch=main_branch,
            prerelease_id=prerelease_id,
            prerelease_revision=prerelease_revision,
            increment=IncrementLevel(increment.lower()) if increment else None,
            default_increment=IncrementLevel(default_increment.lower()),
            match_expression=expression,
            tag_prefix=tag_prefix,
            reuse_tag=reuse_tag,
        )
        resolution = resolve_version(GitRepository(repo), config)
    except GitSemverError as exc:
        raise CommandError(exc) from exc

    for note in resolution.diagnostics:
        warn(note)
    if verbose:
        _report(resolution)
    click.echo(render(resolution.version))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
