"""Tests for git_semver.increment."""

from __future__ import annotations

import re

import pytest

from git_semver.errors import MalformedMatchExpression
from git_semver.increment import (
    compile_match_expression,
    levels_in_summary,
    resolve_increment,
)
from git_semver.models import (
    DEFAULT_MATCH_EXPRESSION,
    BranchContext,
    Commit,
    Config,
    IncrementLevel,
)

MAIN = BranchContext(name="main", is_main=True)
FEATURE = BranchContext(name="feature/login", is_main=False)


def _merge(summary: str) -> Commit:
    return Commit(id="m", summary=summary, parents=("p1", "p2"))


def _direct(summary: str) -> Commit:
    return Commit(id="d", summary=summary, parents=("p1",))


class TestCompileMatchExpression:
    def test_default_compiles(self) -> None:
        assert compile_match_expression(DEFAULT_MATCH_EXPRESSION).groups == 1

    def test_invalid_regex(self) -> None:
        with pytest.raises(MalformedMatchExpression, match="invalid"):
            compile_match_expression("(unclosed")

    def test_requires_capture_group(self) -> None:
        with pytest.raises(MalformedMatchExpression, match="capture group"):
            compile_match_expression("^Merge .*")


class TestLevelsInSummary:
    def test_default_expression(self) -> None:
        expr = re.compile(DEFAULT_MATCH_EXPRESSION)
        assert levels_in_summary(expr, "Merge pull request #9 from org/minor/x") == [
            IncrementLevel.MINOR
        ]

    def test_no_match(self) -> None:
        expr = re.compile(DEFAULT_MATCH_EXPRESSION)
        assert levels_in_summary(expr, "Merge branch 'hotfix'") == []

    def test_ignores_non_level_captures(self) -> None:
        expr = re.compile(r"\[(\w+)\]")
        assert levels_in_summary(expr, "[docs] [major] rewrite") == [
            IncrementLevel.MAJOR
        ]

    def test_case_insensitive_literal(self) -> None:
        expr = re.compile(r"(Major|Minor|Patch)")
        assert levels_in_summary(expr, "Merge Major/x") == [IncrementLevel.MAJOR]

    def test_left_to_right_order(self) -> None:
        expr = re.compile(r"(patch|minor|major)")
        assert levels_in_summary(expr, "minor then major") == [
            IncrementLevel.MINOR,
            IncrementLevel.MAJOR,
        ]


class TestResolveIncrement:
    def test_override_on_main(self) -> None:
        config = Config(increment=IncrementLevel.MAJOR)
        decision = resolve_increment(
            config, MAIN, _merge("Merge pull request #1 from org/patch/x")
        )
        assert decision.level is IncrementLevel.MAJOR
        assert decision.source == "override"

    def test_merge_summary_on_main(self) -> None:
        decision = resolve_increment(
            Config(), MAIN, _merge("Merge pull request #9 from org/minor/x")
        )
        assert decision.level is IncrementLevel.MINOR
        assert decision.source == "summary"

    def test_direct_commit_uses_default(self) -> None:
        config = Config(default_increment=IncrementLevel.MINOR)
        decision = resolve_increment(
            config, MAIN, _direct("Merge pull request #9 from org/major/x")
        )
        assert decision.level is IncrementLevel.MINOR
        assert decision.source == "default"

    def test_merge_without_level_uses_default(self) -> None:
        decision = resolve_increment(Config(), MAIN, _merge("Merge branch 'x'"))
        assert decision.level is IncrementLevel.PATCH
        assert decision.source == "default"

    def test_non_main_is_always_patch(self) -> None:
        config = Config(increment=IncrementLevel.MAJOR)
        decision = resolve_increment(
            config, FEATURE, _merge("Merge pull request #2 from org/major/y")
        )
        assert decision.level is IncrementLevel.PATCH
        assert decision.source == "branch"

    def test_ambiguous_summary_takes_first(self) -> None:
        config = Config(match_expression=re.compile(r"(patch|minor|major)"))
        summary = "Merge major and minor and major"
        decision = resolve_increment(config, MAIN, _merge(summary))
        assert decision.level is IncrementLevel.MAJOR
        assert decision.ambiguous is not None
        assert decision.ambiguous.used is IncrementLevel.MAJOR
        assert decision.ambiguous.ignored == (IncrementLevel.MINOR,)
        assert decision.ambiguous.summary == summary

    def test_repeated_level_is_not_ambiguous(self) -> None:
        config = Config(match_expression=re.compile(r"(patch|minor|major)"))
        decision = resolve_increment(config, MAIN, _merge("minor: minor fixes"))
        assert decision.level is IncrementLevel.MINOR
        assert decision.ambiguous is None
