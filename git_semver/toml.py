"""Project defaults from pyproject.toml.

A repository can pin its conventions in a [tool.git-semver] table instead of
repeating flags in every pipeline:

    [tool.git-semver]
    main-branch = "trunk"
    default-increment = "minor"
    tag-prefix = "release-"

Values become click defaults, so flags given on the command line still win.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import ParseError

from .errors import ConfigError

# table key → (click parameter name, expected value type)
KNOWN_KEYS: dict[str, tuple[str, type]] = {
    "main-branch": ("main_branch", str),
    "prerelease-id": ("prerelease_id", str),
    "prerelease-revision": ("prerelease_revision", str),
    "increment": ("increment", str),
    "default-increment": ("default_increment", str),
    "match-expression": ("match_expression", str),
    "tag-prefix": ("tag_prefix", str),
    "reuse-tag": ("reuse_tag", bool),
}


def load_pyproject(path: Path) -> tomlkit.TOMLDocument:
    """Load and parse a pyproject.toml file.

    Raises:
        ConfigError: If the file is not valid TOML.
    """
    try:
        return tomlkit.parse(path.read_text())
    except ParseError as exc:
        raise ConfigError(f"{path}: {exc}") from exc


def get_tool_table(doc: tomlkit.TOMLDocument) -> dict[str, Any]:
    """Extract [tool.git-semver] as plain Python values ({} when absent)."""
    table = doc.get("tool", {}).get("git-semver", {})
    return dict(table.unwrap()) if hasattr(table, "unwrap") else dict(table)


def load_defaults(repo: Path) -> dict[str, Any]:
    """Read click defaults from <repo>/pyproject.toml.

    Returns an empty dict when the file or the table does not exist.

    Raises:
        ConfigError: On unknown keys or values of the wrong type.
    """
    pyproject = repo / "pyproject.toml"
    if not pyproject.is_file():
        return {}

    table = get_tool_table(load_pyproject(pyproject))
    defaults: dict[str, Any] = {}
    for key, value in table.items():
        if key not in KNOWN_KEYS:
            raise ConfigError(
                f"{pyproject}: unknown key {key!r} in [tool.git-semver]; "
                f"expected one of {', '.join(sorted(KNOWN_KEYS))}"
            )
        param, expected = KNOWN_KEYS[key]
        if not isinstance(value, expected):
            kind = "a boolean" if expected is bool else "a string"
            raise ConfigError(
                f"{pyproject}: [tool.git-semver] {key} must be {kind}"
            )
        defaults[param] = value
    return defaults
