"""Shell and git utilities.

Provides a thin wrapper around subprocess calls to git, plus output helpers.
Standard output is reserved for the resolved version, so every message
printed here goes to stderr.
"""

from __future__ import annotations

import subprocess
import sys


def git(*args: str, cwd: str | None = None, check: bool = True) -> str:
    """Run a git command and return stdout.

    `safe.directory=*` is passed on every call so checkouts owned by another
    user (common in CI containers) can be read without changing any git
    config file.

    Args:
        *args: Arguments to pass to git (e.g., "tag", "--list").
        cwd: Directory to run git in; the current directory when None.
        check: If True (default), raise on non-zero exit. Set to False
               for commands whose exit status carries an answer.

    Returns:
        Stripped stdout from the git command.
    """
    result = subprocess.run(
        ["git", "-c", "safe.directory=*", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=check,
    )
    return result.stdout.strip()


def git_status(*args: str, cwd: str | None = None) -> int:
    """Run a git command and return only its exit status."""
    result = subprocess.run(
        ["git", "-c", "safe.directory=*", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
    )
    return result.returncode


def step(msg: str) -> None:
    """Print a trace line (shown with --verbose)."""
    print(f"  {msg}", file=sys.stderr)


def warn(msg: str) -> None:
    """Print a diagnostic that does not stop the run."""
    print(f"Warning: {msg}", file=sys.stderr)
