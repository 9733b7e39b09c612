"""
Version information for the Aruba invoice extractor.

The release version lives in BASE_VERSION; when the code runs from a git
checkout the short commit hash is reported alongside it.
"""

import subprocess
import sys
from pathlib import Path
from typing import Optional


BASE_VERSION = "0.1.0"


def _run_git(*args: str) -> Optional[str]:
    """Run a git command in the repository root, returning stdout or None."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=Path(__file__).parent.parent,
            capture_output=True,
            text=True,
            timeout=5
        )
    except (subprocess.TimeoutExpired, subprocess.SubprocessError, FileNotFoundError, OSError):
        return None

    if result.returncode != 0:
        return None
    return result.stdout.strip()


def get_git_commit_hash(short: bool = True) -> Optional[str]:
    """
    Get the current git commit hash.

    Args:
        short: If True, return short hash (7 chars), otherwise full hash

    Returns:
        Git commit hash string or None if not available
    """
    if short:
        return _run_git("rev-parse", "--short", "HEAD")
    return _run_git("rev-parse", "HEAD")


def get_version() -> str:
    """The release version."""
    return BASE_VERSION


def get_version_info() -> dict:
    """
    Get version details for display.

    Returns:
        Dictionary containing version details
    """
    commit_hash = get_git_commit_hash(short=True)
    return {
        "version": BASE_VERSION,
        "commit_hash": commit_hash,
        "git_available": commit_hash is not None,
        "python_version": sys.version.split()[0],
    }


__version__ = BASE_VERSION
