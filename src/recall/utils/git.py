"""
Git utilities for recall.
"""

from __future__ import annotations

import subprocess
from pathlib import Path


def get_current_branch(cwd: Path | None = None) -> str | None:
    """Get the current branch name.

    Args:
        cwd: Directory to run git in (defaults to the process cwd)

    Returns:
        Branch name, ``"HEAD"`` on a detached head, or None if not in a
        git repo or git is not installed
    """
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--abbrev-ref", "HEAD"],
            capture_output=True,
            text=True,
            check=True,
            cwd=cwd,
        )
    except subprocess.CalledProcessError:
        return None
    except FileNotFoundError:
        # Git not installed
        return None

    branch = result.stdout.strip()
    return branch or None
