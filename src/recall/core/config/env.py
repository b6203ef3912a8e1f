"""
.env support for RECALL_* settings.

Only variables starting with ``RECALL_`` are taken from .env files, so a
project's unrelated secrets never leak into the process environment.
Values are applied in this order, later files winning:

1. ``$XDG_CONFIG_HOME/recall/.env``
2. ``<project>/.env``
3. ``<project>/.env.local``

Anything already set in the process environment before loading is left
alone.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

from dotenv import dotenv_values

ENV_PREFIX = "RECALL_"


def read_recall_env(path: Path) -> dict[str, str]:
    """
    Read the RECALL_* assignments from one .env file.

    Missing files and keys without a value give nothing.
    """
    if not path.is_file():
        return {}
    return {
        key: value
        for key, value in dotenv_values(path).items()
        if key and key.startswith(ENV_PREFIX) and value is not None
    }


def default_env_files(project_dir: Path) -> list[Path]:
    """The .env files consulted for a project, lowest precedence first."""
    xdg_home = Path(os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config")))
    return [
        xdg_home / "recall" / ".env",
        project_dir / ".env",
        project_dir / ".env.local",
    ]


def load_layered_env(
    *,
    project_dir: Path | None = None,
    env_files: Iterable[Path] | None = None,
) -> dict[str, str]:
    """
    Export RECALL_* values from .env files into ``os.environ``.

    Args:
        project_dir: Project whose .env files are read (defaults to cwd)
        env_files: Explicit files to read instead, lowest precedence first

    Returns:
        The variables this call set, with their final values
    """
    if env_files is None:
        env_files = default_env_files(project_dir or Path.cwd())

    merged: dict[str, str] = {}
    for path in env_files:
        merged.update(read_recall_env(Path(path)))

    applied = {key: value for key, value in merged.items() if key not in os.environ}
    os.environ.update(applied)

    return applied
