"""
Project root discovery utilities for recall.

Commands are scoped by project root, so recording and suggesting from
any subdirectory of a project end up in the same scope.
"""

from pathlib import Path

# Markers that indicate a project root, in order of priority
PROJECT_ROOT_MARKERS = [
    ".git",
    "Cargo.toml",
    "package.json",
    "go.mod",
    "pom.xml",
    "build.gradle",
    "requirements.txt",
    "pyproject.toml",
    "Gemfile",
    "composer.json",
]


def find_project_root(start: Path | None = None) -> Path | None:
    """
    Find the project root directory by searching upward for marker files.

    Args:
        start: Directory to start searching from. Defaults to current working directory.

    Returns:
        Path to the project root directory, or None if not found.

    Example:
        >>> find_project_root(Path("/project/deep/nested/dir"))
        PosixPath('/project')
    """
    if start is None:
        start = Path.cwd()

    start = start.resolve()

    current = start
    while True:
        for marker in PROJECT_ROOT_MARKERS:
            if (current / marker).exists():
                return current
        if current == current.parent:  # Filesystem root
            return None
        current = current.parent


def resolve_scope(start: Path | None = None) -> Path:
    """
    Resolve the project scope for a directory.

    Returns the project root when one is found, otherwise the directory
    itself.

    Raises:
        FileNotFoundError: If the current directory no longer exists
    """
    if start is None:
        start = Path.cwd()
    return find_project_root(start) or start.resolve()


def get_markers(path: Path) -> list[str]:
    """List the project markers present directly in ``path``."""
    return [marker for marker in PROJECT_ROOT_MARKERS if (path / marker).exists()]
