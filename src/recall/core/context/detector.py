"""
Context sensing for suggestions.

Provides the ContextProvider contract the suggestion engine consumes and
a default ContextDetector that reads the filesystem, git and the clock.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Protocol, runtime_checkable

from recall.core.context.models import ContextSnapshot, ProjectType
from recall.utils.git import get_current_branch
from recall.utils.project import resolve_scope

logger = logging.getLogger(__name__)

# Marker files checked in order; first match wins
PROJECT_TYPE_MARKERS: list[tuple[tuple[str, ...], ProjectType]] = [
    (("package.json",), ProjectType.NODE),
    (("Cargo.toml",), ProjectType.RUST),
    (("requirements.txt", "setup.py", "pyproject.toml"), ProjectType.PYTHON),
    (("go.mod",), ProjectType.GO),
    (("pom.xml",), ProjectType.JAVA),
    (("Gemfile",), ProjectType.RUBY),
]


class ContextUnavailableError(Exception):
    """The working context (directory) could not be resolved."""


@runtime_checkable
class ContextProvider(Protocol):
    """Source of context snapshots."""

    def snapshot(self) -> ContextSnapshot:
        """Take a fresh snapshot.

        Raises:
            ContextUnavailableError: If the working directory cannot be resolved
        """
        ...


def detect_project_type(directory: Path) -> ProjectType:
    """
    Classify a project by the marker files in ``directory``.

    Example:
        >>> detect_project_type(Path("/work/my-node-app"))  # has package.json
        <ProjectType.NODE: 'node'>
    """
    for markers, project_type in PROJECT_TYPE_MARKERS:
        if any((directory / marker).exists() for marker in markers):
            return project_type
    return ProjectType.OTHER


class ContextDetector:
    """
    Default context provider.

    The snapshot's working directory is the project root containing the
    start directory (or the start directory itself outside any project),
    which is the scope commands are recorded under.
    """

    def __init__(
        self,
        start: Path | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """
        Initialize the detector.

        Args:
            start: Directory to sense from (defaults to cwd at snapshot time)
            clock: Returns the current local time (defaults to datetime.now)
        """
        self.start = start
        self.clock = clock or datetime.now

    def snapshot(self) -> ContextSnapshot:
        """Take a fresh context snapshot."""
        try:
            working_directory = resolve_scope(self.start)
        except OSError as e:
            raise ContextUnavailableError(f"Cannot resolve working directory: {e}") from e

        snapshot = ContextSnapshot.at(
            self.clock(),
            working_directory=str(working_directory),
            git_branch=get_current_branch(working_directory),
            project_type=detect_project_type(working_directory),
        )
        logger.debug(
            "Context: %s, %s %s, branch=%s, type=%s",
            snapshot.working_directory,
            snapshot.day_of_week.value,
            snapshot.time_of_day.value,
            snapshot.git_branch,
            snapshot.project_type.value if snapshot.project_type else None,
        )
        return snapshot
