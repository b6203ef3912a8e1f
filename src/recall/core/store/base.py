"""
Command store contract.

The pattern detector and suggestion engine depend only on this protocol,
so any storage backend that answers these queries can be plugged in.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from recall.core.store.models import CommandEvent, PatternKind


class StoreError(Exception):
    """A read or write against the command store failed."""


class SuggestionNotFoundError(StoreError):
    """Feedback was given for a suggestion id the store does not know."""


@runtime_checkable
class CommandStore(Protocol):
    """Queries and writes the engine needs from durable storage."""

    def recent_events(self, project_path: str | None, limit: int) -> list[CommandEvent]:
        """Return up to ``limit`` executions, most recent first.

        Args:
            project_path: Restrict to one project (None for all projects)
            limit: Maximum number of events
        """
        ...

    def most_used_events(self, project_path: str | None, limit: int) -> list[CommandEvent]:
        """Return up to ``limit`` distinct commands, highest usage first."""
        ...

    def store_pattern(
        self,
        kind: PatternKind,
        commands: list[str],
        project_path: str | None,
        confidence: float,
        metadata: dict[str, Any],
        occurrences: int = 1,
    ) -> int:
        """Persist a detected pattern and return its id.

        Raises:
            StoreError: If the write fails
        """
        ...

    def store_suggestion(
        self,
        project_path: str,
        context: str | None,
        command: str,
        reason: str | None,
        confidence: float,
    ) -> int:
        """Persist a generated suggestion and return its id.

        Raises:
            StoreError: If the write fails
        """
        ...

    def record_feedback(self, suggestion_id: int, accepted: bool) -> None:
        """Increment the accepted or rejected counter of a suggestion.

        Raises:
            SuggestionNotFoundError: If no suggestion has this id
            StoreError: If the write fails
        """
        ...
