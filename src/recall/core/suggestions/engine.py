"""
Suggestion engine for recall.

Composes the suggestion strategies, ranks the candidates, persists the
winners and records feedback on them.
"""

from __future__ import annotations

import logging

from recall.core.config.models import RecallConfig
from recall.core.context.detector import ContextDetector, ContextProvider
from recall.core.context.models import ContextSnapshot
from recall.core.patterns.detector import PatternDetector
from recall.core.store.base import CommandStore
from recall.core.store.models import PersistenceFailure
from recall.core.suggestions.models import SmartSuggestion, SuggestionResult
from recall.core.suggestions.ranking import MAX_SUGGESTIONS, rank_suggestions
from recall.core.suggestions.sources import (
    suggest_from_context,
    suggest_from_patterns,
    suggest_from_time,
)

logger = logging.getLogger(__name__)

# Recent commands fetched to find the last one run
RECENT_COMMAND_LOOKUP = 5


class SuggestionEngine:
    """
    Engine for generating and ranking next-command suggestions.

    Collects candidates from detected patterns, the project context and
    the time of week, keeps the best MAX_SUGGESTIONS and stores them so
    feedback can be recorded later.

    Example:
        >>> engine = SuggestionEngine(store)
        >>> for suggestion in engine.generate_suggestions():
        ...     print(suggestion.command, "-", suggestion.reason)
    """

    def __init__(
        self,
        store: CommandStore,
        *,
        detector: PatternDetector | None = None,
        context_provider: ContextProvider | None = None,
        enabled: bool = True,
        limit: int = MAX_SUGGESTIONS,
    ):
        """
        Initialize suggestion engine.

        Args:
            store: Command store for history reads and suggestion writes
            detector: Pattern detector (defaults to one over ``store``)
            context_provider: Snapshot source (defaults to ContextDetector())
            enabled: When False, generation returns no suggestions
            limit: Maximum number of suggestions per run
        """
        self.store = store
        self.detector = detector or PatternDetector(store)
        self.context_provider = context_provider or ContextDetector()
        self.enabled = enabled
        self.limit = limit

    @classmethod
    def from_config(
        cls,
        store: CommandStore,
        config: RecallConfig,
        context_provider: ContextProvider | None = None,
    ) -> SuggestionEngine:
        """Create an engine (and its detector) from configuration."""
        return cls(
            store,
            detector=PatternDetector.from_config(store, config),
            context_provider=context_provider,
            enabled=config.suggestions.enabled,
        )

    def generate_suggestions(self) -> list[SmartSuggestion]:
        """
        Get ranked suggestions for the current context.

        Returns:
            At most ``limit`` suggestions, highest confidence first

        Raises:
            ContextUnavailableError: If the context can't be sensed
            StoreError: If reading history fails
        """
        return self.generate().suggestions

    def generate(self, snapshot: ContextSnapshot | None = None) -> SuggestionResult:
        """
        Generate, rank and persist suggestions.

        Args:
            snapshot: Context to suggest for (defaults to a fresh snapshot)

        Returns:
            The snapshot used, the suggestions (with stored ids where the
            write succeeded) and any persistence failures

        Raises:
            ContextUnavailableError: If the context can't be sensed
            StoreError: If reading history fails
        """
        if snapshot is None:
            snapshot = self.context_provider.snapshot()

        if not self.enabled:
            logger.debug("Suggestions disabled, skipping")
            return SuggestionResult(snapshot=snapshot)

        candidates, failures = self._suggest_from_patterns(snapshot)
        candidates.extend(suggest_from_context(snapshot))
        candidates.extend(suggest_from_time(snapshot))

        ranked = rank_suggestions(candidates, limit=self.limit)
        stored, store_failures = self._persist(snapshot, ranked)

        logger.debug(
            "Generated %d suggestion(s) from %d candidate(s) for %s",
            len(stored),
            len(candidates),
            snapshot.working_directory,
        )
        return SuggestionResult(
            snapshot=snapshot,
            suggestions=stored,
            persistence_failures=failures + store_failures,
        )

    def record_feedback(self, suggestion_id: int, accepted: bool) -> None:
        """
        Record whether a suggestion was used.

        Only the stored counters change; stored confidence is left alone.

        Raises:
            SuggestionNotFoundError: If the suggestion doesn't exist
            StoreError: If the write fails
        """
        self.store.record_feedback(suggestion_id, accepted)
        logger.debug(
            "Suggestion %d %s", suggestion_id, "accepted" if accepted else "rejected"
        )

    def _suggest_from_patterns(
        self, snapshot: ContextSnapshot
    ) -> tuple[list[SmartSuggestion], list[PersistenceFailure]]:
        detection = self.detector.detect(snapshot.working_directory)

        last_command: str | None = None
        if any(pattern.is_sequence for pattern in detection.patterns):
            recent = self.store.recent_events(snapshot.working_directory, RECENT_COMMAND_LOOKUP)
            if recent:
                last_command = recent[0].command

        suggestions = suggest_from_patterns(detection.patterns, last_command)
        return suggestions, list(detection.persistence_failures)

    def _persist(
        self, snapshot: ContextSnapshot, suggestions: list[SmartSuggestion]
    ) -> tuple[list[SmartSuggestion], list[PersistenceFailure]]:
        stored: list[SmartSuggestion] = []
        failures: list[PersistenceFailure] = []

        for suggestion in suggestions:
            try:
                suggestion_id = self.store.store_suggestion(
                    snapshot.working_directory,
                    snapshot.time_of_day.value,
                    suggestion.command,
                    suggestion.reason,
                    suggestion.confidence,
                )
            except Exception as e:
                # The suggestion is still returned, just without an id
                logger.warning("Failed to store suggestion '%s': %s", suggestion.command, e)
                failures.append(
                    PersistenceFailure(
                        operation="store_suggestion",
                        subject=suggestion.command,
                        error=str(e),
                    )
                )
                stored.append(suggestion)
                continue

            stored.append(suggestion.model_copy(update={"id": suggestion_id}))

        return stored, failures
