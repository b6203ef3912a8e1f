"""
Pattern detection over command history.

Finds two kinds of pattern:
- Sequential: runs of commands that keep happening in the same order
  ("git add ." then "git commit" then "git push")
- Frequency: tools whose commands are all heavily used (several git
  commands each run dozens of times)

Patterns that clear MIN_CONFIDENCE are written back to the store. Those
writes are best-effort: a failed write is logged and reported in the
result, never raised.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from datetime import datetime, timezone

from recall.core.config.models import RecallConfig
from recall.core.patterns.models import Pattern, PatternDetectionResult, extract_category
from recall.core.store.base import CommandStore
from recall.core.store.models import CommandEvent, PatternKind, PersistenceFailure

logger = logging.getLogger(__name__)

# Need to see a sequence at least this many times before calling it a pattern
MIN_PATTERN_OCCURRENCES = 3

# Only persist (and report frequency patterns) at or above this confidence
MIN_CONFIDENCE = 0.6

# Sequence lengths to look for
WINDOW_SIZES = (2, 3, 4, 5)

# How much history each pass reads
SEQUENCE_HISTORY_LIMIT = 1000
FREQUENCY_COMMAND_LIMIT = 50

# A tool needs at least this many distinct commands to form a frequency pattern
MIN_CATEGORY_SIZE = 3


def extract_sequences(
    commands: Sequence[str],
    window_size: int,
    *,
    chronological: bool = True,
) -> list[tuple[str, ...]]:
    """
    Slide a fixed-size window over a history feed.

    Args:
        commands: Command texts, most recent first (store order)
        window_size: Length of each window
        chronological: Reverse the feed to oldest-first before windowing,
            so a window (A, B) means B was run after A. With False the
            windows follow the feed order (newest first).

    Returns:
        Every contiguous window, as tuples

    Example:
        >>> extract_sequences(["c", "b", "a"], 2)
        [('a', 'b'), ('b', 'c')]
        >>> extract_sequences(["c", "b", "a"], 2, chronological=False)
        [('c', 'b'), ('b', 'a')]
    """
    ordered = list(reversed(commands)) if chronological else list(commands)
    return [
        tuple(ordered[i : i + window_size])
        for i in range(len(ordered) - window_size + 1)
    ]


def sequence_confidence(occurrences: int, window_size: int) -> float:
    """
    Confidence for a sequential pattern.

    Grows with the number of occurrences (up to 0.7) and with the
    sequence length (up to 0.3).
    """
    base_confidence = min(occurrences / 10.0, 0.7)
    length_bonus = min(window_size / 10.0, 0.3)
    return min(base_confidence + length_bonus, 1.0)


def frequency_confidence(average_usage: float) -> float:
    """Confidence for a frequency pattern: average usage / 20, capped at 0.95."""
    return min(average_usage / 20.0, 0.95)


def find_frequent_sequences(
    sequences: list[tuple[str, ...]],
    window_size: int,
    project_path: str | None = None,
) -> list[Pattern]:
    """
    Count identical windows and turn the frequent ones into patterns.

    Windows are compared as ordered tuples. Result order follows the
    first time each window was seen.
    """
    counts = Counter(sequences)

    return [
        Pattern(
            kind=PatternKind.SEQUENTIAL,
            commands=list(sequence),
            confidence=sequence_confidence(occurrences, window_size),
            occurrences=occurrences,
            project_path=project_path,
        )
        for sequence, occurrences in counts.items()
        if occurrences >= MIN_PATTERN_OCCURRENCES
    ]


def categorize_commands(commands: list[CommandEvent]) -> dict[str, list[CommandEvent]]:
    """
    Group commands by category (first word), keeping store order.

    Categories are case-sensitive: "Git" and "git" are different tools.
    """
    categories: dict[str, list[CommandEvent]] = {}
    for event in commands:
        categories.setdefault(extract_category(event.command), []).append(event)
    return categories


class PatternDetector:
    """
    Detects command patterns from the history held in a CommandStore.

    Example:
        >>> detector = PatternDetector(store)
        >>> for pattern in detector.detect_patterns("/home/me/app"):
        ...     print(pattern.kind.value, pattern.commands, pattern.confidence)
    """

    def __init__(
        self,
        store: CommandStore,
        *,
        chronological: bool = True,
        enabled: bool = True,
    ):
        """
        Initialize the detector.

        Args:
            store: Command store to read history from and write patterns to
            chronological: Window history oldest-first (see extract_sequences)
            enabled: When False, detection returns nothing without reading the store
        """
        self.store = store
        self.chronological = chronological
        self.enabled = enabled

    @classmethod
    def from_config(cls, store: CommandStore, config: RecallConfig) -> PatternDetector:
        """Create a detector using the ``patterns`` config section."""
        return cls(
            store,
            chronological=config.patterns.chronological,
            enabled=config.patterns.enabled,
        )

    def detect_patterns(self, project_path: str | None = None) -> list[Pattern]:
        """
        Find all patterns for a scope.

        The list is not sorted by confidence.

        Args:
            project_path: Limit to one project (None for all history)

        Raises:
            StoreError: If reading history fails
        """
        return self.detect(project_path).patterns

    def detect(self, project_path: str | None = None) -> PatternDetectionResult:
        """
        Find all patterns for a scope and persist the confident ones.

        Args:
            project_path: Limit to one project (None for all history)

        Returns:
            Patterns plus any failures from persisting them

        Raises:
            StoreError: If reading history fails
        """
        if not self.enabled:
            logger.debug("Pattern detection disabled, skipping")
            return PatternDetectionResult()

        patterns: list[Pattern] = []
        patterns.extend(self.detect_sequential_patterns(project_path))
        patterns.extend(self.detect_frequency_patterns(project_path))

        failures = self._persist(patterns)

        logger.debug(
            "Detected %d pattern(s) for %s", len(patterns), project_path or "all projects"
        )
        return PatternDetectionResult(patterns=patterns, persistence_failures=failures)

    def detect_sequential_patterns(self, project_path: str | None = None) -> list[Pattern]:
        """Find command sequences of length 2-5 that repeat at least 3 times."""
        events = self.store.recent_events(project_path, SEQUENCE_HISTORY_LIMIT)

        if len(events) < MIN_PATTERN_OCCURRENCES:
            return []

        texts = [event.command for event in events]
        patterns: list[Pattern] = []
        for window_size in WINDOW_SIZES:
            sequences = extract_sequences(texts, window_size, chronological=self.chronological)
            patterns.extend(find_frequent_sequences(sequences, window_size, project_path))

        return patterns

    def detect_frequency_patterns(self, project_path: str | None = None) -> list[Pattern]:
        """Find tools with at least 3 commands whose average usage is high."""
        events = self.store.most_used_events(project_path, FREQUENCY_COMMAND_LIMIT)

        patterns: list[Pattern] = []
        for members in categorize_commands(events).values():
            if len(members) < MIN_CATEGORY_SIZE:
                continue

            total_usage = sum(event.usage_count for event in members)
            confidence = frequency_confidence(total_usage / len(members))

            if confidence >= MIN_CONFIDENCE:
                patterns.append(
                    Pattern(
                        kind=PatternKind.FREQUENCY,
                        commands=[event.command for event in members],
                        confidence=confidence,
                        occurrences=total_usage,
                        project_path=project_path,
                    )
                )

        return patterns

    def _persist(self, patterns: list[Pattern]) -> list[PersistenceFailure]:
        failures: list[PersistenceFailure] = []
        metadata = {
            "detected_at": datetime.now(timezone.utc).isoformat(),
            "method": "auto",
        }

        for pattern in patterns:
            if pattern.confidence < MIN_CONFIDENCE:
                continue
            pattern_metadata = metadata
            if pattern.kind == PatternKind.FREQUENCY:
                pattern_metadata = {**metadata, "category": pattern.category}
            try:
                self.store.store_pattern(
                    pattern.kind,
                    pattern.commands,
                    pattern.project_path,
                    pattern.confidence,
                    pattern_metadata,
                    occurrences=pattern.occurrences,
                )
            except Exception as e:
                # Detection results are returned even when they can't be saved
                logger.warning("Failed to store %s pattern: %s", pattern.kind.value, e)
                failures.append(
                    PersistenceFailure(
                        operation="store_pattern",
                        subject=" -> ".join(pattern.commands),
                        error=str(e),
                    )
                )

        return failures
