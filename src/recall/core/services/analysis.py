"""
Analysis service: one call that mines patterns and suggests commands.

Wraps the pattern detector and the suggestion engine so any interface
(CLI, shell hook) can ask for a complete analysis without wiring the
pieces together itself.

Usage:
    >>> from recall.core.services.analysis import Analyzer
    >>> analyzer = Analyzer.from_config()
    >>> report = analyzer.analyze("/work/app")
    >>> report.pattern_count, report.suggestion_count
    (2, 4)
"""

from __future__ import annotations

import logging
from pathlib import Path

from recall.core.config.loader import load_config
from recall.core.config.models import HistoryConfig, RecallConfig
from recall.core.context.detector import ContextProvider
from recall.core.patterns.detector import PatternDetector
from recall.core.services.models import AnalysisReport
from recall.core.store.sqlite import SQLiteCommandStore
from recall.core.suggestions.engine import SuggestionEngine

logger = logging.getLogger(__name__)


class Analyzer:
    """
    Runs pattern detection and then suggestion generation.

    Errors from either step propagate; a report is only returned when
    both steps completed.
    """

    def __init__(
        self,
        detector: PatternDetector,
        engine: SuggestionEngine,
        *,
        store: SQLiteCommandStore | None = None,
        history: HistoryConfig | None = None,
    ) -> None:
        """
        Initialize analyzer.

        Args:
            detector: Pattern detector for the first step
            engine: Suggestion engine for the second step
            store: Store to prune in ``cleanup`` (None disables cleanup).
                Must be a SQLiteCommandStore: ``prune_history`` is not part
                of the CommandStore protocol.
            history: Retention limits used by ``cleanup``
        """
        self.detector = detector
        self.engine = engine
        self.store = store
        self.history = history or HistoryConfig()

    @classmethod
    def from_config(
        cls,
        config: RecallConfig | None = None,
        context_provider: ContextProvider | None = None,
        project_dir: Path | None = None,
    ) -> Analyzer:
        """
        Create an analyzer over the configured SQLite database.

        Args:
            config: Configuration (loaded for ``project_dir`` if None)
            context_provider: Snapshot source for the engine
            project_dir: Project directory used when loading configuration

        Raises:
            StoreError: If the database cannot be opened
        """
        if config is None:
            config = load_config(project_dir)

        store = SQLiteCommandStore(config.database.path)
        return cls(
            PatternDetector.from_config(store, config),
            SuggestionEngine.from_config(store, config, context_provider=context_provider),
            store=store,
            history=config.history,
        )

    def analyze(self, project_path: str | None = None) -> AnalysisReport:
        """
        Detect patterns for a scope, then generate suggestions.

        Args:
            project_path: Scope for pattern detection (None for all history)

        Returns:
            AnalysisReport with both result sets and their counts

        Raises:
            ContextUnavailableError: If the context can't be sensed
            StoreError: If reading history fails
        """
        detection = self.detector.detect(project_path)
        suggestions = self.engine.generate()

        report = AnalysisReport(
            pattern_count=len(detection.patterns),
            suggestion_count=len(suggestions.suggestions),
            patterns=detection.patterns,
            suggestions=suggestions.suggestions,
            persistence_failures=[
                *detection.persistence_failures,
                *suggestions.persistence_failures,
            ],
        )

        if report.has_persistence_failures:
            logger.warning(
                "Analysis finished with %d failed write(s)", len(report.persistence_failures)
            )
        return report

    def cleanup(self) -> int:
        """
        Apply the history retention limits.

        Returns:
            Number of history entries removed (0 without a store)
        """
        if self.store is None:
            return 0
        return self.store.prune_history(
            older_than_days=self.history.auto_cleanup_days,
            max_events=self.history.max_size,
        )
