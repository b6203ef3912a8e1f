"""
Tests for suggestion ranking.
"""

from recall.core.suggestions.models import SmartSuggestion, SuggestionSource
from recall.core.suggestions.ranking import MAX_SUGGESTIONS, rank_suggestions


def _suggestion(command: str, confidence: float, source=SuggestionSource.CONTEXT):
    return SmartSuggestion(
        command=command,
        reason=f"Reason for {command}",
        confidence=confidence,
        source=source,
    )


class TestRankSuggestions:
    """Test ordering and truncation of candidates."""

    def test_orders_by_confidence_descending(self):
        """Test candidates come back highest confidence first."""
        candidates = [
            _suggestion("a", 0.9),
            _suggestion("b", 0.5),
            _suggestion("c", 0.7),
        ]

        ranked = rank_suggestions(candidates)

        assert [s.confidence for s in ranked] == [0.9, 0.7, 0.5]
        assert [s.command for s in ranked] == ["a", "c", "b"]

    def test_truncates_to_max_suggestions(self):
        """Test seven candidates are cut down to five."""
        candidates = [_suggestion(f"cmd {i}", 0.1 * i) for i in range(1, 8)]

        ranked = rank_suggestions(candidates)

        assert len(ranked) == MAX_SUGGESTIONS == 5
        assert ranked[0].command == "cmd 7"
        assert ranked[-1].command == "cmd 3"

    def test_fewer_than_limit_returns_all(self):
        """Test short candidate lists are not padded."""
        ranked = rank_suggestions([_suggestion("a", 0.6)])
        assert len(ranked) == 1

    def test_empty(self):
        """Test no candidates gives no suggestions."""
        assert rank_suggestions([]) == []

    def test_ties_keep_input_order(self):
        """Test equal confidence keeps the order candidates arrived in."""
        candidates = [
            _suggestion("first", 0.6, SuggestionSource.PATTERN),
            _suggestion("second", 0.6, SuggestionSource.CONTEXT),
            _suggestion("third", 0.6, SuggestionSource.TIME),
        ]

        ranked = rank_suggestions(candidates)

        assert [s.command for s in ranked] == ["first", "second", "third"]

    def test_duplicate_commands_are_kept(self):
        """Test the same command from two sources survives twice."""
        candidates = [
            _suggestion("git push", 0.6, SuggestionSource.PATTERN),
            _suggestion("git push", 0.6, SuggestionSource.CONTEXT),
        ]

        ranked = rank_suggestions(candidates)

        assert [s.command for s in ranked] == ["git push", "git push"]
        assert {s.source for s in ranked} == {SuggestionSource.PATTERN, SuggestionSource.CONTEXT}

    def test_custom_limit(self):
        """Test an explicit limit overrides the default."""
        candidates = [_suggestion(f"cmd {i}", 0.5) for i in range(10)]

        assert len(rank_suggestions(candidates, limit=2)) == 2
        assert len(rank_suggestions(candidates, limit=None)) == 10

    def test_does_not_mutate_input(self):
        """Test the caller's list is left untouched."""
        candidates = [_suggestion("low", 0.1), _suggestion("high", 0.9)]

        rank_suggestions(candidates)

        assert [s.command for s in candidates] == ["low", "high"]
