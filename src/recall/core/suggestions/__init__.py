"""
Suggestion system for recall.

Suggests what to run next from detected command patterns, the project
context and the time of week, with a reason for every suggestion.
"""

from recall.core.suggestions.engine import SuggestionEngine
from recall.core.suggestions.models import SmartSuggestion, SuggestionResult, SuggestionSource
from recall.core.suggestions.ranking import MAX_SUGGESTIONS, rank_suggestions
from recall.core.suggestions.scoring import (
    context_match,
    frequency_weight,
    recency_weight,
    suggestion_score,
)
from recall.core.suggestions.sources import predict_next_in_sequence

__all__ = [
    # Models
    "SmartSuggestion",
    "SuggestionResult",
    "SuggestionSource",
    # Scoring
    "context_match",
    "frequency_weight",
    "recency_weight",
    "suggestion_score",
    # Ranking
    "MAX_SUGGESTIONS",
    "rank_suggestions",
    # Strategies
    "predict_next_in_sequence",
    # Engine
    "SuggestionEngine",
]
