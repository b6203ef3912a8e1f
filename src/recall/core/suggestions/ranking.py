"""
Ranking of suggestion candidates.
"""

from recall.core.suggestions.models import SmartSuggestion

# Most suggestions returned by one generation run
MAX_SUGGESTIONS = 5


def rank_suggestions(
    suggestions: list[SmartSuggestion],
    limit: int | None = MAX_SUGGESTIONS,
) -> list[SmartSuggestion]:
    """
    Order suggestions by confidence, highest first, and keep the top ones.

    Candidates with equal confidence keep their input order. Duplicate
    commands from different sources are all kept.

    Args:
        suggestions: Candidates to rank
        limit: Maximum number to return (None = all)

    Returns:
        Ranked list of suggestions
    """
    ranked = sorted(suggestions, key=lambda s: s.confidence, reverse=True)

    if limit is not None:
        ranked = ranked[:limit]

    return ranked
