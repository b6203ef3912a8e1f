"""
Scoring functions for suggestions.

Pure functions that turn raw factors into normalized 0.0-1.0 scores.
Inputs are clamped, never rejected.
"""

import math

# Weights for suggestion_score; they sum to 1.0
FREQUENCY_WEIGHT = 0.25
RECENCY_WEIGHT = 0.20
PATTERN_WEIGHT = 0.25
CONTEXT_WEIGHT = 0.20
ACCEPTANCE_WEIGHT = 0.10

# Days for the recency weight to halve
RECENCY_HALF_LIFE_DAYS = 7.0


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def suggestion_score(
    frequency: float,
    recency: float,
    pattern_confidence: float,
    context_match: float,
    acceptance_rate: float,
) -> float:
    """
    Combine the scoring factors into one score.

    All factors are expected in 0.0-1.0 already; only the result is
    clamped.

    Args:
        frequency: How often the command is used
        recency: How recently it was used
        pattern_confidence: Confidence of the pattern behind it
        context_match: How well it fits the current context
        acceptance_rate: Historical share of accepts

    Returns:
        Weighted score between 0.0 and 1.0

    Example:
        >>> suggestion_score(1.0, 1.0, 1.0, 1.0, 1.0)
        1.0
    """
    score = (
        frequency * FREQUENCY_WEIGHT
        + recency * RECENCY_WEIGHT
        + pattern_confidence * PATTERN_WEIGHT
        + context_match * CONTEXT_WEIGHT
        + acceptance_rate * ACCEPTANCE_WEIGHT
    )
    return _clamp(score)


def frequency_weight(usage_count: int, max_count: int) -> float:
    """
    Usage relative to the most used command.

    Returns 0.0 when ``max_count`` is 0.

    Example:
        >>> frequency_weight(5, 10)
        0.5
    """
    if max_count == 0:
        return 0.0
    return _clamp(usage_count / max_count)


def recency_weight(days_ago: float) -> float:
    """
    Exponential decay with a 7 day half-life.

    1.0 for today, 0.5 a week ago, 0.25 two weeks ago. Negative input
    gives values above 1.0, so callers clamp ``days_ago`` first.

    Example:
        >>> recency_weight(0.0)
        1.0
    """
    return math.exp(-days_ago / RECENCY_HALF_LIFE_DAYS * math.log(2))


def context_match(factors_matched: int, total_factors: int) -> float:
    """
    Share of context factors that match.

    Returns 0.0 when there are no factors.

    Example:
        >>> context_match(3, 5)
        0.6
    """
    if total_factors == 0:
        return 0.0
    return _clamp(factors_matched / total_factors)
