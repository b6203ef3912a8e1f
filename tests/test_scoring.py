"""
Tests for the suggestion scoring functions.
"""

import pytest

from recall.core.suggestions.scoring import (
    ACCEPTANCE_WEIGHT,
    CONTEXT_WEIGHT,
    FREQUENCY_WEIGHT,
    PATTERN_WEIGHT,
    RECENCY_WEIGHT,
    context_match,
    frequency_weight,
    recency_weight,
    suggestion_score,
)


class TestSuggestionScore:
    """Test the weighted suggestion score."""

    def test_weights_sum_to_one(self):
        """Test the factor weights add up to 1.0."""
        total = (
            FREQUENCY_WEIGHT + RECENCY_WEIGHT + PATTERN_WEIGHT + CONTEXT_WEIGHT + ACCEPTANCE_WEIGHT
        )
        assert total == pytest.approx(1.0)

    def test_all_ones_scores_one(self):
        """Test maximum inputs give exactly 1.0."""
        assert suggestion_score(1.0, 1.0, 1.0, 1.0, 1.0) == pytest.approx(1.0)

    def test_all_zeros_scores_zero(self):
        """Test minimum inputs give 0.0."""
        assert suggestion_score(0.0, 0.0, 0.0, 0.0, 0.0) == 0.0

    def test_single_factor_uses_its_weight(self):
        """Test each factor contributes exactly its weight."""
        assert suggestion_score(1.0, 0.0, 0.0, 0.0, 0.0) == pytest.approx(0.25)
        assert suggestion_score(0.0, 1.0, 0.0, 0.0, 0.0) == pytest.approx(0.20)
        assert suggestion_score(0.0, 0.0, 1.0, 0.0, 0.0) == pytest.approx(0.25)
        assert suggestion_score(0.0, 0.0, 0.0, 1.0, 0.0) == pytest.approx(0.20)
        assert suggestion_score(0.0, 0.0, 0.0, 0.0, 1.0) == pytest.approx(0.10)

    @pytest.mark.parametrize(
        "factors",
        [
            (0.5, 0.5, 0.5, 0.5, 0.5),
            (0.9, 0.1, 0.3, 0.7, 0.0),
            (1.0, 0.0, 1.0, 0.0, 1.0),
        ],
    )
    def test_in_range_inputs_stay_in_range(self, factors):
        """Test normalized inputs give a score in [0, 1]."""
        assert 0.0 <= suggestion_score(*factors) <= 1.0

    def test_out_of_range_result_is_clamped(self):
        """Test unnormalized inputs are clamped, not rejected."""
        assert suggestion_score(5.0, 5.0, 5.0, 5.0, 5.0) == 1.0
        assert suggestion_score(-1.0, -1.0, -1.0, -1.0, -1.0) == 0.0


class TestFrequencyWeight:
    """Test usage relative to the most used command."""

    def test_ratio(self):
        """Test the weight is usage / max."""
        assert frequency_weight(5, 10) == 0.5

    def test_max_usage_is_one(self):
        """Test the most used command weighs 1.0."""
        assert frequency_weight(42, 42) == 1.0

    def test_unused_is_zero(self):
        """Test zero usage weighs 0.0."""
        assert frequency_weight(0, 10) == 0.0

    def test_zero_max_is_zero(self):
        """Test a zero maximum gives 0.0 instead of dividing by zero."""
        assert frequency_weight(0, 0) == 0.0
        assert frequency_weight(7, 0) == 0.0

    def test_usage_above_max_is_clamped(self):
        """Test usage above the maximum is clamped to 1.0."""
        assert frequency_weight(20, 10) == 1.0

    def test_always_in_unit_range(self):
        """Test every usage up to the maximum stays in [0, 1]."""
        for usage in range(0, 11):
            assert 0.0 <= frequency_weight(usage, 10) <= 1.0


class TestRecencyWeight:
    """Test exponential recency decay."""

    def test_today_is_exactly_one(self):
        """Test zero days ago gives exactly 1.0."""
        assert recency_weight(0) == 1.0

    def test_one_half_life(self):
        """Test one week ago gives 0.5."""
        assert recency_weight(7) == pytest.approx(0.5)

    def test_two_half_lives(self):
        """Test two weeks ago gives 0.25."""
        assert recency_weight(14) == pytest.approx(0.25)

    def test_strictly_decreasing(self):
        """Test older usage always weighs less."""
        weights = [recency_weight(days) for days in (0, 0.5, 1, 3, 7, 30, 365)]
        assert all(a > b for a, b in zip(weights, weights[1:]))

    def test_negative_days_not_clamped(self):
        """Test future timestamps are not clamped by the function itself."""
        assert recency_weight(-7) == pytest.approx(2.0)


class TestContextMatch:
    """Test the share of matching context factors."""

    def test_ratio(self):
        """Test the match is matched / total."""
        assert context_match(3, 5) == pytest.approx(0.6)

    def test_no_factors_is_zero(self):
        """Test zero total factors gives 0.0."""
        assert context_match(0, 0) == 0.0

    def test_all_factors_match(self):
        """Test a full match gives 1.0."""
        assert context_match(4, 4) == 1.0

    def test_more_matches_than_factors_is_clamped(self):
        """Test an impossible count is clamped to 1.0."""
        assert context_match(6, 4) == 1.0
