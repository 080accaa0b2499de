"""Unit tests for progress calculations - pure functions, no mocks needed."""

import math

import pytest

from src.core.models import NutritionSnapshot
from src.core.progress import (
    compute_progress_summary,
    describe_progress,
    round_half_up,
    format_amount,
)


class TestComputeProgressSummary:
    """Tests for compute_progress_summary."""

    def test_partial_day(self):
        """1150 of 2000 is 57.5% with 850 remaining."""
        summary = compute_progress_summary(NutritionSnapshot(consumed_calories=1150, goal_calories=2000))
        assert summary.percentage == pytest.approx(57.5)
        assert summary.remaining == 850

    def test_over_goal_caps_at_100(self):
        """Going over goal caps percentage and zeroes remaining."""
        summary = compute_progress_summary(NutritionSnapshot(consumed_calories=2500, goal_calories=2000))
        assert summary.percentage == 100
        assert summary.remaining == 0

    def test_exactly_at_goal(self):
        """Hitting the goal exactly is 100% with nothing remaining."""
        summary = compute_progress_summary(NutritionSnapshot(consumed_calories=2000, goal_calories=2000))
        assert summary.percentage == 100
        assert summary.remaining == 0

    def test_zero_goal_is_zero_percent(self):
        """A zero goal does not divide by zero."""
        summary = compute_progress_summary(NutritionSnapshot(consumed_calories=500, goal_calories=0))
        assert summary.percentage == 0
        assert summary.remaining == 0

    def test_negative_goal_is_zero_percent(self):
        """A negative goal is treated as missing."""
        summary = compute_progress_summary(NutritionSnapshot(consumed_calories=500, goal_calories=-100))
        assert summary.percentage == 0

    def test_nothing_consumed(self):
        """Empty day shows 0% and the full goal remaining."""
        summary = compute_progress_summary(NutritionSnapshot(consumed_calories=0, goal_calories=1800))
        assert summary.percentage == 0
        assert summary.remaining == 1800

    def test_non_finite_consumed_is_clamped(self):
        """nan consumed calories counts as nothing consumed."""
        summary = compute_progress_summary(NutritionSnapshot(consumed_calories=math.nan, goal_calories=2000))
        assert summary.percentage == 0
        assert summary.remaining == 2000

    @pytest.mark.parametrize("consumed", [0, 1, 999, 2000, 2001, 10_000])
    def test_percentage_stays_in_range(self, consumed):
        """Percentage is always between 0 and 100."""
        summary = compute_progress_summary(NutritionSnapshot(consumed_calories=consumed, goal_calories=2000))
        assert 0 <= summary.percentage <= 100


class TestDescribeProgress:
    """Tests for describe_progress."""

    def test_labels(self):
        """Labels match what the progress widget shows."""
        display = describe_progress(NutritionSnapshot(consumed_calories=1150, goal_calories=2000))

        assert display.label == "1150 / 2000 kcal"
        assert display.percent_text == "58%"
        assert display.consumed_text == "1150"
        assert display.remaining_text == "850"

    def test_fill_matches_percentage(self):
        """Bar fill and percent text come from the same clamped value."""
        display = describe_progress(NutritionSnapshot(consumed_calories=3000, goal_calories=2000))

        assert display.fill_percent == 100
        assert display.percent_text == "100%"
        assert display.remaining_text == "0"

    def test_missing_goal(self):
        """A zero goal shows 0% instead of failing."""
        display = describe_progress(NutritionSnapshot(consumed_calories=500, goal_calories=0))

        assert display.fill_percent == 0
        assert display.percent_text == "0%"


class TestFormatting:
    """Tests for rounding and number formatting helpers."""

    def test_round_half_up(self):
        """Halves round up like a browser's Math.round."""
        assert round_half_up(0.5) == 1
        assert round_half_up(57.5) == 58
        assert round_half_up(2.4) == 2

    def test_format_whole_number(self):
        """Whole floats drop the trailing .0."""
        assert format_amount(1150.0) == "1150"

    def test_format_fraction(self):
        """Fractions are kept."""
        assert format_amount(12.5) == "12.5"
