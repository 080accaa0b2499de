"""Progress Calculations - Pure functions for the daily calorie bar.

All functions are pure: same input always produces same output, no side effects.
"""

import math

from .models import NutritionSnapshot, ProgressSummary, ProgressDisplay


def finite_or_zero(value: float) -> float:
    """Return value, or 0 if it is negative, nan or infinite."""
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (57.5 -> 58, 0.5 -> 1)."""
    return math.floor(value + 0.5)


def format_amount(value: float) -> str:
    """Format a number without a trailing '.0' for whole values."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def compute_progress_summary(snapshot: NutritionSnapshot) -> ProgressSummary:
    """Calculate percentage of goal reached and calories remaining.

    A goal of zero or less counts as "no goal": progress is 0% and nothing
    remains. Percentage is capped at 100.

    Args:
        snapshot: Current consumed and goal calories

    Returns:
        ProgressSummary with percentage in [0, 100] and remaining >= 0
    """
    consumed = finite_or_zero(snapshot.consumed_calories)
    goal = finite_or_zero(snapshot.goal_calories)

    if goal > 0:
        percentage = min(consumed * 100 / goal, 100.0)
    else:
        percentage = 0.0

    return ProgressSummary(
        percentage=percentage,
        remaining=max(goal - consumed, 0.0),
    )


def describe_progress(snapshot: NutritionSnapshot) -> ProgressDisplay:
    """Build the text and bar fill for the progress widget.

    Bar fill and the percentage text both come from the same clamped value.

    Args:
        snapshot: Current consumed and goal calories

    Returns:
        ProgressDisplay ready for any display surface
    """
    summary = compute_progress_summary(snapshot)

    return ProgressDisplay(
        label=f"{format_amount(snapshot.consumed_calories)} / {format_amount(snapshot.goal_calories)} kcal",
        fill_percent=summary.percentage,
        percent_text=f"{round_half_up(summary.percentage)}%",
        consumed_text=format_amount(snapshot.consumed_calories),
        remaining_text=format_amount(summary.remaining),
    )
