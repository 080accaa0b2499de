"""Meal Calculations - Pure functions for logged meals.

All functions are pure: same input always produces same output, no side effects.
"""

from typing import Any

from .models import MealEntry, NutritionSnapshot
from .progress import round_half_up


MAX_MEAL_CALORIES = 5000
MIN_MEAL_NAME_LENGTH = 2
DEFAULT_GOAL_CALORIES = 2000


class MealValidationError(ValueError):
    """A meal failed the range checks done before submission."""


def strip_markup(text: Any) -> str:
    """Drop angle brackets and surrounding whitespace.

    This is a display nicety only. It is not an escaping or XSS defence.
    """
    if not isinstance(text, str):
        return ""
    return text.replace("<", "").replace(">", "").strip()


def validate_meal(meal: MealEntry) -> MealEntry:
    """Check a meal before it is sent to the backend.

    Raises:
        MealValidationError: Name too short, calories out of range or negative macros
    """
    if len(meal.meal_name) < MIN_MEAL_NAME_LENGTH:
        raise MealValidationError("Meal name must be at least 2 characters long")
    if meal.calories < 0 or meal.calories > MAX_MEAL_CALORIES:
        raise MealValidationError("Calories must be between 0 and 5000")
    if meal.protein < 0 or meal.carbs < 0 or meal.fats < 0:
        raise MealValidationError("Macronutrients cannot be negative")
    return meal


def meal_from_listing(row: dict) -> MealEntry:
    """Convert a row from the backend's meal listing into a MealEntry.

    The listing names macros protein_g, carbs_g and fats_g.
    """
    return MealEntry(
        meal_name=strip_markup(row.get("meal_name") or "Unknown Meal"),
        calories=row.get("calories") or 0,
        protein=row.get("protein_g") or 0,
        carbs=row.get("carbs_g") or 0,
        fats=row.get("fats_g") or 0,
        meal_type=strip_markup(row.get("meal_type") or "Unknown"),
    )


def calculate_meal_totals(meals: list[MealEntry]) -> tuple[float, float, float, float]:
    """Calculate total calories and macros from a list of meals.

    Returns:
        Tuple of (calories, protein, carbs, fats)
    """
    total_calories = sum(m.calories for m in meals)
    total_protein = sum(m.protein for m in meals)
    total_carbs = sum(m.carbs for m in meals)
    total_fats = sum(m.fats for m in meals)

    return total_calories, total_protein, total_carbs, total_fats


def snapshot_from_meals(
    meals: list[MealEntry], goal_calories: float = DEFAULT_GOAL_CALORIES
) -> NutritionSnapshot:
    """Sum a day's meals into a snapshot against a calorie goal."""
    calories, protein, carbs, fats = calculate_meal_totals(meals)

    return NutritionSnapshot(
        consumed_calories=calories,
        goal_calories=goal_calories,
        protein_g=protein,
        carbs_g=carbs,
        fats_g=fats,
    )


def meal_detail_line(meal: MealEntry) -> str:
    """Format the one-line summary shown under a meal name."""
    return (
        f"{meal.meal_type} • "
        f"P: {round_half_up(meal.protein)}g • "
        f"C: {round_half_up(meal.carbs)}g • "
        f"F: {round_half_up(meal.fats)}g"
    )


DEMO_MEALS: tuple[MealEntry, ...] = (
    MealEntry(meal_name="Chapati with Tea & Banana", calories=280, protein=8, carbs=45, fats=8, meal_type="Breakfast"),
    MealEntry(meal_name="Roasted Groundnuts & Mango", calories=320, protein=12, carbs=25, fats=15, meal_type="Snack"),
    MealEntry(meal_name="Ugali with Sukuma Wiki & Fish", calories=550, protein=25, carbs=55, fats=12, meal_type="Lunch"),
)


def demo_snapshot() -> NutritionSnapshot:
    """Snapshot of the demo meals against the default goal."""
    return snapshot_from_meals(list(DEMO_MEALS), DEFAULT_GOAL_CALORIES)
