"""Recipe Helpers - Pure functions for AI recipe suggestions.

The backend generates the recipes; these functions only shape requests and
turn responses into display cards.
"""

from typing import Any

from .models import RecipeCard, MealEntry
from .meals import strip_markup
from .progress import round_half_up


def parse_ingredients(raw: str) -> list[str]:
    """Split a comma-separated ingredient string into clean items.

    Args:
        raw: User input such as "maize flour, kale , tilapia"

    Returns:
        List of non-empty ingredient names
    """
    cleaned = strip_markup(raw)
    return [item.strip() for item in cleaned.split(",") if item.strip()]


def _number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value


def recipe_card_from_payload(recipe: dict) -> RecipeCard:
    """Build a display card from one backend recipe object."""
    nutrition = recipe.get("nutrition") or {}
    ingredients = recipe.get("ingredients")

    if isinstance(ingredients, list):
        ingredients_text = ", ".join(strip_markup(i) for i in ingredients)
    else:
        ingredients_text = "No ingredients listed"

    calories = _number(nutrition.get("calories"))

    return RecipeCard(
        recipe_id=int(_number(recipe.get("id"))),
        name=strip_markup(recipe.get("name") or "Unknown Recipe"),
        ingredients_text=ingredients_text,
        calories=round_half_up(calories) if calories else None,
        protein=round_half_up(_number(nutrition.get("protein"))),
        carbs=round_half_up(_number(nutrition.get("carbs"))),
        fats=round_half_up(_number(nutrition.get("fats"))),
    )


def recipe_cards_from_payload(recipes: Any) -> list[RecipeCard]:
    """Build display cards from the backend's recipe list.

    Anything other than a list yields no cards.
    """
    if not isinstance(recipes, list):
        return []
    return [recipe_card_from_payload(r) for r in recipes if isinstance(r, dict)]


def meal_from_recipe(card: RecipeCard, meal_type: str = "Snack") -> MealEntry:
    """Prefill a meal from a recipe card so it can be logged."""
    return MealEntry(
        meal_name=card.name,
        calories=card.calories or 0,
        protein=card.protein,
        carbs=card.carbs,
        fats=card.fats,
        meal_type=meal_type,
    )
