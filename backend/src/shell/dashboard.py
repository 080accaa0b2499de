"""Dashboard - Assembles the widgets shown on the diet dashboard page.

Loads data through the backend client and hands it to the pure renderers.
"""

import logging
import os

from ..core.models import NutritionSnapshot, MealEntry
from ..core.progress import describe_progress, format_amount
from ..core.chart import describe_chart, paint_chart
from ..core.meals import DEMO_MEALS, demo_snapshot, meal_detail_line
from .backend_client import NutritionBackendClient, BackendConfig
from .surfaces import RecordingSurface, SvgSurface


logger = logging.getLogger(__name__)

# Lazy-initialized client
_backend_client: NutritionBackendClient | None = None


def get_backend_client() -> NutritionBackendClient:
    """Get or create the backend client from environment settings."""
    global _backend_client
    if _backend_client is None:
        config = BackendConfig(
            base_url=os.environ.get("BACKEND_URL", "http://localhost:8000"),
            timeout=float(os.environ.get("BACKEND_TIMEOUT", 15)),
            default_goal=float(os.environ.get("DAILY_GOAL", 2000)),
        )
        _backend_client = NutritionBackendClient(config)
    return _backend_client


def meal_item(meal: MealEntry) -> dict:
    """One row of the today's meals list."""
    return {
        "name": meal.meal_name,
        "details": meal_detail_line(meal),
        "calories_text": f"{format_amount(meal.calories)} kcal",
    }


def render_chart_svg(snapshot: NutritionSnapshot) -> str:
    """Paint the macro ring chart for a snapshot as an SVG document."""
    surface = SvgSurface()
    paint_chart(describe_chart(snapshot), surface)
    return surface.to_svg()


def render_widgets(snapshot: NutritionSnapshot, meals: list[MealEntry]) -> dict:
    """Describe every dashboard widget for a snapshot and meal list.

    Returns:
        Dictionary with progress, chart, draw calls and meals
    """
    chart = describe_chart(snapshot)
    surface = RecordingSurface()
    paint_chart(chart, surface)

    return {
        "progress": describe_progress(snapshot).model_dump(),
        "chart": chart.model_dump(mode="json"),
        "draw_calls": [{"op": op, **kwargs} for op, kwargs in surface.calls],
        "meals": [meal_item(m) for m in meals],
        "meals_placeholder": None if meals else "No meals logged today",
    }


async def load_day(client: NutritionBackendClient) -> tuple[NutritionSnapshot, list[MealEntry], bool]:
    """Fetch today's progress and meals.

    Falls back to the demo day when the meal listing is unreachable.

    Returns:
        Tuple of (snapshot, meals, is_demo)
    """
    snapshot = await client.get_daily_progress()
    meals = await client.get_todays_meals()

    if meals is None:
        logger.info("Meal listing unavailable, showing demo meals")
        return demo_snapshot(), list(DEMO_MEALS), True

    return snapshot, meals, False


async def load_dashboard(client: NutritionBackendClient) -> dict:
    """Fetch today's data and describe every widget."""
    snapshot, meals, demo = await load_day(client)

    widgets = render_widgets(snapshot, meals)
    widgets["demo"] = demo
    return widgets
