"""Backend Client - HTTP access to the nutrition backend.

This module handles all network I/O for the dashboard.
All I/O is contained here; display logic is in the core module.
"""

import logging
from dataclasses import dataclass

import httpx
from pydantic import ValidationError

from ..core.models import NutritionSnapshot, MealEntry, RecipeCard, RecipeSuggestionRequest
from ..core.meals import meal_from_listing, validate_meal, DEFAULT_GOAL_CALORIES
from ..core.recipes import recipe_cards_from_payload


logger = logging.getLogger(__name__)


class BackendError(RuntimeError):
    """The nutrition backend failed or reported an error."""


@dataclass
class BackendConfig:
    """Configuration for the nutrition backend client.

    Attributes:
        base_url: Root URL of the backend (no trailing slash needed)
        timeout: Per-request timeout in seconds
        default_goal: Calorie goal used when the backend sends none
    """

    base_url: str = "http://localhost:8000"
    timeout: float = 15.0
    default_goal: float = DEFAULT_GOAL_CALORIES


class NutritionBackendClient:
    """Client for the progress, meal and recipe endpoints.

    Endpoints:
        GET  /progress/daily   -> { consumed, daily_goal, macros: {protein, carbs, fats} }
        GET  /meals/today      -> { meals: [...] }
        POST /meals/log        -> { ... } or { error }
        POST /recipes/suggest  -> { recipes: [...] } or { error }
    """

    def __init__(
        self,
        config: BackendConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the backend client.

        Args:
            config: Backend configuration
            http_client: Optional pre-built client (tests pass a MockTransport)
        """
        self.config = config or BackendConfig()
        self._http_client = http_client

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Lazy initialization of the HTTP session."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self.config.base_url,
                timeout=self.config.timeout,
            )
        return self._http_client

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    def empty_snapshot(self) -> NutritionSnapshot:
        """Zero-value snapshot used when progress cannot be loaded."""
        return NutritionSnapshot(goal_calories=self.config.default_goal)

    async def _get_json(self, path: str) -> dict:
        response = await self.http_client.get(path)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected payload from {path}")
        return data

    async def _post_json(self, path: str, payload: dict) -> dict:
        response = await self.http_client.post(path, json=payload)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected payload from {path}")
        return data

    # ==================== Progress ====================

    async def get_daily_progress(self) -> NutritionSnapshot:
        """Fetch today's consumed calories and macros.

        Returns:
            NutritionSnapshot, or the zero-value snapshot if the backend fails
        """
        logger.debug("Fetching daily progress")
        try:
            data = await self._get_json("/progress/daily")
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Failed to fetch daily progress: %s", str(e))
            return self.empty_snapshot()

        if data.get("error"):
            logger.error("Error loading progress: %s", data["error"])
            return self.empty_snapshot()

        macros = data.get("macros") or {}
        try:
            return NutritionSnapshot(
                consumed_calories=data.get("consumed") or 0,
                goal_calories=data.get("daily_goal") or self.config.default_goal,
                protein_g=macros.get("protein") or 0,
                carbs_g=macros.get("carbs") or 0,
                fats_g=macros.get("fats") or 0,
            )
        except (ValidationError, AttributeError) as e:
            logger.error("Malformed daily progress: %s", str(e))
            return self.empty_snapshot()

    # ==================== Meals ====================

    async def get_todays_meals(self) -> list[MealEntry] | None:
        """Fetch the meals logged today.

        Returns:
            List of meals (empty when the backend reports an error),
            or None if the backend is unreachable
        """
        logger.debug("Fetching today's meals")
        try:
            data = await self._get_json("/meals/today")
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Failed to fetch today's meals: %s", str(e))
            return None

        if data.get("error"):
            logger.error("Error loading meals: %s", data["error"])
            return []

        rows = data.get("meals") or []
        try:
            return [meal_from_listing(row) for row in rows if isinstance(row, dict)]
        except ValidationError as e:
            logger.error("Malformed meal listing: %s", str(e))
            return None

    async def log_meal(self, meal: MealEntry) -> bool:
        """Submit a meal to the backend.

        Raises:
            MealValidationError: If the meal fails local range checks

        Returns:
            True if the backend accepted the meal
        """
        validate_meal(meal)
        logger.info("Logging meal: %s", meal.meal_name)
        try:
            data = await self._post_json("/meals/log", meal.model_dump())
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Failed to log meal: %s", str(e))
            return False

        if data.get("error"):
            logger.error("Error logging meal: %s", data["error"])
            return False
        return True

    # ==================== Recipes ====================

    async def suggest_recipes(self, request: RecipeSuggestionRequest) -> list[RecipeCard]:
        """Ask the backend to generate recipes for some ingredients.

        Raises:
            BackendError: If the request fails or the backend reports an error

        Returns:
            Recipe cards (may be empty)
        """
        logger.info("Requesting recipes for %d ingredients in %s", len(request.ingredients), request.region)
        try:
            data = await self._post_json("/recipes/suggest", request.model_dump())
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Failed to generate recipes: %s", str(e))
            raise BackendError("Failed to generate recipes. Please try again.") from e

        if data.get("error"):
            raise BackendError(f"Error generating recipes: {data['error']}")

        return recipe_cards_from_payload(data.get("recipes"))
