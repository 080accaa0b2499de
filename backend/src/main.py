"""Diet Dashboard server - Entry point.

Serves the dashboard widgets as JSON and SVG, and forwards meal and recipe
requests to the nutrition backend.
"""

import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from pydantic import ValidationError
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from .core.models import MealEntry, RecipeSuggestionRequest
from .core.meals import MealValidationError, strip_markup
from .core.recipes import parse_ingredients
from .shell.backend_client import NutritionBackendClient, BackendError
from .shell.dashboard import get_backend_client, load_dashboard, load_day, render_chart_svg


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _backend(request: Request) -> NutritionBackendClient:
    return request.app.state.backend


# ==================== Route Handlers ====================


async def health_check(request: Request) -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse({"status": "healthy", "service": "diet-dashboard"})


async def dashboard(request: Request) -> JSONResponse:
    """Progress bar, macro chart and today's meals."""
    return JSONResponse(await load_dashboard(_backend(request)))


async def macro_chart_svg(request: Request) -> Response:
    """Macro ring chart as an SVG image."""
    snapshot, _, _ = await load_day(_backend(request))
    return Response(render_chart_svg(snapshot), media_type="image/svg+xml")


async def log_meal(request: Request) -> JSONResponse:
    """Validate a meal and submit it to the backend."""
    try:
        body = await request.json()
        meal = MealEntry(
            meal_name=strip_markup(body.get("meal_name")),
            calories=body.get("calories") or 0,
            protein=body.get("protein") or 0,
            carbs=body.get("carbs") or 0,
            fats=body.get("fats") or 0,
            meal_type=body.get("meal_type") or "Snack",
        )
        accepted = await _backend(request).log_meal(meal)
    except MealValidationError as e:
        return JSONResponse({"error": str(e)}, status_code=400)
    except (ValidationError, ValueError, AttributeError) as e:
        logger.warning("Rejected meal payload: %s", str(e))
        return JSONResponse({"error": "Invalid meal data"}, status_code=400)

    if not accepted:
        return JSONResponse({"error": "Failed to log meal. Please try again."}, status_code=502)

    return JSONResponse({"message": "Meal logged successfully!"})


async def suggest_recipes(request: Request) -> JSONResponse:
    """Ask the backend for recipes built from the given ingredients."""
    try:
        body = await request.json()
        raw = body.get("ingredients") or ""
        if isinstance(raw, list):
            raw = ",".join(str(i) for i in raw)
        ingredients = parse_ingredients(raw)
        region = body.get("region") or "East Africa"
    except (ValueError, AttributeError):
        return JSONResponse({"error": "Invalid request body"}, status_code=400)

    if not ingredients:
        return JSONResponse({"error": "Please enter some ingredients!"}, status_code=400)

    try:
        cards = await _backend(request).suggest_recipes(
            RecipeSuggestionRequest(ingredients=ingredients, region=region)
        )
    except BackendError as e:
        return JSONResponse({"error": str(e)}, status_code=502)

    return JSONResponse({
        "recipes": [
            {**card.model_dump(), "calories_text": card.calories_text}
            for card in cards
        ],
        "placeholder": None if cards else "No recipes found",
    })


# ==================== Create ASGI App ====================


def create_app(backend: NutritionBackendClient | None = None) -> Starlette:
    """Create the Starlette application.

    Args:
        backend: Backend client to use (defaults to one built from the environment)
    """
    backend = backend or get_backend_client()

    @asynccontextmanager
    async def lifespan(app: Starlette):
        yield
        await backend.close()

    routes = [
        Route("/health", health_check, methods=["GET"]),
        Route("/dashboard", dashboard, methods=["GET"]),
        Route("/dashboard/chart.svg", macro_chart_svg, methods=["GET"]),
        Route("/meals", log_meal, methods=["POST"]),
        Route("/recipes", suggest_recipes, methods=["POST"]),
    ]

    allowed_origins = os.environ.get("ALLOWED_ORIGINS", "http://localhost:5173").split(",")

    app = Starlette(
        routes=routes,
        middleware=[
            Middleware(
                CORSMiddleware,
                allow_origins=[o.strip() for o in allowed_origins if o.strip()],
                allow_methods=["GET", "POST", "OPTIONS"],
                allow_headers=["*"],
            ),
        ],
        lifespan=lifespan,
    )
    app.state.backend = backend

    return app


# Create app at module level for uvicorn
app = create_app()


def main() -> None:
    """Run the server."""
    port = int(os.environ.get("PORT", 8080))
    host = os.environ.get("HOST", "0.0.0.0")

    logger.info("Starting diet dashboard on %s:%d", host, port)

    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
