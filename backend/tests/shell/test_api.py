"""Integration tests for API endpoints using Starlette TestClient."""

import json

import httpx
import pytest
from starlette.testclient import TestClient

from src.main import create_app
from src.shell.backend_client import NutritionBackendClient, BackendConfig


class FakeBackend:
    """Records requests and answers each path from a dict of (status, json)."""

    def __init__(self, routes: dict | None = None) -> None:
        self.routes = routes or {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.routes.get(request.url.path, (404, None))
        return httpx.Response(status, json=body)


@pytest.fixture
def backend():
    """Fake nutrition backend with a normal day of data."""
    return FakeBackend({
        "/progress/daily": (200, {"consumed": 1150, "daily_goal": 2000,
                                  "macros": {"protein": 45, "carbs": 125, "fats": 35}}),
        "/meals/today": (200, {"meals": []}),
        "/meals/log": (200, {"id": 1}),
        "/recipes/suggest": (200, {"recipes": [
            {"id": 3, "name": "Beans & Rice", "ingredients": ["beans", "rice"],
             "nutrition": {"calories": 420, "protein": 15, "carbs": 70, "fats": 6}},
        ]}),
    })


@pytest.fixture
def client(backend):
    """Create test client wired to the fake backend."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(backend), base_url="http://backend.test")
    app = create_app(NutritionBackendClient(BackendConfig(base_url="http://backend.test"), http_client=http_client))
    return TestClient(app)


class TestHealthEndpoint:
    """Tests for /health endpoint."""

    def test_health_returns_200(self, client):
        """Health endpoint returns 200 OK."""
        response = client.get("/health")
        assert response.status_code == 200

    def test_health_returns_json(self, client):
        """Health endpoint returns JSON with status."""
        data = client.get("/health").json()
        assert data["status"] == "healthy"
        assert data["service"] == "diet-dashboard"


class TestDashboardEndpoint:
    """Tests for /dashboard endpoints."""

    def test_dashboard(self, client):
        """Dashboard JSON describes progress and chart."""
        response = client.get("/dashboard")
        assert response.status_code == 200

        data = response.json()
        assert data["progress"]["label"] == "1150 / 2000 kcal"
        assert data["progress"]["fill_percent"] == 57.5
        assert [line["text"] for line in data["chart"]["legend"]] == [
            "Protein: 45g", "Carbs: 125g", "Fats: 35g",
        ]
        assert data["demo"] is False

    def test_chart_svg(self, client):
        """Chart is served as SVG."""
        response = client.get("/dashboard/chart.svg")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("image/svg+xml")
        assert response.text.count("<path") == 3


class TestMealsEndpoint:
    """Tests for POST /meals."""

    def test_log_meal(self, client, backend):
        """A valid meal is forwarded to the backend."""
        response = client.post("/meals", json={
            "meal_name": "<i>Pilau</i>", "calories": 600, "protein": 20, "carbs": 80, "fats": 18,
            "meal_type": "Dinner",
        })

        assert response.status_code == 200
        assert response.json()["message"] == "Meal logged successfully!"
        sent = json.loads(backend.requests[-1].content.decode())
        assert sent["meal_name"] == "iPilau/i"

    def test_fractional_calories_accepted(self, client, backend):
        """Fractional calories are forwarded rather than rejected."""
        response = client.post("/meals", json={"meal_name": "Mandazi", "calories": 250.5})

        assert response.status_code == 200
        sent = json.loads(backend.requests[-1].content.decode())
        assert sent["calories"] == 250.5

    def test_short_name_rejected(self, client, backend):
        """Validation errors return 400 without calling the backend."""
        response = client.post("/meals", json={"meal_name": "A", "calories": 100})

        assert response.status_code == 400
        assert "at least 2 characters" in response.json()["error"]
        assert backend.requests == []

    def test_bad_types_rejected(self, client):
        """Non-numeric values return 400."""
        response = client.post("/meals", json={"meal_name": "Tea", "calories": "lots"})
        assert response.status_code == 400

    def test_backend_failure(self, client, backend):
        """Backend failure returns 502."""
        backend.routes["/meals/log"] = (500, None)
        response = client.post("/meals", json={"meal_name": "Tea", "calories": 40})
        assert response.status_code == 502


class TestRecipesEndpoint:
    """Tests for POST /recipes."""

    def test_suggest(self, client, backend):
        """Ingredients are split and recipes returned as cards."""
        response = client.post("/recipes", json={"ingredients": "beans, rice"})

        assert response.status_code == 200
        data = response.json()
        assert data["recipes"][0]["name"] == "Beans & Rice"
        assert data["recipes"][0]["calories_text"] == "420"
        assert data["placeholder"] is None
        sent = json.loads(backend.requests[-1].content.decode())
        assert sent == {"ingredients": ["beans", "rice"], "region": "East Africa"}

    def test_no_ingredients(self, client):
        """Blank ingredients return 400."""
        response = client.post("/recipes", json={"ingredients": "  "})
        assert response.status_code == 400
        assert response.json()["error"] == "Please enter some ingredients!"

    def test_backend_error(self, client, backend):
        """Backend errors return 502."""
        backend.routes["/recipes/suggest"] = (200, {"error": "quota exceeded"})
        response = client.post("/recipes", json={"ingredients": ["okra"]})

        assert response.status_code == 502
        assert "quota exceeded" in response.json()["error"]

    def test_no_recipes(self, client, backend):
        """An empty suggestion list shows the placeholder."""
        backend.routes["/recipes/suggest"] = (200, {"recipes": "none"})
        data = client.post("/recipes", json={"ingredients": "okra"}).json()

        assert data["recipes"] == []
        assert data["placeholder"] == "No recipes found"


class TestCORS:
    """Tests for CORS configuration."""

    def test_cors_preflight_localhost(self, client):
        """CORS preflight from the dev origin is allowed."""
        response = client.options(
            "/meals",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert response.status_code == 200
        assert response.headers.get("access-control-allow-origin") == "http://localhost:5173"
