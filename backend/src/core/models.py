"""Core Data Models - Pydantic models for type safety.

Rendering models are frozen value objects. Meal and recipe models only validate.
"""

from enum import Enum
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


class MacroColor(str, Enum):
    """Colour token for each macro arc, in drawing order."""

    PROTEIN = "#28a745"
    CARBS = "#ffc107"
    FATS = "#dc3545"


class NutritionSnapshot(BaseModel):
    """One moment's consumed calories, goal and macro grams.

    Values are not validated here: the renderer clamps bad numbers itself.
    """

    model_config = ConfigDict(frozen=True)

    consumed_calories: float = Field(default=0, description="Calories eaten so far today")
    goal_calories: float = Field(default=2000, description="Daily calorie target")
    protein_g: float = Field(default=0, description="Protein in grams")
    carbs_g: float = Field(default=0, description="Carbohydrates in grams")
    fats_g: float = Field(default=0, description="Fats in grams")


class ProgressSummary(BaseModel):
    """Daily progress derived from a snapshot."""

    model_config = ConfigDict(frozen=True)

    percentage: float = Field(ge=0, le=100)
    remaining: float = Field(ge=0)


class ChartSlice(BaseModel):
    """One arc of the macro ring chart."""

    model_config = ConfigDict(frozen=True)

    label: str
    grams: float = Field(ge=0)
    color_token: MacroColor
    start_angle: float = Field(description="Radians, -pi/2 is 12 o'clock")
    sweep_angle: float = Field(ge=0, description="Radians, clockwise")

    @property
    def end_angle(self) -> float:
        return self.start_angle + self.sweep_angle


class EmptyChartState(BaseModel):
    """Marker for a chart with no macro data at all."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["empty"] = "empty"
    placeholder: str = "No meals logged"


class ChartGeometry(BaseModel):
    """Logical size of the ring chart."""

    model_config = ConfigDict(frozen=True)

    width: float = 200
    height: float = 200
    radius: float = 80
    stroke_width: float = 20

    @property
    def center_x(self) -> float:
        return self.width / 2

    @property
    def center_y(self) -> float:
        return self.height / 2


class LegendLine(BaseModel):
    """One legend row under the ring chart."""

    model_config = ConfigDict(frozen=True)

    text: str
    color_token: MacroColor


class ProgressDisplay(BaseModel):
    """Everything the progress bar widget shows."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(description="'consumed / goal kcal'")
    fill_percent: float = Field(ge=0, le=100, description="Width of the bar fill")
    percent_text: str
    consumed_text: str
    remaining_text: str


class ChartDisplay(BaseModel):
    """Everything the ring chart widget shows."""

    model_config = ConfigDict(frozen=True)

    geometry: ChartGeometry
    slices: Optional[tuple[ChartSlice, ChartSlice, ChartSlice]] = None
    empty: Optional[EmptyChartState] = None
    legend: tuple[LegendLine, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.empty is not None


class MealEntry(BaseModel):
    """A meal as submitted to, or listed by, the nutrition backend."""

    meal_name: str = Field(description="Name of the meal")
    calories: float = Field(default=0, description="Total calories")
    protein: float = Field(default=0, description="Protein in grams")
    carbs: float = Field(default=0, description="Carbohydrates in grams")
    fats: float = Field(default=0, description="Fats in grams")
    meal_type: str = Field(default="Snack", description="Breakfast, Lunch, Dinner or Snack")


class RecipeSuggestionRequest(BaseModel):
    """Request body for the backend recipe generator."""

    ingredients: list[str] = Field(min_length=1)
    region: str = Field(default="East Africa")


class RecipeCard(BaseModel):
    """A recipe suggestion ready to display."""

    recipe_id: int = 0
    name: str
    ingredients_text: str
    calories: int | None = None
    protein: int = 0
    carbs: int = 0
    fats: int = 0

    @property
    def calories_text(self) -> str:
        return str(self.calories) if self.calories else "N/A"
