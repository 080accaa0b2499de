"""Macro Chart - Pure functions for the protein/carbs/fats ring chart.

Angles are in radians, measured the way 2D canvases measure them: 0 is
3 o'clock and positive sweeps run clockwise. The first slice starts at 12
o'clock (-pi/2).
"""

import logging
import math
from typing import Protocol

from .models import (
    NutritionSnapshot,
    ChartSlice,
    EmptyChartState,
    ChartGeometry,
    ChartDisplay,
    LegendLine,
    MacroColor,
)
from .progress import finite_or_zero, round_half_up


logger = logging.getLogger(__name__)

FULL_CIRCLE = 2 * math.pi
START_ANGLE = -math.pi / 2

EMPTY_RING_COLOR = "#e9ecef"
PLACEHOLDER_TEXT_COLOR = "#666"
LEGEND_TEXT_COLOR = "#333"

MACRO_ORDER = (
    ("Protein", MacroColor.PROTEIN),
    ("Carbs", MacroColor.CARBS),
    ("Fats", MacroColor.FATS),
)


class DrawingSurface(Protocol):
    """Anything that can paint arcs, rectangles and text."""

    def clear(self, width: float, height: float) -> None: ...

    def draw_arc(
        self,
        cx: float,
        cy: float,
        radius: float,
        start_angle: float,
        end_angle: float,
        color: str,
        stroke_width: float,
    ) -> None: ...

    def fill_rect(self, x: float, y: float, width: float, height: float, color: str) -> None: ...

    def fill_text(
        self, text: str, x: float, y: float, color: str, font: str, align: str
    ) -> None: ...


def clamp_macros(protein: float, carbs: float, fats: float) -> tuple[float, float, float]:
    """Replace negative or non-finite macro grams with 0.

    Bad values are logged, never raised: a chart must always render.
    """
    clamped = tuple(finite_or_zero(value) for value in (protein, carbs, fats))
    if clamped != (protein, carbs, fats):
        logger.warning(
            "Invalid macro input clamped to zero: protein=%s carbs=%s fats=%s",
            protein, carbs, fats,
        )
    return clamped


def compute_chart_slices(
    protein: float, carbs: float, fats: float
) -> tuple[ChartSlice, ChartSlice, ChartSlice] | EmptyChartState:
    """Split the ring into three arcs proportional to macro grams.

    Args:
        protein: Protein in grams
        carbs: Carbohydrates in grams
        fats: Fats in grams

    Returns:
        Three slices in protein, carbs, fats order whose sweeps sum to 2*pi,
        or EmptyChartState when there are no grams at all
    """
    grams = clamp_macros(protein, carbs, fats)
    total = sum(grams)

    if total <= 0:
        return EmptyChartState()

    # Shares are scale-free, so shrink values whose sum overflows
    shares = grams
    if not math.isfinite(total):
        largest = max(grams)
        shares = tuple(value / largest for value in grams)
        total = sum(shares)

    slices = []
    running_angle = START_ANGLE
    for (label, color), value, share in zip(MACRO_ORDER, grams, shares):
        sweep = (share / total) * FULL_CIRCLE
        slices.append(
            ChartSlice(
                label=label,
                grams=value,
                color_token=color,
                start_angle=running_angle,
                sweep_angle=sweep,
            )
        )
        running_angle += sweep

    return tuple(slices)


def build_legend(protein: float, carbs: float, fats: float) -> tuple[LegendLine, ...]:
    """One legend line per macro with grams rounded to whole numbers."""
    grams = clamp_macros(protein, carbs, fats)
    return tuple(
        LegendLine(text=f"{label}: {round_half_up(value)}g", color_token=color)
        for (label, color), value in zip(MACRO_ORDER, grams)
    )


def describe_chart(
    snapshot: NutritionSnapshot, geometry: ChartGeometry | None = None
) -> ChartDisplay:
    """Build the full ring chart description for a snapshot.

    Args:
        snapshot: Current macro grams
        geometry: Chart size (defaults to 200x200, radius 80, stroke 20)

    Returns:
        ChartDisplay with either slices and legend, or the empty state
    """
    geometry = geometry or ChartGeometry()
    result = compute_chart_slices(snapshot.protein_g, snapshot.carbs_g, snapshot.fats_g)

    if isinstance(result, EmptyChartState):
        return ChartDisplay(geometry=geometry, empty=result)

    return ChartDisplay(
        geometry=geometry,
        slices=result,
        legend=build_legend(snapshot.protein_g, snapshot.carbs_g, snapshot.fats_g),
    )


def paint_chart(display: ChartDisplay, surface: DrawingSurface) -> None:
    """Replay a chart description onto a drawing surface.

    Zero-sweep slices are skipped. The legend sits below the ring, one row
    every 20 units, starting radius + 30 below the centre.
    """
    geo = display.geometry
    cx, cy = geo.center_x, geo.center_y

    surface.clear(geo.width, geo.height)

    if display.empty is not None:
        surface.draw_arc(cx, cy, geo.radius, 0, FULL_CIRCLE, EMPTY_RING_COLOR, geo.stroke_width)
        surface.fill_text(
            display.empty.placeholder, cx, cy, PLACEHOLDER_TEXT_COLOR, "14px Arial", "center"
        )
        return

    for chart_slice in display.slices or ():
        if chart_slice.sweep_angle <= 0:
            continue
        surface.draw_arc(
            cx,
            cy,
            geo.radius,
            chart_slice.start_angle,
            chart_slice.end_angle,
            chart_slice.color_token.value,
            geo.stroke_width,
        )

    legend_y = cy + geo.radius + 30
    for row, line in enumerate(display.legend):
        top = legend_y + row * 20
        surface.fill_rect(cx - 60, top, 12, 12, line.color_token.value)
        surface.fill_text(line.text, cx - 45, top + 10, LEGEND_TEXT_COLOR, "12px Arial", "left")
