"""Drawing Surfaces - Concrete targets for the macro chart painter.

RecordingSurface keeps the draw calls as data; SvgSurface turns them into an
SVG document.
"""

import math
from typing import Any
from xml.sax.saxutils import escape, quoteattr


class RecordingSurface:
    """Surface that records every draw call as a (name, kwargs) pair."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def clear(self, width: float, height: float) -> None:
        self.calls = [("clear", {"width": width, "height": height})]

    def draw_arc(self, cx, cy, radius, start_angle, end_angle, color, stroke_width) -> None:
        self.calls.append((
            "arc",
            {
                "cx": cx,
                "cy": cy,
                "radius": radius,
                "start_angle": start_angle,
                "end_angle": end_angle,
                "color": color,
                "stroke_width": stroke_width,
            },
        ))

    def fill_rect(self, x, y, width, height, color) -> None:
        self.calls.append(("rect", {"x": x, "y": y, "width": width, "height": height, "color": color}))

    def fill_text(self, text, x, y, color, font, align) -> None:
        self.calls.append(("text", {"text": text, "x": x, "y": y, "color": color, "font": font, "align": align}))

    def named(self, name: str) -> list[dict[str, Any]]:
        """All recorded calls of one kind."""
        return [kwargs for call, kwargs in self.calls if call == name]


def _fmt(value: float) -> str:
    return f"{value:.3f}".rstrip("0").rstrip(".")


def _point(cx: float, cy: float, radius: float, angle: float) -> tuple[float, float]:
    return cx + radius * math.cos(angle), cy + radius * math.sin(angle)


class SvgSurface:
    """Surface that builds an SVG document.

    SVG's y axis points down like a canvas, so canvas angles map directly.
    """

    _ANCHORS = {"left": "start", "center": "middle", "right": "end"}

    def __init__(self) -> None:
        self.width: float = 0
        self.height: float = 0
        self.elements: list[str] = []
        self._bottom: float = 0

    def clear(self, width: float, height: float) -> None:
        self.width = width
        self.height = height
        self.elements = []
        self._bottom = height

    def draw_arc(self, cx, cy, radius, start_angle, end_angle, color, stroke_width) -> None:
        sweep = end_angle - start_angle
        stroke = f'fill="none" stroke={quoteattr(color)} stroke-width="{_fmt(stroke_width)}"'

        # A path cannot close a full circle by itself
        if sweep >= 2 * math.pi - 1e-9:
            self.elements.append(
                f'<circle cx="{_fmt(cx)}" cy="{_fmt(cy)}" r="{_fmt(radius)}" {stroke}/>'
            )
            return

        x1, y1 = _point(cx, cy, radius, start_angle)
        x2, y2 = _point(cx, cy, radius, end_angle)
        large_arc = 1 if sweep > math.pi else 0
        self.elements.append(
            f'<path d="M {_fmt(x1)} {_fmt(y1)} A {_fmt(radius)} {_fmt(radius)} 0 {large_arc} 1 '
            f'{_fmt(x2)} {_fmt(y2)}" {stroke}/>'
        )

    def fill_rect(self, x, y, width, height, color) -> None:
        self._bottom = max(self._bottom, y + height)
        self.elements.append(
            f'<rect x="{_fmt(x)}" y="{_fmt(y)}" width="{_fmt(width)}" height="{_fmt(height)}" '
            f'fill={quoteattr(color)}/>'
        )

    def fill_text(self, text, x, y, color, font, align) -> None:
        size, _, family = font.partition(" ")
        self._bottom = max(self._bottom, y + 4)
        anchor = self._ANCHORS.get(align, "start")
        self.elements.append(
            f'<text x="{_fmt(x)}" y="{_fmt(y)}" fill={quoteattr(color)} font-size={quoteattr(size)} '
            f'font-family={quoteattr(family or "Arial")} text-anchor="{anchor}">{escape(text)}</text>'
        )

    def to_svg(self) -> str:
        """Serialize the drawn elements into a standalone SVG document.

        The canvas grows downward to fit a legend drawn below the ring.
        """
        height = _fmt(self._bottom)
        body = "".join(self.elements)
        return (
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{_fmt(self.width)}" '
            f'height="{height}" viewBox="0 0 {_fmt(self.width)} {height}">'
            f"{body}</svg>"
        )
