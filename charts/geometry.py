"""
Presentation-neutral geometry for the chart renderers.

Renderers emit lists of these shapes; the SVG adapter (charts/svg.py) is the
only code that knows about markup. Each shape carries a ``kind`` tag and a
``to_dict()`` so the same instructions can be served as JSON.

Units follow the drawing surface the renderers target: bar charts are laid
out horizontally in percent of the surface width and vertically in absolute
units; pie charts use absolute units on a square surface.

Angles are in degrees, 0 at 12 o'clock, increasing clockwise.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, ClassVar

# Spans at or above this are drawn as a closed ring.
FULL_CIRCLE = 360.0 - 1e-9


def polar_to_cartesian(cx: float, cy: float, radius: float, angle: float) -> "Point":
    """Point at *angle* degrees (0 = top, clockwise) on a circle around (cx, cy)."""
    rad = (angle - 90.0) * math.pi / 180.0
    return Point(cx + radius * math.cos(rad), cy + radius * math.sin(rad))


@dataclass(frozen=True)
class Point:
    kind: ClassVar[str] = "point"

    x: float
    y: float

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "x": self.x, "y": self.y}


@dataclass(frozen=True)
class Rect:
    """Axis-aligned bar. ``x``/``width`` are percent; ``y``/``height`` absolute."""
    kind: ClassVar[str] = "rect"

    x: float
    y: float
    width: float
    height: float
    fill: str
    label: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind, "x": self.x, "y": self.y,
            "width": self.width, "height": self.height,
            "fill": self.fill, "label": self.label,
        }


@dataclass(frozen=True)
class Text:
    """A text run. ``x`` is percent of surface width; ``y`` absolute."""
    kind: ClassVar[str] = "text"

    x: float
    y: float
    text: str
    font_size: float = 10
    fill: str = "#111"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind, "x": self.x, "y": self.y, "text": self.text,
            "font_size": self.font_size, "fill": self.fill,
        }


@dataclass(frozen=True)
class Arc:
    """A stroked circular arc from ``start_angle`` to ``end_angle`` (clockwise)."""
    kind: ClassVar[str] = "arc"

    center: Point
    radius: float
    start_angle: float
    end_angle: float
    stroke: str
    stroke_width: float
    label: str = ""

    @property
    def span(self) -> float:
        return self.end_angle - self.start_angle

    @property
    def large_arc(self) -> int:
        return 1 if self.span > 180 else 0

    @property
    def start_point(self) -> Point:
        return polar_to_cartesian(self.center.x, self.center.y, self.radius, self.start_angle)

    @property
    def end_point(self) -> Point:
        return polar_to_cartesian(self.center.x, self.center.y, self.radius, self.end_angle)

    def path_d(self) -> str:
        """SVG path data; empty for a zero span.

        The path runs from the end point back to the start point with sweep
        flag 0, which traces the same clockwise segment. A full circle is
        split into two half arcs because a single arc with coincident
        endpoints draws nothing.
        """
        if self.span <= 0:
            return ""
        r = self.radius
        if self.span >= FULL_CIRCLE:
            top = polar_to_cartesian(self.center.x, self.center.y, r, self.start_angle)
            bottom = polar_to_cartesian(self.center.x, self.center.y, r, self.start_angle + 180)
            return (
                f"M {top.x} {top.y} A {r} {r} 0 0 0 {bottom.x} {bottom.y} "
                f"A {r} {r} 0 0 0 {top.x} {top.y}"
            )
        start = self.end_point
        end = self.start_point
        return f"M {start.x} {start.y} A {r} {r} 0 {self.large_arc} 0 {end.x} {end.y}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "center": self.center.to_dict(),
            "radius": self.radius,
            "start_angle": self.start_angle,
            "end_angle": self.end_angle,
            "large_arc": self.large_arc,
            "stroke": self.stroke,
            "stroke_width": self.stroke_width,
            "label": self.label,
            "d": self.path_d(),
        }


Shape = Rect | Text | Arc
