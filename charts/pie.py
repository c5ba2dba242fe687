"""
Donut chart layout.

Each point becomes a stroked arc whose angular width is its share of the
total. The stroke is half the chart size wide, so neighbouring arcs fuse
into a ring; there are no filled wedges.

Negative values are clamped to 0 before shares are computed. The underlying
series keeps its signed sums; only this chart ignores losses. The total is
floored at 1 so an empty or all-zero series lays out zero-width arcs
instead of dividing by zero.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from analytics.aggregations import LabeledPoint
from charts.geometry import Arc, Point
from utils.strings import safe_float

DEFAULT_SIZE = 260
PALETTE: tuple[str, ...] = (
    "#1976d2",
    "#388e3c",
    "#f57c00",
    "#d32f2f",
    "#7b1fa2",
    "#0288d1",
    "#ffb300",
)

_RING_INSET = 10


@dataclass(frozen=True)
class LegendEntry:
    label: str
    color: str
    value: float
    percent: str | None     # one decimal, e.g. "42.5"; None when nothing to share

    def to_dict(self) -> dict:
        return {
            "label": self.label, "color": self.color,
            "value": self.value, "percent": self.percent,
        }


@dataclass
class PieChart:
    """Draw instructions for one donut chart plus its legend."""

    size: float
    arcs: list[Arc] = field(default_factory=list)
    legend: list[LegendEntry] = field(default_factory=list)

    @property
    def center(self) -> Point:
        return Point(self.size / 2, self.size / 2)

    def to_dict(self) -> dict:
        return {
            "type": "pie",
            "size": self.size,
            "center": self.center.to_dict(),
            "shapes": [a.to_dict() for a in self.arcs],
            "legend": [e.to_dict() for e in self.legend],
        }


def color_for(index: int) -> str:
    return PALETTE[index % len(PALETTE)]


def render_pie_chart(
    points: Sequence[LabeledPoint],
    size: float = DEFAULT_SIZE,
) -> PieChart:
    """Lay out one arc and one legend entry per point."""
    chart = PieChart(size=size)
    clamped = [max(0.0, safe_float(p.value)) for p in points]
    raw_total = sum(clamped)
    total = raw_total if raw_total > 0 else 1.0
    has_share = raw_total > 0

    center = chart.center
    radius = size / 2 - _RING_INSET
    stroke_width = size / 2

    running = 0.0
    for i, (point, value) in enumerate(zip(points, clamped)):
        start = 360.0 * running / total
        running += value
        end = start + 360.0 * value / total
        color = color_for(i)
        chart.arcs.append(Arc(
            center=center,
            radius=radius,
            start_angle=start,
            end_angle=end,
            stroke=color,
            stroke_width=stroke_width,
            label=point.label,
        ))
        percent = f"{value / total * 100:.1f}" if has_share else None
        chart.legend.append(LegendEntry(point.label, color, value, percent))
    return chart
