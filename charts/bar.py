"""
Categorical bar chart layout.

Bars share the surface width evenly (percent units, 5% left inset) and grow
up from a baseline 20 units above the bottom edge, leaving room for the
label row. Heights are scaled so the largest value fills ``height - 30``.

Bar width is ``max(24, floor(100 / n - 8))`` percent. From five bars up
the 24% floor is wider than a slot and neighbouring bars overlap.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from analytics.aggregations import LabeledPoint
from charts.geometry import Rect, Text
from utils.strings import safe_float

DEFAULT_HEIGHT = 220
BAR_FILL = "#1976d2"
LABEL_FILL = "#111"
LABEL_FONT_SIZE = 10

_GAP = 8            # percent
_MIN_WIDTH = 24     # percent
_LEFT_INSET = 5     # percent
_BASELINE = 20      # units reserved under the bars
_HEADROOM = 30      # height - _HEADROOM is the tallest bar
_LABEL_DROP = 6     # label baseline distance from the bottom edge


@dataclass
class BarChart:
    """Draw instructions for one bar chart."""

    height: float
    bars: list[Rect] = field(default_factory=list)
    labels: list[Text] = field(default_factory=list)

    @property
    def shapes(self) -> list[Rect | Text]:
        out: list[Rect | Text] = []
        for bar, label in zip(self.bars, self.labels):
            out.extend((bar, label))
        return out

    def to_dict(self) -> dict:
        return {
            "type": "bar",
            "width": "100%",
            "height": self.height,
            "shapes": [s.to_dict() for s in self.shapes],
        }


def bar_width(count: int) -> int:
    """Bar width in percent for *count* bars."""
    slot = 100 / (count or 1)
    return max(_MIN_WIDTH, math.floor(slot - _GAP))


def render_bar_chart(
    points: Sequence[LabeledPoint],
    height: float = DEFAULT_HEIGHT,
) -> BarChart:
    """Lay out one bar and one label per point.

    An empty series yields an empty chart. Values at or below zero produce
    zero-height bars.
    """
    chart = BarChart(height=height)
    if not points:
        return chart

    values = [safe_float(p.value) for p in points]
    top = max(max(values), 1)
    count = len(points)
    slot = 100 / count
    width = bar_width(count)
    usable = height - _HEADROOM

    for i, (point, value) in enumerate(zip(points, values)):
        x = i * slot + _LEFT_INSET
        h = max(0.0, value / top * usable)
        y = height - h - _BASELINE
        chart.bars.append(Rect(x=x, y=y, width=width, height=h, fill=BAR_FILL, label=point.label))
        chart.labels.append(
            Text(x=x + 1, y=height - _LABEL_DROP, text=point.label,
                 font_size=LABEL_FONT_SIZE, fill=LABEL_FILL)
        )
    return chart
