"""
SVG adapter for chart draw instructions.

The renderers know nothing about markup; this module turns a BarChart or
PieChart into an SVG document string with svgwrite. Templates embed the
result inline and the API serves it as image/svg+xml.
"""

from __future__ import annotations

import svgwrite

from charts.bar import BarChart
from charts.pie import PieChart


def _num(value: float) -> str:
    return f"{value:g}"


def bar_chart_svg(chart: BarChart) -> str:
    """Render a bar chart as an SVG string sized 100% wide."""
    dwg = svgwrite.Drawing(size=("100%", chart.height), profile="full", debug=False)
    dwg.attribs["style"] = "background: #fff"
    for bar, label in zip(chart.bars, chart.labels):
        group = dwg.g()
        group.add(dwg.rect(
            insert=(f"{_num(bar.x)}%", _num(bar.y)),
            size=(f"{_num(bar.width)}%", _num(bar.height)),
            fill=bar.fill,
        ))
        group.add(dwg.text(
            label.text,
            insert=(f"{_num(label.x)}%", _num(label.y)),
            font_size=_num(label.font_size),
            fill=label.fill,
        ))
        dwg.add(group)
    return dwg.tostring()


def pie_chart_svg(chart: PieChart) -> str:
    """Render a donut chart as a square SVG string; zero-width arcs are skipped."""
    size = _num(chart.size)
    dwg = svgwrite.Drawing(size=(size, size), profile="full", debug=False)
    dwg.attribs["viewBox"] = f"0 0 {size} {size}"
    for arc in chart.arcs:
        d = arc.path_d()
        if not d:
            continue
        dwg.add(dwg.path(
            d=d,
            fill="none",
            stroke=arc.stroke,
            stroke_width=_num(arc.stroke_width),
            stroke_linecap="butt",
        ))
    return dwg.tostring()


def chart_svg(chart: BarChart | PieChart) -> str:
    if isinstance(chart, PieChart):
        return pie_chart_svg(chart)
    return bar_chart_svg(chart)
