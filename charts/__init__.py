"""Chart layout (bar, donut) as presentation-neutral shapes, plus an SVG adapter."""

from charts.bar import BarChart, render_bar_chart
from charts.geometry import Arc, Point, Rect, Text, polar_to_cartesian
from charts.pie import PALETTE, LegendEntry, PieChart, render_pie_chart
from charts.svg import bar_chart_svg, chart_svg, pie_chart_svg

__all__ = [
    "Arc",
    "BarChart",
    "LegendEntry",
    "PALETTE",
    "PieChart",
    "Point",
    "Rect",
    "Text",
    "bar_chart_svg",
    "chart_svg",
    "pie_chart_svg",
    "polar_to_cartesian",
    "render_bar_chart",
    "render_pie_chart",
]
