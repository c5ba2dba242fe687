"""
The analytics page as one computed value.

build_dashboard() takes the full record snapshot and a RecordFilter and
returns everything the page and the analytics API need: the service-type
options (from the unfiltered records), the three series and their charts.
Results are pure values; the web layer memoises them per store version.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from analytics.aggregations import LabeledPoint, build_series
from charts.bar import BarChart, render_bar_chart
from charts.pie import PieChart, render_pie_chart
from charts.svg import chart_svg
from records.filters import RecordFilter, service_options
from records.models import Record

# series name -> (chart type, heading)
CHARTS: dict[str, tuple[str, str]] = {
    "revenue_by_date":   ("bar", "Revenue by date"),
    "profit_by_service": ("bar", "Profit by service type"),
    "income_by_name":    ("pie", "Income distribution by name"),
}


@dataclass
class Dashboard:
    record_filter: RecordFilter
    service_options: list[str]
    record_count: int
    series: dict[str, list[LabeledPoint]]
    charts: dict[str, BarChart | PieChart]

    def svg(self, name: str) -> str:
        """SVG markup for chart *name*; KeyError for an unknown chart."""
        return chart_svg(self.charts[name])

    def filter_dict(self) -> dict:
        return {
            "service_types": sorted(self.record_filter.service_types),
            "from_date": self.record_filter.from_date,
            "to_date": self.record_filter.to_date,
        }

    def series_dict(self) -> dict:
        return {
            "filter": self.filter_dict(),
            "service_options": self.service_options,
            "record_count": self.record_count,
            "series": {
                name: [p.to_dict() for p in points]
                for name, points in self.series.items()
            },
        }

    def charts_dict(self) -> dict:
        return {
            "filter": self.filter_dict(),
            "charts": {
                name: {"title": CHARTS[name][1], **chart.to_dict()}
                for name, chart in self.charts.items()
            },
        }


def build_dashboard(records: Sequence[Record], record_filter: RecordFilter) -> Dashboard:
    filtered = record_filter.apply(records)
    series = build_series(filtered)
    charts: dict[str, BarChart | PieChart] = {}
    for name, (kind, _title) in CHARTS.items():
        if kind == "pie":
            charts[name] = render_pie_chart(series[name])
        else:
            charts[name] = render_bar_chart(series[name])
    return Dashboard(
        record_filter=record_filter,
        service_options=service_options(records),
        record_count=len(filtered),
        series=series,
        charts=charts,
    )
