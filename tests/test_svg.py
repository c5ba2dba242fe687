"""Tests for charts/svg.py, the svgwrite adapter."""
from analytics.aggregations import LabeledPoint
from charts.bar import render_bar_chart
from charts.pie import render_pie_chart
from charts.svg import bar_chart_svg, chart_svg, pie_chart_svg


class TestBarSvg:
    def test_one_rect_and_text_per_point(self):
        svg = bar_chart_svg(render_bar_chart([LabeledPoint("Jan", 3), LabeledPoint("Feb", 5)]))
        assert svg.startswith("<svg")
        assert svg.count("<rect") == 2
        assert svg.count("<text") == 2
        assert ">Jan</text>" in svg and ">Feb</text>" in svg

    def test_percent_units(self):
        svg = bar_chart_svg(render_bar_chart([LabeledPoint("X", 10)]))
        assert 'width="100%"' in svg
        assert 'x="5%"' in svg
        assert 'width="92%"' in svg

    def test_labels_escaped(self):
        svg = bar_chart_svg(render_bar_chart([LabeledPoint("R&D <1>", 1)]))
        assert "R&amp;D &lt;1&gt;" in svg

    def test_empty_chart_is_valid_svg(self):
        svg = bar_chart_svg(render_bar_chart([]))
        assert svg.startswith("<svg") and "<rect" not in svg


class TestPieSvg:
    def test_one_path_per_visible_arc(self):
        svg = pie_chart_svg(render_pie_chart([LabeledPoint("A", 1), LabeledPoint("B", 0)]))
        assert svg.count("<path") == 1
        assert 'fill="none"' in svg
        assert 'stroke="#1976d2"' in svg
        assert 'viewBox="0 0 260 260"' in svg

    def test_all_zero_draws_no_paths(self):
        svg = pie_chart_svg(render_pie_chart([LabeledPoint("A", 0)]))
        assert "<path" not in svg


def test_dispatch():
    bar = render_bar_chart([LabeledPoint("X", 1)])
    pie = render_pie_chart([LabeledPoint("X", 1)])
    assert "<rect" in chart_svg(bar)
    assert "<path" in chart_svg(pie)
