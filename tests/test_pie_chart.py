"""Tests for charts/pie.py donut layout."""
import pytest

from analytics.aggregations import LabeledPoint
from charts.pie import DEFAULT_SIZE, PALETTE, color_for, render_pie_chart


def _pts(*values):
    return [LabeledPoint(chr(ord("A") + i), v) for i, v in enumerate(values)]


class TestTwoEqualSlices:
    def test_each_spans_half(self):
        chart = render_pie_chart(_pts(50, 50), size=260)
        assert [a.span for a in chart.arcs] == [180.0, 180.0]
        assert chart.arcs[0].start_angle == 0
        assert chart.arcs[1].start_angle == 180

    def test_legend_percentages(self):
        chart = render_pie_chart(_pts(50, 50), size=260)
        assert [e.percent for e in chart.legend] == ["50.0", "50.0"]

    def test_ring_geometry(self):
        chart = render_pie_chart(_pts(50, 50), size=260)
        arc = chart.arcs[0]
        assert arc.radius == 120
        assert arc.stroke_width == 130
        assert (arc.center.x, arc.center.y) == (130, 130)


class TestInvariants:
    def test_spans_sum_to_full_circle(self):
        chart = render_pie_chart(_pts(3, 7, 11.5, 0.25))
        assert sum(a.span for a in chart.arcs) == pytest.approx(360, abs=1e-6)

    def test_arcs_are_contiguous(self):
        chart = render_pie_chart(_pts(3, 7, 11.5))
        for prev, nxt in zip(chart.arcs, chart.arcs[1:]):
            assert nxt.start_angle == pytest.approx(prev.end_angle)

    def test_legend_sums_to_hundred(self):
        chart = render_pie_chart(_pts(1, 1, 1))
        assert round(sum(float(e.percent) for e in chart.legend), 1) == pytest.approx(100, abs=0.1)

    @pytest.mark.parametrize("count", [3, 6, 7, 9, 12])
    def test_legend_rounding_error_bounded_by_slice_count(self, count):
        chart = render_pie_chart(_pts(*([1] * count)))
        total = sum(float(e.percent) for e in chart.legend)
        assert abs(total - 100) <= 0.05 * count + 1e-9

    def test_six_equal_slices_keep_one_decimal_each(self):
        chart = render_pie_chart(_pts(*([1] * 6)))
        assert [e.percent for e in chart.legend] == ["16.7"] * 6

    def test_large_arc_flag(self):
        chart = render_pie_chart(_pts(3, 1))
        assert chart.arcs[0].large_arc == 1
        assert chart.arcs[1].large_arc == 0

    def test_negative_values_get_no_share(self):
        chart = render_pie_chart(_pts(100, -50))
        assert chart.arcs[0].span == pytest.approx(360)
        assert chart.arcs[1].span == 0
        assert chart.legend[1].value == 0
        assert chart.legend[1].percent == "0.0"


class TestDegenerate:
    def test_empty_series(self):
        chart = render_pie_chart([])
        assert chart.arcs == [] and chart.legend == []
        assert chart.size == DEFAULT_SIZE

    def test_all_zero_has_no_percentages(self):
        chart = render_pie_chart(_pts(0, 0))
        assert all(a.span == 0 for a in chart.arcs)
        assert [e.percent for e in chart.legend] == [None, None]


class TestPalette:
    def test_cycles(self):
        assert color_for(0) == "#1976d2"
        assert color_for(7) == color_for(0)
        assert len(PALETTE) == 7

    def test_arcs_and_legend_share_colors(self):
        chart = render_pie_chart(_pts(*range(1, 10)))
        assert [a.stroke for a in chart.arcs] == [e.color for e in chart.legend]
        assert chart.arcs[8].stroke == PALETTE[1]


def test_to_dict():
    data = render_pie_chart(_pts(2, 2)).to_dict()
    assert data["type"] == "pie"
    assert data["center"] == {"kind": "point", "x": 130, "y": 130}
    assert data["shapes"][0]["kind"] == "arc"
    assert data["legend"][0] == {"label": "A", "color": "#1976d2", "value": 2.0, "percent": "50.0"}
