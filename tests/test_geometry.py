"""Tests for value scaling and gap-aware path building."""

import pytest

from reel_chart.data.models import Series
from reel_chart.timeline.geometry import (
    PlotPoint,
    ValueRange,
    last_present,
    path_segments,
    series_points,
    value_range,
    x_position,
    y_position,
)
from reel_chart.timeline.phases import ChartArea

AREA = ChartArea(x=10, y=20, width=100, height=200)


class TestValueRange:
    def test_spans_both_series_with_headroom(self, build_dataset) -> None:
        bounds = value_range(build_dataset((10, 50), (30, None), (None, 20)))

        assert bounds.min == pytest.approx(6)
        assert bounds.max == pytest.approx(54)

    def test_flat_values_get_unit_span(self, build_dataset) -> None:
        bounds = value_range(build_dataset((5, 5), (5, 5)))

        assert bounds.min == pytest.approx(4.9)
        assert bounds.max == pytest.approx(5.1)

    def test_no_values_fall_back_to_default(self, build_dataset) -> None:
        bounds = value_range(build_dataset((None, None)))

        assert bounds.min == pytest.approx(-10)
        assert bounds.max == pytest.approx(110)


class TestPositions:
    def test_x_spreads_across_width(self) -> None:
        assert x_position(0, 5, AREA) == 10
        assert x_position(4, 5, AREA) == 110
        assert x_position(0, 1, AREA) == 10

    def test_y_is_inverted(self) -> None:
        bounds = ValueRange(min=0, max=100)

        assert y_position(0, bounds, AREA) == 220
        assert y_position(100, bounds, AREA) == 20
        assert y_position(25, bounds, AREA) == 170

    def test_gap_has_no_y(self, build_dataset) -> None:
        points = series_points(
            build_dataset((1, 1), (None, 2)), Series.A, ValueRange(0, 10), AREA
        )

        assert points[1].y is None
        assert points[1].x == 110


class TestPathSegments:
    def test_gaps_open_new_segments(self) -> None:
        points = [
            PlotPoint(0, 0, 1),
            PlotPoint(1, 1, None),
            PlotPoint(2, 2, 3),
            PlotPoint(3, 3, 4),
            PlotPoint(4, 4, None),
        ]

        segments = path_segments(points)

        assert [segment.indices for segment in segments] == [(0,), (2, 3)]
        assert not segments[0].is_line
        assert segments[1].is_line
        assert segments[1].to_svg_path() == "M 2 3 L 3 4"

    def test_all_gaps(self) -> None:
        assert path_segments([PlotPoint(0, 0, None), PlotPoint(1, 1, None)]) == ()


class TestLastPresent:
    def test_searches_backwards(self) -> None:
        points = [PlotPoint(0, 0, 1), PlotPoint(1, 1, None), PlotPoint(2, 2, None)]

        assert last_present(points, 2).index == 0
        assert last_present(points, 10).index == 0

    def test_none_when_nothing_before(self) -> None:
        points = [PlotPoint(0, 0, None), PlotPoint(1, 1, 5)]

        assert last_present(points, 0) is None
        assert last_present(points, -1) is None
        assert last_present([], 3) is None
