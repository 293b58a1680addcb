"""Tests for highlight selection and delta calculation."""

import pytest

from reel_chart.data.insights import calculate_delta, find_highlight_point


class TestFindHighlightPoint:
    def test_crossing_beats_larger_gap(self, build_dataset) -> None:
        dataset = build_dataset(
            (10, 5), (11, 6), (12, 9), (8, 12), (7, 20), (6, 25), (5, 30), (1, 60), (4, 20)
        )

        assert find_highlight_point(dataset) == 3

    def test_first_crossing_wins(self, build_dataset) -> None:
        dataset = build_dataset((1, 2), (3, 2), (1, 2), (3, 2))

        assert find_highlight_point(dataset) == 1

    def test_largest_gap_without_crossing(self, build_dataset) -> None:
        dataset = build_dataset((10, 9), (20, 5), (12, 10), (13, 12))

        assert find_highlight_point(dataset) == 1

    def test_gap_breaks_crossing_chain(self, build_dataset) -> None:
        dataset = build_dataset((5, 1), (None, 3), (1, 5))

        assert find_highlight_point(dataset) == 0

    def test_touching_is_not_a_crossing(self, build_dataset) -> None:
        dataset = build_dataset((3, 1), (2, 2), (1, 3))

        assert find_highlight_point(dataset) == 0

    def test_no_complete_point_returns_zero(self, build_dataset) -> None:
        dataset = build_dataset((1, None), (None, 2), (3, None))

        assert find_highlight_point(dataset) == 0

    def test_empty_dataset_returns_zero(self) -> None:
        assert find_highlight_point(()) == 0


class TestCalculateDelta:
    def test_change_and_percent(self, build_dataset) -> None:
        deltas = calculate_delta(build_dataset((100, 200), (120, 150), (150, 100)))

        assert deltas.a.change == pytest.approx(50)
        assert deltas.a.percent == pytest.approx(50)
        assert deltas.b.change == pytest.approx(-100)
        assert deltas.b.percent == pytest.approx(-50)

    def test_skips_gaps_at_the_edges(self, build_dataset) -> None:
        deltas = calculate_delta(build_dataset((None, 10), (40, 20), (50, None)))

        assert deltas.a.change == pytest.approx(10)
        assert deltas.a.percent == pytest.approx(25)
        assert deltas.b.change == pytest.approx(10)

    def test_zero_start_reports_zero_percent(self, build_dataset) -> None:
        deltas = calculate_delta(build_dataset((0, 1), (5, 1)))

        assert deltas.a.change == pytest.approx(5)
        assert deltas.a.percent == 0

    def test_short_or_empty_series(self, build_dataset) -> None:
        single = calculate_delta(build_dataset((5, 5)))
        missing = calculate_delta(build_dataset((None, 1), (None, 2)))

        assert single.a.change == 0 and single.a.percent == 0
        assert missing.a.change == 0 and missing.a.percent == 0
        assert missing.b.change == pytest.approx(1)

    def test_format_percent(self, build_dataset) -> None:
        deltas = calculate_delta(build_dataset((100, 200), (150, 150)))

        assert deltas.a.format_percent() == "+50.0%"
        assert deltas.b.format_percent() == "-25.0%"
