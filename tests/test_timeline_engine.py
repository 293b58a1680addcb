"""Tests for the frame-indexed timeline engine."""

import json
from concurrent.futures import ThreadPoolExecutor

import pytest

from reel_chart.timeline.engine import TimelineRequest, tick_indices, timeline_state
from reel_chart.timeline.phases import (
    Phase,
    TimelineConfig,
    ease_out_cubic,
    ramp,
    visible_count,
)


def _state(composition, frame, config=None):
    return timeline_state(
        TimelineRequest(
            dataset=composition.dataset,
            text=composition.text,
            highlight_index=composition.highlight_index,
            frame=frame,
            config=config or TimelineConfig(),
        )
    )


def _request(dataset, text, frame, highlight_index=0, config=None):
    return TimelineRequest(
        dataset=dataset,
        text=text,
        highlight_index=highlight_index,
        frame=frame,
        config=config or TimelineConfig(),
    )


class TestTimelineConfig:
    def test_reference_boundaries(self, reference_config) -> None:
        assert reference_config.fps == 30
        assert reference_config.total_frames == 450
        assert reference_config.hook_end == 45
        assert reference_config.stroke_end == 375
        assert reference_config.highlight_end == 390
        assert reference_config.takeaway_start == 385
        assert reference_config.takeaway_end == 405
        assert reference_config.frame_duration == 33

    def test_for_duration_scales_phases(self) -> None:
        config = TimelineConfig.for_duration(24, 10)

        assert config.total_frames == 240
        assert config.hook_end == 24
        assert config.stroke_end == 200

    @pytest.mark.parametrize(
        ("fps", "total_frames"), [(0, 450), (-30, 450), (30, -1)]
    )
    def test_rejects_unusable_timing(self, fps: int, total_frames: int) -> None:
        with pytest.raises(ValueError):
            TimelineConfig(fps=fps, total_frames=total_frames)

    def test_frame_time_is_rounded_not_truncated(self, reference_config) -> None:
        assert reference_config.time_at(450) == 15000
        assert reference_config.time_at(1) == 33
        assert reference_config.time_at(2) == 67

    def test_overrides_win(self) -> None:
        config = TimelineConfig.for_video(30, 450, hook_end=10)

        assert config.hook_end == 10
        assert config.stroke_end == 375

    def test_chart_area(self, reference_config) -> None:
        area = reference_config.chart_area

        assert (area.x, area.y) == (80, 372)
        assert (area.width, area.height) == (920, 1176)
        assert area.bottom == 1548
        assert area.right == 1000

    @pytest.mark.parametrize(
        ("frame", "phase"),
        [
            (0, Phase.HOOK),
            (44, Phase.HOOK),
            (45, Phase.REVEAL),
            (374, Phase.REVEAL),
            (375, Phase.FREEZE),
            (384, Phase.FREEZE),
            (385, Phase.TAKEAWAY),
            (449, Phase.TAKEAWAY),
        ],
    )
    def test_phase_at(self, reference_config, frame: int, phase: Phase) -> None:
        assert reference_config.phase_at(frame) is phase


class TestEasing:
    def test_ramp_clamps(self) -> None:
        assert ramp(-10, 0, 10) == 0
        assert ramp(5, 0, 10) == 0.5
        assert ramp(20, 0, 10) == 1

    def test_ramp_step_for_empty_window(self) -> None:
        assert ramp(9, 10, 10) == 0
        assert ramp(10, 10, 10) == 1

    def test_ease_out_cubic(self) -> None:
        assert ease_out_cubic(0) == 0
        assert ease_out_cubic(1) == 1
        assert ease_out_cubic(0.5) == pytest.approx(0.875)

    def test_reveal_is_step_when_stroke_precedes_hook(self) -> None:
        config = TimelineConfig(hook_end=100, stroke_end=50)

        assert visible_count(49, 10, config) == 0
        assert visible_count(50, 10, config) == 10


class TestTimelineState:
    def test_highlight_ramps_in_after_reveal(self, composition, reference_config) -> None:
        at_stroke_end = _state(composition, 375)
        after_fade = _state(composition, 390)

        assert at_stroke_end.visible_count == len(composition.dataset)
        assert at_stroke_end.highlight_opacity == 0
        assert after_fade.highlight_opacity == 1

    def test_hook_frames_show_nothing_yet(self, composition) -> None:
        state = _state(composition, 0)

        assert state.phase is Phase.HOOK
        assert state.visible_count == 0
        assert state.lines.a == () and state.lines.b == ()
        assert state.markers.a is None and state.markers.b is None
        assert state.cursor is None
        assert state.hook_opacity == 0
        assert state.deltas is None
        assert all(tick.opacity == 0 for tick in state.ticks)

    def test_same_frame_same_state(self, composition) -> None:
        assert _state(composition, 200) == _state(composition, 200)

    def test_order_does_not_matter(self, composition) -> None:
        frames = list(range(0, 450, 7))

        forward = [_state(composition, frame) for frame in frames]
        backward = [_state(composition, frame) for frame in reversed(frames)]

        assert forward == list(reversed(backward))

    def test_concurrent_calls_match_sequential(self, composition) -> None:
        frames = list(range(0, 450, 5))
        sequential = [_state(composition, frame) for frame in frames]

        with ThreadPoolExecutor(max_workers=4) as executor:
            parallel = list(executor.map(lambda frame: _state(composition, frame), frames))

        assert parallel == sequential

    def test_visible_count_never_decreases(self, composition) -> None:
        counts = [_state(composition, frame).visible_count for frame in range(-5, 460)]

        assert counts == sorted(counts)
        assert counts[-1] == len(composition.dataset)

    def test_gap_splits_line(self, composition) -> None:
        state = _state(composition, 375)

        assert [segment.indices for segment in state.lines.a] == [(0, 1, 2), (4,)]
        assert [segment.indices for segment in state.lines.b] == [(0, 1, 2, 3, 4)]
        assert not state.lines.a[1].is_line

    def test_marker_falls_back_to_last_value_before_gap(self, composition) -> None:
        frame = next(f for f in range(450) if _state(composition, f).visible_count == 4)
        state = _state(composition, frame)
        full = _state(composition, 375)

        assert state.markers.a.x == full.lines.a[0].points[2][0]
        assert state.markers.b.x == full.lines.b[0].points[3][0]

    def test_cursor_follows_reveal_edge(self, composition) -> None:
        frame = next(f for f in range(450) if _state(composition, f).visible_count == 2)
        state = _state(composition, frame)

        assert state.phase is Phase.REVEAL
        assert state.cursor.label == composition.dataset[1].date_label
        assert state.cursor.top == state.chart_area.y
        assert state.cursor.bottom == state.chart_area.bottom
        assert _state(composition, 375).cursor is None

    def test_ticks_fade_in_with_reveal(self, composition) -> None:
        assert all(tick.opacity == 1 for tick in _state(composition, 375).ticks)
        assert [tick.index for tick in _state(composition, 375).ticks] == [0, 1, 2, 3, 4]

    def test_highlight_rings_at_index(self, composition) -> None:
        state = _state(composition, 400)
        full = _state(composition, 375)

        assert state.highlights.a.x == full.lines.a[0].points[2][0]
        assert state.highlights.a.y == full.lines.a[0].points[2][1]
        assert state.highlights.b is not None
        assert _state(composition, 374).highlights.a is None

    def test_deltas_after_reveal(self, composition) -> None:
        assert _state(composition, 374).deltas is None

        deltas = _state(composition, 375).deltas
        assert deltas.a.label == "Revenue"
        assert deltas.a.text == "+50.0%"
        assert deltas.b.text == "+4.2%"

    def test_text_opacities(self, composition) -> None:
        assert _state(composition, 45).hook_opacity == 1
        assert _state(composition, 382).delta_opacity == pytest.approx(7 / 15)
        assert _state(composition, 385).takeaway_opacity == 0
        assert _state(composition, 395).takeaway_opacity == pytest.approx(0.5)
        assert _state(composition, 405).takeaway_opacity == 1

    def test_time_and_legend(self, composition) -> None:
        state = _state(composition, 30)

        assert state.time_ms == 1000
        assert state.legend.a == "Revenue"
        assert state.legend.b == "Costs"

    def test_state_is_json_ready(self, composition) -> None:
        payload = _state(composition, 400).to_dict()

        assert payload["phase"] == "takeaway"
        assert payload["highlights"]["a"]["x"] == pytest.approx(_state(composition, 400).highlights.a.x)
        json.dumps(payload)


class TestDegenerateInput:
    def test_empty_dataset(self, text_config) -> None:
        state = timeline_state(_request((), text_config, 400))

        assert state.visible_count == 0
        assert state.lines.a == ()
        assert state.markers.a is None
        assert state.ticks == ()
        assert state.highlights.a is None

    def test_single_point(self, build_dataset, text_config) -> None:
        dataset = build_dataset((5, 5))
        state = timeline_state(_request(dataset, text_config, 375))
        area = state.chart_area

        assert state.visible_count == 1
        assert state.lines.a[0].points[0][0] == area.x
        assert not state.lines.a[0].is_line
        assert state.highlights.a is not None

    def test_all_null_series(self, build_dataset, text_config) -> None:
        dataset = build_dataset((1, None), (2, None), (3, None))
        state = timeline_state(_request(dataset, text_config, 400, highlight_index=1))

        assert state.lines.b == ()
        assert state.markers.b is None
        assert state.highlights.b is None
        assert state.highlights.a is not None
        assert state.deltas.b.text == "+0.0%"

    @pytest.mark.parametrize("highlight_index", [-1, 5, 99])
    def test_out_of_range_highlight(self, composition, highlight_index: int) -> None:
        state = timeline_state(
            _request(composition.dataset, composition.text, 400, highlight_index)
        )

        assert state.highlights.a is None
        assert state.highlights.b is None

    @pytest.mark.parametrize("frame", [-30, 10_000])
    def test_frames_outside_the_reel(self, composition, frame: int) -> None:
        state = _state(composition, frame)

        assert 0 <= state.visible_count <= len(composition.dataset)


class TestTickIndices:
    @pytest.mark.parametrize(
        ("length", "expected"),
        [
            (0, ()),
            (1, (0,)),
            (8, (0, 1, 2, 3, 4, 5, 6, 7)),
            (20, (0, 3, 6, 9, 12, 15, 19)),
            (58, (0, 8, 16, 24, 32, 40, 48, 57)),
            (120, (0, 15, 30, 45, 60, 75, 90, 105, 119)),
        ],
    )
    def test_stride_plus_last(self, length: int, expected: tuple[int, ...]) -> None:
        assert tick_indices(length) == expected

    def test_last_label_never_crowds_previous(self) -> None:
        for length in range(2, 200):
            indices = tick_indices(length)
            stride = -(-length // 8)

            assert indices[-1] == length - 1
            assert len(indices) <= 9
            if len(indices) > 2:
                assert indices[-1] - indices[-2] > stride // 2
