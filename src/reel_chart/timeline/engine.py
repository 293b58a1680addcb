"""Frame-indexed animation state: a pure function from frame number to draw state."""

import math
from dataclasses import dataclass, field
from functools import lru_cache

from ..constants import MAX_TICK_LABELS
from ..data.insights import calculate_delta
from ..data.models import NormalizedDataset, SeriesPair, TextConfig
from .draw_state import AxisTick, Cursor, DeltaReadout, DrawState, Marker
from .geometry import PlotPoint, last_present, path_segments, series_points, value_range
from .phases import Phase, TimelineConfig, clamp01, ramp, reveal_progress, visible_count

TICK_LABEL_OFFSET = 50  # Pixels between the chart bottom and the tick labels


@dataclass(frozen=True)
class TimelineRequest:
    dataset: NormalizedDataset
    text: TextConfig
    highlight_index: int
    frame: int
    config: TimelineConfig = field(default_factory=TimelineConfig)


@dataclass(frozen=True)
class _StaticLayout:
    """Frame-independent geometry shared by every frame of a composition."""

    points: SeriesPair[tuple[PlotPoint, ...]]
    deltas: SeriesPair[DeltaReadout]
    tick_indices: tuple[int, ...]


def timeline_state(request: TimelineRequest) -> DrawState:
    """
    Compute the complete draw state of one frame.

    The result depends only on the request, so frames can be computed in any
    order and in parallel. Degenerate input (empty dataset, all gaps, an
    out-of-range highlight index) yields a reduced but valid state.
    """
    config = request.config
    frame = request.frame
    dataset = tuple(request.dataset)
    length = len(dataset)
    layout = _static_layout(dataset, request.text, config)
    area = config.chart_area

    progress = reveal_progress(frame, config)
    visible = visible_count(frame, length, config)
    current = min(visible - 1, length - 1)
    frozen = frame >= config.stroke_end

    lines = layout.points.map(lambda _, points: path_segments(points[:visible]))
    markers = layout.points.map(
        lambda _, points: _marker(last_present(points, current)) if visible > 0 else None
    )

    cursor = None
    if config.phase_at(frame) is Phase.REVEAL and visible > 0:
        cursor = Cursor(
            x=layout.points.a[current].x,
            top=area.y,
            bottom=area.bottom,
            label=dataset[current].date_label,
        )

    ticks = tuple(
        AxisTick(
            index=index,
            x=layout.points.a[index].x,
            y=area.bottom + TICK_LABEL_OFFSET,
            label=dataset[index].date_label,
            opacity=clamp01(progress * length - index),
        )
        for index in layout.tick_indices
    )

    highlight_index = request.highlight_index
    if frozen and 0 <= highlight_index < length:
        highlights = layout.points.map(lambda _, points: _marker(points[highlight_index]))
    else:
        highlights = SeriesPair(a=None, b=None)

    return DrawState(
        frame=frame,
        time_ms=config.time_at(frame),
        phase=config.phase_at(frame),
        width=config.width,
        height=config.height,
        chart_area=area,
        visible_count=visible,
        reveal_progress=progress,
        lines=lines,
        markers=markers,
        cursor=cursor,
        ticks=ticks,
        highlights=highlights,
        highlight_opacity=ramp(frame, config.stroke_end, config.highlight_end),
        deltas=layout.deltas if frozen else None,
        legend=SeriesPair.build(request.text.label),
        hook_text=request.text.hook_text,
        hook_opacity=ramp(frame, 0, config.hook_end),
        delta_opacity=ramp(frame, config.stroke_end, config.highlight_end),
        takeaway_text=request.text.takeaway_text,
        takeaway_opacity=ramp(frame, config.takeaway_start, config.takeaway_end),
    )


def tick_indices(length: int, max_labels: int = MAX_TICK_LABELS) -> tuple[int, ...]:
    """
    Every ``ceil(n / max_labels)``-th index, always ending with the last point.

    A stride index within half a stride of the last point is replaced by it
    so the final two labels never crowd each other.
    """
    if length <= 0:
        return ()
    stride = math.ceil(length / max_labels)
    indices = list(range(0, length, stride))
    last = length - 1
    if indices[-1] != last:
        if len(indices) > 1 and last - indices[-1] <= stride // 2:
            indices[-1] = last
        else:
            indices.append(last)
    return tuple(indices)


@lru_cache(maxsize=32)
def _static_layout(
    dataset: NormalizedDataset, text: TextConfig, config: TimelineConfig
) -> _StaticLayout:
    bounds = value_range(dataset)
    area = config.chart_area
    points = SeriesPair.build(lambda series: series_points(dataset, series, bounds, area))
    deltas = calculate_delta(dataset).map(
        lambda series, delta: DeltaReadout(
            label=text.label(series),
            text=delta.format_percent(),
            percent=delta.percent,
        )
    )
    return _StaticLayout(points=points, deltas=deltas, tick_indices=tick_indices(len(dataset)))


def _marker(point: PlotPoint | None) -> Marker | None:
    if point is None or point.y is None:
        return None
    return Marker(x=point.x, y=point.y)

