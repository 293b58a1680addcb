"""Frame-indexed animation state engine."""

from .animator import Animator, Composition
from .draw_state import AxisTick, Cursor, DeltaReadout, DrawState, Marker
from .engine import TimelineRequest, tick_indices, timeline_state
from .geometry import PathSegment, PlotPoint, ValueRange, path_segments, series_points, value_range
from .phases import (
    ChartArea,
    Phase,
    TimelineConfig,
    ease_out_cubic,
    ramp,
    reveal_progress,
    visible_count,
)

__all__ = [
    "Animator",
    "AxisTick",
    "ChartArea",
    "Composition",
    "Cursor",
    "DeltaReadout",
    "DrawState",
    "Marker",
    "PathSegment",
    "Phase",
    "PlotPoint",
    "TimelineConfig",
    "TimelineRequest",
    "ValueRange",
    "ease_out_cubic",
    "path_segments",
    "ramp",
    "reveal_progress",
    "series_points",
    "tick_indices",
    "timeline_state",
    "value_range",
    "visible_count",
]
