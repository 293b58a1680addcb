"""Immutable draw instructions for a single frame of the reel."""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

from ..data.models import SeriesPair
from .geometry import PathSegment
from .phases import ChartArea, Phase


@dataclass(frozen=True)
class Marker:
    x: float
    y: float


@dataclass(frozen=True)
class Cursor:
    """Vertical time cursor following the reveal edge."""

    x: float
    top: float
    bottom: float
    label: str


@dataclass(frozen=True)
class AxisTick:
    index: int
    x: float
    y: float
    label: str
    opacity: float


@dataclass(frozen=True)
class DeltaReadout:
    label: str
    text: str
    percent: float


@dataclass(frozen=True)
class DrawState:
    """Everything the rasterizer needs to paint one frame."""

    frame: int
    time_ms: int
    phase: Phase
    width: int
    height: int
    chart_area: ChartArea
    visible_count: int
    reveal_progress: float
    lines: SeriesPair[tuple[PathSegment, ...]]
    markers: SeriesPair[Marker | None]
    cursor: Cursor | None
    ticks: tuple[AxisTick, ...]
    highlights: SeriesPair[Marker | None]
    highlight_opacity: float
    deltas: SeriesPair[DeltaReadout] | None
    legend: SeriesPair[str]
    hook_text: str
    hook_opacity: float
    delta_opacity: float
    takeaway_text: str
    takeaway_opacity: float

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-ready representation."""
        return asdict(self, dict_factory=_json_ready)


def _json_ready(items: list[tuple[str, Any]]) -> dict[str, Any]:
    return {key: value.value if isinstance(value, Enum) else value for key, value in items}
