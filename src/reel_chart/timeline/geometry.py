"""Map data points to canvas positions and split lines at gaps."""

from dataclasses import dataclass
from typing import Sequence

from ..constants import DEFAULT_VALUE_MAX, DEFAULT_VALUE_MIN, VALUE_RANGE_PADDING
from ..data.models import NormalizedDataset, Series
from .phases import ChartArea


@dataclass(frozen=True)
class ValueRange:
    min: float
    max: float

    @property
    def span(self) -> float:
        return self.max - self.min


@dataclass(frozen=True)
class PlotPoint:
    """Canvas position of one data point. ``y`` is ``None`` for a gap."""

    index: int
    x: float
    y: float | None


@dataclass(frozen=True)
class PathSegment:
    """An unbroken run of plotted points; never spans a gap."""

    indices: tuple[int, ...]
    points: tuple[tuple[float, float], ...]

    @property
    def is_line(self) -> bool:
        return len(self.points) > 1

    def to_svg_path(self) -> str:
        commands = [
            f"{'M' if i == 0 else 'L'} {x:g} {y:g}" for i, (x, y) in enumerate(self.points)
        ]
        return " ".join(commands)


def value_range(dataset: NormalizedDataset) -> ValueRange:
    """
    Shared y-range of both series with 10% headroom on each side.

    Falls back to 0-100 when the dataset holds no values at all.
    """
    values = [
        value
        for point in dataset
        for value in (point.series_a, point.series_b)
        if value is not None
    ]
    low = min(values) if values else DEFAULT_VALUE_MIN
    high = max(values) if values else DEFAULT_VALUE_MAX
    span = (high - low) or 1.0
    return ValueRange(min=low - span * VALUE_RANGE_PADDING, max=high + span * VALUE_RANGE_PADDING)


def x_position(index: int, length: int, area: ChartArea) -> float:
    return area.x + (index / max(length - 1, 1)) * area.width


def y_position(value: float, bounds: ValueRange, area: ChartArea) -> float:
    return area.bottom - ((value - bounds.min) / bounds.span) * area.height


def series_points(
    dataset: NormalizedDataset,
    series: Series,
    bounds: ValueRange,
    area: ChartArea,
) -> tuple[PlotPoint, ...]:
    length = len(dataset)
    return tuple(
        PlotPoint(
            index=index,
            x=x_position(index, length, area),
            y=None if point.value(series) is None else y_position(point.value(series), bounds, area),
        )
        for index, point in enumerate(dataset)
    )


def path_segments(points: Sequence[PlotPoint]) -> tuple[PathSegment, ...]:
    """Split plotted points into segments, starting a fresh one after every gap."""
    segments: list[PathSegment] = []
    current: list[PlotPoint] = []

    for point in points:
        if point.y is None:
            if current:
                segments.append(_segment(current))
                current = []
            continue
        current.append(point)

    if current:
        segments.append(_segment(current))
    return tuple(segments)


def last_present(points: Sequence[PlotPoint], upto: int) -> PlotPoint | None:
    """Most recent point at or before ``upto`` that has a value."""
    for index in range(min(upto, len(points) - 1), -1, -1):
        if points[index].y is not None:
            return points[index]
    return None


def _segment(points: list[PlotPoint]) -> PathSegment:
    return PathSegment(
        indices=tuple(point.index for point in points),
        points=tuple((point.x, point.y) for point in points if point.y is not None),
    )
