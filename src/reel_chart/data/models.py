"""Typed records shared by the normalizer and the timeline engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Iterator, Mapping, Sequence, TypeVar

from ..constants import MAX_HOOK_CHARS, MAX_TAKEAWAY_CHARS
from ..errors import InvalidMappingError

T = TypeVar("T")
U = TypeVar("U")

RawRow = Mapping[str, Any]


class Series(Enum):
    """The two plotted series."""

    A = "series_a"
    B = "series_b"


@dataclass(frozen=True)
class SeriesPair(Generic[T]):
    """Exactly one value per series, indexed by ``Series``."""

    a: T
    b: T

    def __getitem__(self, series: Series) -> T:
        if series is Series.A:
            return self.a
        return self.b

    def __iter__(self) -> Iterator[T]:
        yield self.a
        yield self.b

    def items(self) -> Iterator[tuple[Series, T]]:
        yield Series.A, self.a
        yield Series.B, self.b

    def map(self, func: Callable[[Series, T], U]) -> "SeriesPair[U]":
        return SeriesPair(a=func(Series.A, self.a), b=func(Series.B, self.b))

    @classmethod
    def build(cls, func: Callable[[Series], U]) -> "SeriesPair[U]":
        return SeriesPair(a=func(Series.A), b=func(Series.B))


@dataclass(frozen=True)
class DataPoint:
    """One normalized sample. ``None`` marks a gap, never zero."""

    date_label: str
    timestamp: int
    series_a: float | None
    series_b: float | None

    def value(self, series: Series) -> float | None:
        if series is Series.A:
            return self.series_a
        return self.series_b

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date_label,
            "timestamp": self.timestamp,
            "series_a": self.series_a,
            "series_b": self.series_b,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "DataPoint":
        return cls(
            date_label=str(payload["date"]),
            timestamp=int(payload["timestamp"]),
            series_a=_optional_float(payload.get("series_a")),
            series_b=_optional_float(payload.get("series_b")),
        )


NormalizedDataset = tuple[DataPoint, ...]


@dataclass(frozen=True)
class ColumnMapping:
    """Which table columns feed the date axis and the two series."""

    date_column: str
    series_a_column: str
    series_b_column: str

    def column_for(self, series: Series) -> str:
        if series is Series.A:
            return self.series_a_column
        return self.series_b_column

    def validate(self, headers: Sequence[str]) -> None:
        """
        Check the mapping against a table's header row.

        Raises:
            InvalidMappingError: If columns repeat or are missing from headers
        """
        columns = (self.date_column, self.series_a_column, self.series_b_column)
        if any(not column for column in columns):
            raise InvalidMappingError("All three columns must be selected")
        if len(set(columns)) != len(columns):
            raise InvalidMappingError("Date, series A and series B columns must be distinct")
        missing = [column for column in columns if column not in headers]
        if missing:
            raise InvalidMappingError(f"Unknown column(s): {', '.join(missing)}")


@dataclass(frozen=True)
class TextConfig:
    """Display strings for the reel; opaque to the timeline engine."""

    label_a: str
    label_b: str
    hook_text: str
    takeaway_text: str = ""

    def label(self, series: Series) -> str:
        if series is Series.A:
            return self.label_a
        return self.label_b

    def validate(self) -> list[str]:
        """Return human readable problems; an empty list means the config is usable."""
        problems: list[str] = []
        if not self.label_a.strip() or not self.label_b.strip():
            problems.append("Both line labels are required")
        if not self.hook_text.strip():
            problems.append("Hook text is required")
        if len(self.hook_text) > MAX_HOOK_CHARS:
            problems.append(f"Hook text exceeds {MAX_HOOK_CHARS} characters")
        if len(self.takeaway_text) > MAX_TAKEAWAY_CHARS:
            problems.append(f"Takeaway text exceeds {MAX_TAKEAWAY_CHARS} characters")
        return problems


@dataclass(frozen=True)
class SeriesDelta:
    """Change between the first and last present value of a series."""

    change: float
    percent: float

    def format_percent(self) -> str:
        sign = "+" if self.percent >= 0 else ""
        return f"{sign}{self.percent:.1f}%"


@dataclass(frozen=True)
class NormalizationResult:
    """Best-effort dataset plus the diagnostics gathered while building it."""

    dataset: NormalizedDataset
    errors: tuple[str, ...] = field(default_factory=tuple)
    warnings: tuple[str, ...] = field(default_factory=tuple)


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    return float(value)
