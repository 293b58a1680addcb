"""Turn raw table rows into an ordered, deduplicated, size-bounded dataset."""

import logging
import math
import re
from dataclasses import replace
from datetime import date, datetime, timedelta, timezone
from typing import Any, Iterable

from dateutil import parser as date_parser

from ..config import NormalizeOptions
from ..constants import MAX_POINTS
from ..errors import InvalidDateError
from .models import (
    ColumnMapping,
    DataPoint,
    NormalizationResult,
    NormalizedDataset,
    RawRow,
    Series,
    SeriesPair,
)

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Common layouts, tried in order before falling back to dateutil
_DATE_FORMATS = ("%Y-%m-%d", "%Y-%m", "%Y/%m/%d", "%Y/%m", "%Y")
_QUARTER_PATTERN = re.compile(r"(\d{4})-?Q([1-4])", flags=re.IGNORECASE)
_DATEUTIL_DEFAULT = datetime(2000, 1, 1)


def parse_date(raw_value: Any) -> int:
    """
    Resolve a raw cell to a UTC timestamp in epoch milliseconds.

    Naive dates and times are read as UTC. Bare integers between 1000 and 9999
    are years; other numbers are epoch milliseconds.

    Raises:
        InvalidDateError: If the value is empty or cannot be read as a date
    """
    moment = _to_datetime(raw_value)
    if moment is None:
        raise InvalidDateError(f"Invalid or missing date {raw_value!r}")
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return (moment - EPOCH) // timedelta(milliseconds=1)


def parse_number(raw_value: Any) -> float | None:
    """Coerce a raw cell to a float, or ``None`` when it holds no usable number."""
    if raw_value is None or isinstance(raw_value, bool):
        return None
    if isinstance(raw_value, (int, float)):
        number = float(raw_value)
    elif isinstance(raw_value, str):
        cleaned = raw_value.strip().replace(",", "")
        if not cleaned:
            return None
        try:
            number = float(cleaned)
        except ValueError:
            return None
    else:
        try:
            number = float(raw_value)
        except (TypeError, ValueError):
            return None
    if not math.isfinite(number):
        return None
    return number


def normalize(
    rows: Iterable[RawRow],
    mapping: ColumnMapping,
    options: NormalizeOptions | None = None,
) -> NormalizationResult:
    """
    Build a normalized dataset from raw rows.

    Rows without a readable date are dropped and reported as errors. Missing
    numbers become gaps and are reported as warnings. When two rows share a
    timestamp the later one wins.

    Args:
        rows: Table rows keyed by column name
        mapping: Columns holding the date and the two series
        options: Optional normalization steps (interpolation)

    Returns:
        The dataset with its errors and warnings
    """
    options = options or NormalizeOptions()
    errors: list[str] = []
    warnings: list[str] = []
    by_timestamp: dict[int, DataPoint] = {}

    for row_number, row in enumerate(rows, start=1):
        raw_date = row.get(mapping.date_column)
        try:
            timestamp = parse_date(raw_date)
        except InvalidDateError:
            errors.append(f'Row {row_number}: Invalid or missing date "{_display(raw_date)}"')
            continue

        values = SeriesPair.build(lambda series: parse_number(row.get(mapping.column_for(series))))
        for series, value in values.items():
            if value is None:
                warnings.append(
                    f"Row {row_number}: Missing {series.value} value (will show gap)"
                )

        date_label = _display(raw_date)
        if timestamp in by_timestamp:
            warnings.append(
                f'Row {row_number}: Duplicate date "{date_label}" (using last value)'
            )
        by_timestamp[timestamp] = DataPoint(
            date_label=date_label,
            timestamp=timestamp,
            series_a=values.a,
            series_b=values.b,
        )

    dataset = sort_unique(by_timestamp.values())
    logger.debug(
        "Parsed %d unique points (%d rows dropped)", len(dataset), len(errors)
    )

    if options.interpolate and options.max_interpolate_gap > 0:
        dataset = interpolate_gaps(dataset, options.max_interpolate_gap)

    if len(dataset) > MAX_POINTS:
        before = len(dataset)
        dataset = downsample(dataset, MAX_POINTS)
        warnings.append(f"Downsampled from {before} to {len(dataset)} points")
        logger.debug("Downsampled %d points to %d", before, len(dataset))

    return NormalizationResult(dataset=dataset, errors=tuple(errors), warnings=tuple(warnings))


def sort_unique(points: Iterable[DataPoint]) -> NormalizedDataset:
    """Order points by timestamp, keeping the last point seen for each timestamp."""
    by_timestamp = {point.timestamp: point for point in points}
    return tuple(sorted(by_timestamp.values(), key=lambda point: point.timestamp))


def interpolate_gaps(dataset: NormalizedDataset, max_gap: int) -> NormalizedDataset:
    """
    Fill interior runs of gaps no longer than ``max_gap`` by linear interpolation.

    Each series is handled independently. Runs touching either end of the
    dataset are left alone since they have no value on one side.
    """
    points = list(dataset)
    for series in Series:
        field_name = series.value
        gap_start: int | None = None
        for index, point in enumerate(points):
            if point.value(series) is None:
                if gap_start is None:
                    gap_start = index
                continue
            if gap_start is None:
                continue
            gap_length = index - gap_start
            if gap_start > 0 and gap_length <= max_gap:
                start_value = points[gap_start - 1].value(series)
                end_value = point.value(series)
                for offset in range(gap_length):
                    ratio = (offset + 1) / (gap_length + 1)
                    filled = start_value + (end_value - start_value) * ratio
                    points[gap_start + offset] = replace(
                        points[gap_start + offset], **{field_name: filled}
                    )
            gap_start = None
    return tuple(points)


def downsample(dataset: NormalizedDataset, max_points: int = MAX_POINTS) -> NormalizedDataset:
    """
    Keep every ``ceil(n / max_points)``-th point so at most ``max_points`` remain.

    The first point is always kept. When the stride skips the last point, it
    takes the place of the final sampled point so both ends stay covered.
    """
    if len(dataset) <= max_points:
        return dataset
    stride = math.ceil(len(dataset) / max_points)
    sampled = dataset[::stride]
    if len(sampled) > 1 and sampled[-1] is not dataset[-1]:
        sampled = sampled[:-1] + (dataset[-1],)
    return sampled


def _to_datetime(raw_value: Any) -> datetime | None:
    if raw_value is None or isinstance(raw_value, bool):
        return None
    if isinstance(raw_value, datetime):
        return raw_value
    if isinstance(raw_value, date):
        return datetime(raw_value.year, raw_value.month, raw_value.day)
    if isinstance(raw_value, (int, float)):
        return _number_to_datetime(raw_value)
    if not isinstance(raw_value, str):
        return None

    text = raw_value.strip()
    if not text:
        return None

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            pass

    quarter_match = _QUARTER_PATTERN.fullmatch(text)
    if quarter_match:
        year = int(quarter_match.group(1))
        month = (int(quarter_match.group(2)) - 1) * 3 + 1
        return datetime(year, month, 1)

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass

    try:
        return date_parser.parse(text, default=_DATEUTIL_DEFAULT)
    except (ValueError, OverflowError):
        return None


def _number_to_datetime(value: float) -> datetime | None:
    if not math.isfinite(value):
        return None
    if float(value).is_integer() and 1000 <= value <= 9999:
        return datetime(int(value), 1, 1)
    try:
        return EPOCH + timedelta(milliseconds=value)
    except OverflowError:
        return None


def _display(raw_value: Any) -> str:
    if raw_value is None:
        return ""
    if isinstance(raw_value, datetime):
        return raw_value.isoformat()
    if isinstance(raw_value, date):
        return raw_value.isoformat()
    if isinstance(raw_value, float) and raw_value.is_integer():
        return str(int(raw_value))
    return str(raw_value).strip()
