"""Table ingestion and time-series normalization."""

from .insights import calculate_delta, find_highlight_point
from .models import (
    ColumnMapping,
    DataPoint,
    NormalizationResult,
    NormalizedDataset,
    RawRow,
    Series,
    SeriesDelta,
    SeriesPair,
    TextConfig,
)
from .normalizer import (
    downsample,
    interpolate_gaps,
    normalize,
    parse_date,
    parse_number,
    sort_unique,
)
from .table import ParsedTable, detect_column_mapping, load_csv, parse_csv

__all__ = [
    "ColumnMapping",
    "DataPoint",
    "NormalizationResult",
    "NormalizedDataset",
    "ParsedTable",
    "RawRow",
    "Series",
    "SeriesDelta",
    "SeriesPair",
    "TextConfig",
    "calculate_delta",
    "detect_column_mapping",
    "downsample",
    "find_highlight_point",
    "interpolate_gaps",
    "load_csv",
    "normalize",
    "parse_csv",
    "parse_date",
    "parse_number",
    "sort_unique",
]
