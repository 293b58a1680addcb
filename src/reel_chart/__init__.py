"""Animated two-series chart reels from tabular time series."""

from .animation_pipeline import encode_animation, prepare_composition
from .config import NormalizeOptions, load_normalize_options
from .data import (
    ColumnMapping,
    DataPoint,
    NormalizationResult,
    Series,
    SeriesPair,
    TextConfig,
    calculate_delta,
    find_highlight_point,
    normalize,
    parse_date,
    parse_number,
)
from .errors import (
    InsufficientDataError,
    InvalidDateError,
    InvalidMappingError,
    ReelChartError,
    RenderRejectedError,
    TableError,
)
from .render_queue import Admission, RenderSlots
from .timeline import (
    Animator,
    Composition,
    DrawState,
    TimelineConfig,
    TimelineRequest,
    timeline_state,
)

__all__ = [
    "Admission",
    "Animator",
    "ColumnMapping",
    "Composition",
    "DataPoint",
    "DrawState",
    "InsufficientDataError",
    "InvalidDateError",
    "InvalidMappingError",
    "NormalizationResult",
    "NormalizeOptions",
    "ReelChartError",
    "RenderRejectedError",
    "RenderSlots",
    "Series",
    "SeriesPair",
    "TableError",
    "TextConfig",
    "TimelineConfig",
    "TimelineRequest",
    "calculate_delta",
    "encode_animation",
    "find_highlight_point",
    "load_normalize_options",
    "normalize",
    "parse_date",
    "parse_number",
    "prepare_composition",
    "timeline_state",
]
