"""Environment-driven configuration for the normalization pipeline."""

import os
from dataclasses import dataclass

from .constants import DEFAULT_MAX_INTERPOLATE_GAP

INTERPOLATE_ENV = "REEL_CHART_INTERPOLATE"
MAX_INTERPOLATE_GAP_ENV = "REEL_CHART_MAX_INTERPOLATE_GAP"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class NormalizeOptions:
    """Optional normalization steps. Interpolation is off unless asked for."""

    interpolate: bool = False
    max_interpolate_gap: int = DEFAULT_MAX_INTERPOLATE_GAP


def load_normalize_options() -> NormalizeOptions:
    """
    Build normalization options from environment variables.

    Call ``dotenv.load_dotenv()`` beforehand to pick up a ``.env`` file.

    Raises:
        ValueError: If the max gap variable is not a non-negative integer
    """
    interpolate = os.getenv(INTERPOLATE_ENV, "").strip().lower() in _TRUTHY
    raw_gap = os.getenv(MAX_INTERPOLATE_GAP_ENV)
    if raw_gap is None or not raw_gap.strip():
        return NormalizeOptions(interpolate=interpolate)

    try:
        max_gap = int(raw_gap)
    except ValueError:
        raise ValueError(f"{MAX_INTERPOLATE_GAP_ENV} must be an integer, got '{raw_gap}'")
    if max_gap < 0:
        raise ValueError(f"{MAX_INTERPOLATE_GAP_ENV} must not be negative")
    return NormalizeOptions(interpolate=interpolate, max_interpolate_gap=max_gap)
