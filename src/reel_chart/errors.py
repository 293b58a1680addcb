"""Exception types shared across the package."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .data.models import NormalizationResult


class ReelChartError(Exception):
    """Base exception for reel-chart errors with user-friendly messages."""
    pass


class InvalidDateError(ReelChartError, ValueError):
    """Raised when a raw value cannot be resolved to a calendar date."""
    pass


class InvalidMappingError(ReelChartError, ValueError):
    """Raised when a column mapping does not fit the table headers."""
    pass


class TableError(ReelChartError):
    """Raised when tabular input cannot be read at all."""
    pass


class InsufficientDataError(ReelChartError):
    """Raised when fewer than two points survive normalization."""

    def __init__(self, message: str, result: "NormalizationResult | None" = None):
        super().__init__(message)
        self.result = result


class RenderRejectedError(ReelChartError):
    """Raised when the render admission queue is full."""
    pass
