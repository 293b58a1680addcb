"""Rendering configuration and theming."""

from dataclasses import dataclass

from ..constants import (
    ACCENT_TEAL,
    DARK_NAVY,
    GOLD_ACCENT,
    GRID_GREY,
    OFF_WHITE,
    PRIMARY_BLUE,
)
from ..data.models import Series, SeriesPair

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class RenderContext:
    """Palette, stroke sizes and font sizes used by the renderer."""

    background_color: RGB
    text_color: RGB
    grid_color: RGB
    highlight_color: RGB
    series_colors: SeriesPair[RGB]
    line_width: int = 6
    marker_radius: int = 12
    highlight_radius: int = 20
    highlight_width: int = 4
    cursor_width: int = 2
    hook_font_size: int = 56
    legend_font_size: int = 28
    tick_font_size: int = 22
    cursor_font_size: int = 26
    delta_font_size: int = 48
    delta_label_font_size: int = 24
    takeaway_font_size: int = 36
    grid_ratios: tuple[float, ...] = (0.25, 0.5, 0.75)

    def series_color(self, series: Series) -> RGB:
        return self.series_colors[series]

    @classmethod
    def brand(cls) -> "RenderContext":
        """Light theme with the navy / blue / teal brand palette."""
        return cls(
            background_color=OFF_WHITE,
            text_color=DARK_NAVY,
            grid_color=GRID_GREY,
            highlight_color=GOLD_ACCENT,
            series_colors=SeriesPair(a=PRIMARY_BLUE, b=ACCENT_TEAL),
        )
