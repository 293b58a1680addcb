"""Renderer for drawing reel frames using Pillow."""

from PIL import Image, ImageDraw, ImageFont

from ..data.models import SeriesPair
from ..timeline.draw_state import DrawState
from ..timeline.phases import ChartArea, TimelineConfig
from .render_context import RGB, RenderContext

TEXT_MARGIN = 8
LEGEND_OFFSET = 50  # Legend baseline above the chart top
LEGEND_SWATCH = 24
DELTA_BOTTOM_OFFSET = 200  # Delta readout distance above the bottom padding
TAKEAWAY_BOTTOM_OFFSET = 40


class Renderer:
    """Renders draw states as PIL Images."""

    def __init__(self, render_context: RenderContext, config: TimelineConfig):
        """
        Initialize renderer.

        Args:
            render_context: Rendering configuration and theming
            config: Canvas size and safe-area padding of the reel
        """
        self.context = render_context
        self.width = config.width
        self.height = config.height
        self.padding_top = config.padding_top
        self.padding_bottom = config.padding_bottom
        self.padding_left = config.padding_left
        self.padding_right = config.padding_right

        self.hook_font = ImageFont.load_default(size=self.context.hook_font_size)
        self.legend_font = ImageFont.load_default(size=self.context.legend_font_size)
        self.tick_font = ImageFont.load_default(size=self.context.tick_font_size)
        self.cursor_font = ImageFont.load_default(size=self.context.cursor_font_size)
        self.delta_font = ImageFont.load_default(size=self.context.delta_font_size)
        self.delta_label_font = ImageFont.load_default(size=self.context.delta_label_font_size)
        self.takeaway_font = ImageFont.load_default(size=self.context.takeaway_font_size)

    def render_frame(self, state: DrawState) -> Image.Image:
        """
        Render a draw state as an image.

        Returns:
            RGB PIL Image of the frame
        """
        img = Image.new("RGB", (self.width, self.height), self.context.background_color)

        overlay = Image.new("RGBA", (self.width, self.height), (0, 0, 0, 0))
        draw = ImageDraw.Draw(overlay, "RGBA")

        self._draw_grid(draw, state.chart_area)
        self._draw_cursor(draw, state)
        self._draw_lines(draw, state)
        self._draw_markers(draw, state)
        self._draw_highlights(draw, state)
        self._draw_ticks(draw, state)
        self._draw_legend(draw, state)
        self._draw_hook(draw, state)
        self._draw_deltas(draw, state)
        self._draw_takeaway(draw, state)

        combined = Image.alpha_composite(img.convert("RGBA"), overlay)
        return combined.convert("RGB")

    def _draw_grid(self, draw: ImageDraw.ImageDraw, area: ChartArea) -> None:
        for ratio in self.context.grid_ratios:
            y = area.y + area.height * ratio
            draw.line(
                [(area.x, y), (area.right, y)],
                fill=_rgba(self.context.grid_color),
                width=2,
            )

    def _draw_cursor(self, draw: ImageDraw.ImageDraw, state: DrawState) -> None:
        cursor = state.cursor
        if cursor is None:
            return
        draw.line(
            [(cursor.x, cursor.top), (cursor.x, cursor.bottom)],
            fill=_rgba(self.context.text_color, 0.25),
            width=self.context.cursor_width,
        )
        self._draw_text(
            draw, cursor.label, self.cursor_font, cursor.x, cursor.top - 40,
            _rgba(self.context.text_color),
        )

    def _draw_lines(self, draw: ImageDraw.ImageDraw, state: DrawState) -> None:
        for series, segments in state.lines.items():
            color = _rgba(self.context.series_color(series))
            for segment in segments:
                if segment.is_line:
                    draw.line(
                        list(segment.points),
                        fill=color,
                        width=self.context.line_width,
                        joint="curve",
                    )
                else:
                    # An isolated value between gaps is a dot, never a line
                    x, y = segment.points[0]
                    self._draw_dot(draw, x, y, self.context.line_width / 2, color)

    def _draw_markers(self, draw: ImageDraw.ImageDraw, state: DrawState) -> None:
        for series, marker in state.markers.items():
            if marker is None:
                continue
            self._draw_dot(
                draw, marker.x, marker.y, self.context.marker_radius,
                _rgba(self.context.series_color(series)),
            )

    def _draw_highlights(self, draw: ImageDraw.ImageDraw, state: DrawState) -> None:
        if state.highlight_opacity <= 0:
            return
        radius = self.context.highlight_radius
        for marker in state.highlights:
            if marker is None:
                continue
            draw.ellipse(
                [marker.x - radius, marker.y - radius, marker.x + radius, marker.y + radius],
                outline=_rgba(self.context.highlight_color, state.highlight_opacity),
                width=self.context.highlight_width,
            )

    def _draw_ticks(self, draw: ImageDraw.ImageDraw, state: DrawState) -> None:
        for tick in state.ticks:
            if tick.opacity <= 0:
                continue
            self._draw_text(
                draw, tick.label, self.tick_font, tick.x, tick.y,
                _rgba(self.context.text_color, tick.opacity),
            )

    def _draw_legend(self, draw: ImageDraw.ImageDraw, state: DrawState) -> None:
        if state.hook_opacity <= 0:
            return
        x = float(self.padding_left)
        y = state.chart_area.y - LEGEND_OFFSET
        for series, label in state.legend.items():
            color = _rgba(self.context.series_color(series), state.hook_opacity)
            draw.ellipse([x, y, x + LEGEND_SWATCH, y + LEGEND_SWATCH], fill=color)
            x += LEGEND_SWATCH + TEXT_MARGIN
            draw.text(
                (x, y + LEGEND_SWATCH / 2), label, font=self.legend_font,
                fill=_rgba(self.context.text_color, state.hook_opacity), anchor="lm",
            )
            x += draw.textlength(label, font=self.legend_font) + 40

    def _draw_hook(self, draw: ImageDraw.ImageDraw, state: DrawState) -> None:
        if state.hook_opacity <= 0 or not state.hook_text.strip():
            return
        max_width = self.width - self.padding_left - self.padding_right
        y = float(self.padding_top)
        for line in _wrap_text(draw, state.hook_text, self.hook_font, max_width):
            self._draw_text(
                draw, line, self.hook_font, self.width / 2, y,
                _rgba(self.context.text_color, state.hook_opacity), anchor="mt",
            )
            y += self.context.hook_font_size * 1.2

    def _draw_deltas(self, draw: ImageDraw.ImageDraw, state: DrawState) -> None:
        if state.deltas is None or state.delta_opacity <= 0:
            return
        y = self.height - self.padding_bottom - DELTA_BOTTOM_OFFSET
        centers = SeriesPair(a=self.width * 0.3, b=self.width * 0.7)
        for series, readout in state.deltas.items():
            x = centers[series]
            self._draw_text(
                draw, readout.text, self.delta_font, x, y,
                _rgba(self.context.series_color(series), state.delta_opacity), anchor="mb",
            )
            self._draw_text(
                draw, readout.label, self.delta_label_font, x, y + TEXT_MARGIN,
                _rgba(self.context.text_color, state.delta_opacity), anchor="mt",
            )

    def _draw_takeaway(self, draw: ImageDraw.ImageDraw, state: DrawState) -> None:
        if state.takeaway_opacity <= 0 or not state.takeaway_text.strip():
            return
        max_width = self.width - self.padding_left - self.padding_right
        lines = _wrap_text(draw, state.takeaway_text, self.takeaway_font, max_width)
        line_height = self.context.takeaway_font_size * 1.2
        y = self.height - self.padding_bottom - TAKEAWAY_BOTTOM_OFFSET - line_height * len(lines)
        for line in lines:
            self._draw_text(
                draw, line, self.takeaway_font, self.width / 2, y,
                _rgba(self.context.text_color, state.takeaway_opacity), anchor="mt",
            )
            y += line_height

    def _draw_dot(
        self,
        draw: ImageDraw.ImageDraw,
        x: float,
        y: float,
        radius: float,
        fill: tuple[int, int, int, int],
    ) -> None:
        draw.ellipse([x - radius, y - radius, x + radius, y + radius], fill=fill)

    def _draw_text(
        self,
        draw: ImageDraw.ImageDraw,
        text: str,
        font: ImageFont.FreeTypeFont | ImageFont.ImageFont,
        x: float,
        y: float,
        fill: tuple[int, int, int, int],
        anchor: str = "mm",
    ) -> None:
        draw.text((x, y), text, font=font, fill=fill, anchor=anchor)


def _rgba(color: RGB, opacity: float = 1.0) -> tuple[int, int, int, int]:
    return (*color, int(round(max(0.0, min(1.0, opacity)) * 255)))


def _wrap_text(
    draw: ImageDraw.ImageDraw,
    text: str,
    font: ImageFont.FreeTypeFont | ImageFont.ImageFont,
    max_width: float,
) -> list[str]:
    """Greedy word wrap measured in pixels."""
    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}".strip()
        if current and draw.textlength(candidate, font=font) > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines
