"""Rasterization of draw states with Pillow."""

from .raster_animation import generate_raster_frames
from .render_context import RenderContext
from .renderer import Renderer

__all__ = [
    "RenderContext",
    "Renderer",
    "generate_raster_frames",
]
