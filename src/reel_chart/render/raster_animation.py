"""Raster (Pillow) animation frame generators built on top of Animator timelines."""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Iterator

from PIL import Image

from ..timeline.animator import Animator
from .render_context import RenderContext
from .renderer import Renderer

logger = logging.getLogger(__name__)


def generate_raster_frames(
    animator: Animator,
    max_frames: int | None = None,
    workers: int = 1,
    render_context: RenderContext | None = None,
) -> Iterator[Image.Image]:
    """
    Render raster frames from an animator timeline, in frame order.

    With ``workers > 1`` frames are rendered on a thread pool. Each worker
    thread owns its renderer; draw states are computed independently per frame.
    """
    context = render_context or RenderContext.brand()
    frames = animator.frame_indices(max_frames)
    local = threading.local()

    def render(frame: int) -> Image.Image:
        renderer = getattr(local, "renderer", None)
        if renderer is None:
            renderer = Renderer(context, animator.config)
            local.renderer = renderer
        return renderer.render_frame(animator.state_at(frame))

    logger.debug("Rendering %d frames with %d worker(s)", len(frames), workers)
    if workers <= 1:
        for frame in frames:
            yield render(frame)
        return

    with ThreadPoolExecutor(max_workers=workers) as executor:
        yield from executor.map(render, frames)
