"""Shared animation orchestration used by the CLI and embedding services."""

import logging
from typing import Iterable

from .config import NormalizeOptions
from .data.insights import find_highlight_point
from .data.models import ColumnMapping, NormalizationResult, RawRow, TextConfig
from .data.normalizer import normalize
from .errors import InsufficientDataError, RenderRejectedError
from .output import resolve_output_provider
from .output.base import OutputProvider
from .render.raster_animation import generate_raster_frames
from .render_queue import Admission, RenderSlots
from .timeline.animator import Animator, Composition
from .timeline.phases import TimelineConfig

logger = logging.getLogger(__name__)

MIN_POINTS = 2


def prepare_composition(
    rows: Iterable[RawRow],
    mapping: ColumnMapping,
    text: TextConfig,
    options: NormalizeOptions | None = None,
) -> tuple[Composition, NormalizationResult]:
    """
    Normalize rows and pick the highlight point.

    Raises:
        InsufficientDataError: If fewer than two points survive normalization;
            its ``result`` carries the row diagnostics
    """
    result = normalize(rows, mapping, options)
    if len(result.dataset) < MIN_POINTS:
        raise InsufficientDataError(
            f"Need at least {MIN_POINTS} valid data points, got {len(result.dataset)}",
            result=result,
        )
    composition = Composition(
        dataset=result.dataset,
        text=text,
        highlight_index=find_highlight_point(result.dataset),
    )
    return composition, result


def encode_animation(
    composition: Composition,
    output_path: str,
    *,
    config: TimelineConfig | None = None,
    max_frames: int | None = None,
    provider: OutputProvider | None = None,
    workers: int = 1,
    slots: RenderSlots | None = None,
) -> bytes:
    """
    Encode animation bytes for the composition and output path.

    Raises:
        RenderRejectedError: If ``slots`` is given and its queue is full
        ValueError: If the output extension is not supported
    """
    target_provider = provider or resolve_output_provider(output_path)
    animator = Animator(composition, config)

    if slots is None:
        return _encode(animator, target_provider, max_frames, workers)

    if slots.acquire() is Admission.REJECTED:
        raise RenderRejectedError("Render queue is full, try again later")
    try:
        return _encode(animator, target_provider, max_frames, workers)
    finally:
        slots.release()


def _encode(
    animator: Animator,
    provider: OutputProvider,
    max_frames: int | None,
    workers: int,
) -> bytes:
    frames = generate_raster_frames(animator, max_frames, workers=workers)
    encoded = provider.encode(frames, frame_duration=animator.frame_duration)
    logger.debug("Encoded %d bytes with %s", len(encoded), type(provider).__name__)
    return encoded
