"""Video configuration, phase boundaries and easing curves."""

import math
from dataclasses import dataclass
from enum import Enum

from ..constants import (
    DEFAULT_DURATION_SECONDS,
    DEFAULT_FPS,
    FOOTER_SPACE,
    HEADER_SPACE,
    HIGHLIGHT_FADE_FRAMES,
    HOOK_END_FRACTION,
    PADDING_BOTTOM,
    PADDING_LEFT,
    PADDING_RIGHT,
    PADDING_TOP,
    STROKE_END_FRACTION,
    TAKEAWAY_DELAY_FRAMES,
    TAKEAWAY_FADE_FRAMES,
    VIDEO_HEIGHT,
    VIDEO_WIDTH,
)


class Phase(Enum):
    HOOK = "hook"
    REVEAL = "reveal"
    FREEZE = "freeze"
    TAKEAWAY = "takeaway"


@dataclass(frozen=True)
class ChartArea:
    """Pixel rectangle the two lines are plotted into."""

    x: float
    y: float
    width: float
    height: float

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def right(self) -> float:
        return self.x + self.width


@dataclass(frozen=True)
class TimelineConfig:
    """
    Frame rate, canvas and phase boundaries of a reel.

    The defaults describe the reference reel: 15 seconds at 30 fps on a
    1080x1920 canvas, title until frame 45, lines drawn by frame 375.
    """

    fps: int = DEFAULT_FPS
    total_frames: int = DEFAULT_FPS * DEFAULT_DURATION_SECONDS
    width: int = VIDEO_WIDTH
    height: int = VIDEO_HEIGHT
    padding_top: int = PADDING_TOP
    padding_bottom: int = PADDING_BOTTOM
    padding_left: int = PADDING_LEFT
    padding_right: int = PADDING_RIGHT
    header_space: int = HEADER_SPACE
    footer_space: int = FOOTER_SPACE
    hook_end: int = round(DEFAULT_FPS * DEFAULT_DURATION_SECONDS * HOOK_END_FRACTION)
    stroke_end: int = round(DEFAULT_FPS * DEFAULT_DURATION_SECONDS * STROKE_END_FRACTION)

    def __post_init__(self) -> None:
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")
        if self.total_frames < 0:
            raise ValueError(f"total_frames must not be negative, got {self.total_frames}")

    @classmethod
    def for_video(cls, fps: int, total_frames: int, **overrides: int) -> "TimelineConfig":
        """Derive phase boundaries from the frame rate and total frame count."""
        params: dict[str, int] = {
            "fps": fps,
            "total_frames": total_frames,
            "hook_end": round(total_frames * HOOK_END_FRACTION),
            "stroke_end": round(total_frames * STROKE_END_FRACTION),
        }
        params.update(overrides)
        return cls(**params)

    @classmethod
    def for_duration(cls, fps: int, seconds: float, **overrides: int) -> "TimelineConfig":
        return cls.for_video(fps, max(1, round(fps * seconds)), **overrides)

    @property
    def frame_duration(self) -> int:
        """Whole milliseconds per frame, as stored by the encoders."""
        return 1000 // self.fps

    def time_at(self, frame: int) -> int:
        """Playback position of ``frame`` in milliseconds."""
        return round(frame * 1000 / self.fps)

    @property
    def highlight_end(self) -> int:
        return self.stroke_end + HIGHLIGHT_FADE_FRAMES

    @property
    def takeaway_start(self) -> int:
        return self.stroke_end + TAKEAWAY_DELAY_FRAMES

    @property
    def takeaway_end(self) -> int:
        return self.takeaway_start + TAKEAWAY_FADE_FRAMES

    @property
    def chart_area(self) -> ChartArea:
        return ChartArea(
            x=self.padding_left,
            y=self.padding_top + self.header_space,
            width=self.width - self.padding_left - self.padding_right,
            height=(
                self.height
                - self.padding_top
                - self.padding_bottom
                - self.header_space
                - self.footer_space
            ),
        )

    def phase_at(self, frame: int) -> Phase:
        if frame < self.hook_end:
            return Phase.HOOK
        if frame < self.stroke_end:
            return Phase.REVEAL
        if frame < self.takeaway_start:
            return Phase.FREEZE
        return Phase.TAKEAWAY


def clamp01(value: float) -> float:
    return min(1.0, max(0.0, value))


def ramp(frame: float, start: float, end: float) -> float:
    """Linear 0 to 1 between ``start`` and ``end``, clamped on both sides."""
    if end <= start:
        return 1.0 if frame >= end else 0.0
    return clamp01((frame - start) / (end - start))


def ease_out_cubic(t: float) -> float:
    return 1 - (1 - t) ** 3


def reveal_progress(frame: int, config: TimelineConfig) -> float:
    """Eased share of the dataset drawn at ``frame``."""
    return ease_out_cubic(ramp(frame, config.hook_end, config.stroke_end))


def visible_count(frame: int, length: int, config: TimelineConfig) -> int:
    """Number of leading data points drawn at ``frame``."""
    return min(length, math.ceil(reveal_progress(frame, config) * length))
