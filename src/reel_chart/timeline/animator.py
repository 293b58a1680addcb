"""Animator for sampling draw states out of a composition."""

from dataclasses import dataclass
from typing import Any, Iterator, Mapping

from ..data.models import DataPoint, NormalizedDataset, TextConfig
from ..data.normalizer import downsample, sort_unique
from .draw_state import DrawState
from .engine import TimelineRequest, timeline_state
from .phases import TimelineConfig


@dataclass(frozen=True)
class Composition:
    """The inputs of a reel that stay fixed across frames."""

    dataset: NormalizedDataset
    text: TextConfig
    highlight_index: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "data": [point.to_dict() for point in self.dataset],
            "labelA": self.text.label_a,
            "labelB": self.text.label_b,
            "hookText": self.text.hook_text,
            "takeawayText": self.text.takeaway_text,
            "highlightIndex": self.highlight_index,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Composition":
        """
        Rebuild a composition from its saved props.

        Saved points are sorted, deduplicated (last one wins) and downsampled
        the same way as freshly normalized data.

        Raises:
            KeyError: If a required field is missing
            ValueError: If a field has the wrong type
        """
        points = sort_unique(DataPoint.from_dict(item) for item in payload["data"])
        return cls(
            dataset=downsample(points),
            text=TextConfig(
                label_a=str(payload["labelA"]),
                label_b=str(payload["labelB"]),
                hook_text=str(payload["hookText"]),
                takeaway_text=str(payload.get("takeawayText", "")),
            ),
            highlight_index=int(payload.get("highlightIndex", 0)),
        )


class Animator:
    """Samples draw states from a composition at any frame."""

    def __init__(self, composition: Composition, config: TimelineConfig | None = None):
        """
        Initialize animator.

        Args:
            composition: Dataset, text and highlight of the reel
            config: Frame rate, canvas and phase boundaries
        """
        self.composition = composition
        self.config = config or TimelineConfig()
        self.fps = self.config.fps
        self.frame_duration = self.config.frame_duration

    def state_at(self, frame: int) -> DrawState:
        """Compute the draw state of a single frame."""
        return timeline_state(
            TimelineRequest(
                dataset=self.composition.dataset,
                text=self.composition.text,
                highlight_index=self.composition.highlight_index,
                frame=frame,
                config=self.config,
            )
        )

    def frame_indices(self, max_frames: int | None = None) -> range:
        """Frame numbers of the reel, optionally truncated."""
        total = self.config.total_frames
        if max_frames is not None:
            total = min(total, max(0, max_frames))
        return range(total)

    def iter_frame_states(
        self, max_frames: int | None = None
    ) -> Iterator[tuple[DrawState, int]]:
        """Yield draw states in frame order with elapsed time in milliseconds."""
        for frame in self.frame_indices(max_frames):
            state = self.state_at(frame)
            yield state, state.time_ms
