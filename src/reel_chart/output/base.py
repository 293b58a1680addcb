"""Base classes for reel output formats."""

from abc import ABC, abstractmethod
from io import BytesIO
from pathlib import Path
from typing import Iterator

from PIL import Image


class OutputProvider(ABC):
    """Encodes rendered reel frames and stores the result."""

    def __init__(self, path: str = ""):
        """
        Initialize the provider.

        Args:
            path: Destination file; only needed for ``write``
        """
        self.path = path

    @abstractmethod
    def encode(self, frames: Iterator[Image.Image], frame_duration: int) -> bytes:
        """
        Encode frames into the output format.

        Args:
            frames: Rendered frames in playback order
            frame_duration: Milliseconds each frame stays on screen

        Returns:
            Encoded animation, or empty bytes when there are no frames
        """
        raise NotImplementedError

    def write(self, data: bytes) -> Path:
        """Write encoded data to ``path``, creating missing parent directories."""
        if not self.path:
            raise ValueError("Output path not set")
        target = Path(self.path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        return target


class PillowSequenceOutputProvider(OutputProvider, ABC):
    """Animated image formats written with Pillow's ``save_all``."""

    @property
    @abstractmethod
    def output_format(self) -> str:
        """Pillow format identifier, ``gif`` or ``webp``."""
        raise NotImplementedError

    def encode(self, frames: Iterator[Image.Image], frame_duration: int) -> bytes:
        frame_list = self.prepare_frames(list(frames))
        if not frame_list:
            return b""

        buffer = BytesIO()
        frame_list[0].save(
            buffer,
            format=self.output_format,
            save_all=True,
            append_images=frame_list[1:],
            # Pillow rejects zero-length frames
            duration=max(1, frame_duration),
            loop=0,
            **self.save_options,
        )
        return buffer.getvalue()

    def prepare_frames(self, frames: list[Image.Image]) -> list[Image.Image]:
        """Convert frames before saving; the default keeps them as rendered."""
        return frames

    @property
    def save_options(self) -> dict[str, object]:
        return {}
