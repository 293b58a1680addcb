"""GIF output provider."""

from PIL import Image

from .base import PillowSequenceOutputProvider

PALETTE_SIZE = 256  # GIF colour table limit


class GifOutputProvider(PillowSequenceOutputProvider):
    """GIF reels with one colour table, taken from the final frame, shared by all frames."""

    @property
    def output_format(self) -> str:
        return "gif"

    def prepare_frames(self, frames: list[Image.Image]) -> list[Image.Image]:
        if not frames:
            return frames
        reference = frames[-1].quantize(colors=PALETTE_SIZE, method=Image.Quantize.MEDIANCUT)
        return [frame.quantize(palette=reference, dither=Image.Dither.NONE) for frame in frames]

    @property
    def save_options(self) -> dict[str, object]:
        return {"optimize": False, "disposal": 1}
