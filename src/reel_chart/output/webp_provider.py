"""WebP output provider."""

from .base import PillowSequenceOutputProvider

DEFAULT_QUALITY = 90


class WebPOutputProvider(PillowSequenceOutputProvider):
    """Lossy animated WebP."""

    def __init__(self, path: str = "", quality: int = DEFAULT_QUALITY):
        super().__init__(path)
        if not 0 <= quality <= 100:
            raise ValueError(f"WebP quality must be between 0 and 100, got {quality}")
        self.quality = quality

    @property
    def output_format(self) -> str:
        return "webp"

    @property
    def save_options(self) -> dict[str, object]:
        return {"lossless": False, "quality": self.quality, "method": 4}
