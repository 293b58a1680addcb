"""Output providers for reel animation formats."""

from dataclasses import dataclass
from pathlib import Path

from .base import OutputProvider
from .gif_provider import GifOutputProvider
from .webp_provider import WebPOutputProvider

DEFAULT_OUTPUT_FORMAT = "gif"
OUTPUT_SUFFIX = "-reel"  # Appended to the input stem for default output names


@dataclass(frozen=True)
class OutputFormatSpec:
    extension: str
    provider_class: type[OutputProvider]


_OUTPUT_FORMATS: dict[str, OutputFormatSpec] = {
    "gif": OutputFormatSpec(extension=".gif", provider_class=GifOutputProvider),
    "webp": OutputFormatSpec(extension=".webp", provider_class=WebPOutputProvider),
}


def resolve_output_provider(file_path: str) -> OutputProvider:
    """
    Pick the provider for a file path by its extension (case-insensitive).

    Raises:
        ValueError: If the extension is not a supported reel format
    """
    ext = Path(file_path).suffix.lower()
    spec = _OUTPUT_FORMATS.get(ext.removeprefix("."))
    if spec is None:
        supported = ", ".join(spec.extension for spec in _OUTPUT_FORMATS.values())
        raise ValueError(
            f"Unsupported output format: {ext or '(none)'}. Supported formats: {supported}"
        )
    return spec.provider_class(file_path)


def default_output_path(source_path: str, output_format: str = DEFAULT_OUTPUT_FORMAT) -> str:
    """``data/prices.csv`` becomes ``prices-reel.gif`` in the working directory."""
    extension = _OUTPUT_FORMATS[output_format].extension
    return f"{Path(source_path).stem}{OUTPUT_SUFFIX}{extension}"


def supported_output_formats() -> tuple[str, ...]:
    return tuple(_OUTPUT_FORMATS.keys())


__all__ = [
    "OutputFormatSpec",
    "OutputProvider",
    "GifOutputProvider",
    "WebPOutputProvider",
    "default_output_path",
    "resolve_output_provider",
    "supported_output_formats",
]
