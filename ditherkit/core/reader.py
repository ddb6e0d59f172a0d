"""Still image loading through Pillow."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from PIL import Image

SUPPORTED_SUFFIXES = {
    ".png": "png",
    ".gif": "gif",
    ".bmp": "bmp",
    ".jpg": "jpeg",
    ".jpeg": "jpeg",
    ".tif": "tiff",
    ".tiff": "tiff",
    ".webp": "webp",
}


@dataclass
class ImageInfo:
    """Metadata about the input file."""

    path: Path
    format: str
    width: int
    height: int
    mode: str


def detect_format(path: Path) -> str:
    """Detect image format from file extension."""
    suffix = path.suffix.lower()
    if suffix in SUPPORTED_SUFFIXES:
        return SUPPORTED_SUFFIXES[suffix]
    raise ValueError(f"Unsupported format: {suffix}")


def open_image(path: str | Path) -> tuple[Image.Image, ImageInfo]:
    """Load an image fully into memory.

    Animated inputs contribute their first frame only.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    fmt = detect_format(path)

    with Image.open(path) as img:
        img.load()
        info = ImageInfo(
            path=path,
            format=fmt,
            width=img.width,
            height=img.height,
            mode=img.mode,
        )
        return img.copy(), info
