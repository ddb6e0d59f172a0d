"""Save dithered images."""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image

from ditherkit.core.reader import SUPPORTED_SUFFIXES

logger = logging.getLogger(__name__)

LOSSLESS_FORMATS = {"png", "gif", "bmp", "tiff", "webp"}


def save_image(img: Image.Image, output_path: Path) -> None:
    """Save in the format determined by the output file extension."""
    suffix = output_path.suffix.lower()
    fmt = SUPPORTED_SUFFIXES.get(suffix)
    if fmt is None:
        raise ValueError(f"Unsupported output format: {suffix}")

    if fmt not in LOSSLESS_FORMATS:
        logger.warning("%s is lossy and will blur the dither pattern", fmt.upper())

    if fmt == "webp":
        img.save(str(output_path), format="WEBP", lossless=True)
    else:
        img.save(str(output_path), format=fmt.upper())
