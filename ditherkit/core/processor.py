"""Image dithering pipeline.

Pillow image → grid buffer → color function → error diffusion → Pillow image.
"""

from __future__ import annotations

import hashlib
import logging
import time
from dataclasses import dataclass

import numpy as np
from PIL import Image

from ditherkit.core.engine import ColorFunction
from ditherkit.core.image import GridImage
from ditherkit.core.methods import DitheringMethod, create_ditherer
from ditherkit.core.quantize import nearest_color, uniform

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """Processing settings that affect output."""

    method: DitheringMethod = DitheringMethod.FLOYD_STEINBERG
    levels: int = 2  # per channel, ignored when a palette is given
    palette: tuple[tuple[int, int, int], ...] | None = None
    copy: bool = True  # process_array works on a copy of the caller's data

    def __post_init__(self) -> None:
        if not isinstance(self.method, DitheringMethod):
            object.__setattr__(self, "method", DitheringMethod.parse(self.method))
        if self.levels < 2:
            raise ValueError(f"levels must be at least 2, got {self.levels}")
        if self.palette is not None:
            palette = tuple(tuple(int(c) for c in color) for color in self.palette)
            if not palette:
                raise ValueError("Palette must not be empty")
            for color in palette:
                if len(color) != 3 or not all(0 <= c <= 255 for c in color):
                    raise ValueError(f"Invalid palette color: {color}")
            object.__setattr__(self, "palette", palette)

    def hash(self) -> str:
        """Deterministic short digest identifying these settings."""
        data = f"{self.method.value}:{self.levels}:{self.palette}:{self.copy}"
        return hashlib.md5(data.encode()).hexdigest()[:12]

    def color_function(self, channels: int, max_value: float = 255.0) -> ColorFunction:
        if self.palette is None:
            return uniform(self.levels, max_value)
        # Palette entries are 0..255, rescale to the buffer's sample range
        if channels == 1:
            # Grayscale input against an RGB palette: compare by gray value
            return nearest_color([(sum(color) / 3.0 * max_value / 255.0,) for color in self.palette])
        return nearest_color([tuple(c * max_value / 255.0 for c in color) for color in self.palette])


@dataclass
class ProcessedImage:
    """Result of dithering one image."""

    image: Image.Image
    method: str  # long name, e.g. "Floyd-Steinberg"
    width: int
    height: int
    channels: int
    elapsed_ms: float


def process_array(data: np.ndarray, settings: Settings) -> GridImage:
    """Dither a ``[x, y, c]`` array according to ``settings``.

    With ``settings.copy`` the caller's array is left untouched and the
    result lives in a new buffer; otherwise ``data`` is dithered in place.
    """
    buffer = GridImage(data, copy=settings.copy)
    reduce = settings.color_function(buffer.channels, buffer.limits[1])
    ditherer = create_ditherer(settings.method, reduce)
    return ditherer.run(buffer)


def process_image(img: Image.Image, settings: Settings) -> ProcessedImage:
    """Run a Pillow image through the full pipeline."""
    # from_pil already copies the pixels
    buffer = GridImage.from_pil(img)

    start = time.perf_counter()
    ditherer = create_ditherer(settings.method, settings.color_function(buffer.channels))
    ditherer.run(buffer)
    elapsed_ms = (time.perf_counter() - start) * 1000.0
    logger.info(
        "%s dithering of %dx%d image took %.1f ms",
        settings.method.long_name, buffer.width, buffer.height, elapsed_ms,
    )

    return ProcessedImage(
        image=buffer.to_pil(),
        method=settings.method.long_name,
        width=buffer.width,
        height=buffer.height,
        channels=buffer.channels,
        elapsed_ms=elapsed_ms,
    )
