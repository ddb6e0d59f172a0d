"""Generic raster-scan error-diffusion driver."""

from __future__ import annotations

import logging
from typing import Callable, Sequence

import numpy as np

from ditherkit.core.image import ImageFormat
from ditherkit.core.kernels import Kernel

logger = logging.getLogger(__name__)

# (x, y, original channel samples) -> quantized channel samples
ColorFunction = Callable[[int, int, np.ndarray], Sequence[float]]


class ErrorDiffusion:
    """Dither an image with one kernel and one color-reduction function.

    Pixels are visited left to right, top to bottom. Each pixel is replaced
    by ``color_function(x, y, pixel)`` and the difference is pushed to the
    kernel's taps. Taps that fall outside the image are dropped.

    The pixel handed to the color function is a scratch buffer reused for
    every pixel; it must be treated as read-only.
    """

    def __init__(self, kernel: Kernel, color_function: ColorFunction) -> None:
        self.kernel = kernel
        self.color_function = color_function

    @property
    def method_name(self) -> str:
        return self.kernel.name

    def run(self, image: ImageFormat) -> ImageFormat:
        """Dither ``image`` in place and return it."""
        width, height, channels = image.width, image.height, image.channels
        if width == 0 or height == 0:
            return image

        logger.debug(
            "%s dithering %dx%d image, %d channel(s)",
            self.kernel.name, width, height, channels,
        )

        taps = self.kernel.taps
        color_function = self.color_function
        original = np.empty(channels, dtype=image.dtype)
        error = np.empty(channels, dtype=np.float64)

        for y in range(height):
            for x in range(width):
                image.read_pixel(x, y, out=original)
                quantized = np.asarray(color_function(x, y, original))
                if quantized.shape != (channels,):
                    raise ValueError(
                        f"Color function returned shape {quantized.shape} "
                        f"at ({x}, {y}), expected ({channels},)"
                    )
                image.write_pixel(x, y, quantized)
                image.quantization_error(original, quantized, out=error)

                for dx, dy, weight in taps:
                    tx = x + dx
                    ty = y + dy
                    if 0 <= tx < width and 0 <= ty < height:
                        image.apply_weighted_error(tx, ty, error, weight)

        return image

    def __repr__(self) -> str:
        return f"ErrorDiffusion({self.kernel.name!r})"
