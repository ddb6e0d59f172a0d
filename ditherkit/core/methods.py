"""Dithering method selection.

Maps a ``DitheringMethod`` to its kernel and builds ready-to-run engines.
The ``atkinson`` ... ``stucki`` helpers dither a caller-owned ``[x, y, c]``
array in place and return the buffer wrapping it.
"""

from __future__ import annotations

from enum import Enum

import numpy as np

from ditherkit.core import kernels
from ditherkit.core.engine import ColorFunction, ErrorDiffusion
from ditherkit.core.image import GridImage, ImageFormat
from ditherkit.core.kernels import Kernel


class DitheringMethod(str, Enum):
    NONE = "none"
    ATKINSON = "atkinson"
    BURKES = "burkes"
    FLOYD_STEINBERG = "floyd-steinberg"
    JARVIS_JUDICE_NINKE = "jarvis-judice-ninke"
    SIERRA = "sierra"
    SIERRA_LITE = "sierra-lite"
    SIERRA_TWO_ROW = "sierra-two-row"
    STUCKI = "stucki"

    @property
    def kernel(self) -> Kernel:
        return KERNELS[self]

    @property
    def long_name(self) -> str:
        """Display name, e.g. "Floyd-Steinberg"."""
        return KERNELS[self].name

    @classmethod
    def parse(cls, text: str) -> DitheringMethod:
        """Look up a method by value, enum name or long name (any case)."""
        key = text.strip().lower()
        for method in cls:
            if key in (method.value, method.name.lower(), method.long_name.lower()):
                return method
        raise ValueError(f"Unknown dithering method: {text!r}")


KERNELS: dict[DitheringMethod, Kernel] = {
    DitheringMethod.NONE: kernels.NONE,
    DitheringMethod.ATKINSON: kernels.ATKINSON,
    DitheringMethod.BURKES: kernels.BURKES,
    DitheringMethod.FLOYD_STEINBERG: kernels.FLOYD_STEINBERG,
    DitheringMethod.JARVIS_JUDICE_NINKE: kernels.JARVIS_JUDICE_NINKE,
    DitheringMethod.SIERRA: kernels.SIERRA,
    DitheringMethod.SIERRA_LITE: kernels.SIERRA_LITE,
    DitheringMethod.SIERRA_TWO_ROW: kernels.SIERRA_TWO_ROW,
    DitheringMethod.STUCKI: kernels.STUCKI,
}


def create_ditherer(
    method: DitheringMethod | str, color_function: ColorFunction
) -> ErrorDiffusion:
    """Build an engine for ``method`` bound to ``color_function``."""
    if not isinstance(method, DitheringMethod):
        method = DitheringMethod.parse(method)
    return ErrorDiffusion(KERNELS[method], color_function)


def dither(
    image: ImageFormat,
    color_function: ColorFunction,
    method: DitheringMethod | str = DitheringMethod.NONE,
) -> ImageFormat:
    """Dither ``image`` in place with the selected method and return it."""
    return create_ditherer(method, color_function).run(image)


def dither_array(
    color_function: ColorFunction,
    data: np.ndarray,
    method: DitheringMethod | str | None = DitheringMethod.NONE,
) -> GridImage:
    """Dither a ``[x, y, c]`` array in place.

    ``None`` or an unknown method name selects plain quantization
    without diffusion.
    """
    if method is None:
        method = DitheringMethod.NONE
    elif not isinstance(method, DitheringMethod):
        try:
            method = DitheringMethod.parse(method)
        except ValueError:
            method = DitheringMethod.NONE
    image = GridImage(data)
    create_ditherer(method, color_function).run(image)
    return image


def atkinson(color_function: ColorFunction, data: np.ndarray) -> GridImage:
    return dither_array(color_function, data, DitheringMethod.ATKINSON)


def burkes(color_function: ColorFunction, data: np.ndarray) -> GridImage:
    return dither_array(color_function, data, DitheringMethod.BURKES)


def floyd_steinberg(color_function: ColorFunction, data: np.ndarray) -> GridImage:
    return dither_array(color_function, data, DitheringMethod.FLOYD_STEINBERG)


def jarvis_judice_ninke(color_function: ColorFunction, data: np.ndarray) -> GridImage:
    return dither_array(color_function, data, DitheringMethod.JARVIS_JUDICE_NINKE)


def sierra(color_function: ColorFunction, data: np.ndarray) -> GridImage:
    return dither_array(color_function, data, DitheringMethod.SIERRA)


def sierra_lite(color_function: ColorFunction, data: np.ndarray) -> GridImage:
    return dither_array(color_function, data, DitheringMethod.SIERRA_LITE)


def sierra_two_row(color_function: ColorFunction, data: np.ndarray) -> GridImage:
    return dither_array(color_function, data, DitheringMethod.SIERRA_TWO_ROW)


def stucki(color_function: ColorFunction, data: np.ndarray) -> GridImage:
    return dither_array(color_function, data, DitheringMethod.STUCKI)


def no_dither(color_function: ColorFunction, data: np.ndarray) -> GridImage:
    return dither_array(color_function, data, DitheringMethod.NONE)
