"""Pixel buffers consumed by the error-diffusion engine.

Two storage layouts share one interface:

- ``FlatImage``: a linear buffer indexed by ``(y * width + x) * channels + c``.
- ``GridImage``: a three-axis buffer indexed by ``[x, y, c]``.

Samples keep the dtype of the backing numpy array. Integer dtypes use their
full range (uint8 -> 0..255); floating dtypes are normalized to 0.0..1.0.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np
from PIL import Image


def sample_range(dtype: np.dtype) -> tuple[float, float]:
    """Return the (min, max) representable sample value for a dtype."""
    dtype = np.dtype(dtype)
    if np.issubdtype(dtype, np.integer):
        info = np.iinfo(dtype)
        return float(info.min), float(info.max)
    if np.issubdtype(dtype, np.floating):
        return 0.0, 1.0
    raise ValueError(f"Unsupported sample dtype: {dtype}")


class ImageFormat(ABC):
    """Read/write access to a width x height x channels sample grid."""

    def __init__(self, width: int, height: int, channels: int, dtype: np.dtype) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"Invalid image size: {width}x{height}")
        if channels < 1:
            raise ValueError(f"Channels per pixel must be positive, got {channels}")
        self._width = width
        self._height = height
        self._channels = channels
        self._dtype = np.dtype(dtype)
        self._min, self._max = sample_range(self._dtype)
        self._is_integer = np.issubdtype(self._dtype, np.integer)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def channels(self) -> int:
        return self._channels

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def limits(self) -> tuple[float, float]:
        return self._min, self._max

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(
                f"Pixel ({x}, {y}) outside {self._width}x{self._height} image"
            )

    @abstractmethod
    def _pixel(self, x: int, y: int) -> np.ndarray:
        """Writable view of the channel samples at (x, y)."""

    @abstractmethod
    def raw_content(self) -> np.ndarray:
        """All samples as a flat row-major array."""

    def read_pixel(self, x: int, y: int, out: np.ndarray | None = None) -> np.ndarray:
        """Return the channel samples at (x, y).

        If ``out`` is given the samples are copied into it and it is returned,
        otherwise a new array of the storage dtype is allocated.
        """
        self._check_bounds(x, y)
        if out is None:
            return self._pixel(x, y).copy()
        out[:] = self._pixel(x, y)
        return out

    def write_pixel(self, x: int, y: int, values) -> None:
        """Overwrite the channel samples at (x, y)."""
        self._check_bounds(x, y)
        if self._is_integer:
            values = np.rint(np.clip(values, self._min, self._max))
        self._pixel(x, y)[:] = values

    def quantization_error(
        self,
        original: np.ndarray,
        quantized: np.ndarray,
        out: np.ndarray | None = None,
    ) -> np.ndarray:
        """Per-channel ``original - quantized`` as float64."""
        if out is None:
            out = np.empty(self._channels, dtype=np.float64)
        np.subtract(original, quantized, out=out, dtype=np.float64)
        return out

    def apply_weighted_error(
        self, x: int, y: int, error: np.ndarray, weight: float
    ) -> None:
        """Add ``error * weight`` to the pixel at (x, y), saturating at the
        sample range of the storage dtype."""
        self._check_bounds(x, y)
        pixel = self._pixel(x, y)
        value = pixel + error * weight
        np.clip(value, self._min, self._max, out=value)
        if self._is_integer:
            np.rint(value, out=value)
        pixel[:] = value

    def to_grid(self) -> np.ndarray:
        """Samples as a new ``[x, y, c]`` array."""
        flat = self.raw_content()
        return flat.reshape(self._height, self._width, self._channels).transpose(1, 0, 2).copy()

    def to_pil(self) -> Image.Image:
        """Render the buffer as an 8-bit Pillow image."""
        rows = self.raw_content().reshape(self._height, self._width, self._channels)
        if not self._is_integer:
            rows = np.rint(np.clip(rows, 0.0, 1.0) * 255.0)
        elif self._dtype != np.uint8:
            # Scale the full integer range down to 0..255
            rows = np.rint((rows.astype(np.float64) - self._min) * 255.0 / (self._max - self._min))
        rows = rows.astype(np.uint8)
        if self._channels == 1:
            return Image.fromarray(rows[:, :, 0])
        return Image.fromarray(rows)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self._width}x{self._height}, "
            f"channels={self._channels}, dtype={self._dtype})"
        )


class FlatImage(ImageFormat):
    """Image stored as a linear buffer of ``width * height * channels`` samples."""

    def __init__(
        self,
        data: np.ndarray,
        width: int,
        height: int,
        channels: int,
        copy: bool = False,
    ) -> None:
        data = np.array(data, copy=True) if copy else np.asarray(data)
        if data.ndim != 1:
            raise ValueError(f"Flat buffer must be 1-D, got shape {data.shape}")
        super().__init__(width, height, channels, data.dtype)
        expected = width * height * channels
        if data.size != expected:
            raise ValueError(
                f"Buffer holds {data.size} samples, expected {expected} "
                f"for {width}x{height}x{channels}"
            )
        self._data = data

    @classmethod
    def share(cls, other: FlatImage) -> FlatImage:
        """New buffer aliasing the storage of ``other``."""
        return cls(other._data, other.width, other.height, other.channels)

    @property
    def data(self) -> np.ndarray:
        return self._data

    def _pixel(self, x: int, y: int) -> np.ndarray:
        base = (y * self._width + x) * self._channels
        return self._data[base : base + self._channels]

    def raw_content(self) -> np.ndarray:
        return self._data


class GridImage(ImageFormat):
    """Image stored as a three-axis ``[x, y, channel]`` array."""

    def __init__(self, data: np.ndarray, copy: bool = False) -> None:
        data = np.array(data, copy=True) if copy else np.asarray(data)
        if data.ndim != 3:
            raise ValueError(f"Grid buffer must be 3-D [x, y, c], got shape {data.shape}")
        width, height, channels = data.shape
        super().__init__(width, height, channels, data.dtype)
        self._data = data

    @classmethod
    def share(cls, other: GridImage) -> GridImage:
        """New buffer aliasing the storage of ``other``."""
        return cls(other._data)

    @classmethod
    def from_pil(cls, img: Image.Image) -> GridImage:
        """Copy a Pillow image into a uint8 grid buffer.

        Grayscale modes ("L", "1") keep one channel, everything
        else is converted to RGB.
        """
        if img.mode in ("L", "1"):
            rows = np.array(img.convert("L"), dtype=np.uint8)[:, :, np.newaxis]
        else:
            rows = np.array(img.convert("RGB"), dtype=np.uint8)
        # Pillow arrays are [y, x, c]
        return cls(rows.transpose(1, 0, 2))

    @property
    def data(self) -> np.ndarray:
        return self._data

    def _pixel(self, x: int, y: int) -> np.ndarray:
        return self._data[x, y]

    def raw_content(self) -> np.ndarray:
        return self._data.transpose(1, 0, 2).reshape(-1).copy()
