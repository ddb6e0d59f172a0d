"""Ready-made color-reduction functions.

Each factory returns a callable with the engine's color-function signature
``(x, y, pixel) -> quantized pixel``. They only map colors; choosing a
palette is up to the caller.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ditherkit.core.engine import ColorFunction


def uniform(levels: int = 2, max_value: float = 255.0) -> ColorFunction:
    """Snap every channel independently to ``levels`` evenly spaced steps.

    Args:
        levels: number of output levels per channel. 2 = black/white
                threshold at the midpoint.
        max_value: top of the sample range (255 for bytes, 1.0 for floats).
    """
    if levels < 2:
        raise ValueError(f"levels must be at least 2, got {levels}")
    step = max_value / (levels - 1)

    def reduce(x: int, y: int, pixel: np.ndarray) -> np.ndarray:
        q = np.floor(pixel / step + 0.5) * step
        return np.clip(q, 0.0, max_value)

    return reduce


def threshold(max_value: float = 255.0) -> ColorFunction:
    """Black/white per channel, split at half of ``max_value``."""
    return uniform(2, max_value)


def nearest_color(palette: Sequence[Sequence[float]]) -> ColorFunction:
    """Replace each pixel by the palette entry closest in Euclidean distance.

    Ties resolve to the earliest palette entry.
    """
    colors = np.asarray(palette, dtype=np.float64)
    if colors.ndim != 2 or len(colors) == 0:
        raise ValueError("Palette must be a non-empty list of colors")

    def reduce(x: int, y: int, pixel: np.ndarray) -> np.ndarray:
        if pixel.shape[0] != colors.shape[1]:
            raise ValueError(
                f"Pixel has {pixel.shape[0]} channels, palette has {colors.shape[1]}"
            )
        dist = ((colors - pixel) ** 2).sum(axis=1)
        return colors[int(np.argmin(dist))]

    return reduce


def parse_palette(text: str) -> list[tuple[int, int, int]]:
    """Parse ``"#000000,#ffffff"`` or ``"000,fff"`` into RGB tuples."""
    palette: list[tuple[int, int, int]] = []
    for item in text.split(","):
        item = item.strip().lstrip("#")
        if len(item) == 3:
            item = "".join(ch * 2 for ch in item)
        if len(item) != 6:
            raise ValueError(f"Invalid palette color: {item!r}")
        try:
            rgb = tuple(int(item[i : i + 2], 16) for i in (0, 2, 4))
        except ValueError as e:
            raise ValueError(f"Invalid palette color: {item!r}") from e
        palette.append(rgb)
    return palette
