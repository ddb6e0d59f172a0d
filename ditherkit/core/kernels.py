"""Error-diffusion kernels.

A kernel is an immutable list of taps. Each tap pushes ``weight`` of the
current pixel's quantization error to the pixel at offset (dx, dy).
Offsets only point forward in raster order: right on the current row or
anywhere on a later row.

Weights are written as their exact fractions. Atkinson is the only kernel
whose weights sum to less than 1 (6/8); the rest of the error is dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple


class Tap(NamedTuple):
    dx: int
    dy: int
    weight: float


@dataclass(frozen=True)
class Kernel:
    """Named, ordered set of taps."""

    name: str
    taps: tuple[Tap, ...]

    def __post_init__(self) -> None:
        for tap in self.taps:
            if tap.dy < 0 or (tap.dy == 0 and tap.dx <= 0):
                raise ValueError(
                    f"{self.name}: tap ({tap.dx}, {tap.dy}) points at an "
                    "already processed pixel"
                )

    @property
    def total_weight(self) -> float:
        return sum(tap.weight for tap in self.taps)

    @property
    def rows(self) -> int:
        """Number of rows below the current one the kernel reaches."""
        return max((tap.dy for tap in self.taps), default=0)


def _kernel(name: str, taps: list[tuple[int, int, float]]) -> Kernel:
    return Kernel(name, tuple(Tap(*t) for t in taps))


#        X   1   1
#    1   1   1
#        1          (1/8)
ATKINSON = _kernel(
    "Atkinson",
    [
        (1, 0, 1 / 8),
        (2, 0, 1 / 8),
        (-1, 1, 1 / 8),
        (0, 1, 1 / 8),
        (1, 1, 1 / 8),
        (0, 2, 1 / 8),
    ],
)

#            X   8   4
#    2   4   8   4   2  (1/32)
BURKES = _kernel(
    "Burkes",
    [
        (1, 0, 8 / 32),
        (2, 0, 4 / 32),
        (-2, 1, 2 / 32),
        (-1, 1, 4 / 32),
        (0, 1, 8 / 32),
        (1, 1, 4 / 32),
        (2, 1, 2 / 32),
    ],
)

#        X   7
#    3   5   1          (1/16)
FLOYD_STEINBERG = _kernel(
    "Floyd-Steinberg",
    [
        (1, 0, 7 / 16),
        (-1, 1, 3 / 16),
        (0, 1, 5 / 16),
        (1, 1, 1 / 16),
    ],
)

#            X   7   5
#    3   5   7   5   3
#    1   3   5   3   1  (1/48)
JARVIS_JUDICE_NINKE = _kernel(
    "Jarvis-Judice-Ninke",
    [
        (1, 0, 7 / 48),
        (2, 0, 5 / 48),
        (-2, 1, 3 / 48),
        (-1, 1, 5 / 48),
        (0, 1, 7 / 48),
        (1, 1, 5 / 48),
        (2, 1, 3 / 48),
        (-2, 2, 1 / 48),
        (-1, 2, 3 / 48),
        (0, 2, 5 / 48),
        (1, 2, 3 / 48),
        (2, 2, 1 / 48),
    ],
)

#            X   5   3
#    2   4   5   4   2
#        2   3   2      (1/32)
SIERRA = _kernel(
    "Sierra",
    [
        (1, 0, 5 / 32),
        (2, 0, 3 / 32),
        (-2, 1, 2 / 32),
        (-1, 1, 4 / 32),
        (0, 1, 5 / 32),
        (1, 1, 4 / 32),
        (2, 1, 2 / 32),
        (-1, 2, 2 / 32),
        (0, 2, 3 / 32),
        (1, 2, 2 / 32),
    ],
)

#        X   2
#    1   1              (1/4)
SIERRA_LITE = _kernel(
    "SierraLite",
    [
        (1, 0, 2 / 4),
        (-1, 1, 1 / 4),
        (0, 1, 1 / 4),
    ],
)

#            X   4   3
#    1   2   3   2   1  (1/16)
SIERRA_TWO_ROW = _kernel(
    "SierraTwoRow",
    [
        (1, 0, 4 / 16),
        (2, 0, 3 / 16),
        (-2, 1, 1 / 16),
        (-1, 1, 2 / 16),
        (0, 1, 3 / 16),
        (1, 1, 2 / 16),
        (2, 1, 1 / 16),
    ],
)

#            X   8   4
#    2   4   8   4   2
#    1   2   4   2   1  (1/42)
STUCKI = _kernel(
    "Stucki",
    [
        (1, 0, 8 / 42),
        (2, 0, 4 / 42),
        (-2, 1, 2 / 42),
        (-1, 1, 4 / 42),
        (0, 1, 8 / 42),
        (1, 1, 4 / 42),
        (2, 1, 2 / 42),
        (-2, 2, 1 / 42),
        (-1, 2, 2 / 42),
        (0, 2, 4 / 42),
        (1, 2, 2 / 42),
        (2, 2, 1 / 42),
    ],
)

# Plain nearest-color quantization
NONE = _kernel("None", [])


ALL_KERNELS: tuple[Kernel, ...] = (
    NONE,
    ATKINSON,
    BURKES,
    FLOYD_STEINBERG,
    JARVIS_JUDICE_NINKE,
    SIERRA,
    SIERRA_LITE,
    SIERRA_TWO_ROW,
    STUCKI,
)
