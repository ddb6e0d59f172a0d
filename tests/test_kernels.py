"""Tests for the error-diffusion kernel tables."""

import pytest

from ditherkit.core import kernels
from ditherkit.core.kernels import ALL_KERNELS, Kernel, Tap

DIFFUSING = [k for k in ALL_KERNELS if k.taps]


class TestKernelWeights:
    @pytest.mark.parametrize(
        "kernel", [k for k in DIFFUSING if k is not kernels.ATKINSON], ids=lambda k: k.name
    )
    def test_weights_sum_to_one(self, kernel):
        assert kernel.total_weight == pytest.approx(1.0, abs=1e-9)

    def test_atkinson_keeps_six_eighths(self):
        assert kernels.ATKINSON.total_weight == pytest.approx(6 / 8, abs=1e-9)
        assert all(tap.weight == 1 / 8 for tap in kernels.ATKINSON.taps)

    def test_floyd_steinberg_exact(self):
        assert kernels.FLOYD_STEINBERG.taps == (
            Tap(1, 0, 7 / 16),
            Tap(-1, 1, 3 / 16),
            Tap(0, 1, 5 / 16),
            Tap(1, 1, 1 / 16),
        )

    def test_sierra_lite_exact(self):
        assert kernels.SIERRA_LITE.taps == (
            Tap(1, 0, 2 / 4),
            Tap(-1, 1, 1 / 4),
            Tap(0, 1, 1 / 4),
        )

    def test_none_has_no_taps(self):
        assert kernels.NONE.taps == ()
        assert kernels.NONE.total_weight == 0


class TestKernelShape:
    @pytest.mark.parametrize(
        "kernel, count, rows",
        [
            (kernels.ATKINSON, 6, 2),
            (kernels.BURKES, 7, 1),
            (kernels.FLOYD_STEINBERG, 4, 1),
            (kernels.JARVIS_JUDICE_NINKE, 12, 2),
            (kernels.SIERRA, 10, 2),
            (kernels.SIERRA_LITE, 3, 1),
            (kernels.SIERRA_TWO_ROW, 7, 1),
            (kernels.STUCKI, 12, 2),
            (kernels.NONE, 0, 0),
        ],
        ids=lambda v: v.name if isinstance(v, Kernel) else str(v),
    )
    def test_tap_count_and_reach(self, kernel, count, rows):
        assert len(kernel.taps) == count
        assert kernel.rows == rows

    @pytest.mark.parametrize("kernel", DIFFUSING, ids=lambda k: k.name)
    def test_taps_point_forward(self, kernel):
        for tap in kernel.taps:
            assert tap.dy > 0 or (tap.dy == 0 and tap.dx > 0)

    @pytest.mark.parametrize("kernel", DIFFUSING, ids=lambda k: k.name)
    def test_offsets_unique(self, kernel):
        offsets = [(t.dx, t.dy) for t in kernel.taps]
        assert len(set(offsets)) == len(offsets)

    def test_all_kernels_named_uniquely(self):
        names = [k.name for k in ALL_KERNELS]
        assert len(names) == 9
        assert len(set(names)) == 9


class TestKernelValidation:
    @pytest.mark.parametrize("dx, dy", [(0, 0), (-1, 0), (0, -1), (3, -2)])
    def test_backward_tap_rejected(self, dx, dy):
        with pytest.raises(ValueError, match="already processed"):
            Kernel("bad", (Tap(dx, dy, 1.0),))

    def test_kernel_is_immutable(self):
        with pytest.raises(AttributeError):
            kernels.FLOYD_STEINBERG.name = "other"
