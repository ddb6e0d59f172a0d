"""Tests for method selection and the array convenience helpers."""

import numpy as np
import pytest

from ditherkit.core import methods
from ditherkit.core.engine import ErrorDiffusion
from ditherkit.core.image import FlatImage, GridImage
from ditherkit.core.methods import (
    KERNELS,
    DitheringMethod,
    create_ditherer,
    dither,
    dither_array,
)
from ditherkit.core.quantize import threshold


def _gradient(width=8, height=4):
    """[x, y, c] uint8 horizontal gradient."""
    row = np.linspace(0, 255, width).astype(np.uint8)
    grid = np.repeat(row[:, np.newaxis], height, axis=1)
    return np.repeat(grid[:, :, np.newaxis], 3, axis=2)


class TestDitheringMethod:
    @pytest.mark.parametrize(
        "method, long_name",
        [
            (DitheringMethod.NONE, "None"),
            (DitheringMethod.ATKINSON, "Atkinson"),
            (DitheringMethod.BURKES, "Burkes"),
            (DitheringMethod.FLOYD_STEINBERG, "Floyd-Steinberg"),
            (DitheringMethod.JARVIS_JUDICE_NINKE, "Jarvis-Judice-Ninke"),
            (DitheringMethod.SIERRA, "Sierra"),
            (DitheringMethod.SIERRA_LITE, "SierraLite"),
            (DitheringMethod.SIERRA_TWO_ROW, "SierraTwoRow"),
            (DitheringMethod.STUCKI, "Stucki"),
        ],
    )
    def test_long_names(self, method, long_name):
        assert method.long_name == long_name

    def test_every_method_has_kernel(self):
        assert set(KERNELS) == set(DitheringMethod)
        for method in DitheringMethod:
            assert method.kernel is KERNELS[method]

    @pytest.mark.parametrize(
        "text", ["floyd-steinberg", "FLOYD_STEINBERG", "Floyd-Steinberg", " floyd-STEINBERG "]
    )
    def test_parse(self, text):
        assert DitheringMethod.parse(text) is DitheringMethod.FLOYD_STEINBERG

    def test_parse_long_name_without_dash(self):
        assert DitheringMethod.parse("sierralite") is DitheringMethod.SIERRA_LITE

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Unknown dithering method"):
            DitheringMethod.parse("bayer")


class TestCreateDitherer:
    def test_binds_kernel_and_function(self):
        reduce = threshold()
        engine = create_ditherer(DitheringMethod.BURKES, reduce)
        assert isinstance(engine, ErrorDiffusion)
        assert engine.kernel is KERNELS[DitheringMethod.BURKES]
        assert engine.color_function is reduce
        assert engine.method_name == "Burkes"

    def test_accepts_string(self):
        engine = create_ditherer("stucki", threshold())
        assert engine.method_name == "Stucki"


class TestDither:
    def test_mutates_and_returns_image(self):
        data = _gradient().transpose(1, 0, 2).reshape(-1).copy()
        image = FlatImage(data, 8, 4, 3)
        result = dither(image, threshold(), DitheringMethod.SIERRA_TWO_ROW)
        assert result is image
        assert set(np.unique(data)) <= {0, 255}

    def test_default_is_no_diffusion(self):
        data = _gradient()
        expected = (np.floor(data / 255.0 + 0.5) * 255).astype(np.uint8)
        dither(GridImage(data), threshold())
        assert np.array_equal(data, expected)


class TestDitherArray:
    def test_in_place_on_caller_array(self):
        data = _gradient()
        image = dither_array(threshold(), data, DitheringMethod.FLOYD_STEINBERG)
        assert isinstance(image, GridImage)
        assert image.data is data
        assert set(np.unique(data)) <= {0, 255}

    def test_unknown_name_selects_no_diffusion(self):
        data = np.array([[[200]], [[50]]], dtype=np.uint8)
        dither_array(threshold(), data, "no-such-method")
        assert data.reshape(-1).tolist() == [255, 0]

    def test_unknown_name_still_strict_elsewhere(self):
        with pytest.raises(ValueError, match="Unknown dithering method"):
            create_ditherer("no-such-method", threshold())

    def test_none_selects_no_diffusion(self):
        a, b = _gradient(), _gradient()
        dither_array(threshold(), a, None)
        dither_array(threshold(), b, DitheringMethod.NONE)
        assert np.array_equal(a, b)

    @pytest.mark.parametrize(
        "helper, method",
        [
            (methods.atkinson, DitheringMethod.ATKINSON),
            (methods.burkes, DitheringMethod.BURKES),
            (methods.floyd_steinberg, DitheringMethod.FLOYD_STEINBERG),
            (methods.jarvis_judice_ninke, DitheringMethod.JARVIS_JUDICE_NINKE),
            (methods.sierra, DitheringMethod.SIERRA),
            (methods.sierra_lite, DitheringMethod.SIERRA_LITE),
            (methods.sierra_two_row, DitheringMethod.SIERRA_TWO_ROW),
            (methods.stucki, DitheringMethod.STUCKI),
            (methods.no_dither, DitheringMethod.NONE),
        ],
    )
    def test_named_helpers(self, helper, method):
        a, b = _gradient(), _gradient()
        helper(threshold(), a)
        dither_array(threshold(), b, method)
        assert np.array_equal(a, b)

    def test_methods_differ(self):
        a, b = _gradient(16, 8), _gradient(16, 8)
        methods.floyd_steinberg(threshold(), a)
        methods.atkinson(threshold(), b)
        assert not np.array_equal(a, b)
