"""Tests for in-place pixel level transformations."""

import numpy as np
import pytest

from graymap import ContractViolation, Image, brighten, negative, threshold


def _row(levels, maxval=255):
    return Image.from_array([levels], maxval=maxval)


class TestNegative:
    """Tests for negative()."""

    def test_inverts_against_maxval(self):
        img = _row([0, 40, 100], maxval=100)
        negative(img)
        assert img.raster.tolist() == [[100, 60, 0]]

    def test_applied_twice_restores_original(self, rng):
        levels = rng.integers(0, 256, size=(9, 11), dtype=np.uint8)
        img = Image.from_array(levels, maxval=255)
        negative(img)
        negative(img)
        assert np.array_equal(img.raster, levels)

    def test_level_above_maxval_wraps(self):
        img = _row([0], maxval=100)
        img.set_pixel(0, 0, 120)
        negative(img)
        assert img.get_pixel(0, 0) == 236
        negative(img)
        assert img.get_pixel(0, 0) == 120


class TestThreshold:
    """Tests for threshold()."""

    def test_splits_at_threshold(self):
        img = _row([0, 50, 127, 128, 200, 255])
        threshold(img, 128)
        assert img.raster.tolist() == [[0, 0, 0, 255, 255, 255]]

    def test_white_is_maxval(self):
        img = _row([10, 90], maxval=90)
        threshold(img, 50)
        assert img.raster.tolist() == [[0, 90]]

    def test_zero_threshold_whitens_everything(self):
        img = _row([0, 1, 2], maxval=7)
        threshold(img, 0)
        assert img.raster.tolist() == [[7, 7, 7]]

    @pytest.mark.parametrize("thr", [-1, 256])
    def test_out_of_range_threshold_raises(self, thr):
        with pytest.raises(ContractViolation):
            threshold(_row([0]), thr)


class TestBrighten:
    """Tests for brighten()."""

    def test_rounds_half_up(self):
        img = _row([1, 3, 5, 10])
        brighten(img, 0.5)
        assert img.raster.tolist() == [[1, 2, 3, 5]]

    def test_saturates_at_maxval(self):
        img = _row([10, 60, 100], maxval=100)
        brighten(img, 2.0)
        assert img.raster.tolist() == [[20, 100, 100]]

    def test_saturates_beyond_8_bits(self):
        img = _row([200, 255])
        brighten(img, 3.0)
        assert img.raster.tolist() == [[255, 255]]

    def test_zero_factor_blackens(self):
        img = _row([5, 255])
        brighten(img, 0.0)
        assert img.raster.tolist() == [[0, 0]]

    @pytest.mark.parametrize("factor", [-0.1, float("nan"), float("inf")])
    def test_invalid_factor_raises(self, factor):
        with pytest.raises(ContractViolation, match="factor"):
            brighten(_row([0]), factor)
