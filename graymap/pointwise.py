"""
Pixel level transformations.

These functions change pixel levels in place without touching positions or
geometry. They allocate no image and never fail on a valid image.
"""

import math

import numpy as np

from .config import PIXMAX
from .errors import require
from .image import Image


def negative(image: Image) -> None:
    """Turn the image into its photographic negative: level -> maxval - level.

    Arithmetic is modulo 256, as for 8-bit samples, so a raw level above
    maxval wraps instead of failing and negative() stays its own inverse.
    """
    pixels = image.raster
    pixels[...] = (image.maxval - pixels.astype(np.int16)) % (PIXMAX + 1)


def threshold(image: Image, thr: int) -> None:
    """Set levels below thr to black (0) and the rest to white (maxval)."""
    require(0 <= thr <= PIXMAX, f"threshold must be in [0, {PIXMAX}], got {thr!r}")
    pixels = image.raster
    pixels[...] = np.where(pixels < thr, 0, image.maxval)


def brighten(image: Image, factor: float) -> None:
    """Multiply every level by factor, rounding half up and saturating at maxval.

    factor > 1.0 brightens the image, factor < 1.0 darkens it.
    """
    require(
        math.isfinite(factor) and factor >= 0.0,
        f"brighten factor must be finite and >= 0, got {factor!r}",
    )
    pixels = image.raster
    scaled = np.floor(pixels * float(factor) + 0.5)
    pixels[...] = np.minimum(scaled, image.maxval)
