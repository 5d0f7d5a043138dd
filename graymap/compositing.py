"""
Operations on two images.

Both functions modify the destination image in place; the source image is
only read. The source must fit entirely inside the destination at (x, y).
"""

from __future__ import annotations

import numpy as np

from .errors import require
from .image import Image


def _target_region(dst: Image, x: int, y: int, src: Image) -> np.ndarray | None:
    require(
        dst.valid_rect(x, y, src.width, src.height),
        f"{src.width}x{src.height} image does not fit at ({x}, {y}) "
        f"in {dst.width}x{dst.height} image",
    )
    if src.width == 0 or src.height == 0:
        return None
    return dst.raster[y:y + src.height, x:x + src.width]


def paste(dst: Image, x: int, y: int, src: Image) -> None:
    """Copy src verbatim into dst with its top-left corner at (x, y)."""
    region = _target_region(dst, x, y, src)
    if region is not None:
        region[...] = src.raster


def blend(dst: Image, x: int, y: int, src: Image, alpha: float) -> None:
    """Blend src into dst at (x, y): dst*(1 - alpha) + src*alpha.

    Results are rounded half up and saturated to [0, maxval(dst)]. alpha is
    usually in [0.0, 1.0]; values outside extrapolate the blend and are not
    clamped.
    """
    region = _target_region(dst, x, y, src)
    if region is None:
        return
    alpha = float(alpha)
    mixed = np.floor(region * (1.0 - alpha) + src.raster * alpha + 0.5)
    region[...] = np.clip(mixed, 0, dst.maxval)
