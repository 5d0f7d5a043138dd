"""
Mean (box) filtering with border-clamped windows.

blur() replaces each pixel with the rounded mean of the pixels in the
(2*dx+1) x (2*dy+1) window centred on it. Windows are intersected with the
image rather than padded or wrapped, so pixels near the border average over
fewer samples than interior pixels.

Window sums are read from an integral image, which makes the cost linear in
the number of pixels whatever the window size.
"""

import logging

import cv2
import numpy as np

from .errors import AllocationError, require
from .image import Image, _is_int

logger = logging.getLogger(__name__)


def _window_bounds(size: int, radius: int) -> tuple[np.ndarray, np.ndarray]:
    """Per-coordinate [start, stop) of the clamped window along one axis."""
    centres = np.arange(size)
    start = np.clip(centres - radius, 0, size)
    stop = np.clip(centres + radius + 1, 0, size)
    return start, stop


def _window_means(pixels: np.ndarray, dx: int, dy: int) -> np.ndarray:
    """Rounded mean of every clamped window, as an int64 array."""
    height, width = pixels.shape
    # (height+1, width+1) table; sums are exact in float64 for 8-bit data.
    table = cv2.integral(pixels, sdepth=cv2.CV_64F).astype(np.int64)

    x0, x1 = _window_bounds(width, dx)
    y0, y1 = _window_bounds(height, dy)
    sums = (
        table[np.ix_(y1, x1)]
        - table[np.ix_(y0, x1)]
        - table[np.ix_(y1, x0)]
        + table[np.ix_(y0, x0)]
    )
    counts = np.outer(y1 - y0, x1 - x0)
    return (sums + counts // 2) // counts


def blur(image: Image, dx: int, dy: int) -> None:
    """Blur the image in place with a (2*dx+1) x (2*dy+1) mean filter.

    Every output is computed from the original pixels. The means are first
    written to a scratch image and copied back once all are known; if the
    scratch image cannot be allocated the image is left unchanged.

    Requires:
        dx and dy are ints >= 0.
    """
    require(
        _is_int(dx) and _is_int(dy) and dx >= 0 and dy >= 0,
        f"blur radii must be ints >= 0, got dx={dx!r}, dy={dy!r}",
    )
    pixels = image.raster
    if pixels.size == 0:
        return

    try:
        scratch = Image.create(image.width, image.height, image.maxval)
    except AllocationError:
        logger.warning(
            "Skipping blur of %dx%d image: scratch allocation failed",
            image.width, image.height,
        )
        return

    try:
        scratch.raster[...] = _window_means(pixels, int(dx), int(dy))
        pixels[...] = scratch.raster
    finally:
        scratch.destroy()
