"""
Geometric transformations.

Each function returns a new image (owned by the caller) whose pixels are a
position-remapped copy of the source. The source is never modified.
Allocation goes through Image.create(), so AllocationError propagates.
"""

import numpy as np

from .errors import require
from .image import Image


def rotate_clockwise_90(image: Image) -> Image:
    """Rotate 90 degrees clockwise.

    The result is height x width; the sample at row i, column j of the source
    ends up at row j, column (height - 1 - i).
    """
    rotated = Image.create(image.height, image.width, image.maxval)
    rotated.raster[...] = np.rot90(image.raster, k=-1)
    return rotated


def mirror_horizontal(image: Image) -> Image:
    """Flip left-right: (x, y) -> (width - 1 - x, y)."""
    mirrored = Image.create(image.width, image.height, image.maxval)
    mirrored.raster[...] = np.flip(image.raster, axis=1)
    return mirrored


def crop(image: Image, x: int, y: int, w: int, h: int) -> Image:
    """Copy the w x h rectangle with top-left corner (x, y) into a new image.

    Requires:
        The rectangle lies inside the image.
    """
    require(
        image.valid_rect(x, y, w, h),
        f"crop rectangle ({x}, {y}, {w}, {h}) outside {image.width}x{image.height} image",
    )
    cropped = Image.create(w, h, image.maxval)
    if w > 0 and h > 0:
        cropped.raster[...] = image.raster[y:y + h, x:x + w]
    return cropped
