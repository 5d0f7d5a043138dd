"""
8-bit grayscale raster engine.

This package provides an in-memory pixel store for single-channel 8-bit
images, a codec for raw PGM (P5) files, and algorithms operating on images.

Key components:
- image: Image, the bounds-checked pixel store
- codec: load() and save() for raw PGM files
- pointwise: negative, threshold, brighten (in place)
- geometric: rotate_clockwise_90, mirror_horizontal, crop (new images)
- compositing: paste, blend (in place on the destination)
- matching: matches_at, locate (exact subimage search)
- filters: blur (border-clamped mean filter, in place)
- errors: ContractViolation for caller bugs, ImageError for runtime failures

Example usage:
    import graymap

    img = graymap.load("photo.pgm")
    graymap.blur(img, 2, 2)
    rotated = graymap.rotate_clockwise_90(img)
    graymap.save(rotated, "rotated.pgm")
"""

from .errors import (
    ContractViolation,
    ImageError,
    AllocationError,
    ImageLoadError,
    ImageSaveError,
)
from .image import Image
from .codec import load, save
from .pointwise import negative, threshold, brighten
from .geometric import rotate_clockwise_90, mirror_horizontal, crop
from .compositing import paste, blend
from .matching import matches_at, locate
from .filters import blur

__all__ = [
    # Errors
    "ContractViolation",
    "ImageError",
    "AllocationError",
    "ImageLoadError",
    "ImageSaveError",
    # Pixel store and codec
    "Image",
    "load",
    "save",
    # Pixel transformations
    "negative",
    "threshold",
    "brighten",
    # Geometric transformations
    "rotate_clockwise_90",
    "mirror_horizontal",
    "crop",
    # Two-image operations
    "paste",
    "blend",
    "matches_at",
    "locate",
    # Filtering
    "blur",
]
