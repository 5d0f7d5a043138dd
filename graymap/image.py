"""
Pixel store for 8-bit grayscale images.

An Image owns a contiguous row-major buffer of uint8 samples together with
its width, height, and maxval (the level of pure white). Sample (x, y) lives
at linear index y * width + x; internally the buffer is a numpy array of
shape (height, width), so it is addressed as raster[y, x].

Every other graymap module works through the accessors defined here.
Positional accessors check their coordinates and raise ContractViolation on
a bad position: out-of-range coordinates are caller bugs, never an expected
runtime condition.

Stored samples are not forced to stay <= maxval. set_pixel() accepts any
8-bit level; operations that compute new levels saturate to maxval.
"""

from __future__ import annotations

import logging
from numbers import Integral

import numpy as np

from .config import PIXMAX
from .errors import AllocationError, require

logger = logging.getLogger(__name__)


def _is_int(value) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


class Image:
    """An 8-bit grayscale image with a single owner.

    Create images with Image.create() or Image.from_array(), or load them
    with graymap.load(). Call destroy() (or use the image as a context
    manager) to release the pixel buffer; a destroyed image must not be used
    again.
    """

    __slots__ = ("_width", "_height", "_maxval", "_pixels")

    def __init__(self, width: int, height: int, maxval: int, pixels: np.ndarray):
        self._width = width
        self._height = height
        self._maxval = maxval
        self._pixels = pixels

    @classmethod
    def create(cls, width: int, height: int, maxval: int) -> "Image":
        """Create a new black image.

        Args:
            width: Number of columns, >= 0.
            height: Number of rows, >= 0.
            maxval: Level of pure white, in (0, PIXMAX].

        Returns:
            A new zero-filled image owned by the caller.

        Raises:
            ContractViolation: If a dimension or maxval is out of range.
            AllocationError: If the pixel buffer cannot be allocated.
        """
        require(_is_int(width) and width >= 0, f"width must be a non-negative int, got {width!r}")
        require(_is_int(height) and height >= 0, f"height must be a non-negative int, got {height!r}")
        require(
            _is_int(maxval) and 0 < maxval <= PIXMAX,
            f"maxval must be an int in (0, {PIXMAX}], got {maxval!r}",
        )
        try:
            pixels = np.zeros((int(height), int(width)), dtype=np.uint8)
        except (MemoryError, ValueError, OverflowError) as e:
            # numpy reports oversized shapes as ValueError or OverflowError
            logger.debug("Allocation of %dx%d image failed: %s", width, height, e)
            raise AllocationError("Memory allocation failed") from e
        return cls(int(width), int(height), int(maxval), pixels)

    @classmethod
    def from_array(cls, array, maxval: int = PIXMAX) -> "Image":
        """Create a new image holding a copy of a 2D array of levels.

        Args:
            array: 2D array-like of integers in [0, PIXMAX], indexed [y, x].
            maxval: Level of pure white for the new image.

        Raises:
            ContractViolation: If the array is not 2D or holds levels outside
                the 8-bit range.
            AllocationError: If the pixel buffer cannot be allocated.
        """
        data = np.asarray(array)
        require(data.ndim == 2, f"expected a 2D array, got {data.ndim}D with shape {data.shape}")
        require(
            data.size == 0 or np.issubdtype(data.dtype, np.integer),
            f"expected integer levels, got dtype {data.dtype}",
        )
        require(
            data.size == 0 or (data.min() >= 0 and data.max() <= PIXMAX),
            f"levels must lie in [0, {PIXMAX}]",
        )
        height, width = data.shape
        image = cls.create(width, height, maxval)
        image._pixels[...] = data
        return image

    def destroy(self) -> None:
        """Release the pixel buffer. Safe to call more than once."""
        self._pixels = None

    @property
    def destroyed(self) -> bool:
        return self._pixels is None

    def __enter__(self) -> "Image":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.destroy()

    def _live(self) -> np.ndarray:
        require(self._pixels is not None, "image has been destroyed")
        return self._pixels

    @property
    def width(self) -> int:
        self._live()
        return self._width

    @property
    def height(self) -> int:
        self._live()
        return self._height

    @property
    def maxval(self) -> int:
        self._live()
        return self._maxval

    @property
    def raster(self) -> np.ndarray:
        """The live (height, width) uint8 buffer backing this image.

        Writes through this array bypass coordinate checks; it is meant for
        whole-image algorithms, not for per-pixel access.
        """
        return self._live()

    def valid_position(self, x: int, y: int) -> bool:
        """Check if pixel position (x, y) is inside the image."""
        self._live()
        return 0 <= x < self._width and 0 <= y < self._height

    def valid_rect(self, x: int, y: int, w: int, h: int) -> bool:
        """Check if the rectangle [x, x+w) x [y, y+h) is inside the image.

        An empty rectangle (w <= 0 or h <= 0) contains no positions and is
        therefore always valid.
        """
        self._live()
        if w <= 0 or h <= 0:
            return True
        return 0 <= x and x + w <= self._width and 0 <= y and y + h <= self._height

    def _require_position(self, x, y) -> None:
        require(_is_int(x) and _is_int(y), f"position must be a pair of ints, got ({x!r}, {y!r})")
        require(self.valid_position(x, y), f"position ({x}, {y}) outside {self._width}x{self._height} image")

    def get_pixel(self, x: int, y: int) -> int:
        """Get the level at position (x, y)."""
        pixels = self._live()
        self._require_position(x, y)
        return int(pixels[y, x])

    def set_pixel(self, x: int, y: int, level: int) -> None:
        """Set the level at position (x, y).

        The level may exceed maxval; only the 8-bit range is enforced.
        """
        pixels = self._live()
        self._require_position(x, y)
        require(_is_int(level) and 0 <= level <= PIXMAX, f"level must be an int in [0, {PIXMAX}], got {level!r}")
        pixels[y, x] = level

    def stats(self) -> tuple[int, int]:
        """Return the (min, max) levels in the image.

        An empty image reports (0, 0).
        """
        pixels = self._live()
        if pixels.size == 0:
            return 0, 0
        return int(pixels.min()), int(pixels.max())

    def __repr__(self) -> str:
        if self._pixels is None:
            return "Image(<destroyed>)"
        return f"Image(width={self._width}, height={self._height}, maxval={self._maxval})"
