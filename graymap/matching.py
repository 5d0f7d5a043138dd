"""
Exact subimage matching and search.

matches_at() compares a needle image against the haystack at one offset;
locate() scans every offset in raster order and returns the first match.
Both are read-only.
"""

from __future__ import annotations

import logging

import numpy as np

from .config import LOCATE_INCLUDE_FLUSH_EDGE
from .errors import require
from .image import Image

logger = logging.getLogger(__name__)


def matches_at(haystack: Image, x: int, y: int, needle: Image) -> bool:
    """Check whether needle matches the haystack subimage at (x, y).

    Samples are compared in raster order and the first mismatch ends the
    comparison. The needle is not required to fit as a whole, but every
    sample actually compared must lie inside the haystack; reaching one
    outside it is a contract violation, as for any out-of-range pixel access.

    Requires:
        (x, y) is a valid position in haystack.
    """
    require(
        haystack.valid_position(x, y),
        f"position ({x}, {y}) outside {haystack.width}x{haystack.height} image",
    )
    hay = haystack.raster
    ndl = needle.raster
    width = needle.width
    if width == 0:
        return True
    for row in range(needle.height):
        require(
            y + row < haystack.height,
            f"needle row {row} at ({x}, {y + row}) runs outside "
            f"{haystack.width}x{haystack.height} image",
        )
        # Columns past the right edge are only reached if the row agrees so far.
        inside = min(width, haystack.width - x)
        if not np.array_equal(hay[y + row, x:x + inside], ndl[row, :inside]):
            return False
        require(
            inside == width,
            f"needle row {row} at ({x}, {y + row}) runs outside "
            f"{haystack.width}x{haystack.height} image",
        )
    return True


def locate(
    haystack: Image,
    needle: Image,
    inclusive: bool = LOCATE_INCLUDE_FLUSH_EDGE,
) -> tuple[int, int] | None:
    """Find the first position where needle occurs inside haystack.

    Offsets are scanned row by row (y outer, x inner). With inclusive=True
    the scan covers every offset where the needle fits, including those
    flush with the bottom or right edge; with inclusive=False the last row
    and column of offsets are skipped, as in the legacy scan.

    Args:
        haystack: Image to search in.
        needle: Image to search for.
        inclusive: Whether flush-edge offsets are tried.

    Returns:
        (x, y) of the first match, or None if there is none.
    """
    rows = haystack.height - needle.height + (1 if inclusive else 0)
    cols = haystack.width - needle.width + (1 if inclusive else 0)
    if rows <= 0 or cols <= 0:
        return None
    if needle.width == 0 or needle.height == 0:
        return 0, 0

    # Only offsets whose top-left sample agrees can match.
    anchor = needle.raster[0, 0]
    candidates = np.argwhere(haystack.raster[:rows, :cols] == anchor)
    for checked, (y, x) in enumerate(candidates, start=1):
        if matches_at(haystack, int(x), int(y), needle):
            logger.debug("Needle found at (%d, %d) after %d candidates", x, y, checked)
            return int(x), int(y)

    logger.debug("Needle not found among %d candidates", len(candidates))
    return None
