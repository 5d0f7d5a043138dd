"""
Load and save raw 8-bit PGM (P5) files.

File layout:

    P5 <ws> width <ws> height <ws> maxval <one ws byte> <width*height bytes>

<ws> is one or more whitespace bytes, and may contain comments that start
with '#' and run to the end of the line. Exactly one whitespace byte follows
maxval; the raw samples start right after it, row-major, no padding.

Failures raise ImageLoadError / ImageSaveError whose cause names the step
that failed, checked in header order. When the operating system reported
the failure its errno is kept on the exception.
"""

from __future__ import annotations

import logging
import os

import numpy as np

from .config import (
    PIXMAX,
    PGM_COMMENT_MARKER,
    PGM_HEADER_TEMPLATE,
    PGM_MAGIC,
    PGM_WHITESPACE,
)
from .errors import AllocationError, ImageLoadError, ImageSaveError
from .image import Image

logger = logging.getLogger(__name__)

_DIGITS = b"0123456789"


class _HeaderParseError(Exception):
    """Internal: a header field could not be parsed or validated."""


class _HeaderReader:
    """Cursor over the bytes of a PGM file, consuming header tokens."""

    def __init__(self, data: bytes):
        self.data = data
        self.pos = 0

    def _peek(self) -> int | None:
        if self.pos < len(self.data):
            return self.data[self.pos]
        return None

    def _at_whitespace(self) -> bool:
        byte = self._peek()
        return byte is not None and byte in PGM_WHITESPACE

    def _at_comment(self) -> bool:
        byte = self._peek()
        return byte is not None and byte == PGM_COMMENT_MARKER[0]

    def expect_magic(self) -> bool:
        end = self.pos + len(PGM_MAGIC)
        if self.data[self.pos:end] != PGM_MAGIC:
            return False
        self.pos = end
        return True

    def skip_separator(self) -> int:
        """Skip whitespace and comment lines; return the bytes consumed."""
        start = self.pos
        while True:
            if self._at_whitespace():
                self.pos += 1
            elif self._at_comment():
                newline = self.data.find(b"\n", self.pos)
                self.pos = len(self.data) if newline < 0 else newline + 1
            else:
                return self.pos - start

    def read_int(self) -> int | None:
        """Read an optionally signed decimal integer, or None if absent."""
        start = self.pos
        if self._peek() is not None and self._peek() in b"+-":
            self.pos += 1
        digits_start = self.pos
        while self._peek() is not None and self._peek() in _DIGITS:
            self.pos += 1
        if self.pos == digits_start:
            self.pos = start
            return None
        return int(self.data[start:self.pos])

    def read_single_whitespace(self) -> bool:
        if not self._at_whitespace():
            return False
        self.pos += 1
        return True


def _parse_header(reader: _HeaderReader) -> tuple[int, int, int]:
    """Parse the header fields in order, raising on the first bad one."""
    if not (reader.expect_magic() and reader.skip_separator() > 0):
        raise _HeaderParseError("Invalid file format")

    width = reader.read_int()
    if width is None or width < 0 or reader.skip_separator() == 0:
        raise _HeaderParseError("Invalid width")

    height = reader.read_int()
    if height is None or height < 0 or reader.skip_separator() == 0:
        raise _HeaderParseError("Invalid height")

    maxval = reader.read_int()
    if maxval is None or not 0 < maxval <= PIXMAX:
        raise _HeaderParseError("Invalid maxval")

    if not reader.read_single_whitespace():
        raise _HeaderParseError("Whitespace expected")

    return width, height, maxval


def load(path: str | os.PathLike) -> Image:
    """Load a raw PGM file.

    Only 8-bit (maxval <= 255) files are accepted.

    Args:
        path: File to read.

    Returns:
        A new image owned by the caller.

    Raises:
        ImageLoadError: If the file cannot be opened, its header is invalid,
            the pixel buffer cannot be allocated, or fewer than width*height
            samples follow the header.
    """
    path_str = str(path)
    try:
        f = open(path, "rb")
    except OSError as e:
        raise ImageLoadError("Open failed", path_str, e.errno) from e
    try:
        with f:
            data = f.read()
    except OSError as e:
        raise ImageLoadError("Reading pixels", path_str, e.errno) from e

    reader = _HeaderReader(data)
    try:
        width, height, maxval = _parse_header(reader)
    except _HeaderParseError as e:
        logger.debug("Rejected %s: %s at byte %d", path_str, e, reader.pos)
        raise ImageLoadError(str(e), path_str) from None

    try:
        image = Image.create(width, height, maxval)
    except AllocationError as e:
        raise ImageLoadError(e.cause, path_str) from e

    count = width * height
    body = data[reader.pos:reader.pos + count]
    if len(body) != count:
        image.destroy()
        raise ImageLoadError("Reading pixels", path_str)

    if count:
        image.raster[...] = np.frombuffer(body, dtype=np.uint8).reshape(height, width)
    logger.debug("Loaded %dx%d image (maxval=%d) from %s", width, height, maxval, path_str)
    return image


def save(image: Image, path: str | os.PathLike) -> None:
    """Save an image to a raw PGM file.

    On failure a partial, invalid file may be left at path.

    Raises:
        ImageSaveError: If the file cannot be opened or written.
    """
    path_str = str(path)
    header = PGM_HEADER_TEMPLATE.format(
        width=image.width, height=image.height, maxval=image.maxval
    ).encode("ascii")
    body = image.raster.tobytes()

    try:
        f = open(path, "wb")
    except OSError as e:
        raise ImageSaveError("Open failed", path_str, e.errno) from e

    stage = "Writing header failed"
    try:
        with f:
            f.write(header)
            stage = "Writing pixels failed"
            f.write(body)
    except OSError as e:
        raise ImageSaveError(stage, path_str, e.errno) from e

    logger.debug(
        "Saved %dx%d image (maxval=%d) to %s",
        image.width, image.height, image.maxval, path_str,
    )
