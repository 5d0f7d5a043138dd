"""Error types for the graymap engine.

Two tiers:

- ContractViolation: a caller bug (bad dimensions, out-of-range coordinates,
  destroyed image, negative brighten factor). Raised by require() and never
  meant to be caught for flow control.
- ImageError and subclasses: expected runtime failures (allocation
  exhaustion, file open/format/read/write). Each carries the cause message
  and, when the operating system reported one, the original errno.
"""

from __future__ import annotations


class ContractViolation(AssertionError):
    """A precondition of a graymap operation was broken by the caller."""


def require(condition: bool, message: str) -> None:
    """Raise ContractViolation with message unless condition holds."""
    if not condition:
        raise ContractViolation(message)


class ImageError(Exception):
    """Base class for recoverable graymap failures.

    Attributes:
        cause: Short human-readable description of what failed.
        errno: errno of the underlying OSError, or None.
    """

    def __init__(self, cause: str, errno: int | None = None):
        super().__init__(cause)
        self.cause = cause
        self.errno = errno


class AllocationError(ImageError):
    """The pixel buffer could not be allocated."""


class ImageLoadError(ImageError):
    """A raster file could not be opened, parsed, or read."""

    def __init__(self, cause: str, path: str, errno: int | None = None):
        super().__init__(cause, errno)
        self.path = path

    def __str__(self) -> str:
        return f"{self.path}: {self.cause}"


class ImageSaveError(ImageError):
    """A raster file could not be opened or written."""

    def __init__(self, cause: str, path: str, errno: int | None = None):
        super().__init__(cause, errno)
        self.path = path

    def __str__(self) -> str:
        return f"{self.path}: {self.cause}"
