"""Bounds checks shared by the header reader and the point extractor."""

from typing import Type

from .errors import TruncatedHeaderError


def fits(buffer_length: int, offset: int, size: int) -> bool:
    """Return True if ``size`` bytes starting at ``offset`` lie inside the buffer."""
    return offset >= 0 and size >= 0 and offset + size <= buffer_length


def require(
    buffer_length: int,
    offset: int,
    size: int,
    region: str = "header",
    error: Type[TruncatedHeaderError] = TruncatedHeaderError,
) -> None:
    """Raise ``error`` unless ``size`` bytes at ``offset`` are available.

    Parameters
    ----------
    buffer_length : int
        Length of the whole input buffer in bytes.
    offset : int
        Start of the region that is about to be read.
    size : int
        Number of bytes the read needs.
    region : str, optional
        Name of the region, used in the error message.
    error : type, optional
        Exception class to raise.  It is constructed as
        ``error(required, available, region)``.
    """
    if not fits(buffer_length, offset, size):
        raise error(offset + size, buffer_length, region)


def complete_records(buffer_length: int, start: int, stride: int) -> int:
    """Number of whole records of ``stride`` bytes that fit from ``start`` on.

    A start past the end of the buffer, or a non-positive stride,
    yields zero.
    """
    if stride <= 0 or start < 0 or start >= buffer_length:
        return 0
    return (buffer_length - start) // stride
