"""LAS point cloud decoding.

Decoding is a two-stage pipeline of pure functions::

    header = parse(buffer)
    cloud = extract(buffer, header, limit)

`parse` raises `FormatError` or `TruncatedHeaderError` for unusable
headers.  `extract` never fails on short or odd point data; it returns
what the buffer holds and flags the shortfall via `PointCloud.is_partial`.
"""

from .errors import LasError, FormatError, TruncatedHeaderError
from .header import Header, parse
from .points import PointCloud, extract
from .metadata import ScanMetadata, summarize

__all__ = [
    "LasError",
    "FormatError",
    "TruncatedHeaderError",
    "Header",
    "parse",
    "PointCloud",
    "extract",
    "ScanMetadata",
    "summarize",
]
