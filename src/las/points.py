"""Point record extraction.

`extract` walks the point records that follow the header and converts
them into numpy arrays: scaled XYZ positions, intensity,
classification and a colour per point.  The record stride is always
the record length declared in the header, so vendor specific extra
bytes at the end of each record are skipped without interpretation.

Colour policy
-------------
Formats 2, 3, 5, 7, 8 and 10 carry an explicit 16-bit RGB triple,
located at byte 20 of the record, or at byte 28 when an 8-byte GPS
time precedes it.  Channels are normalised to [0, 1].  For every other
format the colour is a grey value derived from the intensity.  If the
RGB bytes of a record fall outside the record or the buffer, that point
gets neutral grey (0.5, 0.5, 0.5) instead.

A buffer that ends inside the point data yields only the complete
records.  This is not an error; the returned cloud reports it through
`PointCloud.is_partial`.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

import numpy as np
import pandas as pd

from ..utils.logging import get_logger
from . import point_formats
from .buffer import complete_records, fits
from .header import Header

logger = get_logger(__name__)

NEUTRAL_GREY = 0.5
CHANNEL_MAX = 65535.0


@dataclass(frozen=True, eq=False)
class PointCloud:
    """Decoded point attributes.

    The constructor stores read-only copies of the arrays it is given.
    """

    count: int
    """Number of points actually decoded."""

    position: np.ndarray
    """Array of shape (count, 3) with real-world XYZ coordinates."""

    color: np.ndarray
    """Array of shape (count, 3) with RGB in [0, 1]."""

    intensity: np.ndarray
    """uint16 array of length count."""

    classification: np.ndarray
    """uint8 array of length count."""

    has_color: bool
    """True if colours come from an RGB field, False if from intensity."""

    expected_count: int = 0
    """Points requested: the header's point count capped by the limit."""

    def __post_init__(self):
        for name in ("position", "color", "intensity", "classification"):
            arr = np.array(getattr(self, name), copy=True)
            arr.setflags(write=False)
            object.__setattr__(self, name, arr)

    @property
    def is_partial(self) -> bool:
        """True if the buffer ended before `expected_count` points were read."""
        return self.count < self.expected_count

    def bounds(self) -> Optional[Tuple[np.ndarray, np.ndarray]]:
        """Return ``(mins, maxs)`` of the decoded positions, or None if empty."""
        if self.count == 0:
            return None
        return self.position.min(axis=0), self.position.max(axis=0)

    def centered(self) -> "PointCloud":
        """Return a copy translated so the bounding box centre is the origin."""
        extent = self.bounds()
        if extent is None:
            return self
        center = (extent[0] + extent[1]) / 2.0
        return replace(self, position=self.position - center)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert the point attributes to a DataFrame, one row per point."""
        return pd.DataFrame({
            "x": self.position[:, 0],
            "y": self.position[:, 1],
            "z": self.position[:, 2],
            "r": self.color[:, 0],
            "g": self.color[:, 1],
            "b": self.color[:, 2],
            "intensity": self.intensity,
            "classification": self.classification,
        })


def _field(records: np.ndarray, offset: int, dtype, width: int = 1) -> np.ndarray:
    """Reinterpret ``width`` consecutive values of ``dtype`` at ``offset`` in every record."""
    dtype = np.dtype(dtype)
    columns = records[:, offset:offset + dtype.itemsize * width]
    values = np.array(columns, copy=True).view(dtype)
    return values.reshape(-1) if width == 1 else values.reshape(-1, width)


def _grey_from_intensity(intensity: np.ndarray) -> np.ndarray:
    grey = np.minimum(intensity / CHANNEL_MAX, 1.0)
    return np.repeat(grey[:, np.newaxis], 3, axis=1)


def _explicit_color(
    records: np.ndarray,
    starts: np.ndarray,
    color_offset: int,
    stride: int,
    buffer_length: int,
) -> np.ndarray:
    color = np.full((len(records), 3), NEUTRAL_GREY)
    if not fits(stride, color_offset, point_formats.COLOR_SIZE):
        logger.debug(
            "RGB at byte %d does not fit in %d-byte records; using neutral grey",
            color_offset,
            stride,
        )
        return color

    in_buffer = starts + color_offset + point_formats.COLOR_SIZE <= buffer_length
    rgb = _field(records, color_offset, "<u2", width=3)
    color[in_buffer] = rgb[in_buffer] / CHANNEL_MAX
    return color


def _empty(has_color: bool, expected_count: int) -> PointCloud:
    return PointCloud(
        count=0,
        position=np.empty((0, 3), dtype=np.float64),
        color=np.empty((0, 3), dtype=np.float64),
        intensity=np.empty(0, dtype=np.uint16),
        classification=np.empty(0, dtype=np.uint8),
        has_color=has_color,
        expected_count=expected_count,
    )


def extract(buffer, header: Header, limit: Optional[int] = None) -> PointCloud:
    """Decode up to ``limit`` point records from ``buffer``.

    Parameters
    ----------
    buffer : bytes-like
        The same buffer the header was decoded from.
    header : Header
        Decoded header describing where the records start, their
        stride, format, scale and offset.
    limit : int, optional
        Maximum number of points to decode.  None means no limit.

    Returns
    -------
    PointCloud
        The first ``count`` points in file order, where ``count`` is the
        smallest of the header's point count, ``limit`` and the number
        of complete records in the buffer.
    """
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")

    view = memoryview(buffer).cast("B")
    length = len(view)
    point_format = header.point_data_record_format
    stride = header.point_data_record_length
    start = header.offset_to_point_data
    has_color = point_formats.has_color(point_format)

    expected = header.point_count if limit is None else min(header.point_count, limit)

    minimum = point_formats.min_record_length(point_format)
    if minimum is not None and stride < minimum:
        logger.warning(
            "Record length %d is shorter than the %d bytes of point format %d",
            stride,
            minimum,
            point_format,
        )

    if stride < point_formats.CORE_RECORD_SIZE:
        logger.warning(
            "Record length %d cannot hold the point coordinates; no points decoded",
            stride,
        )
        available = 0
    else:
        available = complete_records(length, start, stride)

    count = min(expected, available)
    if count < expected:
        logger.warning(
            "Point data truncated: %d of %d records available",
            count,
            expected,
        )
    if count == 0:
        return _empty(has_color, expected)

    records = np.frombuffer(view, dtype=np.uint8, count=count * stride, offset=start)
    records = records.reshape(count, stride)

    raw = np.column_stack([
        _field(records, point_formats.X_OFFSET, "<i4"),
        _field(records, point_formats.Y_OFFSET, "<i4"),
        _field(records, point_formats.Z_OFFSET, "<i4"),
    ])
    position = raw.astype(np.float64) * header.scales + header.offsets
    intensity = _field(records, point_formats.INTENSITY_OFFSET, "<u2").astype(np.uint16)
    classification = _field(records, point_formats.CLASSIFICATION_OFFSET, np.uint8)

    if has_color:
        starts = start + np.arange(count, dtype=np.int64) * stride
        color = _explicit_color(
            records,
            starts,
            point_formats.color_offset(point_format),
            stride,
            length,
        )
    else:
        color = _grey_from_intensity(intensity)

    logger.debug("Decoded %d points of format %d", count, point_format)
    return PointCloud(
        count=count,
        position=position,
        color=color,
        intensity=intensity,
        classification=classification,
        has_color=has_color,
        expected_count=expected,
    )
