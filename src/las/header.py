"""LAS public header block decoding.

The public header starts every LAS file.  Versions 1.0 to 1.2 share a
227-byte core layout; version 1.3 appends a pointer to the waveform
data packet record at byte 235 and version 1.4 appends the extended
variable length record table pointer and 64-bit point counts at byte
243.  `parse` decodes the core layout plus whichever version-specific
fields the declared version and header size call for, and returns an
immutable `Header`.

Per-return point counts and the contents of (extended) variable length
records are skipped.
"""

import struct
import uuid
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

import numpy as np

from ..utils.logging import get_logger
from .buffer import require
from .errors import FormatError, TruncatedHeaderError

logger = get_logger(__name__)

LAS_SIGNATURE = b"LASF"

# Core header fields up to and including the bounding box.  The 20 pad
# bytes at offset 111 are the five legacy per-return point counts.
_CORE = struct.Struct("<4sHH16sBB32s32sHHHIIBHI20x3d3d6d")
CORE_HEADER_SIZE = _CORE.size  # 227

WAVEFORM_OFFSET = 235
_WAVEFORM = struct.Struct("<Q")

EXTENDED_OFFSET = 243
_EXTENDED = struct.Struct("<QIQ")


@dataclass(frozen=True)
class Header:
    """Decoded LAS public header block."""

    file_signature: str
    file_source_id: int
    global_encoding: int
    project_id: uuid.UUID
    version_major: int
    version_minor: int
    system_identifier: str
    generating_software: str
    file_creation_day_of_year: int
    file_creation_year: int
    header_size: int
    """Declared size of the public header block in bytes."""

    offset_to_point_data: int
    """Byte offset of the first point record."""

    number_of_variable_length_records: int
    point_data_record_format: int
    point_data_record_length: int
    """Declared bytes per point record.  Always used as the record stride."""

    legacy_number_of_point_records: int
    x_scale_factor: float
    y_scale_factor: float
    z_scale_factor: float
    x_offset: float
    y_offset: float
    z_offset: float
    max_x: float
    min_x: float
    max_y: float
    min_y: float
    max_z: float
    min_z: float

    start_of_waveform_data_packet_record: Optional[int] = None
    """Only read for version 1.3 and later."""

    start_of_first_extended_variable_length_record: Optional[int] = None
    number_of_extended_variable_length_records: Optional[int] = None
    number_of_point_records: Optional[int] = None
    """64-bit point count, only read for version 1.4 and later."""

    @property
    def version(self) -> str:
        return f"{self.version_major}.{self.version_minor}"

    @property
    def point_count(self) -> int:
        """Effective number of point records.

        The 64-bit count of a 1.4 header wins; otherwise the legacy
        32-bit count is used.
        """
        if self.number_of_point_records is not None:
            return self.number_of_point_records
        return int(self.legacy_number_of_point_records)

    @property
    def scales(self) -> np.ndarray:
        return np.array([self.x_scale_factor, self.y_scale_factor, self.z_scale_factor])

    @property
    def offsets(self) -> np.ndarray:
        return np.array([self.x_offset, self.y_offset, self.z_offset])

    @property
    def mins(self) -> np.ndarray:
        return np.array([self.min_x, self.min_y, self.min_z])

    @property
    def maxs(self) -> np.ndarray:
        return np.array([self.max_x, self.max_y, self.max_z])

    def to_dict(self) -> Dict[str, Any]:
        """Convert the header to a JSON friendly dictionary."""
        data = asdict(self)
        data["project_id"] = str(self.project_id)
        data["point_count"] = self.point_count
        return data


def _text(raw: bytes) -> str:
    return raw.rstrip(b"\x00 ").decode("utf-8", errors="replace").rstrip()


def parse(buffer) -> Header:
    """Decode the public header block at the start of ``buffer``.

    Parameters
    ----------
    buffer : bytes-like
        Contents of a complete or partial LAS file.

    Returns
    -------
    Header
        The decoded header.

    Raises
    ------
    FormatError
        If the first four bytes are not ``LASF``.
    TruncatedHeaderError
        If the buffer ends before a header region the declared version
        and header size require.
    """
    view = memoryview(buffer).cast("B")
    length = len(view)

    require(length, 0, len(LAS_SIGNATURE), region="file signature")
    signature = bytes(view[:4])
    if signature != LAS_SIGNATURE:
        raise FormatError(signature)

    require(length, 0, CORE_HEADER_SIZE)
    (
        _,
        file_source_id,
        global_encoding,
        guid,
        version_major,
        version_minor,
        system_identifier,
        generating_software,
        day_of_year,
        year,
        header_size,
        offset_to_point_data,
        number_of_vlrs,
        point_format,
        record_length,
        legacy_count,
        x_scale, y_scale, z_scale,
        x_offset, y_offset, z_offset,
        max_x, min_x, max_y, min_y, max_z, min_z,
    ) = _CORE.unpack_from(view, 0)

    extra: Dict[str, int] = {}
    if version_major == 1 and version_minor >= 3 and header_size >= WAVEFORM_OFFSET:
        require(length, WAVEFORM_OFFSET, _WAVEFORM.size, region="waveform pointer")
        (extra["start_of_waveform_data_packet_record"],) = _WAVEFORM.unpack_from(
            view, WAVEFORM_OFFSET
        )
    if version_major == 1 and version_minor >= 4 and header_size >= EXTENDED_OFFSET:
        require(length, EXTENDED_OFFSET, _EXTENDED.size, region="extended header")
        (
            extra["start_of_first_extended_variable_length_record"],
            extra["number_of_extended_variable_length_records"],
            extra["number_of_point_records"],
        ) = _EXTENDED.unpack_from(view, EXTENDED_OFFSET)

    header = Header(
        file_signature=signature.decode("ascii"),
        file_source_id=file_source_id,
        global_encoding=global_encoding,
        project_id=uuid.UUID(bytes_le=guid),
        version_major=version_major,
        version_minor=version_minor,
        system_identifier=_text(system_identifier),
        generating_software=_text(generating_software),
        file_creation_day_of_year=day_of_year,
        file_creation_year=year,
        header_size=header_size,
        offset_to_point_data=offset_to_point_data,
        number_of_variable_length_records=number_of_vlrs,
        point_data_record_format=point_format,
        point_data_record_length=record_length,
        legacy_number_of_point_records=legacy_count,
        x_scale_factor=x_scale,
        y_scale_factor=y_scale,
        z_scale_factor=z_scale,
        x_offset=x_offset,
        y_offset=y_offset,
        z_offset=z_offset,
        max_x=max_x,
        min_x=min_x,
        max_y=max_y,
        min_y=min_y,
        max_z=max_z,
        min_z=min_z,
        **extra,
    )
    logger.debug(
        "Decoded LAS %s header: format %d, record length %d, %d points",
        header.version,
        header.point_data_record_format,
        header.point_data_record_length,
        header.point_count,
    )
    return header


__all__ = [
    "Header",
    "parse",
    "FormatError",
    "TruncatedHeaderError",
    "CORE_HEADER_SIZE",
    "LAS_SIGNATURE",
]
