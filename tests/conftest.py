"""Shared fixtures: byte-exact synthetic LAS files."""

import struct

import pytest

CORE = struct.Struct("<4sHH16sBB32s32sHHHIIBHI20x3d3d6d")

HEADER_SIZES = {0: 227, 1: 227, 2: 227, 3: 235, 4: 375}
RECORD_LENGTHS = {0: 20, 1: 28, 2: 26, 3: 34, 4: 57, 5: 63, 6: 30, 7: 36, 8: 38, 9: 59, 10: 67}
GPS_FORMATS = {1, 3, 4, 5, 6, 7, 8, 9, 10}
COLOR_FORMATS = {2, 3, 5, 7, 8, 10}


def build_las(
    points=(),
    version=(1, 2),
    point_format=1,
    record_length=None,
    header_size=None,
    offset_to_point_data=None,
    legacy_count=None,
    extended_count=None,
    waveform_start=0,
    evlr_start=0,
    evlr_count=0,
    scales=(0.01, 0.01, 0.01),
    offsets=(0.0, 0.0, 0.0),
    bbox=(0.0, 0.0, 0.0, 0.0, 0.0, 0.0),
    system_identifier=b"TEST SYSTEM",
    generating_software=b"las builder",
    guid=bytes(range(16)),
    file_source_id=7,
    global_encoding=1,
    day=42,
    year=2021,
    signature=b"LASF",
):
    """Build a LAS file in memory.

    ``points`` is a sequence of dicts with keys ``xyz`` (raw int32
    triple), and optionally ``intensity``, ``classification``, ``rgb``
    and ``gps_time``.  ``bbox`` is (max_x, min_x, max_y, min_y, max_z,
    min_z), the on-disk order.
    """
    major, minor = version
    if header_size is None:
        header_size = HEADER_SIZES[minor]
    if record_length is None:
        record_length = RECORD_LENGTHS[point_format]
    if offset_to_point_data is None:
        offset_to_point_data = header_size
    if legacy_count is None:
        legacy_count = len(points)

    header = bytearray(max(header_size, CORE.size))
    CORE.pack_into(
        header, 0,
        signature, file_source_id, global_encoding, guid, major, minor,
        system_identifier, generating_software, day, year, header_size,
        offset_to_point_data, 0, point_format, record_length, legacy_count,
        *scales, *offsets, *bbox,
    )
    if len(header) >= 243:
        struct.pack_into("<Q", header, 235, waveform_start)
    if len(header) >= 263:
        count = len(points) if extended_count is None else extended_count
        struct.pack_into("<QIQ", header, 243, evlr_start, evlr_count, count)

    body = bytearray(header)
    body.extend(bytes(max(0, offset_to_point_data - len(body))))
    for point in points:
        record = bytearray(record_length)
        struct.pack_into("<iii", record, 0, *point["xyz"])
        struct.pack_into("<H", record, 12, point.get("intensity", 0))
        record[15] = point.get("classification", 0)
        if point_format in GPS_FORMATS and record_length >= 28:
            struct.pack_into("<d", record, 20, point.get("gps_time", 0.0))
        color_offset = 28 if point_format in GPS_FORMATS else 20
        if point_format in COLOR_FORMATS and "rgb" in point and color_offset + 6 <= record_length:
            struct.pack_into("<HHH", record, color_offset, *point["rgb"])
        body.extend(record)
    return bytes(body)


@pytest.fixture
def make_las():
    """Return the synthetic LAS file builder."""
    return build_las


@pytest.fixture
def sample_points():
    """Three points with distinct attributes."""
    return [
        {"xyz": (100, 200, 300), "intensity": 1000, "classification": 2,
         "rgb": (65535, 0, 32768), "gps_time": 1.5},
        {"xyz": (-50, 0, 12345), "intensity": 65535, "classification": 6,
         "rgb": (1, 2, 3), "gps_time": 2.5},
        {"xyz": (2147483647, -2147483648, 0), "intensity": 0, "classification": 9,
         "rgb": (0, 65535, 65535), "gps_time": 3.5},
    ]
