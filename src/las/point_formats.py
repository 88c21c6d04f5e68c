"""Point Data Record Format (PDRF) policy.

The format code selects which optional fields follow the common
20-byte prefix of a point record.  Only two properties matter to the
decoder: whether the record carries an explicit RGB triple and, if so,
whether an 8-byte GPS time field precedes it.
"""

from typing import Dict, FrozenSet, Optional

COLOR_FORMATS: FrozenSet[int] = frozenset({2, 3, 5, 7, 8, 10})
"""Formats that carry red, green and blue channels."""

GPS_TIME_FORMATS: FrozenSet[int] = frozenset({1, 3, 4, 5, 6, 7, 8, 9, 10})
"""Formats that carry a GPS time field."""

# Byte offsets inside a record.
X_OFFSET = 0
Y_OFFSET = 4
Z_OFFSET = 8
INTENSITY_OFFSET = 12
CLASSIFICATION_OFFSET = 15

CORE_RECORD_SIZE = CLASSIFICATION_OFFSET + 1
"""Bytes a record must span to hold XYZ, intensity and classification."""

COLOR_OFFSET = 20
GPS_TIME_SIZE = 8
COLOR_SIZE = 6

MIN_RECORD_LENGTHS: Dict[int, int] = {
    0: 20,
    1: 28,
    2: 26,
    3: 34,
    4: 57,
    5: 63,
    6: 30,
    7: 36,
    8: 38,
    9: 59,
    10: 67,
}
"""Documented record length of each format, before any extra bytes."""


def has_color(point_format: int) -> bool:
    return point_format in COLOR_FORMATS


def color_offset(point_format: int) -> Optional[int]:
    """Relative byte offset of the RGB triple, or None if there is none."""
    if point_format not in COLOR_FORMATS:
        return None
    if point_format in GPS_TIME_FORMATS:
        return COLOR_OFFSET + GPS_TIME_SIZE
    return COLOR_OFFSET


def min_record_length(point_format: int) -> Optional[int]:
    return MIN_RECORD_LENGTHS.get(point_format)
