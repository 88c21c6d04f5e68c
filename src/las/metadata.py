"""Decoded-field summary for a LAS file.

`summarize` condenses a decoded `Header` and `PointCloud` into a
`ScanMetadata` record: what the file declares, what was actually read,
whether the read was cut short, and whether the decoded points agree
with the bounding box stored in the header.  The record can be written
to JSON next to the input for later inspection.
"""

import json
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import numpy as np

from .header import Header
from .points import PointCloud

BBox = Tuple[float, float, float, float, float, float]


@dataclass
class ScanMetadata:
    """Structured summary of a decoded LAS file."""

    version: str
    """LAS version as ``major.minor``."""

    point_format: int
    record_length: int
    generating_software: str

    has_rgb: bool
    """Whether colours come from an RGB field."""

    point_count: int
    """Number of points decoded."""

    expected_point_count: int
    """Number of points requested from the file."""

    truncated: bool
    """Whether the point data ended before `expected_point_count`."""

    header_bbox: BBox
    """Header bounding box as (x_min, y_min, z_min, x_max, y_max, z_max)."""

    bbox: Optional[BBox] = None
    """Bounding box of the decoded points, same layout as `header_bbox`."""

    bbox_within_header: Optional[bool] = None
    """Whether `bbox` lies inside `header_bbox` within one scale step."""

    intensity_range: Optional[Tuple[int, int]] = None

    classification_counts: Optional[Dict[int, int]] = None
    """Number of points per classification code."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert metadata to dictionary format."""
        data = asdict(self)
        if self.classification_counts is not None:
            data["classification_counts"] = {
                str(k): v for k, v in self.classification_counts.items()
            }
        return data

    def save(self, path: Path) -> None:
        """Save metadata to a JSON file.

        Parameters
        ----------
        path : Path
            Output path of the JSON file.
        """
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2)


def _as_bbox(mins: np.ndarray, maxs: np.ndarray) -> BBox:
    return (
        float(mins[0]),
        float(mins[1]),
        float(mins[2]),
        float(maxs[0]),
        float(maxs[1]),
        float(maxs[2]),
    )


def summarize(header: Header, cloud: PointCloud) -> ScanMetadata:
    """Build a `ScanMetadata` from a decoded header and point cloud.

    Parameters
    ----------
    header : Header
        Decoded header.
    cloud : PointCloud
        Points extracted with that header.  A centred cloud will not
        match the header bounding box.

    Returns
    -------
    ScanMetadata
        Summary of declared and decoded values.
    """
    metadata = ScanMetadata(
        version=header.version,
        point_format=header.point_data_record_format,
        record_length=header.point_data_record_length,
        generating_software=header.generating_software,
        has_rgb=cloud.has_color,
        point_count=cloud.count,
        expected_point_count=cloud.expected_count,
        truncated=cloud.is_partial,
        header_bbox=_as_bbox(header.mins, header.maxs),
    )

    extent = cloud.bounds()
    if extent is None:
        return metadata

    mins, maxs = extent
    tolerance = np.abs(header.scales)
    metadata.bbox = _as_bbox(mins, maxs)
    metadata.bbox_within_header = bool(
        np.all(mins >= header.mins - tolerance) and np.all(maxs <= header.maxs + tolerance)
    )
    metadata.intensity_range = (int(cloud.intensity.min()), int(cloud.intensity.max()))
    codes, counts = np.unique(cloud.classification, return_counts=True)
    metadata.classification_counts = {int(c): int(n) for c, n in zip(codes, counts)}
    return metadata
