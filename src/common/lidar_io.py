from pathlib import Path
from typing import Optional

from ..las import extract, parse
from ..utils.logging import get_logger

logger = get_logger(__name__)


def read_las_bytes(path) -> bytes:
    path = Path(path)
    data = path.read_bytes()
    logger.info("Read %d bytes from %s", len(data), path)
    return data


def load_las_points(path, limit: Optional[int] = None, center: bool = False):
    data = read_las_bytes(path)
    header = parse(data)
    cloud = extract(data, header, limit)
    if center:
        cloud = cloud.centered()

    if cloud.is_partial:
        logger.warning(
            "%s: read %d of %d points", Path(path).name, cloud.count, cloud.expected_count
        )

    x = cloud.position[:, 0]
    y = cloud.position[:, 1]
    z = cloud.position[:, 2]

    r = g = b = None
    if cloud.has_color:
        r = cloud.color[:, 0]
        g = cloud.color[:, 1]
        b = cloud.color[:, 2]

    pts = {
        "x": x,
        "y": y,
        "z": z,
        "intensity": cloud.intensity,
        "classification": cloud.classification,
        "r": r,
        "g": g,
        "b": b,
        "cloud": cloud,
    }

    return pts, header
