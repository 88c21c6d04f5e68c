"""Command line inspector for LAS files.

Decodes the header and point records of a LAS file and prints the
header fields and a short summary of the points.  Optionally writes
the summary as JSON and the points as Parquet.

Usage:
    python -m src.las.inspect_las scan.las --limit 100000 --summary-json meta.json
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from ..common.lidar_io import read_las_bytes
from ..utils.config import ReaderConfig
from ..utils.logging import get_logger, set_level
from .errors import LasError
from .header import Header, parse
from .metadata import ScanMetadata, summarize
from .points import extract

logger = get_logger(__name__)


def print_header(header: Header) -> None:
    print("=" * 60)
    print(f"LAS {header.version} header")
    print("=" * 60)
    for key, value in header.to_dict().items():
        print(f"{key:<48} {value}")


def print_summary(metadata: ScanMetadata) -> None:
    print("\n" + "=" * 60)
    print("Points")
    print("=" * 60)
    print(f"Decoded points:    {metadata.point_count:,}")
    print(f"Expected points:   {metadata.expected_point_count:,}")
    print(f"Truncated:         {metadata.truncated}")
    print(f"Explicit RGB:      {metadata.has_rgb}")
    if metadata.bbox is not None:
        print(f"Bounding box:      {metadata.bbox}")
        print(f"Inside header box: {metadata.bbox_within_header}")
        print(f"Intensity range:   {metadata.intensity_range}")
        print(f"Classes:           {metadata.classification_counts}")


def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Decode a LAS file and print its header and point summary"
    )
    parser.add_argument(
        "input",
        type=Path,
        help="Input LAS file"
    )
    parser.add_argument(
        "--limit",
        type=non_negative_int,
        default=None,
        help="Maximum number of points to decode (default: config max_points)"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML configuration file (default: configs/las_reader.yaml)"
    )
    parser.add_argument(
        "--center",
        action="store_true",
        help="Centre the decoded points on their bounding box"
    )
    parser.add_argument(
        "--summary-json",
        type=Path,
        default=None,
        help="Write the decoded-field summary to this JSON file"
    )
    parser.add_argument(
        "--export-parquet",
        type=Path,
        default=None,
        help="Write the decoded points to this Parquet file"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: config log_level)"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the inspector and return the process exit status."""
    args = build_parser().parse_args(argv)

    config = ReaderConfig.load(args.config)
    set_level(args.log_level or config.log_level)
    limit = args.limit if args.limit is not None else config.max_points
    center = args.center or config.center_cloud

    try:
        data = read_las_bytes(args.input)
        header = parse(data)
    except (OSError, LasError) as exc:
        logger.error("Cannot read %s: %s", args.input, exc)
        return 1

    print_header(header)
    cloud = extract(data, header, limit)
    metadata = summarize(header, cloud)
    print_summary(metadata)

    if metadata.truncated:
        logger.warning(
            "Partial read: %d of %d points", metadata.point_count, metadata.expected_point_count
        )

    if args.summary_json is not None:
        metadata.save(args.summary_json)
        print(f"\n✓ Summary saved to {args.summary_json}")

    if args.export_parquet is not None:
        if center:
            cloud = cloud.centered()
        args.export_parquet.parent.mkdir(parents=True, exist_ok=True)
        cloud.to_dataframe().to_parquet(args.export_parquet, index=False)
        print(f"✓ Points exported to {args.export_parquet}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
