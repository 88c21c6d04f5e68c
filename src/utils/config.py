"""Configuration loader.

Reads configuration files in YAML format and returns a dictionary.
Configuration files reside in the `configs/` directory at the project
root; `configs/las_reader.yaml` holds the reader defaults.
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .logging import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG = Path(__file__).resolve().parents[2] / "configs" / "las_reader.yaml"


def load_config(path: str) -> Dict[str, Any]:
    """Load a YAML configuration file into a dictionary.

    Parameters
    ----------
    path : str
        Path to the YAML configuration file.

    Returns
    -------
    dict
        Parsed configuration dictionary.  Returns an empty dict if the
        file does not exist or holds no mapping.
    """
    cfg_path = Path(path)
    if not cfg_path.is_file():
        logger.debug("No configuration file at %s", cfg_path)
        return {}
    with open(cfg_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        return {}
    return data


@dataclass
class ReaderConfig:
    """Settings for reading LAS files."""

    max_points: Optional[int] = None
    """Maximum number of points to decode.  None reads all points."""

    center_cloud: bool = False
    """Translate decoded points so the bounding box centre is the origin."""

    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReaderConfig":
        """Build a config from a dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))
        cfg = cls(**{k: v for k, v in data.items() if k in known})
        if cfg.max_points is not None:
            cfg.max_points = int(cfg.max_points)
            if cfg.max_points < 0:
                raise ValueError(f"max_points must be non-negative, got {cfg.max_points}")
        cfg.center_cloud = bool(cfg.center_cloud)
        return cfg

    @classmethod
    def load(cls, path: Optional[str] = None) -> "ReaderConfig":
        """Load a config file, falling back to the bundled defaults."""
        return cls.from_dict(load_config(str(path) if path else str(DEFAULT_CONFIG)))
