"""Utility functions for the LAS reader."""

from .logging import get_logger, set_level
from .config import load_config, ReaderConfig

__all__ = ["get_logger", "set_level", "load_config", "ReaderConfig"]
