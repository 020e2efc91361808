"""Utility functions for reproducibility, configuration and logging."""

from galaxy_cloud.utils.reproducibility import make_rng
from galaxy_cloud.utils.config import load_config, save_config, Config
from galaxy_cloud.utils.logging_config import setup_logging

__all__ = [
    "make_rng",
    "load_config",
    "save_config",
    "Config",
    "setup_logging",
]
