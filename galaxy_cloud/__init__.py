"""
Galaxy Cloud - procedural spiral galaxy point clouds.

Features:
- Immutable, validated parameter snapshots
- Vectorized, seedable generator with optional threaded sharding
- Time-driven rigid rotation about the vertical axis
- Regeneration on parameter change with abandonment of stale results
- matplotlib preview, GIF export, .npz/.json cloud files
- CLI and GUI interfaces
"""

__version__ = "0.1.0"

from galaxy_cloud.params import ParameterSet, InvalidParameter, parse_color
from galaxy_cloud.generator import GalaxyGenerator, PointCloud, generate
from galaxy_cloud.rotation import orientation, rotate_positions, FrameClock
from galaxy_cloud.regeneration import Regenerator

__all__ = [
    "ParameterSet",
    "InvalidParameter",
    "parse_color",
    "GalaxyGenerator",
    "PointCloud",
    "generate",
    "orientation",
    "rotate_positions",
    "FrameClock",
    "Regenerator",
]
