"""I/O utilities for cloud files and animation export."""

from galaxy_cloud.io.rotation_gif import export_rotation_gif, frame_angles
from galaxy_cloud.io.cloud_io import save_cloud, load_cloud

__all__ = ["export_rotation_gif", "frame_angles", "save_cloud", "load_cloud"]
