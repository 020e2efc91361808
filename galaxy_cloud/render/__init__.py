"""Rendering of generated clouds."""

from galaxy_cloud.render.base import Renderer
from galaxy_cloud.render.renderer_3d import CloudRenderer

__all__ = ["Renderer", "CloudRenderer"]
