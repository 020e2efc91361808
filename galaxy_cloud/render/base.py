"""Base renderer interface."""

from abc import ABC, abstractmethod
import numpy as np

from galaxy_cloud.generator import PointCloud


class Renderer(ABC):
    """Abstract base class for renderers."""

    @abstractmethod
    def render(self, cloud: PointCloud, angle: float = 0.0):
        """Render one frame.

        Args:
            cloud: Point cloud to draw (never modified)
            angle: Orientation about the vertical axis, in radians
        """
        pass

    @abstractmethod
    def capture_frame(self) -> np.ndarray:
        """Capture current frame as image array.

        Returns:
            Image array (H, W, 3) uint8
        """
        pass

    @abstractmethod
    def clear(self):
        """Clear the renderer."""
        pass

    @abstractmethod
    def close(self):
        """Close the renderer."""
        pass
