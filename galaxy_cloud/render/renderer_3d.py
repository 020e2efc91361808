"""3D point-cloud renderer using matplotlib."""

import logging
import warnings
from typing import Optional

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from galaxy_cloud.generator import PointCloud
from galaxy_cloud.render.base import Renderer
from galaxy_cloud.rotation import rotate_positions

logger = logging.getLogger(__name__)


class CloudRenderer(Renderer):
    """Draws a galaxy cloud as colored points, rotated as one rigid body.

    The cloud's y axis is vertical; it is mapped onto matplotlib's z axis.
    """

    def __init__(
        self,
        figure: Optional[Figure] = None,
        figsize: float = 8.0,
        dpi: int = 100,
        background: str = "#11081F",
        elevation: float = 22.0,
        azimuth: float = -90.0,
        point_scale: float = 400.0,
        alpha: float = 0.6,
        max_points: int = 50000,
        nucleus: bool = True,
        interactive: bool = True,
    ):
        """Initialize renderer.

        Args:
            figure: Existing figure to draw into (e.g. embedded in a GUI)
            figsize: Square figure size in inches when creating a figure
            dpi: Dots per inch
            background: Background color
            elevation: Camera elevation angle
            azimuth: Camera azimuth angle
            point_scale: Marker area per unit of the cloud's point size
            alpha: Point opacity; overlapping points brighten like additive blending
            max_points: Points drawn per frame; larger clouds are strided
            nucleus: Draw a dark core at the origin
            interactive: Show a window and pump its event loop after each frame
        """
        self.figsize = figsize
        self.dpi = dpi
        self.background = background
        self.elevation = elevation
        self.azimuth = azimuth
        self.point_scale = point_scale
        self.alpha = alpha
        self.max_points = max(1, max_points)
        self.nucleus = nucleus
        self.interactive = interactive
        self.fig: Optional[Figure] = figure
        self.ax = None
        self.scatter = None
        self._cloud: Optional[PointCloud] = None
        self._stride = 1

    def _initialize(self):
        if self.fig is None:
            self.fig = plt.figure(figsize=(self.figsize, self.figsize), dpi=self.dpi)
        if self.ax is None:
            self.ax = self.fig.add_subplot(111, projection='3d')
        self.fig.patch.set_facecolor(self.background)
        self.ax.set_facecolor(self.background)
        self.ax.set_axis_off()
        self.ax.view_init(elev=self.elevation, azim=self.azimuth)
        if self.interactive:
            plt.show(block=False)

    def is_open(self) -> bool:
        """Whether the figure window still exists."""
        if self.fig is None:
            return False
        return plt.fignum_exists(self.fig.number)

    def _set_cloud(self, cloud: PointCloud):
        """Rebuild artists for a newly generated cloud."""
        self._stride = max(1, int(np.ceil(len(cloud) / self.max_points)))
        if self._stride > 1:
            warnings.warn(
                f"Drawing every {self._stride}th of {len(cloud)} particles; "
                f"raise max_points to draw more.",
                UserWarning
            )
        self.ax.clear()
        self.ax.set_axis_off()
        self.ax.set_facecolor(self.background)

        extent = cloud.params.radius * 1.1
        self.ax.set_xlim(-extent, extent)
        self.ax.set_ylim(-extent, extent)
        self.ax.set_zlim(-extent, extent)

        if self.nucleus:
            self.ax.scatter([0.0], [0.0], [0.0], c='black', s=self.point_scale * 0.2,
                            depthshade=False, zorder=10)

        points = cloud.positions[::self._stride]
        self.scatter = self.ax.scatter(
            points[:, 0], points[:, 2], points[:, 1],
            c=np.clip(cloud.colors[::self._stride], 0.0, 1.0),
            s=cloud.params.size * self.point_scale,
            alpha=self.alpha,
            edgecolors='none',
            depthshade=False,
        )
        self._cloud = cloud
        logger.debug(f"Renderer bound to cloud of {len(cloud)} particles (stride {self._stride})")

    def render(self, cloud: PointCloud, angle: float = 0.0):
        """Render cloud rotated by angle about the vertical axis."""
        if self.interactive and self._cloud is not None and not self.is_open():
            return
        if self.ax is None:
            self._initialize()
        if cloud is not self._cloud:
            self._set_cloud(cloud)

        rotated = rotate_positions(cloud.positions[::self._stride], angle)
        # cloud y is up; matplotlib z is up
        self.scatter._offsets3d = (rotated[:, 0], rotated[:, 2], rotated[:, 1])

        if self.interactive:
            plt.draw()
            plt.pause(0.001)
        else:
            self.fig.canvas.draw_idle()

    def capture_frame(self) -> np.ndarray:
        """Capture current frame as image array."""
        if self.fig is None:
            raise RuntimeError("Renderer not initialized. Call render() first.")

        self.fig.canvas.draw()
        rgba = np.asarray(self.fig.canvas.buffer_rgba())
        return rgba[:, :, :3].copy()

    def set_view(self, elevation: float, azimuth: float):
        """Set camera view angles."""
        self.elevation = elevation
        self.azimuth = azimuth
        if self.ax is not None:
            self.ax.view_init(elev=elevation, azim=azimuth)

    def clear(self):
        """Clear the renderer."""
        if self.ax is not None:
            self.ax.clear()
        self._cloud = None
        self.scatter = None

    def close(self):
        """Close the renderer."""
        if self.fig is not None:
            plt.close(self.fig)
            self.fig = None
            self.ax = None
            self.scatter = None
            self._cloud = None
