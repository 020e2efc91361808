"""Animated GIF of a cloud turning about its vertical axis."""

import logging
from typing import List

import numpy as np

from galaxy_cloud.generator import PointCloud
from galaxy_cloud.rotation import ROTATION_SPEED, orientation

logger = logging.getLogger(__name__)


def frame_angles(n_frames: int, fps: int, time_scale: float = 1.0,
                 speed: float = ROTATION_SPEED) -> np.ndarray:
    """Orientation of each animation frame.

    Frame i shows the cloud as it stands after i / fps * time_scale seconds
    of the live view.
    """
    if n_frames < 1:
        raise ValueError(f"n_frames must be at least 1, got {n_frames}")
    if fps <= 0:
        raise ValueError(f"fps must be positive, got {fps}")
    return np.array([orientation(i / fps * time_scale, speed) for i in range(n_frames)])


def export_rotation_gif(
    cloud: PointCloud,
    renderer,
    output_path: str,
    fps: int = 30,
    duration: float = 4.0,
    time_scale: float = 10.0,
) -> int:
    """Render the cloud once per frame and write the frames as a looping GIF.

    Args:
        cloud: Cloud to animate
        renderer: Renderer providing render(cloud, angle) and capture_frame()
        output_path: Destination .gif path
        fps: Animation frame rate
        duration: Animation length in seconds
        time_scale: Live-view seconds per animation second

    Returns:
        Number of frames written
    """
    try:
        import imageio
    except ImportError:
        raise ImportError(
            "GIF export requires imageio. Install with: pip install galaxy-cloud[export]"
        )

    n_frames = max(1, int(round(duration * fps)))
    frames: List[np.ndarray] = []
    for angle in frame_angles(n_frames, fps, time_scale):
        renderer.render(cloud, float(angle))
        frame = renderer.capture_frame()
        if frame.dtype != np.uint8:
            frame = (np.clip(frame, 0.0, 1.0) * 255).astype(np.uint8)
        frames.append(frame)

    logger.info(f"Writing {n_frames} frames of {len(cloud)} particles to {output_path}")
    imageio.mimsave(output_path, frames, duration=1.0 / fps, loop=0)
    return n_frames
