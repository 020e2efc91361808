"""Rotation of the whole cloud about the vertical axis."""

import time
from typing import Optional

import numpy as np

# Radians per second
ROTATION_SPEED = 0.05


def orientation(elapsed_seconds: float, speed: float = ROTATION_SPEED) -> float:
    """Angle of the cloud about the vertical axis after elapsed_seconds.

    Grows without bound; callers that need a normalized angle wrap it themselves.
    """
    return float(elapsed_seconds) * speed


def rotation_matrix(angle: float) -> np.ndarray:
    """3x3 rotation about the y (vertical) axis, right-handed."""
    c, s = np.cos(angle), np.sin(angle)
    return np.array([
        [c, 0.0, s],
        [0.0, 1.0, 0.0],
        [-s, 0.0, c],
    ])


def rotate_positions(positions: np.ndarray, angle: float) -> np.ndarray:
    """Return a rotated copy of (n, 3) positions; the input is left untouched."""
    rotated = np.asarray(positions) @ rotation_matrix(angle).T
    return rotated.astype(np.asarray(positions).dtype, copy=False)


class FrameClock:
    """Elapsed seconds since creation (or the last reset), from a monotonic clock."""

    def __init__(self, timer=time.monotonic):
        self._timer = timer
        self._start: Optional[float] = None
        self.reset()

    def reset(self):
        self._start = self._timer()

    def elapsed(self) -> float:
        return self._timer() - self._start

    def orientation(self) -> float:
        return orientation(self.elapsed())
