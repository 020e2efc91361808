"""Tests for the rotation transform."""

import numpy as np

from galaxy_cloud.generator import generate
from galaxy_cloud.params import ParameterSet
from galaxy_cloud.rotation import (
    ROTATION_SPEED,
    FrameClock,
    orientation,
    rotate_positions,
    rotation_matrix,
)


def test_orientation():
    assert orientation(0) == 0.0
    assert np.isclose(orientation(20), 1.0)
    assert np.isclose(orientation(1e6), 1e6 * ROTATION_SPEED)  # no wraparound


def test_rotation_matrix_is_about_vertical_axis():
    """A quarter turn sends +x to -z and leaves y alone."""
    r = rotation_matrix(np.pi / 2)

    assert np.allclose(r @ [1.0, 0.0, 0.0], [0.0, 0.0, -1.0])
    assert np.allclose(r @ [0.0, 1.0, 0.0], [0.0, 1.0, 0.0])
    assert np.allclose(r @ r.T, np.eye(3))


def test_rotate_positions_does_not_mutate_cloud():
    """Rotation returns a new array; the cloud keeps its buffers."""
    cloud = generate(ParameterSet(count=1000), seed=2)
    before = cloud.positions.copy()

    rotated = rotate_positions(cloud.positions, orientation(37.0))

    assert np.array_equal(cloud.positions, before)
    assert rotated is not cloud.positions
    assert rotated.dtype == cloud.positions.dtype
    assert np.allclose(rotated[:, 1], before[:, 1])
    assert np.allclose(
        np.linalg.norm(rotated, axis=1), np.linalg.norm(before, axis=1), atol=1e-5
    )


def test_frame_clock():
    now = [100.0]
    clock = FrameClock(timer=lambda: now[0])

    assert clock.elapsed() == 0.0
    now[0] = 120.0
    assert clock.elapsed() == 20.0
    assert np.isclose(clock.orientation(), 1.0)

    clock.reset()
    assert clock.orientation() == 0.0
