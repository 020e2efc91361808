"""Procedural spiral galaxy point-cloud generator."""

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

import numpy as np

from galaxy_cloud.params import InvalidParameter, ParameterSet

logger = logging.getLogger(__name__)

# Uniforms consumed per particle, in order: radius, then (magnitude, sign) for x, y, z
DRAWS_PER_PARTICLE = 7
MIN_SHARD_SIZE = 10000


@dataclass(frozen=True, eq=False)
class PointCloud:
    """Index-aligned position and color buffers of one generation pass.

    Both arrays have shape (count, 3) and are read-only.
    """
    positions: np.ndarray
    colors: np.ndarray
    params: ParameterSet

    def __len__(self) -> int:
        return self.positions.shape[0]

    @property
    def count(self) -> int:
        return len(self)


def _check_random_source(rng) -> None:
    if not callable(getattr(rng, "random", None)):
        raise TypeError(
            f"Random source must provide random(size) like numpy.random.Generator, got {type(rng).__name__}"
        )


def _fill_shard(
    start: int,
    stop: int,
    uniforms: np.ndarray,
    params: ParameterSet,
    positions: np.ndarray,
    colors: np.ndarray,
) -> None:
    """Compute particles [start, stop) into their slice of the output buffers."""
    u = uniforms[start:stop]
    index = np.arange(start, stop)

    radius = u[:, 0] * params.radius
    spin_angle = radius * params.spin
    branch_angle = (index % params.branches) / params.branches * 2.0 * np.pi

    # Jitter: u^power biases toward zero, scaled by the particle's radius
    magnitude = np.power(u[:, 1::2], params.randomness_power)
    sign = np.where(u[:, 2::2] < 0.5, 1.0, -1.0)
    offsets = magnitude * sign * params.randomness * radius[:, np.newaxis]

    angle = branch_angle + spin_angle
    positions[start:stop, 0] = np.cos(angle) * radius + offsets[:, 0]
    positions[start:stop, 1] = offsets[:, 1]
    positions[start:stop, 2] = np.sin(angle) * radius + offsets[:, 2]

    inside = np.asarray(params.color_inside, dtype=np.float64)
    outside = np.asarray(params.color_outside, dtype=np.float64)
    t = (radius / params.radius)[:, np.newaxis]
    # Clip rounding error so each channel stays between its two endpoints
    blend = inside + (outside - inside) * t
    colors[start:stop] = np.clip(blend, np.minimum(inside, outside), np.maximum(inside, outside))


def generate(
    params: ParameterSet,
    rng=None,
    seed: Optional[int] = None,
    workers: int = 1,
    dtype=np.float32,
) -> PointCloud:
    """Generate a spiral galaxy point cloud.

    Particles are assigned to arms round-robin by index and placed at a
    uniformly sampled radius on a spiral whose angle is
    branch angle + radius * spin, then scattered per axis by a
    jitter of magnitude u ** randomness_power * randomness * radius.
    Colors blend linearly from color_inside to color_outside with
    radius / params.radius and are clipped per channel to the interval
    between the two, so the dtype-cast buffer never leaves it.

    Args:
        params: Parameter snapshot
        rng: Random source with a numpy-style random(size) method.
            Defaults to numpy.random.default_rng(seed)
        seed: Seed used when rng is None
        workers: Number of threads to shard the particle loop over.
            Output is identical for any value.
        dtype: Output buffer dtype (float32 matches GPU vertex buffers)

    Returns:
        New PointCloud with read-only buffers

    Raises:
        InvalidParameter: If params violate a domain invariant
    """
    if not isinstance(params, ParameterSet):
        raise InvalidParameter("params", f"expected ParameterSet, got {type(params).__name__}")
    params.validate()
    if workers < 1:
        raise InvalidParameter("workers", f"must be at least 1, got {workers}")

    if rng is None:
        rng = np.random.default_rng(seed)
    _check_random_source(rng)

    count = int(params.count)
    # Drawing the whole block in C order yields the per-particle sequential stream
    uniforms = np.asarray(rng.random((count, DRAWS_PER_PARTICLE)), dtype=np.float64)
    if uniforms.shape != (count, DRAWS_PER_PARTICLE):
        raise ValueError(f"Random source returned shape {uniforms.shape}")

    positions = np.empty((count, 3), dtype=dtype)
    colors = np.empty((count, 3), dtype=dtype)

    n_shards = min(workers, max(1, math.ceil(count / MIN_SHARD_SIZE)))
    if n_shards == 1:
        _fill_shard(0, count, uniforms, params, positions, colors)
    else:
        bounds = np.linspace(0, count, n_shards + 1).astype(int)
        with ThreadPoolExecutor(max_workers=n_shards) as pool:
            futures = [
                pool.submit(_fill_shard, int(lo), int(hi), uniforms, params, positions, colors)
                for lo, hi in zip(bounds[:-1], bounds[1:])
            ]
            for future in futures:
                future.result()

    positions.flags.writeable = False
    colors.flags.writeable = False
    logger.debug(f"Generated {count} particles on {params.branches} branches ({n_shards} shard(s))")
    return PointCloud(positions=positions, colors=colors, params=params)


class GalaxyGenerator:
    """Reusable generator bound to a random source and worker count."""

    def __init__(self, seed: Optional[int] = None, rng=None, workers: int = 1, dtype=np.float32):
        """Initialize generator.

        Args:
            seed: Seed for a fresh numpy Generator on every pass (reproducible
                output per call). Ignored when rng is given.
            rng: Shared random source; successive passes continue its stream
            workers: Threads used per pass
            dtype: Output buffer dtype
        """
        if rng is not None:
            _check_random_source(rng)
        self.seed = seed
        self.rng = rng
        self.workers = workers
        self.dtype = dtype

    def generate(self, params: ParameterSet) -> PointCloud:
        """Generate a new point cloud for params."""
        rng = self.rng if self.rng is not None else np.random.default_rng(self.seed)
        return generate(params, rng=rng, workers=self.workers, dtype=self.dtype)
