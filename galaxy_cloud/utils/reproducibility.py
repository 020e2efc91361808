"""Reproducibility utilities for deterministic generation."""

import numpy as np
from typing import Optional


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create the random source passed to the generator.

    Args:
        seed: Seed, or None for fresh OS entropy

    Returns:
        numpy Generator
    """
    return np.random.default_rng(seed)
