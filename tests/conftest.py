"""Shared test fixtures."""

import numpy as np
import pytest


class FixedSource:
    """Random source returning the same value for every draw."""

    def __init__(self, value: float):
        self.value = value

    def random(self, size):
        return np.full(size, self.value)


@pytest.fixture
def fixed_source():
    return FixedSource
