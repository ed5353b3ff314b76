"""Shared fixtures for the flocking tests."""

import numpy as np
import pytest

ARENA = (1000.0, 1000.0)
BORDER = 50.0
CENTER = np.array([500.0, 500.0])


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
