"""
Pytest fixtures for vectordist tests.
"""

import pytest
import numpy as np


@pytest.fixture
def dimension() -> int:
    """Default dimension for test vectors."""
    return 8


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random generator so failures are reproducible."""
    return np.random.default_rng(42)


@pytest.fixture
def random_pair(rng, dimension):
    """Two random Gaussian vectors."""
    return rng.normal(size=dimension), rng.normal(size=dimension)


@pytest.fixture
def positive_pair(rng, dimension):
    """Two random strictly positive vectors."""
    return (
        rng.uniform(0.1, 2.0, size=dimension),
        rng.uniform(0.1, 2.0, size=dimension),
    )


@pytest.fixture
def ball_pair(rng, dimension):
    """Two random points well inside the unit ball."""
    u = rng.normal(size=dimension)
    v = rng.normal(size=dimension)
    return 0.6 * u / np.linalg.norm(u), 0.3 * v / np.linalg.norm(v)


@pytest.fixture
def spd_matrix(rng, dimension):
    """Random symmetric positive-definite matrix."""
    m = rng.normal(size=(dimension, dimension))
    return m @ m.T + np.eye(dimension)


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: end-to-end tests")
    config.addinivalue_line("markers", "slow: long-running tests")
