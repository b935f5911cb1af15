import matplotlib

# Graph tests must never open a window.
matplotlib.use("Agg")

import numpy as np
import pytest

from point_manager import PointManager


class Pt:
    """Minimal stand-in for a caller-owned point."""
    def __init__(self, x, y, payload=None):
        self.x = x
        self.y = y
        self.payload = payload

    def __repr__(self):
        return f"Pt({self.x}, {self.y})"


@pytest.fixture
def rng():
    return np.random.default_rng(2024)


@pytest.fixture
def uniform_points(rng):
    coords = rng.uniform((0.0, 0.0), (1000.0, 600.0), size=(2000, 2))
    return PointManager.from_array(coords)


@pytest.fixture
def clustered_points(rng):
    # Tight clusters force deep subdivision in a few places.
    centres = rng.uniform((100.0, 100.0), (900.0, 500.0), size=(6, 2))
    coords = np.concatenate([c + rng.normal(0.0, 3.0, size=(150, 2)) for c in centres])
    coords = np.clip(coords, (0.0, 0.0), (1000.0, 600.0))
    return PointManager.from_array(coords)


@pytest.fixture
def make_point():
    return Pt
