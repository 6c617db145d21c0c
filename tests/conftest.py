"""Shared fixtures and checks for the test suite."""

import numpy as np
import pytest

from vegepoly.core.geometry import Polygon


def assert_min_spacing(points, min_distance):
    """Fail if any two points are closer than min_distance (x-sorted sweep)."""
    coords = np.array(points, dtype=float).reshape(-1, 2)
    coords = coords[np.argsort(coords[:, 0])]
    limit = min_distance * min_distance
    for i in range(len(coords)):
        j = i + 1
        while j < len(coords) and coords[j, 0] - coords[i, 0] < min_distance:
            d2 = np.sum((coords[j] - coords[i]) ** 2)
            assert d2 >= limit, f"Points {coords[i]} and {coords[j]} are {np.sqrt(d2):.4f} apart"
            j += 1


@pytest.fixture
def square():
    """100 x 100 square."""
    return Polygon.from_coords([(0, 0), (100, 0), (100, 100), (0, 100)])


@pytest.fixture
def l_shape():
    """Non-convex L-shaped polygon."""
    return Polygon.from_coords([(0, 0), (60, 0), (60, 20), (20, 20), (20, 60), (0, 60)])


@pytest.fixture
def rng():
    return np.random.default_rng(12345)
