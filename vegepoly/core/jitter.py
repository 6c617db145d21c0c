"""Random positional variation applied after sampling."""

import math
from typing import List, Sequence

import numpy as np

from .geometry import Point


def apply_jitter(points: Sequence[Point], variation: float, rng: np.random.Generator) -> List[Point]:
    """
    Move each point by a random offset of length below ``variation``.

    Points are not re-checked afterwards: a jittered point may end up outside
    the polygon or closer than the sampling distance to a neighbour.

    Args:
        points: Points to displace
        variation: Maximum offset; 0 returns the points unchanged
        rng: Random source, one angle and one radius drawn per point

    Returns:
        New list of points
    """
    if variation <= 0:
        return list(points)

    jittered = []
    for x, y in points:
        angle = rng.random() * 2.0 * math.pi
        distance = rng.random() * variation
        jittered.append(Point(x + distance * math.cos(angle), y + distance * math.sin(angle)))

    return jittered
