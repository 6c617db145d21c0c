"""
Poisson-disc (blue-noise) sampling inside a polygon.

Bridson-style dart throwing: one seed point is placed inside the polygon,
then new candidates are proposed in an annulus ``[d, 2d)`` around randomly
chosen active points. A candidate is kept when it lies inside the polygon and
no accepted point is closer than ``d``. An active point that yields nothing
after ``max_attempts`` candidates is retired.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import numpy as np
import shapely
import structlog

from .geometry import BoundingBox, Point, Polygon, calculate_polygon_bounds
from .jitter import apply_jitter
from .spatial_grid import SpatialGrid

logger = structlog.get_logger()

DEFAULT_MAX_ATTEMPTS = 30
DEFAULT_SEED_ATTEMPTS = 100


class SamplerState(Enum):
    """Lifecycle of one sampling run."""
    EMPTY = "empty"
    SEEDED = "seeded"
    GROWING = "growing"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class SamplingParameters:
    """Per-run sampling parameters."""
    min_distance: float
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    variation: float = 0.0

    def __post_init__(self):
        if not self.min_distance > 0:
            raise ValueError(f"min_distance must be positive, got {self.min_distance}")
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if not self.variation >= 0:
            raise ValueError(f"variation must be non-negative, got {self.variation}")


class PoissonDiscSampler:
    """
    Generates points inside a polygon with a guaranteed minimum spacing.

    A sampler instance covers a single polygon; all working state (grid,
    accepted points, frontier) belongs to it and is dropped with it.
    """

    def __init__(
        self,
        min_distance: float,
        bounds: BoundingBox,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        seed_attempts: int = DEFAULT_SEED_ATTEMPTS,
    ):
        """
        Initialize sampler.

        Args:
            min_distance: Minimum distance between any two points
            bounds: Sampling area, usually the polygon's bounding box
            max_attempts: Candidates tried around an active point before retiring it
            seed_attempts: Random tries to place the first point
        """
        self.params = SamplingParameters(min_distance=min_distance, max_attempts=max_attempts)
        self.bounds = bounds
        self.seed_attempts = seed_attempts
        self.grid = SpatialGrid(min_distance, bounds)
        self.state = SamplerState.EMPTY

    @property
    def points(self) -> List[Point]:
        return self.grid.points

    def generate_distribution(self, polygon: Polygon, rng: np.random.Generator) -> List[Point]:
        """
        Fill the polygon with points.

        Args:
            polygon: Area to fill
            rng: Random source; the result depends only on its draw sequence

        Returns:
            Accepted points in insertion order, seed first. Empty when no seed
            point could be placed.
        """
        geometry = polygon.prepared
        min_x, min_y, max_x, max_y = self.bounds
        width = max_x - min_x
        height = max_y - min_y

        for _ in range(self.seed_attempts):
            x = min_x + rng.random() * width
            y = min_y + rng.random() * height
            if shapely.contains_xy(geometry, x, y):
                self.grid.register(Point(x, y))
                self.state = SamplerState.SEEDED
                break

        if self.state is SamplerState.EMPTY:
            self.state = SamplerState.EXHAUSTED
            logger.debug("No seed point found inside polygon", attempts=self.seed_attempts)
            return []

        min_distance = self.params.min_distance
        active = self.grid.active

        while active:
            self.state = SamplerState.GROWING
            position = int(rng.integers(len(active)))
            pivot_x, pivot_y = self.grid.points[active[position]]

            found = False
            for _ in range(self.params.max_attempts):
                angle = 2.0 * math.pi * rng.random()
                radius = min_distance + min_distance * rng.random()

                new_x = pivot_x + radius * math.cos(angle)
                new_y = pivot_y + radius * math.sin(angle)

                if new_x < min_x or new_x >= max_x or new_y < min_y or new_y >= max_y:
                    continue

                candidate = Point(new_x, new_y)
                if shapely.contains_xy(geometry, new_x, new_y) and self.grid.is_far_enough(candidate):
                    self.grid.register(candidate)
                    found = True
                    break

            if not found:
                self.grid.retire(position)

        self.state = SamplerState.EXHAUSTED
        return list(self.grid.points)


def sample(
    polygon: Polygon,
    min_distance: float,
    variation: float,
    rng: np.random.Generator,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    seed_attempts: int = DEFAULT_SEED_ATTEMPTS,
    bounds: Optional[BoundingBox] = None,
) -> List[Point]:
    """
    Sample a polygon and jitter the result.

    Args:
        polygon: Area to fill
        min_distance: Minimum distance between points before jitter
        variation: Jitter radius, 0 to disable
        rng: Random source used for both sampling and jitter
        max_attempts: Candidates per active point
        seed_attempts: Tries for the first point
        bounds: Sampling area, defaults to the polygon's bounding box

    Returns:
        Final point list
    """
    params = SamplingParameters(min_distance=min_distance, max_attempts=max_attempts, variation=variation)
    if bounds is None:
        bounds = calculate_polygon_bounds(polygon)

    sampler = PoissonDiscSampler(params.min_distance, bounds, params.max_attempts, seed_attempts)
    points = sampler.generate_distribution(polygon, rng)
    return apply_jitter(points, params.variation, rng)
