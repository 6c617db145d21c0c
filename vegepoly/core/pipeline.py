"""
Per-polygon processing pipeline.

normalize -> bounds -> sample -> jitter. Formatting and export of the
resulting points belong to the caller.
"""

from dataclasses import dataclass
from typing import Iterable, List

import numpy as np
import structlog

from ..config.vegetation_settings import VegetationParams
from .geometry import Point, Polygon, calculate_polygon_bounds
from .jitter import apply_jitter
from .sampler import DEFAULT_MAX_ATTEMPTS, DEFAULT_SEED_ATTEMPTS, PoissonDiscSampler
from .wkt_parser import MalformedGeometryError, parse_geometry

logger = structlog.get_logger()


@dataclass(frozen=True)
class PolygonSamplingResult:
    """A parsed polygon and the points generated inside it."""
    polygon: Polygon
    points: List[Point]


@dataclass(frozen=True)
class PolygonPreview:
    """Outline and generated points, as plain tuples for display."""
    polygon: list
    points: list


def distribute_points_in_polygon(
    geometry_text: str,
    params: VegetationParams,
    rng: np.random.Generator,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    seed_attempts: int = DEFAULT_SEED_ATTEMPTS,
) -> PolygonSamplingResult:
    """
    Generate vegetation points for one polygon.

    Args:
        geometry_text: Row text containing a POLYGON((...)) literal
        params: Vegetation parameters; ``density`` is the minimum distance
        rng: Random source for sampling and jitter
        max_attempts: Candidates per active point
        seed_attempts: Tries for the first point

    Returns:
        PolygonSamplingResult with the final (jittered) points

    Raises:
        GeometryError: The text could not be parsed into a polygon
    """
    polygon = parse_geometry(geometry_text)
    bounds = calculate_polygon_bounds(polygon)

    sampler = PoissonDiscSampler(params.density, bounds, max_attempts, seed_attempts)
    sampled = sampler.generate_distribution(polygon, rng)
    logger.debug("Generated points using spatial distribution algorithm", points=len(sampled))

    points = apply_jitter(sampled, params.variation, rng)
    return PolygonSamplingResult(polygon=polygon, points=points)


def extract_polygon_data(
    rows: Iterable[str],
    params: VegetationParams,
    rng: np.random.Generator,
) -> PolygonPreview:
    """
    Sample the first polygon found in ``rows`` for preview.

    Raises:
        MalformedGeometryError: No row contains a polygon
        GeometryError: The first polygon row could not be parsed
    """
    polygon_row = next((row for row in rows if "POLYGON" in row), None)
    if polygon_row is None:
        raise MalformedGeometryError("No polygon found in input")

    result = distribute_points_in_polygon(polygon_row, params, rng)
    return PolygonPreview(
        polygon=result.polygon.ring,
        points=[(p.x, p.y) for p in result.points],
    )
