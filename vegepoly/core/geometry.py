"""
Coordinate and polygon value types.

Containment is delegated to shapely so that holes and boundary handling
follow its definition of "contains": points on the boundary or inside a
hole are not contained.
"""

from dataclasses import dataclass, field
from functools import cached_property
from typing import List, NamedTuple, Sequence, Tuple

import shapely
from shapely.geometry import Polygon as ShapelyPolygon


class Point(NamedTuple):
    """A 2D coordinate."""
    x: float
    y: float


class BoundingBox(NamedTuple):
    """Axis-aligned bounds of a polygon's exterior ring."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


def close_ring(coords: Sequence[Point]) -> List[Point]:
    """Repeat the first coordinate at the end if a ring of 2+ coordinates is open."""
    ring = list(coords)
    if len(ring) > 1 and ring[0] != ring[-1]:
        ring.append(ring[0])
    return ring


@dataclass(frozen=True)
class Polygon:
    """Exterior ring plus optional holes, all closed rings of Points."""
    exterior: Tuple[Point, ...]
    interiors: Tuple[Tuple[Point, ...], ...] = field(default=())

    @classmethod
    def from_coords(cls, coords, holes=()) -> "Polygon":
        """Build a polygon from (x, y) pairs, closing open rings."""
        exterior = tuple(close_ring([Point(float(x), float(y)) for x, y in coords]))
        interiors = tuple(
            tuple(close_ring([Point(float(x), float(y)) for x, y in hole])) for hole in holes
        )
        return cls(exterior, interiors)

    @property
    def ring(self) -> List[Tuple[float, float]]:
        """Exterior ring as plain tuples, e.g. for previews."""
        return [(p.x, p.y) for p in self.exterior]

    def to_shapely(self) -> ShapelyPolygon:
        """
        Convert to a prepared shapely polygon.

        Rings too short for shapely give an empty polygon, which contains
        nothing.
        """
        if len(self.exterior) < 4:
            geometry = ShapelyPolygon()
        else:
            holes = [hole for hole in self.interiors if len(hole) >= 4]
            geometry = ShapelyPolygon(self.exterior, holes)
        shapely.prepare(geometry)
        return geometry

    @cached_property
    def prepared(self) -> ShapelyPolygon:
        """Prepared shapely geometry, built on first use and kept."""
        return self.to_shapely()

    def contains(self, x: float, y: float) -> bool:
        """Strict containment test."""
        return bool(shapely.contains_xy(self.prepared, x, y))


def calculate_polygon_bounds(polygon: Polygon) -> BoundingBox:
    """
    Compute the bounds of a polygon's exterior ring.

    The ring must not be empty; the parser guarantees this.
    """
    min_x = min_y = float("inf")
    max_x = max_y = float("-inf")

    for x, y in polygon.exterior:
        min_x = min(min_x, x)
        min_y = min(min_y, y)
        max_x = max(max_x, x)
        max_y = max(max_y, y)

    return BoundingBox(min_x, min_y, max_x, max_y)
