"""Tests for geometry value types and bounds."""

import dataclasses

import pytest
from vegepoly.core.geometry import (
    BoundingBox, Point, Polygon, calculate_polygon_bounds, close_ring
)


class TestPolygon:
    """Test polygon construction and containment."""

    def test_from_coords_closes_ring(self):
        polygon = Polygon.from_coords([(0, 0), (1, 0), (1, 1)])
        assert polygon.exterior[0] == polygon.exterior[-1]
        assert len(polygon.exterior) == 4

    def test_already_closed_ring_untouched(self):
        polygon = Polygon.from_coords([(0, 0), (1, 0), (1, 1), (0, 0)])
        assert len(polygon.exterior) == 4

    def test_single_coordinate_not_closed(self):
        assert close_ring([Point(1, 2)]) == [Point(1, 2)]

    def test_is_immutable(self, square):
        with pytest.raises(dataclasses.FrozenInstanceError):
            square.exterior = ()

    def test_ring_as_tuples(self, square):
        assert square.ring[0] == (0.0, 0.0)
        assert square.ring[-1] == (0.0, 0.0)
        assert len(square.ring) == 5

    def test_contains_is_strict(self, square):
        assert square.contains(50, 50)
        assert not square.contains(0, 50)  # on boundary
        assert not square.contains(150, 50)

    def test_holes_are_excluded(self):
        polygon = Polygon.from_coords(
            [(0, 0), (10, 0), (10, 10), (0, 10)],
            holes=[[(4, 4), (6, 4), (6, 6), (4, 6)]],
        )
        assert polygon.contains(2, 2)
        assert not polygon.contains(5, 5)

    def test_degenerate_polygon_contains_nothing(self):
        line = Polygon.from_coords([(0, 0), (10, 10), (20, 20)])
        assert not line.contains(10, 10)
        assert not line.contains(5, 6)

    def test_too_short_ring_contains_nothing(self):
        polygon = Polygon.from_coords([(0, 0), (1, 1)])
        assert not polygon.contains(0.5, 0.5)

    def test_prepared_geometry_is_reused(self, square):
        first = square.prepared
        assert square.contains(50, 50)
        assert square.prepared is first
        assert first.bounds == (0.0, 0.0, 100.0, 100.0)

    def test_prepared_geometry_per_polygon(self, square, l_shape):
        assert square.prepared is not l_shape.prepared


class TestBounds:
    """Test bounding box calculation."""

    def test_square_bounds(self, square):
        assert calculate_polygon_bounds(square) == BoundingBox(0, 0, 100, 100)

    def test_negative_coordinates(self):
        polygon = Polygon.from_coords([(-5, 3), (7, -2), (1, 9)])
        bounds = calculate_polygon_bounds(polygon)
        assert bounds == BoundingBox(-5, -2, 7, 9)
        assert bounds.width == 12
        assert bounds.height == 11

    def test_single_point(self):
        polygon = Polygon((Point(3, 4),))
        assert calculate_polygon_bounds(polygon) == BoundingBox(3, 4, 3, 4)
