"""Tests for the sampling grid index."""

import math

import numpy as np
import pytest
from vegepoly.core.geometry import BoundingBox, Point
from vegepoly.core.spatial_grid import EMPTY_CELL, SpatialGrid


class TestGridLayout:
    """Test grid sizing."""

    def test_cell_size(self):
        grid = SpatialGrid(1.0, BoundingBox(0, 0, 10, 10))
        assert grid.cell_size == pytest.approx(1 / math.sqrt(2))

    def test_dimensions(self):
        grid = SpatialGrid(2.0, BoundingBox(0, 0, 10, 5))
        cell = 2.0 / math.sqrt(2)
        assert grid.grid_width == math.ceil(10 / cell) + 1
        assert grid.grid_height == math.ceil(5 / cell) + 1
        assert grid.cells.shape == (grid.grid_height, grid.grid_width)
        assert np.all(grid.cells == EMPTY_CELL)

    def test_zero_extent(self):
        grid = SpatialGrid(1.0, BoundingBox(3, 3, 3, 3))
        assert grid.grid_width == 1
        assert grid.grid_height == 1

    def test_cell_relative_to_origin(self):
        grid = SpatialGrid(math.sqrt(2), BoundingBox(-10, 100, 10, 120))
        assert grid.cell_of(Point(-10, 100)) == (0, 0)
        assert grid.cell_of(Point(-7.5, 102.2)) == (2, 2)


class TestRegister:
    """Test point registration."""

    def test_register_returns_sequential_indices(self):
        grid = SpatialGrid(1.0, BoundingBox(0, 0, 10, 10))
        assert grid.register(Point(1, 1)) == 0
        assert grid.register(Point(5, 5)) == 1
        assert grid.points == [Point(1, 1), Point(5, 5)]
        assert grid.active == [0, 1]

    def test_register_writes_owning_cell(self):
        grid = SpatialGrid(1.0, BoundingBox(0, 0, 10, 10))
        grid.register(Point(5, 5))
        gx, gy = grid.cell_of(Point(5, 5))
        assert grid.cells[gy, gx] == 0
        assert np.count_nonzero(grid.cells != EMPTY_CELL) == 1

    def test_register_overwrites_cell(self):
        grid = SpatialGrid(1.0, BoundingBox(0, 0, 10, 10))
        grid.register(Point(5.0, 5.0))
        grid.register(Point(5.1, 5.1))
        gx, gy = grid.cell_of(Point(5.0, 5.0))
        assert grid.cells[gy, gx] == 1
        assert len(grid.points) == 2

    def test_out_of_range_point_ignored_by_cells(self):
        grid = SpatialGrid(1.0, BoundingBox(0, 0, 10, 10))
        grid.register(Point(500, 500))
        assert np.all(grid.cells == EMPTY_CELL)
        assert len(grid.points) == 1

    def test_retire_swap_removes(self):
        grid = SpatialGrid(1.0, BoundingBox(0, 0, 10, 10))
        for x in range(4):
            grid.register(Point(x * 2 + 0.5, 1))
        grid.retire(1)
        assert sorted(grid.active) == [0, 2, 3]
        assert grid.active[1] == 3
        grid.retire(len(grid.active) - 1)
        assert sorted(grid.active) == [0, 3]
        assert len(grid.points) == 4


class TestIsFarEnough:
    """Test neighbour validity checks."""

    def test_empty_grid(self):
        grid = SpatialGrid(1.0, BoundingBox(0, 0, 10, 10))
        assert grid.is_far_enough(Point(5, 5))

    def test_too_close(self):
        grid = SpatialGrid(1.0, BoundingBox(0, 0, 10, 10))
        grid.register(Point(5, 5))
        assert not grid.is_far_enough(Point(5.5, 5.5))

    def test_exact_distance_allowed(self):
        grid = SpatialGrid(1.0, BoundingBox(0, 0, 10, 10))
        grid.register(Point(5, 5))
        assert grid.is_far_enough(Point(6, 5))

    def test_far_point(self):
        grid = SpatialGrid(1.0, BoundingBox(0, 0, 10, 10))
        grid.register(Point(1, 1))
        assert grid.is_far_enough(Point(8, 8))

    def test_neighbour_two_cells_away(self):
        # Cells are ~0.707 wide: these points sit two columns apart but only 0.9 apart
        grid = SpatialGrid(1.0, BoundingBox(0, 0, 10, 10))
        grid.register(Point(0.7, 0.1))
        candidate = Point(1.6, 0.1)
        assert grid.cell_of(candidate)[0] - grid.cell_of(Point(0.7, 0.1))[0] == 2
        assert not grid.is_far_enough(candidate)

    def test_grid_edges(self):
        grid = SpatialGrid(1.0, BoundingBox(0, 0, 10, 10))
        grid.register(Point(0, 0))
        grid.register(Point(10, 10))
        assert not grid.is_far_enough(Point(0.2, 0.2))
        assert not grid.is_far_enough(Point(9.9, 9.9))
        assert grid.is_far_enough(Point(5, 5))

    def test_random_inserts_keep_spacing(self):
        rng = np.random.default_rng(7)
        grid = SpatialGrid(0.5, BoundingBox(0, 0, 20, 20))
        for _ in range(5000):
            candidate = Point(*rng.random(2) * 20)
            if grid.is_far_enough(candidate):
                grid.register(candidate)

        pts = np.array(grid.points)
        diffs = pts[:, None, :] - pts[None, :, :]
        dist = np.sqrt((diffs ** 2).sum(axis=-1))
        np.fill_diagonal(dist, np.inf)
        assert dist.min() >= 0.5
