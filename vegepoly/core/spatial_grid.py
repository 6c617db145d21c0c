"""
Uniform background grid for Poisson-disc sampling.

Cells are ``min_distance / sqrt(2)`` wide, so two points in the same cell are
always closer than ``min_distance`` and each cell holds at most one accepted
point. Neighbour checks only look at a fixed window of cells around the
candidate instead of every accepted point.
"""

import math
from typing import List, Tuple

import numpy as np

from .geometry import BoundingBox, Point

EMPTY_CELL = -1


class SpatialGrid:
    """
    Grid index over a bounding box, plus the accepted point list and the
    active frontier that index into it.
    """

    def __init__(self, min_distance: float, bounds: BoundingBox):
        self.min_distance = min_distance
        self.min_distance_squared = min_distance * min_distance
        self.bounds = bounds

        self.cell_size = min_distance / math.sqrt(2)
        self.grid_width = int(math.ceil(bounds.width / self.cell_size)) + 1
        self.grid_height = int(math.ceil(bounds.height / self.cell_size)) + 1

        # A point two cells away can be as close as one cell edge (~0.71 * min_distance)
        self.search_radius = int(math.ceil(min_distance / self.cell_size))

        self.cells = np.full((self.grid_height, self.grid_width), EMPTY_CELL, dtype=np.int64)
        self.points: List[Point] = []
        self.active: List[int] = []

    def cell_of(self, point: Point) -> Tuple[int, int]:
        """Return (column, row) of the cell owning ``point``."""
        gx = int((point[0] - self.bounds.min_x) / self.cell_size)
        gy = int((point[1] - self.bounds.min_y) / self.cell_size)
        return gx, gy

    def register(self, point: Point) -> int:
        """
        Accept a point: append it, mark it active and record it in its cell.

        Returns:
            Index of the point in ``points``
        """
        index = len(self.points)
        self.points.append(point)
        self.active.append(index)

        gx, gy = self.cell_of(point)
        if 0 <= gx < self.grid_width and 0 <= gy < self.grid_height:
            self.cells[gy, gx] = index

        return index

    def is_far_enough(self, candidate: Point) -> bool:
        """
        Check that no accepted point lies closer than ``min_distance``.

        Only cells within ``search_radius`` of the candidate's cell are
        scanned, clamped to the grid.
        """
        gx, gy = self.cell_of(candidate)
        r = self.search_radius

        start_x = max(gx - r, 0)
        start_y = max(gy - r, 0)
        end_x = min(gx + r, self.grid_width - 1)
        end_y = min(gy + r, self.grid_height - 1)
        if start_x > end_x or start_y > end_y:
            return True

        cx, cy = candidate[0], candidate[1]
        window = self.cells[start_y:end_y + 1, start_x:end_x + 1]
        for index in window[window != EMPTY_CELL]:
            other = self.points[index]
            dx = cx - other[0]
            dy = cy - other[1]
            if dx * dx + dy * dy < self.min_distance_squared:
                return False

        return True

    def retire(self, frontier_position: int) -> None:
        """Drop an entry from the active frontier (swap-remove, order not kept)."""
        last = self.active.pop()
        if frontier_position < len(self.active):
            self.active[frontier_position] = last
