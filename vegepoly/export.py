"""
Hand-off to export writers.

The legacy fixed-width export format is owned by the writer; the core only
supplies point coordinates and the batch's type code.
"""

from typing import List, Protocol, Sequence, Tuple

from .core.geometry import Point


class PointSink(Protocol):
    """Receives the points generated for one polygon."""

    def write_points(self, points: Sequence[Point], type_code: int) -> None:
        ...


class ListSink:
    """Collects points in memory as ``(x, y, type_code)`` rows."""

    def __init__(self):
        self.rows: List[Tuple[float, float, int]] = []

    def write_points(self, points: Sequence[Point], type_code: int) -> None:
        self.rows.extend((p.x, p.y, type_code) for p in points)

    def __len__(self) -> int:
        return len(self.rows)
