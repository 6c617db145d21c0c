"""
Core point generation functionality.
"""

from .geometry import BoundingBox, Point, Polygon, calculate_polygon_bounds
from .wkt_parser import (GeometryError, UnsupportedGeometryError, MalformedGeometryError,
                         EmptyGeometryError, parse_geometry)
from .spatial_grid import SpatialGrid
from .sampler import PoissonDiscSampler, SamplerState, SamplingParameters, sample
from .jitter import apply_jitter
from .pipeline import PolygonPreview, PolygonSamplingResult, distribute_points_in_polygon, extract_polygon_data
from .batch import BatchProcessor, ProcessingState, ProgressInfo

__all__ = ['BoundingBox', 'Point', 'Polygon', 'calculate_polygon_bounds',
           'GeometryError', 'UnsupportedGeometryError', 'MalformedGeometryError',
           'EmptyGeometryError', 'parse_geometry', 'SpatialGrid',
           'PoissonDiscSampler', 'SamplerState', 'SamplingParameters', 'sample',
           'apply_jitter', 'PolygonPreview', 'PolygonSamplingResult',
           'distribute_points_in_polygon', 'extract_polygon_data',
           'BatchProcessor', 'ProcessingState', 'ProgressInfo']
