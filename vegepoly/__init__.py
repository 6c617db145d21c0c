"""
vegepoly - blue-noise vegetation placement inside WKT polygons.
"""

from .core import parse_geometry, sample

__version__ = "0.1.0"

__all__ = ['parse_geometry', 'sample']
