"""
Configuration modules for vegetation generation.
"""

from .config import Settings, configure_logging
from .vegetation_settings import (
    DEFAULT_VEGETATION_PARAMS,
    VegetationParams,
    VegetationType,
    get_default_vegetation_params,
    vegetation_label,
)

__all__ = ['Settings', 'configure_logging', 'DEFAULT_VEGETATION_PARAMS', 'VegetationParams',
           'VegetationType', 'get_default_vegetation_params', 'vegetation_label']
