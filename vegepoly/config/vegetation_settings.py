"""
Vegetation presets.

Each vegetation type carries a density (minimum distance between generated
points), a positional variation (jitter radius) and the type code written
next to every exported point.
"""

from enum import IntEnum

from pydantic import BaseModel, Field


class VegetationType(IntEnum):
    """Vegetation kinds known to the exporter."""

    TREES = 1
    SURFACES = 2
    ROCCAILLES = 3

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    VegetationType.TREES: "Trees",
    VegetationType.SURFACES: "Surfaces",
    VegetationType.ROCCAILLES: "Roccailles",
}


def vegetation_label(vegetation_type: int) -> str:
    """Human readable name used in log lines; unknown types are "Items"."""
    try:
        return VegetationType(vegetation_type).label
    except ValueError:
        return "Items"


class VegetationParams(BaseModel):
    """Parameters for generating one batch of vegetation points."""

    vegetation_type: int = Field(default=1, ge=1, description="Vegetation type number")
    density: float = Field(default=10.0, gt=0, description="Minimum distance between points (map units)")
    variation: float = Field(default=1.0, ge=0, description="Jitter radius applied after sampling")
    type_value: int = Field(default=10, ge=0, description="Type code written with each exported point")


DEFAULT_VEGETATION_PARAMS = {
    VegetationType.TREES: VegetationParams(
        vegetation_type=VegetationType.TREES, density=10.0, variation=1.0, type_value=10
    ),
    VegetationType.SURFACES: VegetationParams(
        vegetation_type=VegetationType.SURFACES, density=5.0, variation=0.5, type_value=20
    ),
    VegetationType.ROCCAILLES: VegetationParams(
        vegetation_type=VegetationType.ROCCAILLES, density=3.0, variation=0.3, type_value=30
    ),
}


def get_default_vegetation_params(vegetation_type: int) -> VegetationParams:
    """
    Get the default parameters for a vegetation type.

    Unknown types get the trees preset, keeping the requested type number.

    Args:
        vegetation_type: Vegetation type number (1: trees, 2: surfaces, 3: roccailles)

    Returns:
        VegetationParams: A fresh copy of the preset
    """
    try:
        return DEFAULT_VEGETATION_PARAMS[VegetationType(vegetation_type)].model_copy()
    except ValueError:
        fallback = DEFAULT_VEGETATION_PARAMS[VegetationType.TREES]
        return fallback.model_copy(update={"vegetation_type": vegetation_type})
