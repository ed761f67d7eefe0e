"""
geoid.measure

Diagnostics on a configured field: sea level selection, checks of the
solver's monotonicity assumption and surface regime classification.
"""

from .classification import DISK_OMEGA, DISK_RADIUS, classify_surface, disk_mask
from .monotonicity import (
    is_monotonic_on_bracket,
    max_monotonic_omega,
    radial_profile,
    sweep_monotonicity,
)
from .sea_level import (
    EGG_SEA_LEVEL_FACTOR,
    SPHERE_SEA_LEVEL_FACTOR,
    SeaLevel,
    surface_potential,
)

__all__ = [
    "SeaLevel",
    "surface_potential",
    "EGG_SEA_LEVEL_FACTOR",
    "SPHERE_SEA_LEVEL_FACTOR",
    "radial_profile",
    "is_monotonic_on_bracket",
    "sweep_monotonicity",
    "max_monotonic_omega",
    "classify_surface",
    "disk_mask",
    "DISK_RADIUS",
    "DISK_OMEGA",
]
