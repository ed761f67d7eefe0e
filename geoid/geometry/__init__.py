"""
geoid.geometry

Ray directions from the origin and local frames on equipotential surfaces.
"""

from .directions import (
    fibonacci_directions,
    meridian_directions,
    normalize,
    normalize_rows,
    polar_angles,
    rotate_about_vertical,
    sobol_directions,
)
from .frames import snap_to_surface, step_east, surface_frame

__all__ = [
    "normalize",
    "normalize_rows",
    "fibonacci_directions",
    "sobol_directions",
    "meridian_directions",
    "polar_angles",
    "rotate_about_vertical",
    "surface_frame",
    "snap_to_surface",
    "step_east",
]
