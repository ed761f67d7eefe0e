# geoid/__init__.py
"""
geoid

Potential fields of point masses on a rotating axis, and the equipotential
("sea level") surfaces they define.
"""
__version__ = "1.0.0"

# 1. Core objects - the mass configuration every query runs against
from .core import PointMass, PotentialField, characteristic_bracket, pole_masses

# 2. Dynamics - potential, gradient and radius solvers
from .dynamics import (
    BracketReport,
    RadiusSolver,
    calculate_gradient,
    potential_point_masses,
    solve_radius,
)

# 3. Measurement & workflows
from .measure import SeaLevel, classify_surface, sweep_monotonicity
from .workflows import SurfaceAnalysis, run_surface_analysis

__all__ = [
    # === Core objects ===
    "PointMass",
    "PotentialField",
    "characteristic_bracket",
    "pole_masses",
    # === Dynamics ===
    "potential_point_masses",
    "calculate_gradient",
    "solve_radius",
    "RadiusSolver",
    "BracketReport",
    # === Measurement & workflows ===
    "SeaLevel",
    "classify_surface",
    "sweep_monotonicity",
    "run_surface_analysis",
    "SurfaceAnalysis",
]

# The JAX backend (geoid.dynamics_jax) and the plotting helpers
# (geoid.visualize) are not imported here so that the package can be used
# without JAX or a matplotlib display.
