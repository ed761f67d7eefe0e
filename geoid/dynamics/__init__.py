"""
geoid.dynamics

The computational core: potential, analytic gradient and the equipotential
radius solvers (NumPy backend).
"""

from .gradient import calculate_gradient, gradient_grid, numerical_gradient
from .potential import (
    SINGULARITY_POTENTIAL,
    SINGULARITY_RADIUS,
    potential_grid,
    potential_point_masses,
)
from .solvers import BracketReport, RadiusSolver, solve_radius

__all__ = [
    "potential_point_masses",
    "potential_grid",
    "calculate_gradient",
    "gradient_grid",
    "numerical_gradient",
    "solve_radius",
    "RadiusSolver",
    "BracketReport",
    "SINGULARITY_RADIUS",
    "SINGULARITY_POTENTIAL",
]
