"""
geoid.dynamics_jax

Optional JAX backend: JIT-compiled potential, autodiff gradient and a
vectorised radius solver.
"""

from .gradient_jax import gradient_jax
from .potential_jax import potential_jax
from .solvers_jax import RadiusSolverJax

__all__ = ["potential_jax", "gradient_jax", "RadiusSolverJax"]
