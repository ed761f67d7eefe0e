# geoid/dynamics_jax/gradient_jax.py
"""JAX gradient of the potential using automatic differentiation.

Away from the masses this agrees with the analytic gradient. Inside the
singularity radius the potential is a constant sentinel, so the automatic
gradient is zero there, whereas the analytic gradient only drops the
offending mass. Use the analytic gradient for surface normals.
"""
from typing import Callable

import jax
from jax import grad, jit

from .potential_jax import potential_jax

grad_potential_fn: Callable[..., jax.Array] = grad(potential_jax, argnums=0)


@jit
def gradient_jax(
    point: jax.Array,
    mass_y: jax.Array,
    mass_m: jax.Array,
    G: float,
    omega: float,
) -> jax.Array:
    """Calculates the potential gradient at a point by automatic differentiation.

    Args:
        point (jax.Array): The query point, shape (3,).
        mass_y (jax.Array): Axial positions of the masses, shape (M,).
        mass_m (jax.Array): Masses, shape (M,).
        G (float): The gravitational constant.
        omega (float): The rotation rate about the vertical axis.

    Returns:
        jax.Array: The gradient, shape (3,).
    """
    return grad_potential_fn(point, mass_y, mass_m, G, omega)
