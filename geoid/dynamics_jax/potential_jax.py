# geoid/dynamics_jax/potential_jax.py
"""JAX implementation of the rotating point-mass potential.

The mass configuration is passed as flat arrays rather than a PotentialField
so that the function can be JIT-compiled, vectorised with `jax.vmap` and
differentiated with `jax.grad`.
"""
import jax
import jax.numpy as jnp
from jax import jit

from ..dynamics.potential import SINGULARITY_POTENTIAL, SINGULARITY_RADIUS


@jit
def potential_jax(
    point: jax.Array,
    mass_y: jax.Array,
    mass_m: jax.Array,
    G: float,
    omega: float,
) -> jax.Array:
    """Calculates the potential at a point (JAX version).

    Args:
        point (jax.Array): The query point, shape (3,).
        mass_y (jax.Array): Axial positions of the masses, shape (M,).
        mass_m (jax.Array): Masses, shape (M,).
        G (float): The gravitational constant.
        omega (float): The rotation rate about the vertical axis.

    Returns:
        jax.Array: The scalar potential, or SINGULARITY_POTENTIAL if the point
            lies inside the singularity radius of any mass.
    """
    planar_sq = point[0] ** 2 + point[2] ** 2
    dist = jnp.sqrt(planar_sq + (point[1] - mass_y) ** 2)
    inside = jnp.any(dist < SINGULARITY_RADIUS)

    # Keep the division finite so that gradients stay defined
    safe_dist = jnp.where(dist < SINGULARITY_RADIUS, 1.0, dist)
    gravity = -jnp.sum(G * mass_m / safe_dist)
    potential = gravity - 0.5 * omega**2 * planar_sq

    return jnp.where(inside, SINGULARITY_POTENTIAL, potential)
