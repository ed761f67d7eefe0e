# geoid/dynamics/gradient.py
"""Gradient of the rotating point-mass potential.

The gradient of V is normal to the equipotential surfaces and points towards
higher (less negative) potential, i.e. "up" on the surface. It combines two
contributions of opposite character:

- gravity: G * m / r^3 * (x, y - y_i, z), pointing away from each mass;
- rotation: -omega^2 * (x, 0, z), pointing towards the rotation axis.

Unlike the potential, the gradient does not use a sentinel inside the
singularity radius: masses closer than SINGULARITY_RADIUS are skipped. This
asymmetry is intentional and changes the shape of the extracted surface
normals near the masses if removed.
"""
from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from .potential import SINGULARITY_RADIUS, potential_point_masses

if TYPE_CHECKING:
    from ..core.field import PotentialField


def calculate_gradient(
    x: float, y: float, z: float, field: PotentialField
) -> NDArray[np.float64]:
    """Calculates the analytic gradient of the potential at (x, y, z).

    Args:
        x (float): x coordinate of the query point.
        y (float): y (vertical) coordinate of the query point.
        z (float): z coordinate of the query point.
        field (PotentialField): The field configuration to evaluate.

    Returns:
        NDArray[np.float64]: The raw (non-normalised) gradient, shape (3,).
    """
    G = field.G
    planar_sq = x * x + z * z
    gx = gy = gz = 0.0

    for mass in field.masses:
        dy = y - mass.y
        r2 = planar_sq + dy * dy
        r = math.sqrt(r2)
        if r < SINGULARITY_RADIUS:
            continue
        factor = (G * mass.m) / (r2 * r)
        gx += factor * x
        gy += factor * dy
        gz += factor * z

    omega_sq = field.omega * field.omega
    gx -= omega_sq * x
    gz -= omega_sq * z

    return np.array([gx, gy, gz])


def gradient_grid(points: NDArray[np.float64], field: PotentialField) -> NDArray[np.float64]:
    """Calculates the analytic gradient at every row of an (N, 3) point array.

    Args:
        points (NDArray[np.float64]): Query points with shape (N, 3).
        field (PotentialField): The field configuration to evaluate.

    Returns:
        NDArray[np.float64]: The gradients, shape (N, 3).
    """
    pts: NDArray[np.float64] = np.atleast_2d(np.asarray(points, dtype=float))
    ys, ms = field.mass_arrays()
    grad: NDArray[np.float64] = np.zeros_like(pts)

    if ys.size > 0:
        # (N, M, 3) offsets from every mass to every point
        offsets: NDArray[np.float64] = np.repeat(
            pts[:, np.newaxis, :], ys.size, axis=1
        )
        offsets[:, :, 1] -= ys[np.newaxis, :]
        r: NDArray[np.float64] = np.linalg.norm(offsets, axis=2)

        with np.errstate(divide="ignore", invalid="ignore"):
            factor: NDArray[np.float64] = field.G * ms / r**3
        factor = np.where(r < SINGULARITY_RADIUS, 0.0, factor)
        grad += np.sum(factor[:, :, np.newaxis] * offsets, axis=1)

    omega_sq = field.omega**2
    grad[:, 0] -= omega_sq * pts[:, 0]
    grad[:, 2] -= omega_sq * pts[:, 2]
    return grad


def numerical_gradient(
    x: float, y: float, z: float, field: PotentialField, h: float = 1e-6
) -> NDArray[np.float64]:
    """Calculates the gradient of the potential by central differences.

    This is a reference implementation used to cross-check the analytic
    gradient away from the masses. Inside the singularity radius it sees the
    sentinel plateau and therefore disagrees with `calculate_gradient`.

    Args:
        x (float): x coordinate of the query point.
        y (float): y (vertical) coordinate of the query point.
        z (float): z coordinate of the query point.
        field (PotentialField): The field configuration to evaluate.
        h (float): The finite-difference step. Defaults to 1e-6.

    Returns:
        NDArray[np.float64]: The numerical gradient, shape (3,).
    """
    p: NDArray[np.float64] = np.array([x, y, z], dtype=float)
    grad: NDArray[np.float64] = np.zeros(3)

    for i in range(3):
        p_fwd = p.copy()
        p_bwd = p.copy()
        p_fwd[i] += h
        p_bwd[i] -= h

        potential_fwd = potential_point_masses(*p_fwd, field)
        potential_bwd = potential_point_masses(*p_bwd, field)
        grad[i] = (potential_fwd - potential_bwd) / (2 * h)

    return grad
