# geoid/dynamics/potential.py
"""Potential of point masses on a rotating axis.

This module provides the scalar potential of a PotentialField, in a
pure-Python form for per-point queries and a vectorised NumPy form for
whole point clouds. Both share the same singularity policy.
"""
from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from ..core.field import PotentialField

# Points closer than this to any mass are treated as inside the mass.
SINGULARITY_RADIUS: float = 0.1
# Returned for points inside a mass; deeper than any reachable potential.
SINGULARITY_POTENTIAL: float = -10000.0


def potential_point_masses(x: float, y: float, z: float, field: PotentialField) -> float:
    """Calculates the total potential at the point (x, y, z).

    The potential is the gravitational potential of every mass plus the
    centrifugal potential of the rotation about the vertical axis:

    V = -sum_i(G * m_i / dist_i) - 0.5 * omega^2 * (x^2 + z^2)

    where dist_i is the distance from (x, y, z) to (0, y_i, 0).

    If the point lies within SINGULARITY_RADIUS of any mass, the summation
    stops and SINGULARITY_POTENTIAL is returned, so that root finding always
    treats the point as too deep. The function never raises.

    Args:
        x (float): x coordinate of the query point.
        y (float): y (vertical) coordinate of the query point.
        z (float): z coordinate of the query point.
        field (PotentialField): The field configuration to evaluate.

    Returns:
        float: The potential at (x, y, z).
    """
    G = field.G
    planar_sq = x * x + z * z
    potential = 0.0

    for mass in field.masses:
        dy = y - mass.y
        dist = math.sqrt(planar_sq + dy * dy)
        if dist < SINGULARITY_RADIUS:
            return SINGULARITY_POTENTIAL
        potential -= (G * mass.m) / dist

    potential -= 0.5 * field.omega * field.omega * planar_sq
    return potential


def potential_grid(points: NDArray[np.float64], field: PotentialField) -> NDArray[np.float64]:
    """Calculates the potential at every row of an (N, 3) point array.

    Rows that fall inside the singularity radius of any mass are set to
    SINGULARITY_POTENTIAL, exactly as the scalar version does.

    Args:
        points (NDArray[np.float64]): Query points with shape (N, 3).
        field (PotentialField): The field configuration to evaluate.

    Returns:
        NDArray[np.float64]: The potentials, shape (N,).
    """
    pts: NDArray[np.float64] = np.atleast_2d(np.asarray(points, dtype=float))
    ys, ms = field.mass_arrays()

    planar_sq: NDArray[np.float64] = pts[:, 0] ** 2 + pts[:, 2] ** 2
    if ys.size == 0:
        return -0.5 * field.omega**2 * planar_sq

    # (N, M) distances from every point to every mass
    dy: NDArray[np.float64] = pts[:, 1:2] - ys[np.newaxis, :]
    dist: NDArray[np.float64] = np.sqrt(planar_sq[:, np.newaxis] + dy**2)
    inside: NDArray[np.bool_] = np.any(dist < SINGULARITY_RADIUS, axis=1)

    with np.errstate(divide="ignore", invalid="ignore"):
        gravity: NDArray[np.float64] = -np.sum(field.G * ms / dist, axis=1)

    potential = gravity - 0.5 * field.omega**2 * planar_sq
    return np.where(inside, SINGULARITY_POTENTIAL, potential)
