# geoid/geometry/directions.py
"""Unit directions for sampling rays from the origin.

The surface solver works one ray at a time; these helpers produce the ray
directions (deterministic spirals, quasi-random samples, meridian fans) and
the rotations used to check axial symmetry.
"""
from __future__ import annotations

import math
from typing import Optional

import numpy as np
from numpy.typing import NDArray
from scipy.stats import qmc

GOLDEN_ANGLE: float = math.pi * (3.0 - math.sqrt(5.0))


def normalize(v: NDArray[np.float64]) -> NDArray[np.float64]:
    """Returns v scaled to unit length. A zero vector is returned unchanged."""
    arr: NDArray[np.float64] = np.asarray(v, dtype=float)
    norm = np.linalg.norm(arr)
    if norm == 0:
        return arr.copy()
    return arr / norm


def normalize_rows(vectors: NDArray[np.float64]) -> NDArray[np.float64]:
    """Row-wise `normalize` for an (N, 3) array."""
    arr: NDArray[np.float64] = np.atleast_2d(np.asarray(vectors, dtype=float))
    norms = np.linalg.norm(arr, axis=1, keepdims=True)
    return np.divide(arr, norms, out=arr.copy(), where=norms > 0)


def fibonacci_directions(n: int) -> NDArray[np.float64]:
    """Returns n near-uniform unit directions on a Fibonacci spiral.

    The first direction is the north pole (+y) and the last the south pole.

    Args:
        n (int): Number of directions.

    Returns:
        NDArray[np.float64]: Unit directions, shape (n, 3).

    Raises:
        ValueError: If n is not positive.
    """
    if n < 1:
        raise ValueError(f"n must be a positive integer, but got {n}.")
    if n == 1:
        return np.array([[0.0, 1.0, 0.0]])

    i = np.arange(n)
    y = 1.0 - 2.0 * i / (n - 1)
    ring = np.sqrt(np.clip(1.0 - y * y, 0.0, None))
    theta = GOLDEN_ANGLE * i
    return np.column_stack([ring * np.cos(theta), y, ring * np.sin(theta)])


def sobol_directions(n: int, seed: Optional[int] = None) -> NDArray[np.float64]:
    """Returns n quasi-random unit directions from a scrambled Sobol sequence.

    The (u, v) samples are mapped to the sphere with an equal-area map, so
    the directions are uniform in solid angle.

    Args:
        n (int): Number of directions.
        seed (Optional[int]): Seed of the scrambling, for reproducibility.

    Returns:
        NDArray[np.float64]: Unit directions, shape (n, 3).
    """
    if n < 1:
        raise ValueError(f"n must be a positive integer, but got {n}.")
    sampler = qmc.Sobol(d=2, scramble=True, seed=seed)
    n_power_of_2 = 1 << (n - 1).bit_length()
    samples: NDArray[np.float64] = sampler.random(n=n_power_of_2)[:n]

    y = 1.0 - 2.0 * samples[:, 0]
    ring = np.sqrt(np.clip(1.0 - y * y, 0.0, None))
    phi = 2.0 * np.pi * samples[:, 1]
    return np.column_stack([ring * np.cos(phi), y, ring * np.sin(phi)])


def meridian_directions(n: int) -> NDArray[np.float64]:
    """Returns n directions in the x-y half plane, from the south pole to the north.

    Args:
        n (int): Number of directions (at least 2).

    Returns:
        NDArray[np.float64]: Unit directions, shape (n, 3), with z == 0.
    """
    if n < 2:
        raise ValueError(f"n must be at least 2, but got {n}.")
    polar = np.linspace(np.pi, 0.0, n)
    return np.column_stack([np.sin(polar), np.cos(polar), np.zeros(n)])


def polar_angles(directions: NDArray[np.float64]) -> NDArray[np.float64]:
    """Angle of each direction from the north pole (+y), in radians."""
    dirs = normalize_rows(directions)
    return np.arccos(np.clip(dirs[:, 1], -1.0, 1.0))


def rotate_about_vertical(point: NDArray[np.float64], theta: float) -> NDArray[np.float64]:
    """Rotates a point (or an (N, 3) array of points) about the y axis.

    (x, y, z) -> (x cos(theta) - z sin(theta), y, x sin(theta) + z cos(theta))
    """
    pts: NDArray[np.float64] = np.asarray(point, dtype=float)
    c, s = math.cos(theta), math.sin(theta)
    x, y, z = pts[..., 0], pts[..., 1], pts[..., 2]
    return np.stack([x * c - z * s, y, x * s + z * c], axis=-1)
