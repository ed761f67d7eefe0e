# geoid/core/distribution.py
"""Mass distributions for tapered ("egg") bodies.

The solid body is modelled as a stack of thin cylinders along the rotation
axis. Each cylinder becomes one PointMass whose mass is proportional to its
cross-sectional area, so a body that narrows towards its top pole ends up
bottom-heavy.
"""
from __future__ import annotations

from typing import List

import numpy as np
from numpy.typing import NDArray

from .mass import PointMass

# Fraction of the radius lost at the top pole for taper == 1
TAPER_STRENGTH: float = 0.6


def slice_scale(y: float, radius: float, taper: float) -> float:
    """Returns the cross-section scale of the body at height y.

    The lower half (y <= 0) keeps the full radius; the upper half narrows
    linearly towards the top pole.

    Args:
        y (float): Height along the rotation axis.
        radius (float): Base radius of the body.
        taper (float): Taper amount, 0 for a sphere. Practical range 0-0.5.

    Returns:
        float: The multiplier applied to the base radius at height y.
    """
    if y <= 0:
        return 1.0
    return 1.0 - taper * (y / radius) * TAPER_STRENGTH


def pole_positions(radius: float, taper: float, count: int) -> NDArray[np.float64]:
    """Evenly spaced mass positions between the two poles.

    The pole separation scales with the taper, so taper == 0 collapses every
    mass onto the origin (a single point mass).
    """
    if count == 1:
        return np.zeros(1)
    y_normalized: NDArray[np.float64] = -1.0 + 2.0 * np.arange(count) / (count - 1)
    return y_normalized * radius * taper


def pole_masses(
    radius: float = 4.0,
    taper: float = 0.2,
    count: int = 20,
    total_mass: float = 10.0,
) -> List[PointMass]:
    """Distributes the mass of a tapered body over `count` axial point masses.

    Each mass is proportional to the area (r^2) of the body's cross-section
    at its height, which approximates the volume integral by a sum over
    cylinders. The result is rescaled so that the masses add up to
    `total_mass`.

    Args:
        radius (float): Base radius of the body.
        taper (float): Taper amount (0 gives a sphere).
        count (int): Number of point masses along the axis.
        total_mass (float): Total mass of the returned distribution.

    Returns:
        List[PointMass]: The masses ordered from the bottom pole to the top.

    Raises:
        ValueError: If count is not positive, or radius / total_mass are not
            strictly positive.
    """
    if count < 1:
        raise ValueError(f"count must be a positive integer, but got {count}.")
    if radius <= 0:
        raise ValueError(f"radius must be positive, but got {radius}.")
    if total_mass <= 0:
        raise ValueError(f"total_mass must be positive, but got {total_mass}.")

    ys = pole_positions(radius, taper, count)
    areas = np.array([(radius * slice_scale(y, radius, taper)) ** 2 for y in ys])
    scaled = areas * (total_mass / np.sum(areas))

    return [PointMass(y=y, m=m) for y, m in zip(ys, scaled)]
