# geoid/measure/classification.py
"""Classifying the regime of an extracted surface.

A surface that stays close to the body is an ordinary ocean. Once any part
of it reaches beyond `disk_radius` the ocean has spilled into the outer
region: under fast rotation this is an equatorial accretion disk, otherwise
a gargantuan ocean.
"""
from typing import Literal

import numpy as np
from numpy.typing import NDArray

DISK_RADIUS: float = 6.0
DISK_OMEGA: float = 0.05

SurfaceRegime = Literal["ocean", "gargantuan_ocean", "accretion_disk"]


def disk_mask(radii: NDArray[np.float64], disk_radius: float = DISK_RADIUS) -> NDArray[np.bool_]:
    """Boolean mask of the radii that lie in the outer (disk) region."""
    return np.asarray(radii, dtype=float) > disk_radius


def classify_surface(
    radii: NDArray[np.float64],
    omega: float,
    disk_radius: float = DISK_RADIUS,
    omega_disk: float = DISK_OMEGA,
) -> SurfaceRegime:
    """Classifies a solved surface.

    Args:
        radii (NDArray[np.float64]): Solved radii over the surface directions.
        omega (float): Rotation rate the surface was solved with.
        disk_radius (float): Radius beyond which a point belongs to the disk.
        omega_disk (float): Rotation rate above which an outer region is an
            accretion disk rather than an oversized ocean.

    Returns:
        SurfaceRegime: 'ocean', 'gargantuan_ocean' or 'accretion_disk'.
    """
    if not np.any(disk_mask(radii, disk_radius)):
        return "ocean"
    if omega > omega_disk:
        return "accretion_disk"
    return "gargantuan_ocean"
