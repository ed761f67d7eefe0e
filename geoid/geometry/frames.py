# geoid/geometry/frames.py
"""Local frames on an equipotential surface and movement along it.

"Up" is the normalised potential gradient. "North" is the world +y axis
projected onto the tangent plane and "east" completes the frame. The frame
is undefined at the poles, where +y is parallel to up; there north and east
come back as zero vectors.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

import numpy as np
from numpy.typing import NDArray

from ..dynamics.gradient import calculate_gradient
from ..dynamics.solvers import solve_radius
from .directions import normalize

if TYPE_CHECKING:
    from ..core.field import PotentialField

WORLD_UP: NDArray[np.float64] = np.array([0.0, 1.0, 0.0])


def surface_frame(
    field: PotentialField, point: NDArray[np.float64]
) -> Tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
    """Returns the (up, north, east) unit vectors at a point.

    Args:
        field (PotentialField): The field configuration.
        point (NDArray[np.float64]): A point, usually on the surface.

    Returns:
        Tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
            up (normalised gradient), north (+y projected onto the tangent
            plane) and east (north x up).
    """
    x, y, z = np.asarray(point, dtype=float)
    up = normalize(calculate_gradient(x, y, z, field))
    north = normalize(WORLD_UP - np.dot(WORLD_UP, up) * up)
    east = normalize(np.cross(north, up))
    return up, north, east


def snap_to_surface(
    field: PotentialField, point: NDArray[np.float64], target_potential: float
) -> NDArray[np.float64]:
    """Moves a point along its ray from the origin onto the equipotential surface."""
    direction = normalize(point)
    r = solve_radius(*direction, target_potential, field)
    return direction * r


def step_east(
    field: PotentialField,
    point: NDArray[np.float64],
    target_potential: float,
    distance: float,
) -> NDArray[np.float64]:
    """Moves a surface point eastwards by `distance` and snaps it back to the surface.

    Args:
        field (PotentialField): The field configuration.
        point (NDArray[np.float64]): The current position.
        target_potential (float): The potential of the surface.
        distance (float): Step length along the local east vector.

    Returns:
        NDArray[np.float64]: The new position on the surface.
    """
    _, _, east = surface_frame(field, point)
    moved = np.asarray(point, dtype=float) + east * distance
    return snap_to_surface(field, moved, target_potential)
