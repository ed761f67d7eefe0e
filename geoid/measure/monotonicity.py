# geoid/measure/monotonicity.py
"""Checks of the monotonicity assumption behind the radius solver.

The bisection is only correct if the potential increases with r across the
whole bracket. Gravity makes it increase; rotation makes it decrease, and
beyond the potential crest rotation wins. These helpers measure where that
happens for a given configuration.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Tuple

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from ..dynamics.solvers import RadiusSolver
from ..geometry.directions import normalize

if TYPE_CHECKING:
    from ..core.field import PotentialField


def radial_profile(
    field: PotentialField, direction: NDArray[np.float64], n_samples: int = 128
) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Samples the potential along a ray across the field's bracket.

    Args:
        field (PotentialField): The field configuration.
        direction (NDArray[np.float64]): Direction of the ray.
        n_samples (int): Number of evenly spaced radii.

    Returns:
        Tuple[NDArray[np.float64], NDArray[np.float64]]: (radii, potentials).
    """
    return RadiusSolver(field).radial_samples(normalize(direction), n_samples)


def is_monotonic_on_bracket(
    field: PotentialField, direction: NDArray[np.float64], n_samples: int = 128
) -> bool:
    """True if the potential is non-decreasing in r along the ray."""
    _, potentials = radial_profile(field, direction, n_samples)
    return bool(np.all(np.diff(potentials) >= 0))


def sweep_monotonicity(
    field: PotentialField,
    directions: NDArray[np.float64],
    omegas: Iterable[float],
    n_samples: int = 128,
) -> pd.DataFrame:
    """Tests the monotonicity assumption over directions and rotation rates.

    The field's rotation rate is changed during the sweep and restored
    afterwards, so the field must not be shared with concurrent queries.

    Args:
        field (PotentialField): The field configuration.
        directions (NDArray[np.float64]): Directions to test, shape (N, 3).
        omegas (Iterable[float]): Rotation rates to test.
        n_samples (int): Samples per ray.

    Returns:
        pd.DataFrame: One row per (omega, direction) with the columns
            'omega', 'dx', 'dy', 'dz', 'monotonic' and 'min_step' (the
            smallest potential increment between consecutive samples).
    """
    records = []
    original_omega = field.omega
    dirs = np.atleast_2d(np.asarray(directions, dtype=float))

    try:
        for omega in omegas:
            field.set_rotation(omega)
            for d in dirs:
                _, potentials = radial_profile(field, d, n_samples)
                steps = np.diff(potentials)
                min_step = float(np.min(steps)) if steps.size else 0.0
                records.append(
                    {
                        "omega": float(omega),
                        "dx": d[0],
                        "dy": d[1],
                        "dz": d[2],
                        "monotonic": min_step >= 0,
                        "min_step": min_step,
                    }
                )
    finally:
        field.set_rotation(original_omega)

    return pd.DataFrame.from_records(
        records, columns=["omega", "dx", "dy", "dz", "monotonic", "min_step"]
    )


def max_monotonic_omega(
    field: PotentialField,
    directions: NDArray[np.float64],
    omega_max: float = 0.2,
    n_omegas: int = 41,
    n_samples: int = 128,
) -> float:
    """Largest tested rotation rate for which every direction stays monotonic.

    Rotation rates are tested on an even grid over [0, omega_max]. Returns
    0.0 if even the non-rotating field fails.
    """
    omegas = np.linspace(0.0, omega_max, n_omegas)
    table = sweep_monotonicity(field, directions, omegas, n_samples)
    passing = table.groupby("omega")["monotonic"].all()

    best = 0.0
    for omega, ok in passing.items():
        if not ok:
            break
        best = float(omega)
    return best
