# geoid/dynamics/solvers.py
"""Equipotential radius solvers.

This module extracts the equipotential surface V = target along rays from
the origin:
- solve_radius: the per-direction bisection used for every surface vertex.
- RadiusSolver: a field-bound solver adding a vectorised batch solve and a
  bracket diagnostic.

The bisection assumes that the potential increases with r inside the bracket
(the gravity-dominated regime). When rotation is fast enough to put the
potential crest inside the bracket, or the target is not reachable there,
the solve still returns a radius but it has no physical meaning. Use
`RadiusSolver.check_bracket` to detect these cases.
"""
from __future__ import annotations

import os
import warnings
from dataclasses import dataclass
from typing import TYPE_CHECKING, List

import numpy as np
from joblib import Parallel, delayed
from numpy.typing import NDArray
from scipy.optimize import OptimizeResult, minimize_scalar

from .potential import potential_grid, potential_point_masses

if TYPE_CHECKING:
    from ..core.field import PotentialField


def solve_radius(
    dx: float, dy: float, dz: float, target_potential: float, field: PotentialField
) -> float:
    """Finds the radius r at which the potential at r * (dx, dy, dz) hits a target.

    Runs exactly `field.iterations` bisection steps on
    [field.r_min, field.r_max], with no convergence test and no early exit.
    At each step, a midpoint potential below the target means the surface is
    further out; otherwise it is further in. The result is therefore
    deterministic, with precision (r_max - r_min) / 2**iterations.

    The direction is expected to be a unit vector. The function never raises;
    if the bracket holds no root it converges onto one of its bounds.

    Args:
        dx (float): x component of the direction.
        dy (float): y component of the direction.
        dz (float): z component of the direction.
        target_potential (float): The potential of the surface.
        field (PotentialField): The field configuration to evaluate.

    Returns:
        float: The midpoint of the final bracket.
    """
    r_lo = field.r_min
    r_hi = field.r_max

    for _ in range(field.iterations):
        r_mid = (r_lo + r_hi) * 0.5
        value = potential_point_masses(dx * r_mid, dy * r_mid, dz * r_mid, field)
        if value < target_potential:
            r_lo = r_mid
        else:
            r_hi = r_mid

    return (r_lo + r_hi) * 0.5


def _bisect_chunk(
    directions: NDArray[np.float64], target_potential: float, field: PotentialField
) -> NDArray[np.float64]:
    """Vectorised counterpart of `solve_radius` for an (N, 3) block of directions."""
    n: int = directions.shape[0]
    r_lo: NDArray[np.float64] = np.full(n, field.r_min)
    r_hi: NDArray[np.float64] = np.full(n, field.r_max)

    for _ in range(field.iterations):
        r_mid = (r_lo + r_hi) * 0.5
        values = potential_grid(directions * r_mid[:, np.newaxis], field)
        below = values < target_potential
        r_lo = np.where(below, r_mid, r_lo)
        r_hi = np.where(below, r_hi, r_mid)

    return (r_lo + r_hi) * 0.5


@dataclass(frozen=True)
class BracketReport:
    """Diagnostic summary of the bisection bracket along one ray.

    Attributes:
        monotonic (bool): True if the sampled potential never decreases with r.
        target_in_range (bool): True if the target lies between the potential
            at the inner and outer bounds.
        v_min (float): Potential at the inner bound.
        v_max (float): Potential at the outer bound.
        crest_radius (float): Radius of the potential maximum on the bracket.
            Equal to the outer bound when gravity dominates throughout.
        crest_potential (float): Potential at crest_radius.
    """

    monotonic: bool
    target_in_range: bool
    v_min: float
    v_max: float
    crest_radius: float
    crest_potential: float

    @property
    def valid(self) -> bool:
        """True if the bisection result along this ray is trustworthy."""
        return self.monotonic and self.target_in_range


class RadiusSolver:
    """Solves equipotential radii for a PotentialField (NumPy backend).

    Args:
        field (PotentialField): The field configuration. It is held by
            reference, so later changes to the field are seen by the solver.
        chunk_size (int): Number of directions processed per vectorised block
            in `solve_many`.
    """

    def __init__(self, field: "PotentialField", chunk_size: int = 4096):
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, but got {chunk_size}.")
        self.field: "PotentialField" = field
        self.chunk_size: int = chunk_size

    def solve(self, direction: NDArray[np.float64], target_potential: float) -> float:
        """Solves the radius along a single direction."""
        dx, dy, dz = direction
        return solve_radius(dx, dy, dz, target_potential, self.field)

    def solve_many(
        self,
        directions: NDArray[np.float64],
        target_potential: float,
        n_jobs: int = 1,
    ) -> NDArray[np.float64]:
        """Solves the radius along every row of an (N, 3) direction array.

        The bisection is vectorised over directions and uses the same
        comparison rule and iteration budget as `solve_radius`.

        Args:
            directions (NDArray[np.float64]): Unit directions, one per row.
            target_potential (float): The potential of the surface.
            n_jobs (int): The number of CPU cores used to process chunks in
                parallel. -1 means using all available cores.

        Returns:
            NDArray[np.float64]: The radius along each direction, shape (N,).
        """
        dirs: NDArray[np.float64] = np.atleast_2d(np.asarray(directions, dtype=float))
        if dirs.shape[0] == 0:
            return np.zeros(0)
        if n_jobs == -1:
            n_jobs = os.cpu_count() or 1

        chunks: List[NDArray[np.float64]] = [
            dirs[i : i + self.chunk_size] for i in range(0, len(dirs), self.chunk_size)
        ]

        if n_jobs == 1 or len(chunks) == 1:
            results = [_bisect_chunk(c, target_potential, self.field) for c in chunks]
        else:
            results = Parallel(n_jobs=n_jobs)(
                delayed(_bisect_chunk)(c, target_potential, self.field) for c in chunks
            )
        return np.concatenate(results)

    def radial_samples(
        self, direction: NDArray[np.float64], n_samples: int = 64
    ) -> tuple:
        """Samples the potential along a ray across the bracket.

        Returns:
            tuple: (radii, potentials), both of shape (n_samples,).
        """
        d: NDArray[np.float64] = np.asarray(direction, dtype=float)
        radii: NDArray[np.float64] = np.linspace(
            self.field.r_min, self.field.r_max, n_samples
        )
        potentials = potential_grid(radii[:, np.newaxis] * d[np.newaxis, :], self.field)
        return radii, potentials

    def check_bracket(
        self,
        direction: NDArray[np.float64],
        target_potential: float,
        n_samples: int = 64,
        warn: bool = False,
    ) -> BracketReport:
        """Checks whether the bisection assumptions hold along a ray.

        This is a diagnostic only; it never changes what `solve` returns.

        Args:
            direction (NDArray[np.float64]): The unit direction of the ray.
            target_potential (float): The potential of the surface.
            n_samples (int): Number of samples used for the monotonicity test.
            warn (bool): If True, emit a UserWarning when the bracket is
                not valid for this ray.

        Returns:
            BracketReport: The diagnostic summary.
        """
        d: NDArray[np.float64] = np.asarray(direction, dtype=float)
        radii, potentials = self.radial_samples(d, n_samples)
        monotonic = bool(np.all(np.diff(potentials) >= 0))

        v_min = float(potentials[0])
        v_max = float(potentials[-1])
        target_in_range = v_min <= target_potential <= v_max

        def negative_potential(r: float) -> float:
            return -potential_point_masses(d[0] * r, d[1] * r, d[2] * r, self.field)

        res: OptimizeResult = minimize_scalar(
            negative_potential,
            bounds=(self.field.r_min, self.field.r_max),
            method="bounded",
            options={"xatol": 1e-8},
        )
        crest_radius = float(res.x)
        crest_potential = float(-res.fun)
        # The bounded search never lands exactly on the bound
        if crest_potential < v_max:
            crest_radius, crest_potential = float(radii[-1]), v_max

        report = BracketReport(
            monotonic=monotonic,
            target_in_range=target_in_range,
            v_min=v_min,
            v_max=v_max,
            crest_radius=crest_radius,
            crest_potential=crest_potential,
        )

        if warn and not report.valid:
            warnings.warn(
                f"Bisection bracket [{self.field.r_min}, {self.field.r_max}] is "
                f"not valid along direction {np.round(d, 4)} (monotonic="
                f"{report.monotonic}, target_in_range={report.target_in_range}, "
                f"omega={self.field.omega:.4f}). The solved radius is not "
                "physically meaningful.",
                UserWarning,
            )
        return report
