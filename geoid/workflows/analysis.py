"""
geoid.workflows.analysis

End-to-end extraction of an equipotential surface from a configured field.
This is the main entry point for a standard analysis: it samples ray
directions, solves the surface radius along each of them, and attaches
normals, residuals and bracket diagnostics to every surface point.
"""
from dataclasses import dataclass
from typing import Any, Literal, Optional

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from ..core.field import PotentialField
from ..dynamics.gradient import gradient_grid
from ..dynamics.potential import potential_grid
from ..geometry.directions import fibonacci_directions, normalize_rows
from ..measure.classification import SurfaceRegime, classify_surface, disk_mask
from ..measure.sea_level import SeaLevel


@dataclass
class SurfaceAnalysis:
    """
    Result of `run_surface_analysis`.

    Attributes:
        target_potential (float): The sea level the surface was solved for.
        omega (float): The rotation rate at solve time.
        regime (SurfaceRegime): 'ocean', 'gargantuan_ocean' or 'accretion_disk'.
        table (pd.DataFrame): One row per direction with the columns
            dx, dy, dz, radius, x, y, z, nx, ny, nz, residual,
            bracket_valid and in_disk.
    """
    target_potential: float
    omega: float
    regime: SurfaceRegime
    table: pd.DataFrame

    @property
    def points(self) -> NDArray[np.float64]:
        return self.table[["x", "y", "z"]].to_numpy()

    @property
    def normals(self) -> NDArray[np.float64]:
        return self.table[["nx", "ny", "nz"]].to_numpy()

    @property
    def valid_fraction(self) -> float:
        """Share of directions whose bisection bracket was valid."""
        if self.table.empty:
            return 0.0
        return float(self.table["bracket_valid"].mean())


def bracket_validity(
    field: PotentialField,
    directions: NDArray[np.float64],
    target_potential: float,
    n_samples: int = 32,
) -> NDArray[np.bool_]:
    """
    Vectorised bracket check: monotonic potential and target within reach,
    for every direction at once.
    """
    radii = np.linspace(field.r_min, field.r_max, n_samples)
    # (N, S, 3) sample points, flattened for the potential evaluation
    samples = directions[:, np.newaxis, :] * radii[np.newaxis, :, np.newaxis]
    potentials = potential_grid(samples.reshape(-1, 3), field).reshape(len(directions), n_samples)

    monotonic = np.all(np.diff(potentials, axis=1) >= 0, axis=1)
    in_range = (potentials[:, 0] <= target_potential) & (target_potential <= potentials[:, -1])
    return monotonic & in_range


def run_surface_analysis(
    field: PotentialField,
    target_potential: Optional[float] = None,
    n_directions: int = 2048,
    directions: Optional[NDArray[np.float64]] = None,
    backend: Optional[Literal['numpy', 'jax']] = None,
    reference_radius: float = 4.0,
    verbose: bool = True,
    **solve_kwargs: Any,
) -> SurfaceAnalysis:
    """
    Solves the equipotential surface of a field and collects per-point diagnostics.

    Args:
        field (PotentialField): The field configuration. It must not be
            mutated while the analysis runs.
        target_potential (Optional[float]): The sea level. Defaults to the
            egg sea level derived from `reference_radius`.
        n_directions (int): Number of Fibonacci directions, used when
            `directions` is not given.
        directions (Optional[NDArray[np.float64]]): Explicit ray directions,
            shape (N, 3). Rows are normalised.
        backend (Optional[Literal['numpy', 'jax']]): Overrides the field's
            solver backend for this analysis only.
        reference_radius (float): Equatorial radius of the solid body, used
            for the default sea level.
        verbose (bool): Print progress.
        **solve_kwargs: Passed to the solver's `solve_many` (e.g. `n_jobs`).

    Returns:
        SurfaceAnalysis: The solved surface and its diagnostics.
    """
    if target_potential is None:
        target_potential = SeaLevel.for_field(field, radius=reference_radius).default
    if directions is None:
        directions = fibonacci_directions(n_directions)
    dirs = normalize_rows(directions)

    solve_field = field
    if backend is not None and backend != field.backend:
        solve_field = field.with_backend(backend)

    if verbose:
        print(f"\n--- Solving surface V = {target_potential:.4f} over {len(dirs)} directions ---")
        print(f"  - field: {field}")

    radii = solve_field.solve_surface(dirs, target_potential, **solve_kwargs)
    points = dirs * radii[:, np.newaxis]
    normals = normalize_rows(gradient_grid(points, field))
    residuals = potential_grid(points, field) - target_potential
    valid = bracket_validity(field, dirs, target_potential)
    in_disk = disk_mask(radii)

    table = pd.DataFrame({
        'dx': dirs[:, 0], 'dy': dirs[:, 1], 'dz': dirs[:, 2],
        'radius': radii,
        'x': points[:, 0], 'y': points[:, 1], 'z': points[:, 2],
        'nx': normals[:, 0], 'ny': normals[:, 1], 'nz': normals[:, 2],
        'residual': residuals,
        'bracket_valid': valid,
        'in_disk': in_disk,
    })
    regime = classify_surface(radii, field.omega)

    if verbose:
        print(f"Radius range: [{radii.min():.4f}, {radii.max():.4f}]")
        print(f"Valid brackets: {valid.mean():.1%}")
        print(f"Surface regime: {regime}")
        if not valid.all():
            print(f"  - {int((~valid).sum())} direction(s) violate the bisection assumptions.")

    return SurfaceAnalysis(
        target_potential=float(target_potential),
        omega=field.omega,
        regime=regime,
        table=table,
    )
