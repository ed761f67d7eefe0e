# geoid/core/field.py
"""The PotentialField class, the mutable configuration of a geoid model.

This module defines PotentialField, which holds the physical configuration
(point masses, gravitational constant, rotation rate) together with the
numerical settings of the equipotential solver (bisection bracket, iteration
budget and computational backend). It is the object every query is
evaluated against.

Concurrency contract:
    A PotentialField is shared mutable state with a single writer and many
    readers. It provides no locking. Callers must not mutate it (through
    `set_masses`, `set_rotation` or attribute assignment such as
    `field.masses = [...]`) while a batch of queries, e.g. one pass over
    all mesh vertices, is in flight;
    otherwise the resulting surface mixes two configurations.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterable, List, Literal, Tuple, Type

import numpy as np
from numpy.typing import NDArray

from ..dynamics.gradient import calculate_gradient
from ..dynamics.potential import potential_point_masses
from ..dynamics.solvers import solve_radius
from .distribution import pole_masses
from .mass import PointMass

if TYPE_CHECKING:
    from ..dynamics.solvers import RadiusSolver
    from ..dynamics_jax.solvers_jax import RadiusSolverJax

DEFAULT_R_MIN: float = 3.0
DEFAULT_R_MAX: float = 8.0
DEFAULT_ITERATIONS: int = 15


def default_masses() -> List[PointMass]:
    """The two-mass "egg": a heavy mass below the origin, a lighter one above."""
    return [PointMass(y=-1.5, m=4.0), PointMass(y=2.0, m=2.0)]


@dataclass
class PotentialField:
    """Point masses on a rotating axis and the settings used to query them.

    Attributes:
        masses (List[PointMass]): The ordered point masses. Replaced wholesale
            via `set_masses` or plain assignment whenever the mass
            distribution changes; every assigned entry is converted with
            `PointMass.from_record`. In-place edits of the list (e.g.
            `append`) bypass that conversion and must add PointMass objects.
        G (float): The gravitational constant. Defaults to 1.0.
        omega (float): Rotation rate about the vertical axis. Defaults to 0.0.
            Values observed in practice lie in 0.0-0.2.
        r_min (float): Inner bound of the bisection bracket. Defaults to 3.0.
        r_max (float): Outer bound of the bisection bracket. Defaults to 8.0.
        iterations (int): Fixed number of bisection steps. Defaults to 15.
        backend (Literal['numpy', 'jax']): Backend of the batch radius solver
            returned by `solver()`. Scalar queries always run in pure Python.
    """

    masses: List[PointMass] = field(default_factory=default_masses)
    G: float = 1.0
    omega: float = 0.0
    r_min: float = DEFAULT_R_MIN
    r_max: float = DEFAULT_R_MAX
    iterations: int = DEFAULT_ITERATIONS
    backend: Literal["numpy", "jax"] = "numpy"

    _solver_class: Type[RadiusSolver] | Type[RadiusSolverJax] = field(
        init=False, repr=False
    )

    def __post_init__(self) -> None:
        """Validates settings and binds the backend."""
        self.G = float(self.G)
        self.omega = float(self.omega)
        self._validate_bracket(self.r_min, self.r_max)

        if self.G < 0:
            raise ValueError(
                f"G must be non-negative, but received {self.G}."
            )
        if int(self.iterations) < 1:
            raise ValueError(
                f"iterations must be at least 1, but received {self.iterations}."
            )
        self.iterations = int(self.iterations)
        self._bind_backend()

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "masses":
            value = [PointMass.from_record(m) for m in value]
        super().__setattr__(name, value)

    def _bind_backend(self) -> None:
        # --- Dynamically bind the computational backend ---
        if self.backend == "jax":
            try:
                from ..dynamics_jax.solvers_jax import RadiusSolverJax

                self._solver_class = RadiusSolverJax
            except ImportError as e:
                raise ImportError(
                    "Could not load the JAX backend. Please ensure JAX is "
                    "installed: `pip install 'jax[cpu]'` or `pip install "
                    "'jax[cuda]'` (for GPU)."
                ) from e
        elif self.backend == "numpy":
            from ..dynamics.solvers import RadiusSolver

            self._solver_class = RadiusSolver
        else:
            raise ValueError(
                f"Unsupported backend: '{self.backend}'. Please choose "
                "'numpy' or 'jax'."
            )

    @staticmethod
    def _validate_bracket(r_min: float, r_max: float) -> None:
        if not 0 <= r_min < r_max:
            raise ValueError(
                f"The bisection bracket must satisfy 0 <= r_min < r_max, but "
                f"got r_min={r_min}, r_max={r_max}."
            )

    # ------------------------------------------------------------------
    # Presets
    # ------------------------------------------------------------------

    @classmethod
    def two_mass(cls, omega: float = 0.0, **kwargs: Any) -> PotentialField:
        """The default egg model: masses {y=-1.5, m=4} and {y=2, m=2}."""
        return cls(masses=default_masses(), omega=omega, **kwargs)

    @classmethod
    def sphere(cls, mass: float = 8.0, omega: float = 0.02, **kwargs: Any) -> PotentialField:
        """A single central mass.

        With G=1, m=8 and a surface radius of 4, surface gravity is 0.5 and
        omega=0.02 gives an Earth-like centrifugal-to-gravity ratio.
        """
        return cls(masses=[PointMass(y=0.0, m=mass)], omega=omega, **kwargs)

    @classmethod
    def egg(
        cls,
        radius: float = 4.0,
        taper: float = 0.2,
        count: int = 20,
        omega: float = 0.0,
        **kwargs: Any,
    ) -> PotentialField:
        """A tapered body sampled by `count` axial masses (total mass 10)."""
        return cls(masses=pole_masses(radius, taper, count), omega=omega, **kwargs)

    # ------------------------------------------------------------------
    # Configuration surface
    # ------------------------------------------------------------------

    def set_masses(self, masses: Iterable[Any]) -> None:
        """Replaces the mass list wholesale.

        Args:
            masses (Iterable[Any]): PointMass objects, {'y', 'm'} mappings or
                (y, m) pairs, ordered as the caller wants them summed.
        """
        self.masses = masses

    def set_rotation(self, omega: float) -> None:
        """Sets the rotation rate about the vertical axis."""
        self.omega = float(omega)

    def set_bracket(self, r_min: float, r_max: float) -> None:
        """Sets the bisection bracket used by radius solves."""
        self._validate_bracket(r_min, r_max)
        self.r_min = float(r_min)
        self.r_max = float(r_max)

    @property
    def total_mass(self) -> float:
        return sum(m.m for m in self.masses)

    def mass_arrays(self) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Returns (y positions, masses) as two 1D arrays."""
        ys: NDArray[np.float64] = np.array([m.y for m in self.masses], dtype=float)
        ms: NDArray[np.float64] = np.array([m.m for m in self.masses], dtype=float)
        return ys, ms

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_potential(self, x: float, y: float, z: float) -> float:
        """Evaluates the potential at (x, y, z). See `potential_point_masses`."""
        return potential_point_masses(x, y, z, self)

    def get_gradient(self, x: float, y: float, z: float) -> NDArray[np.float64]:
        """Evaluates the raw potential gradient at (x, y, z)."""
        return calculate_gradient(x, y, z, self)

    def solve_radius(
        self, dx: float, dy: float, dz: float, target_potential: float
    ) -> float:
        """Finds r such that the potential at r * (dx, dy, dz) equals the target."""
        return solve_radius(dx, dy, dz, target_potential, self)

    def with_backend(self, backend: Literal["numpy", "jax"]) -> PotentialField:
        """Returns a copy of the field bound to another solver backend.

        The copy shares the already validated PointMass objects, so no
        mass warnings are raised again. Later changes to either field are
        not seen by the other.
        """
        clone = copy.copy(self)
        clone.masses = list(self.masses)
        clone.backend = backend
        clone._bind_backend()
        return clone

    def solver(self, **kwargs: Any) -> RadiusSolver | RadiusSolverJax:
        """Returns a batch radius solver bound to this field and its backend."""
        return self._solver_class(field=self, **kwargs)

    def solve_surface(
        self, directions: NDArray[np.float64], target_potential: float, **kwargs: Any
    ) -> NDArray[np.float64]:
        """Solves the surface radius for every row of an (N, 3) direction array.

        Args:
            directions (NDArray[np.float64]): Unit directions, one per row.
            target_potential (float): The potential of the surface.
            **kwargs: Passed to the backend's `solve_many` (e.g. `n_jobs`).

        Returns:
            NDArray[np.float64]: The radius along each direction.
        """
        return self.solver().solve_many(directions, target_potential, **kwargs)

    def __repr__(self) -> str:
        """Provides a concise string representation of the field."""
        masses_repr = list(self.masses[:2])
        if len(self.masses) > 2:
            masses_repr = masses_repr + ["..."]
        return (
            f"PotentialField(n_masses={len(self.masses)}, G={self.G:.4f}, "
            f"omega={self.omega:.4f}, bracket=({self.r_min}, {self.r_max}), "
            f"backend='{self.backend}', masses={masses_repr})"
        )


def characteristic_bracket(
    masses: Iterable[Any],
    reference_radius: float | None = None,
    inner: float = 0.75,
    outer: float = 2.0,
) -> Tuple[float, float]:
    """Derives a bisection bracket from the scale of a mass configuration.

    The bracket is (inner * R, outer * R) where R is `reference_radius` or,
    when omitted, twice the largest axial offset of any mass. For the default
    two-mass model and for a radius-4 body this reproduces (3.0, 8.0).

    Args:
        masses (Iterable[Any]): The mass configuration (any record shape
            accepted by `PointMass.from_record`).
        reference_radius (float | None): The body's surface radius, if known.
        inner (float): Inner bound as a multiple of R.
        outer (float): Outer bound as a multiple of R.

    Returns:
        Tuple[float, float]: (r_min, r_max).

    Raises:
        ValueError: If no scale can be derived (all masses at the origin and
            no reference radius) or the multipliers do not define a bracket.
    """
    if not 0 <= inner < outer:
        raise ValueError(
            f"inner and outer must satisfy 0 <= inner < outer, got {inner}, {outer}."
        )
    if reference_radius is None:
        offsets = [abs(PointMass.from_record(m).y) for m in masses]
        reference_radius = 2.0 * max(offsets, default=0.0)
        if reference_radius == 0:
            raise ValueError(
                "Cannot derive a length scale from masses that all sit at the "
                "origin. Please pass reference_radius explicitly."
            )
    return inner * reference_radius, outer * reference_radius
