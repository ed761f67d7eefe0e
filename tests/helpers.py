import math
from typing import Sequence
import numpy as np
from geoid.core.field import PotentialField
from geoid.core.mass import PointMass
def create_two_mass_field(omega: float = 0.0, **kwargs) -> PotentialField:
    return PotentialField.two_mass(omega=omega, **kwargs)
def create_single_mass_field(m: float = 1.0, y: float = 0.0, G: float = 1.0, omega: float = 0.0, **kwargs) -> PotentialField:
    return PotentialField(masses=[PointMass(y=y, m=m)], G=G, omega=omega, **kwargs)
def unit(v: Sequence[float]) -> np.ndarray:
    arr = np.asarray(v, dtype=float)
    return arr / np.linalg.norm(arr)
def random_points(n: int, scale: float = 6.0, seed: int = 0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.uniform(-scale, scale, size=(n, 3))
def random_directions(n: int, seed: int = 0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    v = rng.normal(size=(n, 3))
    return v / np.linalg.norm(v, axis=1, keepdims=True)
def potential_along(field: PotentialField, direction: Sequence[float], r: float) -> float:
    dx, dy, dz = direction
    return field.get_potential(dx * r, dy * r, dz * r)
