"""
Tests for the rotating point-mass potential in geoid.dynamics.potential.
"""
import math

import numpy as np
import pytest

from geoid.core.field import PotentialField
from geoid.dynamics import potential as pot
from tests import helpers


@pytest.mark.core
@pytest.mark.parametrize("r", [0.5, 1.0, 2.0, 5.0, 10.0])
def test_single_mass_is_newtonian(r):
    field = helpers.create_single_mass_field(m=3.0, G=1.5)
    assert pot.potential_point_masses(r, 0.0, 0.0, field) == pytest.approx(-1.5 * 3.0 / r)


@pytest.mark.core
def test_two_mass_scenario_on_axis():
    field = helpers.create_two_mass_field()
    expected = -(1.0 * 4.0 / 5.5) - (1.0 * 2.0 / 2.0)
    assert pot.potential_point_masses(0.0, 4.0, 0.0, field) == pytest.approx(expected)
    assert expected == pytest.approx(-1.7273, abs=1e-4)


@pytest.mark.core
def test_potential_returns_python_float():
    field = helpers.create_two_mass_field(omega=0.05)
    value = pot.potential_point_masses(1.0, 2.0, 3.0, field)
    assert isinstance(value, float)


@pytest.mark.core
def test_centrifugal_term_is_independent_of_height():
    field = PotentialField(masses=[], omega=0.2)
    for y in (-5.0, 0.0, 3.0):
        assert pot.potential_point_masses(3.0, y, 4.0, field) == pytest.approx(-0.5 * 0.04 * 25.0)


@pytest.mark.core
@pytest.mark.parametrize("theta", np.linspace(0.0, 2 * np.pi, 7))
def test_potential_is_symmetric_about_vertical_axis(theta):
    field = helpers.create_two_mass_field(omega=0.1)
    c, s = math.cos(theta), math.sin(theta)
    for x, y, z in helpers.random_points(20, seed=1):
        rotated = (x * c - z * s, y, x * s + z * c)
        assert pot.potential_point_masses(*rotated, field) == pytest.approx(
            pot.potential_point_masses(x, y, z, field), rel=1e-12, abs=1e-12
        )


@pytest.mark.core
@pytest.mark.parametrize("point", [
    (0.0, -1.5, 0.0),
    (0.0, -1.45, 0.0),
    (0.05, 2.0, 0.05),
    (0.0, 2.09, 0.0),
])
def test_singularity_returns_sentinel(point):
    field = helpers.create_two_mass_field(omega=0.1)
    assert pot.potential_point_masses(*point, field) == pot.SINGULARITY_POTENTIAL


@pytest.mark.core
def test_sentinel_is_deeper_than_reachable_potentials():
    field = helpers.create_two_mass_field()
    # Just outside the guard of the heavier mass
    edge = pot.potential_point_masses(0.0, -1.5 + 0.1001, 0.0, field)
    assert pot.SINGULARITY_POTENTIAL < edge


@pytest.mark.core
def test_potential_grid_matches_scalar():
    field = helpers.create_two_mass_field(omega=0.07)
    points = np.vstack([helpers.random_points(200, seed=2), [[0.0, -1.5, 0.0], [0.0, 2.05, 0.0]]])
    expected = np.array([pot.potential_point_masses(*p, field) for p in points])

    grid = pot.potential_grid(points, field)

    assert grid.shape == (len(points),)
    np.testing.assert_allclose(grid, expected, rtol=1e-12)
    assert grid[-1] == pot.SINGULARITY_POTENTIAL
    assert grid[-2] == pot.SINGULARITY_POTENTIAL


@pytest.mark.core
def test_potential_grid_without_masses():
    field = PotentialField(masses=[], omega=0.1)
    points = np.array([[1.0, 0.0, 0.0], [0.0, 5.0, 2.0]])
    np.testing.assert_allclose(pot.potential_grid(points, field), [-0.005, -0.02])
