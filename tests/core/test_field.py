"""
Unit tests for the PotentialField class in geoid.core.field.
"""
import warnings

import numpy as np
import pytest

from geoid.core.field import PotentialField, characteristic_bracket, default_masses
from geoid.core.mass import PointMass
from geoid.dynamics.solvers import RadiusSolver
from tests import helpers


@pytest.mark.core
def test_field_defaults():
    field = PotentialField()

    assert field.masses == [PointMass(y=-1.5, m=4.0), PointMass(y=2.0, m=2.0)]
    assert field.G == 1.0
    assert field.omega == 0.0
    assert (field.r_min, field.r_max) == (3.0, 8.0)
    assert field.iterations == 15
    assert field.backend == "numpy"
    assert field.total_mass == pytest.approx(6.0)


@pytest.mark.core
def test_default_masses_are_fresh_lists():
    a = PotentialField()
    b = PotentialField()
    a.set_masses([(0.0, 1.0)])
    assert len(b.masses) == 2
    assert default_masses() == b.masses


@pytest.mark.core
def test_masses_are_coerced_from_records():
    field = PotentialField(masses=[{"y": 0.0, "m": 8}, (1.0, 2.0)])
    assert field.masses == [PointMass(y=0.0, m=8.0), PointMass(y=1.0, m=2.0)]


@pytest.mark.core
def test_set_masses_replaces_wholesale():
    field = helpers.create_two_mass_field()
    field.set_masses([{"y": 0.0, "m": 8.0}])

    assert field.masses == [PointMass(y=0.0, m=8.0)]
    assert field.get_potential(4.0, 0.0, 0.0) == pytest.approx(-2.0)


@pytest.mark.core
def test_assigned_masses_are_coerced_from_records():
    field = PotentialField()
    field.masses = [{"y": 0.0, "m": 8.0}]

    assert field.masses == [PointMass(y=0.0, m=8.0)]
    assert field.get_potential(4.0, 0.0, 0.0) == pytest.approx(-2.0)
    np.testing.assert_allclose(field.get_gradient(4.0, 0.0, 0.0), [0.5, 0.0, 0.0])


@pytest.mark.core
def test_with_backend_copies_without_revalidating_masses():
    with pytest.warns(UserWarning, match="non-positive mass"):
        field = PotentialField(masses=[(0.0, 8.0), (0.5, -0.01)], omega=0.02)

    with warnings.catch_warnings():
        warnings.filterwarnings("error", message=".*non-positive mass")
        clone = field.with_backend("numpy")

    assert clone is not field
    assert clone.masses == field.masses
    assert clone.omega == field.omega
    assert isinstance(clone.solver(), RadiusSolver)

    clone.set_masses([(0.0, 1.0)])
    assert len(field.masses) == 2


@pytest.mark.validation
def test_with_backend_rejects_unknown_backend():
    with pytest.raises(ValueError, match="Unsupported backend"):
        PotentialField().with_backend("torch")


@pytest.mark.core
def test_set_rotation_changes_queries():
    field = helpers.create_single_mass_field(m=8.0)
    before = field.get_potential(4.0, 0.0, 0.0)
    field.set_rotation(0.1)

    assert field.omega == 0.1
    assert field.get_potential(4.0, 0.0, 0.0) == pytest.approx(before - 0.5 * 0.01 * 16.0)


@pytest.mark.core
def test_mass_arrays():
    ys, ms = helpers.create_two_mass_field().mass_arrays()
    np.testing.assert_allclose(ys, [-1.5, 2.0])
    np.testing.assert_allclose(ms, [4.0, 2.0])


@pytest.mark.core
def test_presets():
    sphere = PotentialField.sphere()
    assert sphere.masses == [PointMass(y=0.0, m=8.0)]
    assert sphere.omega == 0.02

    egg = PotentialField.egg(radius=4.0, taper=0.2)
    assert len(egg.masses) == 20
    assert egg.total_mass == pytest.approx(10.0)

    two = PotentialField.two_mass(omega=0.03, r_max=9.0)
    assert two.omega == 0.03
    assert two.r_max == 9.0


@pytest.mark.core
def test_set_bracket():
    field = helpers.create_two_mass_field()
    field.set_bracket(2.0, 10.0)
    assert (field.r_min, field.r_max) == (2.0, 10.0)
    with pytest.raises(ValueError, match="bisection bracket"):
        field.set_bracket(5.0, 5.0)


@pytest.mark.validation
@pytest.mark.parametrize("kwargs, expected_error", [
    ({"r_min": 8.0, "r_max": 3.0}, "bisection bracket"),
    ({"r_min": -1.0}, "bisection bracket"),
    ({"iterations": 0}, "iterations must be at least 1"),
    ({"G": -1.0}, "G must be non-negative"),
    ({"backend": "torch"}, "Unsupported backend"),
])
def test_field_validation(kwargs, expected_error):
    with pytest.raises(ValueError, match=expected_error):
        PotentialField(**kwargs)


@pytest.mark.core
class TestFieldBackendSelection:
    """Tests the dynamic backend selection logic."""

    def test_backend_numpy_selection(self):
        field = PotentialField(backend="numpy")
        assert field._solver_class is RadiusSolver
        solver = field.solver()
        assert isinstance(solver, RadiusSolver)
        assert solver.field is field

    def test_backend_jax_selection(self):
        pytest.importorskip("jax")
        from geoid.dynamics_jax.solvers_jax import RadiusSolverJax

        field = PotentialField(backend="jax")
        assert field._solver_class is RadiusSolverJax


@pytest.mark.core
def test_solver_follows_field_by_reference():
    field = helpers.create_single_mass_field(m=8.0)
    solver = field.solver()
    target = field.get_potential(4.0, 0.0, 0.0)
    assert solver.solve(np.array([1.0, 0.0, 0.0]), target) == pytest.approx(4.0, abs=1e-3)

    # Heavier mass: the same potential now lies further out
    field.set_masses([PointMass(y=0.0, m=10.0)])
    assert solver.solve(np.array([1.0, 0.0, 0.0]), target) == pytest.approx(5.0, abs=1e-3)


@pytest.mark.core
@pytest.mark.parametrize("masses, reference_radius, expected", [
    (default_masses(), None, (3.0, 8.0)),
    ([PointMass(y=0.0, m=8.0)], 4.0, (3.0, 8.0)),
    ([(-1.0, 1.0), (3.0, 1.0)], None, (4.5, 12.0)),
])
def test_characteristic_bracket(masses, reference_radius, expected):
    assert characteristic_bracket(masses, reference_radius) == pytest.approx(expected)


@pytest.mark.validation
def test_characteristic_bracket_needs_a_scale():
    with pytest.raises(ValueError, match="reference_radius"):
        characteristic_bracket([PointMass(y=0.0, m=8.0)])
    with pytest.raises(ValueError, match="inner < outer"):
        characteristic_bracket(default_masses(), inner=2.0, outer=1.0)
