"""
Functional tests for the surface analysis workflow.
"""
import numpy as np
import pytest

from geoid.measure.sea_level import SeaLevel
from geoid.workflows.analysis import SurfaceAnalysis, bracket_validity, run_surface_analysis
from tests import helpers

COLUMNS = ['dx', 'dy', 'dz', 'radius', 'x', 'y', 'z', 'nx', 'ny', 'nz', 'residual', 'bracket_valid', 'in_disk']


@pytest.mark.core
def test_default_two_mass_surface_is_an_ocean():
    field = helpers.create_two_mass_field()
    result = run_surface_analysis(field, n_directions=256, verbose=False)

    assert isinstance(result, SurfaceAnalysis)
    assert list(result.table.columns) == COLUMNS
    assert len(result.table) == 256
    assert result.target_potential == pytest.approx(SeaLevel.for_field(field).default)
    assert result.regime == "ocean"
    assert result.valid_fraction == 1.0
    assert np.all(np.abs(result.table['residual']) < 1e-3)
    assert np.all((result.table['radius'] > 3.0) & (result.table['radius'] < 6.0))


@pytest.mark.core
def test_normals_are_unit_and_point_outwards():
    field = helpers.create_two_mass_field(omega=0.02)
    result = run_surface_analysis(field, target_potential=-1.5, n_directions=128, verbose=False)

    np.testing.assert_allclose(np.linalg.norm(result.normals, axis=1), 1.0)
    # Outward: normals and ray directions agree in sign
    dots = np.sum(result.normals * result.table[['dx', 'dy', 'dz']].to_numpy(), axis=1)
    assert np.all(dots > 0)
    # The first Fibonacci direction is the north pole
    assert result.table['ny'].iloc[0] > 0.99
    np.testing.assert_allclose(
        result.points, result.table[['dx', 'dy', 'dz']].to_numpy() * result.table[['radius']].to_numpy()
    )


@pytest.mark.core
def test_fast_rotation_with_shallow_sea_makes_an_accretion_disk():
    field = helpers.create_two_mass_field(omega=0.15)
    result = run_surface_analysis(field, target_potential=-1.3, n_directions=512, verbose=False)

    assert result.regime == "accretion_disk"
    assert result.table['in_disk'].any()
    assert result.valid_fraction < 1.0
    # The equatorial rays cannot reach the target and pile up on the outer bound
    equator = result.table[np.abs(result.table['dy']) < 0.05]
    assert np.all(equator['radius'] > 7.9)
    assert not equator['bracket_valid'].any()


@pytest.mark.core
def test_explicit_directions_are_normalised():
    field = helpers.create_single_mass_field(m=8.0)
    target = field.get_potential(4.0, 0.0, 0.0)
    directions = np.array([[2.0, 0.0, 0.0], [0.0, 0.0, -5.0]])
    result = run_surface_analysis(field, target_potential=target, directions=directions, verbose=False)

    np.testing.assert_allclose(result.table['radius'], 4.0, atol=1e-3)
    np.testing.assert_allclose(result.table[['dx', 'dy', 'dz']].to_numpy(), [[1, 0, 0], [0, 0, -1]])


@pytest.mark.core
def test_verbose_output(capsys):
    run_surface_analysis(helpers.create_two_mass_field(), n_directions=32)
    out = capsys.readouterr().out
    assert "Solving surface" in out
    assert "Surface regime: ocean" in out


@pytest.mark.consistency
def test_bracket_validity_matches_solver_diagnostic():
    field = helpers.create_two_mass_field(omega=0.15)
    directions = helpers.random_directions(20, seed=11)
    solver = field.solver()

    vectorised = bracket_validity(field, directions, -1.3, n_samples=64)
    scalar = [solver.check_bracket(d, -1.3, n_samples=64).valid for d in directions]

    np.testing.assert_array_equal(vectorised, scalar)


@pytest.mark.consistency
def test_backend_override_uses_jax():
    pytest.importorskip("jax")
    field = helpers.create_two_mass_field()
    result_np = run_surface_analysis(field, target_potential=-1.5, n_directions=64, verbose=False)
    result_jax = run_surface_analysis(field, target_potential=-1.5, n_directions=64, backend='jax', verbose=False)

    assert field.backend == 'numpy'
    np.testing.assert_allclose(result_jax.table['radius'], result_np.table['radius'], atol=1e-3)
