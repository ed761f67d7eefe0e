import numpy as np
import pytest
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from geoid.visualize import ProfilePlotter
from tests import helpers

@pytest.fixture
def ax():
    fig, ax = plt.subplots()
    yield ax
    plt.close(fig)

@pytest.mark.core
def test_plot_radial_profile(ax):
    field = helpers.create_two_mass_field(omega=0.05)
    plotter = ProfilePlotter(field, n_samples=50)
    returned = plotter.plot_radial_profile(ax, np.array([1.0, 0.0, 0.0]), target_potential=-1.5)
    assert returned is ax
    # profile curve, target line and solved radius line
    assert len(ax.lines) == 3
    assert len(ax.lines[0].get_xdata()) == 50
    assert ax.get_xlabel() == "r"

@pytest.mark.core
def test_plot_radial_profile_without_target(ax):
    plotter = ProfilePlotter(helpers.create_two_mass_field())
    plotter.plot_radial_profile(ax, [0.0, 1.0, 0.0])
    assert len(ax.lines) == 1

@pytest.mark.core
def test_plot_meridian(ax):
    field = helpers.create_two_mass_field()
    ProfilePlotter(field).plot_meridian(ax, target_potential=-1.5, n_directions=37)
    radii = ax.lines[0].get_ydata()
    assert len(radii) == 37
    assert np.all((radii > 3.0) & (radii < 8.0))
