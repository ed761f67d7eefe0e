"""
ProfilePlotter: diagnostic plots of the potential along rays and of the
solved surface along a meridian.
"""
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np
from numpy.typing import NDArray

from ..core.field import PotentialField
from ..dynamics.potential import potential_grid
from ..geometry.directions import meridian_directions, normalize, polar_angles
from ..measure.classification import DISK_RADIUS


class ProfilePlotter:
    """
    Plots radial potential profiles and meridian cross-sections of a field.
    All methods draw onto a caller-supplied matplotlib Axes.
    """
    def __init__(self, field: PotentialField, n_samples: int = 200):
        self.field = field
        self.n_samples = n_samples

    def plot_radial_profile(
        self,
        ax: plt.Axes,
        direction: NDArray[np.float64],
        target_potential: Optional[float] = None,
        r_max: Optional[float] = None,
        **kwargs,
    ) -> plt.Axes:
        """
        Plots V(r) along a ray, shading the bisection bracket.

        Args:
            ax (plt.Axes): matplotlib axes object.
            direction (NDArray[np.float64]): Direction of the ray.
            target_potential (Optional[float]): If given, drawn as a
                horizontal line together with the solved radius.
            r_max (Optional[float]): Outer plot limit. Defaults to 1.5x the
                bracket's outer bound.
            **kwargs: Passed to `ax.plot` for the profile curve.

        Returns:
            plt.Axes: The same axes, for chaining.
        """
        d = normalize(direction)
        r_max = r_max if r_max is not None else 1.5 * self.field.r_max
        # Start just outside the singularity guard so the sentinel does not flatten the plot
        radii = np.linspace(0.2, r_max, self.n_samples)
        potentials = potential_grid(radii[:, np.newaxis] * d[np.newaxis, :], self.field)

        ax.plot(radii, potentials, label="V(r)", **kwargs)
        ax.axvspan(self.field.r_min, self.field.r_max, color="grey", alpha=0.15, label="bracket")

        if target_potential is not None:
            r_solved = self.field.solve_radius(*d, target_potential)
            ax.axhline(target_potential, color="tab:blue", linestyle="--", linewidth=1, label="target")
            ax.axvline(r_solved, color="tab:red", linestyle=":", linewidth=1, label=f"r = {r_solved:.3f}")

        ax.set_xlabel("r")
        ax.set_ylabel("potential")
        ax.set_title(f"Radial profile along {np.round(d, 3)}", fontsize=12)
        ax.legend(loc="best", fontsize=8)
        return ax

    def plot_meridian(
        self,
        ax: plt.Axes,
        target_potential: float,
        n_directions: int = 181,
        **kwargs,
    ) -> plt.Axes:
        """
        Plots the solved surface radius against the polar angle from the north pole.

        Args:
            ax (plt.Axes): matplotlib axes object.
            target_potential (float): The potential of the surface.
            n_directions (int): Number of meridian directions.
            **kwargs: Passed to `ax.plot`.

        Returns:
            plt.Axes: The same axes, for chaining.
        """
        dirs = meridian_directions(n_directions)
        radii = self.field.solve_surface(dirs, target_potential)
        angles = np.degrees(polar_angles(dirs))

        ax.plot(angles, radii, **kwargs)
        ax.axhline(DISK_RADIUS, color="cyan", linestyle="--", linewidth=1, label="disk radius")
        ax.set_xlim(0, 180)
        ax.set_xlabel("polar angle (deg)")
        ax.set_ylabel("surface radius")
        ax.set_title(f"Meridian of V = {target_potential:.3f} (omega = {self.field.omega:.3f})", fontsize=12)
        ax.legend(loc="best", fontsize=8)
        return ax
