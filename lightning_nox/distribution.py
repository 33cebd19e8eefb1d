"""Truncated Gaussian vertical distributions of lightning NOx.

DeCaria, A. J., K. E. Pickering, G. L. Stenchikov, and L. E. Ott (2005),
Lightning-generated NOX and its impact on tropospheric ozone production:
A three-dimensional modeling study of a Stratosphere-Troposphere Experiment:
Radiation, Aerosols and Ozone (STERAO-A) thunderstorm, J. Geophys. Res.,
110, D14303, doi:10.1029/2004JD005556.
"""
import dataclasses

import numpy as np
import xarray as xr

from lightning_nox.names import Z_DIM
from lightning_nox.profiles import layer_thickness

# the Gaussian is truncated at this many standard deviations
TRUNCATION = 3.0


@dataclasses.dataclass(frozen=True)
class VerticalDistribution:
    """Fraction of the column total placed at each level

    Attributes:
        weights: fraction of the column at each level, zero outside of the
            distribution's level range; sums to one
        layer_thickness: thickness of each level [m]
    """

    weights: xr.DataArray
    layer_thickness: xr.DataArray

    @property
    def density(self) -> xr.DataArray:
        """Normalized distribution per unit height [1/m], integrates to one"""
        dz = self.layer_thickness
        return xr.where(dz > 0, self.weights / dz.where(dz > 0), 0.0)

    def blend(self, other: "VerticalDistribution") -> "VerticalDistribution":
        """Level-by-level average of two distributions"""
        return dataclasses.replace(self, weights=0.5 * (self.weights + other.weights))

    def pressure_weighted_sum(self, pressure: xr.DataArray, k_min: int, k_max: int):
        """Sum of weight times pressure over the levels ``k_min..k_max`` [Pa]"""
        levels = slice(k_min, k_max)
        return float(
            (self.weights.sel({Z_DIM: levels}) * pressure.sel({Z_DIM: levels})).sum()
        )


def bellcurve(
    k_min: int, k_max: int, k_mu: int, height: xr.DataArray
) -> VerticalDistribution:
    """Normal distribution between levels ``k_min`` and ``k_max`` centered at
    level ``k_mu``.

    The standard deviation is a third of the shorter distance from the mode
    to either end of the range, so the 3 sigma truncation never extends past
    the range. Each level's value is the Gaussian density at its height times
    its layer thickness, normalized over the range so the weights sum to one.

    If the standard deviation is zero (``k_mu`` at either end of the range)
    the whole column is placed at ``k_mu``.

    Args:
        k_min: lowest level of the distribution
        k_max: highest level of the distribution
        k_mu: level of the mode
        height: height of each level [m], indexed by level

    Returns:
        the distribution over all levels of ``height``
    """
    levels = height[Z_DIM].values
    if not (levels[0] <= k_min <= k_mu <= k_max <= levels[-1]):
        raise ValueError(
            f"Levels must satisfy {levels[0]} <= k_min <= k_mu <= k_max <= "
            f"{levels[-1]}, got k_min={k_min}, k_mu={k_mu} and k_max={k_max}."
        )
    dz = layer_thickness(height)
    z_mu = float(height.sel({Z_DIM: k_mu}))
    sigma = (
        min(
            float(height.sel({Z_DIM: k_max})) - z_mu,
            z_mu - float(height.sel({Z_DIM: k_min})),
        )
        / TRUNCATION
    )

    in_range = (height[Z_DIM] >= k_min) & (height[Z_DIM] <= k_max)
    if sigma > 0:
        ex = (height - z_mu) / sigma
        f = np.exp(-ex * ex / 2.0) / (np.sqrt(2.0 * np.pi) * sigma)
        mass = (f * dz).where(in_range, 0.0)
        total = float(mass.sum())
    else:
        total = 0.0

    if total > 0:
        weights = mass / total
    else:
        weights = xr.DataArray(
            np.where(levels == k_mu, 1.0, 0.0), dims=[Z_DIM], coords={Z_DIM: levels}
        )
    weights = weights.rename(None).assign_attrs(units="")
    return VerticalDistribution(weights=weights, layer_thickness=dz)
