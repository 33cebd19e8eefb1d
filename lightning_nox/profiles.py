import dataclasses

import numpy as np
import xarray as xr

from lightning_nox.bounds import PatchBounds
from lightning_nox.constants import GAS_CONSTANT
from lightning_nox.names import HORIZONTAL_DIMS, Z_DIM


def horizontal_average(field: xr.DataArray, bounds: PatchBounds) -> xr.DataArray:
    """Average a 3-D field over the horizontal extent of the local patch.

    No reduction across subdomains is performed.

    Args:
        field: 3-D field with dimensions x, y and z
        bounds: extents of the local patch within ``field``

    Returns:
        profile over z whose ``z`` coordinate holds the level indices kps..kpe
    """
    patch = bounds.select(field)
    total = patch.sum(HORIZONTAL_DIMS)
    return (total / bounds.horizontal_size).assign_attrs(field.attrs)


def layer_thickness(height: xr.DataArray) -> xr.DataArray:
    """Thickness assigned to each level of a height profile [m]

    Interior levels use half the distance between their neighbors; the first
    and last levels use half the distance to their single neighbor.
    """
    z = np.asarray(height.values, dtype=float)
    dz = np.zeros_like(z)
    if z.size > 1:
        dz[0] = (z[1] - z[0]) * 0.5
        dz[-1] = (z[-1] - z[-2]) * 0.5
        dz[1:-1] = (z[2:] - z[:-2]) * 0.5
    return xr.DataArray(
        dz, dims=[Z_DIM], coords={Z_DIM: height[Z_DIM].values}, attrs={"units": "m"}
    )


@dataclasses.dataclass
class ColumnProfile:
    """Horizontally averaged thermodynamic profile of the local patch

    Attributes:
        height: height of each level [m]
        temperature: [K]
        pressure: [Pa]
        density: [kg/m^3]
    """

    height: xr.DataArray
    temperature: xr.DataArray
    pressure: xr.DataArray
    density: xr.DataArray

    @classmethod
    def from_fields(
        cls,
        height: xr.DataArray,
        temperature: xr.DataArray,
        pressure: xr.DataArray,
        density: xr.DataArray,
        bounds: PatchBounds,
    ) -> "ColumnProfile":
        return cls(
            height=horizontal_average(height, bounds),
            temperature=horizontal_average(temperature, bounds),
            pressure=horizontal_average(pressure, bounds),
            density=horizontal_average(density, bounds),
        )

    @property
    def layer_thickness(self) -> xr.DataArray:
        return layer_thickness(self.height)

    def conversion_factor(self, dx: float, dy: float) -> xr.DataArray:
        """R T / (dx dy) [J/mol/m^2], converts moles of NO in a column into a
        mixing ratio tendency once divided by pressure and layer thickness
        """
        conv = GAS_CONSTANT * self.temperature / (dx * dy)
        return conv.assign_attrs(units="J/mol/m^2")
