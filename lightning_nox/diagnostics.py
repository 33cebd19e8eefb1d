from typing import Optional

import xarray as xr

from lightning_nox.boundaries import VerticalBoundaries
from lightning_nox.constants import PPMV_PER_MIXING_RATIO
from lightning_nox.names import HORIZONTAL_DIMS
from lightning_nox.profiles import ColumnProfile
from lightning_nox.types import Diagnostics


def nox_production_rate(
    tendency: xr.DataArray, profile: ColumnProfile, dx: float, dy: float
) -> float:
    """Moles of NO per second added to the patch by a tendency.

    Inverts the conversion of the lightning NOx tendency, using the horizontally
    averaged pressure and temperature of each level.

    Args:
        tendency: NOx tendency over the patch [ppmv/s], indexed by level
        profile: horizontally averaged profile of the patch
        dx, dy: horizontal grid spacing [m]

    Returns:
        NO production rate [mol/s]
    """
    moles_of_air = (
        profile.pressure * profile.layer_thickness / profile.conversion_factor(dx, dy)
    )
    level_total = tendency.sum(HORIZONTAL_DIMS) * moles_of_air
    return float(level_total.sum()) / PPMV_PER_MIXING_RATIO


def compute_diagnostics(
    reflectivity: xr.DataArray,
    cellcount: xr.DataArray,
    ic_flash_rate: float,
    cg_flash_rate: float,
    boundaries: Optional[VerticalBoundaries] = None,
) -> Diagnostics:
    diags: Diagnostics = {
        "max_reflectivity": xr.DataArray(
            float(reflectivity.max()), attrs={"units": "dBZ"}
        ),
        "max_cellcount": xr.DataArray(float(cellcount.max()), attrs={"units": ""}),
        "total_ic_flash_rate": xr.DataArray(ic_flash_rate, attrs={"units": "#/s"}),
        "total_cg_flash_rate": xr.DataArray(cg_flash_rate, attrs={"units": "#/s"}),
    }
    if boundaries is not None:
        for name in ["ktop", "kbtm", "kupper", "klower"]:
            diags[name] = xr.DataArray(getattr(boundaries, name))
    return diags
