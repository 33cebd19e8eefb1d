from typing import Optional

import numpy as np
import xarray as xr

from lightning_nox.bounds import PatchBounds
from lightning_nox.config import CellCountMethod
from lightning_nox.constants import REFLECTIVITY_THRESHOLD
from lightning_nox.names import HORIZONTAL_DIMS
from lightning_nox.reduction import LocalReducer, Reducer


def count_cells(
    reflectivity: xr.DataArray,
    bounds: PatchBounds,
    threshold: float = REFLECTIVITY_THRESHOLD,
    method: CellCountMethod = CellCountMethod.PATCH,
    reducer: Optional[Reducer] = None,
) -> xr.DataArray:
    """Count the grid cells of each level belonging to a convective cell.

    Args:
        reflectivity: 3-D radar reflectivity [dBZ]
        bounds: extents of the local patch within ``reflectivity``
        threshold: cells with reflectivity strictly above this are counted
        method: with ``CellCountMethod.DOMAIN`` the counts of every level are
            summed over all subdomains
        reducer: collective reductions, required for ``DOMAIN`` counts

    Returns:
        cell count profile over z, indexed by level kps..kpe
    """
    patch = bounds.select(reflectivity)
    cellcount = (patch > threshold).sum(HORIZONTAL_DIMS).astype(float)
    if CellCountMethod(method).is_global:
        reducer = reducer or LocalReducer()
        cellcount = cellcount.copy(
            data=np.array([reducer.sum(value) for value in cellcount.values])
        )
    return cellcount.assign_attrs(units="")
