import numpy as np
import xarray as xr

from lightning_nox.bounds import PatchBounds
from lightning_nox.cells import count_cells
from lightning_nox.config import CellCountMethod
from testing_utils import ThreadGroup


def _reflectivity():
    data = np.zeros((3, 4, 2))
    data[0, 1, 0] = 35.0
    data[1, 1, 1] = 25.0
    data[2, 2, 0] = 20.0  # not strictly above threshold
    data[2, 3, 1] = 50.0
    return xr.DataArray(data, dims=["x", "z", "y"])


def test_count_cells():
    refl = _reflectivity()
    cellcount = count_cells(refl, PatchBounds.covering(refl))
    np.testing.assert_allclose(cellcount.values, [0, 2, 0, 1])
    np.testing.assert_array_equal(cellcount["z"], [0, 1, 2, 3])


def test_count_cells_threshold():
    refl = _reflectivity()
    cellcount = count_cells(refl, PatchBounds.covering(refl), threshold=10.0)
    np.testing.assert_allclose(cellcount.values, [0, 2, 1, 1])


def test_count_cells_patch_only():
    refl = _reflectivity()
    cellcount = count_cells(refl, PatchBounds.from_extents(1, 2, 1, 3, 0, 1))
    np.testing.assert_allclose(cellcount.values, [1, 0, 1])
    np.testing.assert_array_equal(cellcount["z"], [1, 2, 3])


def test_count_cells_domain_sums_subdomains():
    refl = _reflectivity()
    group = ThreadGroup(2)
    west = PatchBounds.from_extents(0, 0, 0, 3, 0, 1)
    east = PatchBounds.from_extents(1, 2, 0, 3, 0, 1)
    results = group.run(
        [
            lambda reducer: count_cells(
                refl, west, method=CellCountMethod.DOMAIN, reducer=reducer
            ),
            lambda reducer: count_cells(
                refl, east, method=CellCountMethod.DOMAIN, reducer=reducer
            ),
        ]
    )
    for cellcount in results:
        np.testing.assert_allclose(cellcount.values, [0, 2, 0, 1])
