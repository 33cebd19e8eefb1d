import numpy as np
import pytest
import xarray as xr

from lightning_nox.bounds import IndexRange, PatchBounds


def test_IndexRange():
    index_range = IndexRange(2, 5)
    assert index_range.size == 4
    np.testing.assert_array_equal(index_range.levels, [2, 3, 4, 5])
    assert 5 in index_range
    assert 6 not in index_range


def test_IndexRange_invalid():
    with pytest.raises(ValueError):
        IndexRange(3, 2)


def test_PatchBounds_select_halo():
    field = xr.DataArray(np.arange(5 * 4 * 6).reshape(5, 4, 6), dims=["x", "z", "y"])
    bounds = PatchBounds.from_extents(1, 3, 1, 2, 2, 4)
    patch = bounds.select(field)
    assert patch.sizes == {"x": 3, "z": 2, "y": 3}
    np.testing.assert_array_equal(patch["z"], [1, 2])
    np.testing.assert_array_equal(patch.values, field.values[1:4, 1:3, 2:5])


def test_PatchBounds_select_2d():
    field = xr.DataArray(np.ones((5, 6)), dims=["y", "x"])
    bounds = PatchBounds.from_extents(0, 1, 0, 9, 0, 2)
    assert bounds.select(field).sizes == {"y": 3, "x": 2}


def test_PatchBounds_covering():
    field = xr.DataArray(np.zeros((2, 7, 3)), dims=["x", "z", "y"])
    bounds = PatchBounds.covering(field)
    assert bounds == PatchBounds.from_extents(0, 1, 0, 6, 0, 2)
    assert bounds.horizontal_size == 6


@pytest.mark.parametrize(
    "extents",
    [
        pytest.param((0, 2, 0, 3, 0, 2), id="x_too_large"),
        pytest.param((0, 1, 0, 7, 0, 2), id="z_too_large"),
        pytest.param((-1, 1, 0, 3, 0, 2), id="negative_start"),
    ],
)
def test_PatchBounds_select_outside(extents):
    field = xr.DataArray(np.zeros((2, 7, 3)), dims=["x", "z", "y"])
    with pytest.raises(ValueError):
        PatchBounds.from_extents(*extents).select(field)


def test_PatchBounds_select_missing_horizontal_dim():
    field = xr.DataArray(np.zeros((2, 7)), dims=["x", "z"])
    with pytest.raises(ValueError):
        PatchBounds.from_extents(0, 1, 0, 6, 0, 0).select(field)
