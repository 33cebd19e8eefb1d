import numpy as np
import pytest
import xarray as xr

from lightning_nox.bounds import PatchBounds
from lightning_nox.constants import GAS_CONSTANT
from lightning_nox.profiles import ColumnProfile, horizontal_average, layer_thickness
from testing_utils import column_field, profile


def test_horizontal_average():
    data = np.arange(2 * 3 * 2, dtype=float).reshape(2, 3, 2)
    field = xr.DataArray(data, dims=["x", "z", "y"], attrs={"units": "K"})
    average = horizontal_average(field, PatchBounds.covering(field))
    expected = xr.DataArray(data.mean(axis=(0, 2)), dims=["z"], coords={"z": [0, 1, 2]})
    xr.testing.assert_allclose(average, expected)
    assert average.attrs["units"] == "K"


def test_horizontal_average_excludes_halo():
    data = np.zeros((4, 2, 4))
    data[1:3, :, 1:3] = 1.0
    field = xr.DataArray(data, dims=["x", "z", "y"])
    average = horizontal_average(field, PatchBounds.from_extents(1, 2, 0, 1, 1, 2))
    np.testing.assert_allclose(average.values, [1.0, 1.0])


def test_horizontal_average_level_coordinate():
    field = column_field([1.0, 2.0, 3.0, 4.0], nx=2, ny=2)
    average = horizontal_average(field, PatchBounds.from_extents(0, 1, 1, 3, 0, 1))
    np.testing.assert_array_equal(average["z"], [1, 2, 3])
    np.testing.assert_allclose(average.values, [2.0, 3.0, 4.0])


@pytest.mark.parametrize(
    "height, expected",
    [
        pytest.param(
            [0.0, 1000.0, 2000.0, 3000.0], [500, 1000, 1000, 500], id="uniform"
        ),
        pytest.param([0.0, 100.0, 400.0], [50, 200, 150], id="stretched"),
        pytest.param([10.0], [0.0], id="single_level"),
    ],
)
def test_layer_thickness(height, expected):
    dz = layer_thickness(profile(height))
    np.testing.assert_allclose(dz.values, expected)
    assert dz.attrs["units"] == "m"


def test_ColumnProfile_conversion_factor():
    bounds = PatchBounds.from_extents(0, 1, 0, 2, 0, 0)
    fields = [
        column_field(values, nx=2)
        for values in [[0, 1000, 2000], [250, 240, 230], [9e4, 8e4, 7e4], [1, 1, 1]]
    ]
    column = ColumnProfile.from_fields(*fields, bounds=bounds)
    conv = column.conversion_factor(dx=2000.0, dy=3000.0)
    expected = GAS_CONSTANT * np.array([250, 240, 230]) / 6e6
    np.testing.assert_allclose(conv.values, expected)
    np.testing.assert_allclose(column.layer_thickness.values, [500, 1000, 500])
