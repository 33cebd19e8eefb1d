"""Conversion of lightning flash rates into vertically distributed NOx tendencies
following DeCaria et al. (2000, 2005).

The tendencies are in ppmv/s; the caller multiplies them by the time step to
increment the NO concentration.
"""
import logging
from typing import Callable, Optional, Tuple

import numpy as np
import xarray as xr

from lightning_nox.bounds import PatchBounds
from lightning_nox.boundaries import VerticalBoundaries, find_vertical_boundaries
from lightning_nox.cells import count_cells
from lightning_nox.config import CellCountMethod, LightningNOxConfig
from lightning_nox.constants import PPMV_PER_MIXING_RATIO
from lightning_nox.diagnostics import compute_diagnostics
from lightning_nox.distribution import VerticalDistribution, bellcurve
from lightning_nox.names import (
    CG_FLASH_RATE,
    CG_TENDENCY,
    DENSITY,
    HEIGHT,
    IC_FLASH_RATE,
    IC_TENDENCY,
    PRESSURE,
    REFLECTIVITY,
    REQUIRED_INPUTS,
    TEMP,
    Z_DIM,
)
from lightning_nox.profiles import ColumnProfile
from lightning_nox.reduction import LocalReducer, Reducer
from lightning_nox.types import Diagnostics, State, Tendencies

logger = logging.getLogger(__name__)

CellCounter = Callable[..., xr.DataArray]


def _zero_tendency(reflectivity: xr.DataArray, long_name: str) -> xr.DataArray:
    tendency = xr.zeros_like(reflectivity, dtype=float)
    tendency.attrs = {"units": "ppmv/s", "long_name": long_name}
    return tendency


class DecariaLightningNOx:

    label = "lightning_nox_decaria"

    def __init__(
        self,
        config: LightningNOxConfig,
        reducer: Optional[Reducer] = None,
        cell_counter: CellCounter = count_cells,
        log: Optional[logging.Logger] = None,
    ):
        """Create the DeCaria lightning NOx scheme

        Args:
            config: scheme constants
            reducer: collective reductions across subdomains, used when
                ``config.cellcount_method`` is ``CellCountMethod.DOMAIN``.
                Defaults to reductions over this subdomain only.
            cell_counter: function with the signature of ``count_cells``
                returning the convective cell count of each level
            log: receives diagnostic messages, defaults to the module logger
        """
        self.config = config
        self._reducer = reducer or LocalReducer()
        self._cell_counter = cell_counter
        self._log = log or logger

    @property
    def _method(self) -> CellCountMethod:
        return CellCountMethod(self.config.cellcount_method)

    def _total_flash_rate(self, flash_rate: xr.DataArray, bounds: PatchBounds):
        total = float(bounds.select(flash_rate).sum())
        if self._method.is_global:
            total = self._reducer.sum(total)
        return total

    def __call__(
        self,
        state: State,
        dx: float,
        dy: float,
        bounds: Optional[PatchBounds] = None,
    ) -> Tuple[Tendencies, Diagnostics]:
        """Compute the IC and CG lightning NOx tendencies of the local patch

        Args:
            state: 3-D air temperature [K], air pressure [Pa], air density
                [kg/m^3], height [m] and reflectivity [dBZ] and 2-D IC and CG
                flash rates [#/s], see ``lightning_nox.names``
            dx, dy: horizontal grid spacing [m]
            bounds: extents of the local patch within the fields of ``state``,
                defaults to the whole extent of the reflectivity field

        Returns:
            tendencies: NOx tendencies [ppmv/s] over the patch
            diagnostics: scalar diagnostics of the column
        """
        missing = [name for name in REQUIRED_INPUTS if name not in state]
        if missing:
            raise KeyError(f"State is missing required lightning NOx inputs {missing}")
        refl = state[REFLECTIVITY]
        bounds = bounds or PatchBounds.covering(refl)
        refl_patch = bounds.select(refl)

        ic_tend = _zero_tendency(refl_patch, "lightning NOx tendency from IC flashes")
        cg_tend = _zero_tendency(refl_patch, "lightning NOx tendency from CG flashes")

        cellcount = self._cell_counter(
            refl,
            bounds,
            threshold=self.config.reflectivity_threshold,
            method=self._method,
            reducer=self._reducer,
        )
        ic_fr = self._total_flash_rate(state[IC_FLASH_RATE], bounds)
        cg_fr = self._total_flash_rate(state[CG_FLASH_RATE], bounds)
        self._log.debug(
            "LNOx: max_refl, max_cellcount, ic_fr = %g, %g, %g",
            float(refl_patch.max()),
            float(cellcount.max()),
            ic_fr,
        )

        profile = ColumnProfile.from_fields(
            state[HEIGHT], state[TEMP], state[PRESSURE], state[DENSITY], bounds
        )
        conv = profile.conversion_factor(dx, dy)

        boundaries = find_vertical_boundaries(
            cellcount,
            profile.temperature,
            self.config.ltng_temp_upper,
            self.config.ltng_temp_lower,
            method=self._method,
            reducer=self._reducer,
            log=self._log,
        )
        ktop, kbtm = boundaries.ktop, boundaries.kbtm

        if ic_fr > 0 and boundaries.brackets_lower_isotherm:
            distribution = bellcurve(kbtm, ktop, boundaries.klower, profile.height)
            if ktop > boundaries.kupper:
                distribution = distribution.blend(
                    bellcurve(kbtm, ktop, boundaries.kupper, profile.height)
                )
            ic_tend = self._distribute(
                ic_fr * self.config.n_ic,
                distribution,
                boundaries,
                kbtm,
                cellcount,
                profile.pressure,
                conv,
                refl_patch,
                ic_tend,
            )

        # CG NOx is distributed from the ground up, with a single mode
        if cg_fr > 0 and boundaries.brackets_lower_isotherm:
            distribution = bellcurve(
                bounds.z.start, ktop, boundaries.klower, profile.height
            )
            cg_tend = self._distribute(
                cg_fr * self.config.n_cg,
                distribution,
                boundaries,
                bounds.z.start,
                cellcount,
                profile.pressure,
                conv,
                refl_patch,
                cg_tend,
            )

        tendencies: Tendencies = {IC_TENDENCY: ic_tend, CG_TENDENCY: cg_tend}
        diagnostics = compute_diagnostics(
            refl_patch, cellcount, ic_fr, cg_fr, boundaries
        )
        return tendencies, diagnostics

    def _distribute(
        self,
        production_rate: float,
        distribution: VerticalDistribution,
        boundaries: VerticalBoundaries,
        k_start: int,
        cellcount: xr.DataArray,
        pressure: xr.DataArray,
        conv: xr.DataArray,
        refl_patch: xr.DataArray,
        tendency: xr.DataArray,
    ) -> xr.DataArray:
        """Spread ``production_rate`` [mol/s] over the levels ``k_start..ktop``
        of the convective cells.

        Each level receives its distribution weight, divided equally among its
        convective cells. Cells with reflectivity at or below the threshold
        keep their existing tendency.
        """
        b_denom = distribution.pressure_weighted_sum(
            pressure, boundaries.kbtm, boundaries.ktop
        )
        if not np.isfinite(b_denom) or b_denom <= 0:
            self._log.warning(
                "LNOx: non-positive pressure weighted distribution (%g) between "
                "levels %d and %d, no NOx is produced",
                b_denom,
                boundaries.kbtm,
                boundaries.ktop,
            )
            return tendency

        levels = {Z_DIM: slice(k_start, boundaries.ktop)}
        count = cellcount.sel(levels)
        count = count.where(count > 0)
        delta = (
            (production_rate / count)
            * distribution.weights.sel(levels)
            / b_denom
            * conv.sel(levels)
            / distribution.layer_thickness.sel(levels)
            * PPMV_PER_MIXING_RATIO
        )
        delta = delta.reindex({Z_DIM: refl_patch[Z_DIM].values})
        active = (refl_patch > self.config.reflectivity_threshold) & delta.notnull()
        updated = xr.where(active, delta, tendency).transpose(*tendency.dims)
        return updated.assign_attrs(tendency.attrs)

    def tendency_diagnostics(self, tendencies: Tendencies) -> Diagnostics:
        """Maximum of each lightning NOx tendency [ppmv/s]"""
        return {
            f"{name}_max": xr.DataArray(float(tendencies[name].max()))
            for name in [IC_TENDENCY, CG_TENDENCY]
        }


def lightning_nox_decaria(
    dx: float,
    dy: float,
    xland: Optional[xr.DataArray],
    ht: Optional[xr.DataArray],
    t: xr.DataArray,
    rho: xr.DataArray,
    z: xr.DataArray,
    p: xr.DataArray,
    ic_flashrate: xr.DataArray,
    cg_flashrate: xr.DataArray,
    refl: xr.DataArray,
    n_ic: float,
    n_cg: float,
    ltng_temp_upper: float,
    ltng_temp_lower: float,
    cellcount_method: int,
    bounds: Optional[PatchBounds] = None,
    reducer: Optional[Reducer] = None,
    cell_counter: CellCounter = count_cells,
) -> Tuple[xr.DataArray, xr.DataArray]:
    """Lightning NOx tendencies with the call contract of the WRF LNOx driver.

    ``xland`` and ``ht`` are accepted for compatibility with the driver and are
    not used.

    Returns:
        IC and CG NOx tendencies [ppmv/s] over the patch
    """
    config = LightningNOxConfig(
        n_ic=n_ic,
        n_cg=n_cg,
        ltng_temp_upper=ltng_temp_upper,
        ltng_temp_lower=ltng_temp_lower,
        cellcount_method=CellCountMethod(cellcount_method),
    )
    state: State = {
        TEMP: t,
        DENSITY: rho,
        HEIGHT: z,
        PRESSURE: p,
        IC_FLASH_RATE: ic_flashrate,
        CG_FLASH_RATE: cg_flashrate,
        REFLECTIVITY: refl,
    }
    scheme = DecariaLightningNOx(config, reducer=reducer, cell_counter=cell_counter)
    tendencies, _ = scheme(state, dx, dy, bounds=bounds)
    return tendencies[IC_TENDENCY], tendencies[CG_TENDENCY]
