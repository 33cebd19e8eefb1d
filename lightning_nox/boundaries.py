import dataclasses
import logging
from typing import Optional

import numpy as np
import xarray as xr

from lightning_nox.config import CellCountMethod
from lightning_nox.constants import FREEZING_TEMPERATURE
from lightning_nox.names import Z_DIM
from lightning_nox.reduction import LocalReducer, Reducer

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class VerticalBoundaries:
    """Vertical level indices bounding the lightning NOx distribution

    Attributes:
        ktop: highest level with convective cells (reflectivity cloud top)
        kbtm: lowest level with convective cells (reflectivity cloud bottom)
        kupper: level of the upper (cold) mode isotherm
        klower: level of the lower (warm) mode isotherm
    """

    ktop: int
    kbtm: int
    kupper: int
    klower: int

    @property
    def brackets_lower_isotherm(self) -> bool:
        """Whether the cloud extends below and above the lower mode isotherm"""
        return self.kbtm < self.klower < self.ktop

    def reconcile(self, reducer: Reducer) -> "VerticalBoundaries":
        """Combine the boundaries of all subdomains: the lowest cloud bottom and
        the highest of the other three levels"""
        return VerticalBoundaries(
            ktop=int(np.rint(reducer.max(float(self.ktop)))),
            kbtm=int(np.rint(reducer.min(float(self.kbtm)))),
            kupper=int(np.rint(reducer.max(float(self.kupper)))),
            klower=int(np.rint(reducer.max(float(self.klower)))),
        )


def _first_level_at_or_below(
    temperature: np.ndarray, threshold: float, start: int
) -> int:
    k = start
    while temperature[k] > threshold and k < temperature.size - 1:
        k += 1
    return k


def find_vertical_boundaries(
    cellcount: xr.DataArray,
    temperature: xr.DataArray,
    ltng_temp_upper: float,
    ltng_temp_lower: float,
    method: CellCountMethod = CellCountMethod.PATCH,
    reducer: Optional[Reducer] = None,
    log: Optional[logging.Logger] = None,
) -> VerticalBoundaries:
    """Find the cloud top and bottom and the two mode isotherms of a column.

    Levels are scanned upward (increasing index is increasing altitude) and
    scans never pass the top level of the profile. The isotherm scans assume
    temperature decreases with height; a temperature inversion above the
    first crossing is not detected.

    Args:
        cellcount: convective cell count of each level, indexed by level
        temperature: horizontally averaged temperature [K], same levels
        ltng_temp_upper: upper mode isotherm [degC]
        ltng_temp_lower: lower mode isotherm [degC]
        method: with ``CellCountMethod.DOMAIN`` the boundaries are reconciled
            over all subdomains
        reducer: collective reductions, required for ``DOMAIN`` boundaries
        log: receives the boundaries found at debug level, defaults to the
            module logger

    Returns:
        boundaries as absolute level indices within kps..kpe. Without any
        convective cell, ``ktop`` is kps.
    """
    log = log or logger
    levels = cellcount[Z_DIM].values
    kps = int(levels[0])
    counts = np.asarray(cellcount.values)
    t = np.asarray(temperature.sel({Z_DIM: levels}).values)
    top = counts.size - 1

    k = top
    while counts[k] == 0 and k > 0:
        k -= 1
    ktop = k

    k = 0
    while k <= ktop and counts[k] == 0:
        k += 1
    kbtm = min(k, top)

    klower = _first_level_at_or_below(t, ltng_temp_lower + FREEZING_TEMPERATURE, 0)
    kupper = _first_level_at_or_below(
        t, ltng_temp_upper + FREEZING_TEMPERATURE, klower
    )

    boundaries = VerticalBoundaries(
        ktop=kps + ktop, kbtm=kps + kbtm, kupper=kps + kupper, klower=kps + klower
    )
    log.debug(
        "LNOx: kbtm, ktop, klower, kupper = %d, %d, %d, %d",
        boundaries.kbtm,
        boundaries.ktop,
        boundaries.klower,
        boundaries.kupper,
    )

    if CellCountMethod(method).is_global:
        boundaries = boundaries.reconcile(reducer or LocalReducer())
        log.debug(
            "LNOx: reconciled kbtm, ktop, klower, kupper = %d, %d, %d, %d",
            boundaries.kbtm,
            boundaries.ktop,
            boundaries.klower,
            boundaries.kupper,
        )
    return boundaries
