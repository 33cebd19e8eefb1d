from .bounds import IndexRange, PatchBounds
from .boundaries import VerticalBoundaries, find_vertical_boundaries
from .cells import count_cells
from .config import (
    CellCountMethod,
    LightningNOxConfig,
    config_from_namelist,
    load_config,
)
from .decaria import DecariaLightningNOx, lightning_nox_decaria
from .diagnostics import compute_diagnostics, nox_production_rate
from .distribution import VerticalDistribution, bellcurve
from .profiles import ColumnProfile, horizontal_average, layer_thickness
from .reduction import LocalReducer, Reducer

__version__ = "0.1.0"
