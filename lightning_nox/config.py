import dataclasses
import enum
from typing import Any, Mapping, Union

import dacite
import f90nml
import yaml

from lightning_nox.constants import REFLECTIVITY_THRESHOLD

NAMELIST_GROUP = "chem"
NAMELIST_KEYS = [
    "n_ic",
    "n_cg",
    "ltng_temp_upper",
    "ltng_temp_lower",
    "cellcount_method",
]


class CellCountMethod(enum.IntEnum):
    """How convective cells are counted and cloud extents are found

    ``AUTO`` is resolved by the calling driver; within this package it counts
    over the local patch, as ``PATCH`` does. ``DOMAIN`` reduces flash rates,
    cell counts and vertical boundaries across all subdomains.
    """

    AUTO = 0
    PATCH = 1
    DOMAIN = 2

    @property
    def is_global(self) -> bool:
        return self == CellCountMethod.DOMAIN


@dataclasses.dataclass
class LightningNOxConfig:
    """Configuration of the DeCaria lightning NOx vertical distribution

    Attributes:
        n_ic: moles of NO produced per intra-cloud flash
        n_cg: moles of NO produced per cloud-to-ground flash
        ltng_temp_upper: isotherm of the upper (cold) production mode [degC]
        ltng_temp_lower: isotherm of the lower (warm) production mode [degC]
        cellcount_method: see ``CellCountMethod``
        reflectivity_threshold: reflectivity above which a grid cell belongs to
            a convective cell [dBZ]

    Example::

        LightningNOxConfig(n_ic=250.0, n_cg=500.0, cellcount_method=2)
    """

    n_ic: float = 500.0
    n_cg: float = 500.0
    ltng_temp_upper: float = -45.0
    ltng_temp_lower: float = -15.0
    cellcount_method: CellCountMethod = CellCountMethod.AUTO
    reflectivity_threshold: float = REFLECTIVITY_THRESHOLD

    def __post_init__(self):
        self.cellcount_method = CellCountMethod(self.cellcount_method)

    def validate(self):
        """Raise ``ValueError`` for settings outside of the scheme's range

        Only ``from_dict`` and the loaders built on it validate.
        """
        if self.n_ic < 0 or self.n_cg < 0:
            raise ValueError(
                f"NO production per flash must be non-negative, got n_ic={self.n_ic} "
                f"and n_cg={self.n_cg}."
            )
        if self.ltng_temp_upper > self.ltng_temp_lower:
            raise ValueError(
                "The upper mode isotherm must not be warmer than the lower one, got "
                f"ltng_temp_upper={self.ltng_temp_upper} and "
                f"ltng_temp_lower={self.ltng_temp_lower}."
            )

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "LightningNOxConfig":
        config = dacite.from_dict(
            cls, dict(d), dacite.Config(strict=True, cast=[CellCountMethod, float])
        )
        config.validate()
        return config


def load_config(path: str) -> LightningNOxConfig:
    """Open a yaml configuration of the lightning NOx scheme"""
    with open(path) as f:
        config = yaml.safe_load(f)
    return LightningNOxConfig.from_dict(config or {})


def config_from_namelist(
    namelist: Union[f90nml.Namelist, Mapping[str, Any], str]
) -> LightningNOxConfig:
    """Read the lightning NOx settings of the ``&chem`` group of a WRF namelist.

    Args:
        namelist: a parsed namelist or the path of one. Settings missing from
            the namelist take their default values.

    Returns:
        the lightning NOx configuration
    """
    if isinstance(namelist, str):
        namelist = f90nml.read(namelist)
    group = {
        key.lower(): value for key, value in namelist.get(NAMELIST_GROUP, {}).items()
    }
    config = {}
    for key in NAMELIST_KEYS:
        if key in group:
            value = group[key]
            # per-domain entries are lists, the first domain is used
            if isinstance(value, list):
                value = value[0]
            config[key] = value
    return LightningNOxConfig.from_dict(config)
