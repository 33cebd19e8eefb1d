import dataclasses

import numpy as np
import xarray as xr

from lightning_nox.names import X_DIM, Y_DIM, Z_DIM


@dataclasses.dataclass(frozen=True)
class IndexRange:
    """An inclusive range of integer indices, e.g. ``kps..kpe``."""

    start: int
    end: int

    def __post_init__(self):
        if self.end < self.start:
            raise ValueError(
                f"Index range end ({self.end}) is smaller than start ({self.start})."
            )

    @property
    def size(self) -> int:
        return self.end - self.start + 1

    @property
    def levels(self) -> np.ndarray:
        return np.arange(self.start, self.end + 1)

    @property
    def slice(self) -> slice:
        return slice(self.start, self.end + 1)


@dataclasses.dataclass(frozen=True)
class PatchBounds:
    """The index extents of the local subdomain (patch) within a memory-sized
    field, which may be larger than the patch because of halo points.

    Attributes:
        x: ``ips..ipe``
        z: ``kps..kpe``
        y: ``jps..jpe``
    """

    x: IndexRange
    z: IndexRange
    y: IndexRange

    @classmethod
    def from_extents(
        cls, ips: int, ipe: int, kps: int, kpe: int, jps: int, jpe: int
    ) -> "PatchBounds":
        return cls(IndexRange(ips, ipe), IndexRange(kps, kpe), IndexRange(jps, jpe))

    @classmethod
    def covering(cls, field: xr.DataArray) -> "PatchBounds":
        """Bounds of a 3-D field which is itself the whole patch"""
        return cls(
            IndexRange(0, field.sizes[X_DIM] - 1),
            IndexRange(0, field.sizes[Z_DIM] - 1),
            IndexRange(0, field.sizes[Y_DIM] - 1),
        )

    @property
    def horizontal_size(self) -> int:
        return self.x.size * self.y.size

    def select(self, field: xr.DataArray) -> xr.DataArray:
        """Select the patch from ``field``.

        Works for 3-D (x, z, y) and 2-D (x, y) fields. When ``field`` has a
        vertical dimension, the absolute level indices ``kps..kpe`` are
        assigned as its ``z`` coordinate.
        """
        indexers = {}
        for dim, index_range in [(X_DIM, self.x), (Z_DIM, self.z), (Y_DIM, self.y)]:
            if dim not in field.dims:
                continue
            if index_range.end >= field.sizes[dim] or index_range.start < 0:
                raise ValueError(
                    f"Patch range {index_range} along '{dim}' lies outside of the "
                    f"field extent {field.sizes[dim]}."
                )
            indexers[dim] = index_range.slice
        missing = {X_DIM, Y_DIM} - set(field.dims)
        if missing:
            raise ValueError(f"Field is missing horizontal dimensions {missing}.")
        patch = field.isel(indexers)
        if Z_DIM in patch.dims:
            patch = patch.assign_coords({Z_DIM: self.z.levels})
        return patch
