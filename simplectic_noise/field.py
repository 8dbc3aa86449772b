# simplectic_noise/field.py

"""
================================================================================
NOISE FIELDS
================================================================================
This module binds a permutation table to the compiled kernels of one
dimension count. A field is built once and then evaluated any number of
times, at single points or over whole coordinate arrays.

Data Contract:
---------------
- Inputs (on initialization):
    - seed (int): Used to build the permutation table when none is given.
    - permutation_table (PermutationTable | sequence of 256 ints, optional):
      A pre-computed table. When given, the seed is ignored.
    - logger: A Python logging object for runtime messages. Defaults to the
      module logger.
- Outputs (from methods):
    - eval: A float, approximately within [-1, 1].
    - eval_array: A float64 NumPy array with the broadcast shape of the
      coordinate inputs.
- Side Effects: Logs construction messages using the logger.
- Invariants: Given the same table, every evaluation is deterministic.
  Fields are read-only after construction and safe to share across threads.
================================================================================
"""

import logging

import numpy as np

from . import config as DEFAULTS
from .noise2d import noise_2d, noise_2d_array
from .noise3d import noise_3d, noise_3d_array
from .noise4d import noise_4d, noise_4d_array
from .permutation import PermutationTable


class NoiseField:
    """Base class holding the permutation table shared by every dimension."""

    dimensions = 0

    def __init__(self, seed: int = DEFAULTS.DEFAULT_SEED, permutation_table=None,
                 logger: logging.Logger = None):
        """
        Initializes the noise field.

        Args:
            seed (int): Seed for the permutation table.
            permutation_table (optional): A PermutationTable or a raw sequence
                of 256 integers. If None, a table is generated from the seed.
            logger (logging.Logger, optional): The logger instance for all output.
        """
        self.logger = logger if logger is not None else logging.getLogger(__name__)

        if permutation_table is not None:
            if isinstance(permutation_table, PermutationTable):
                self.table = permutation_table
            else:
                self.table = PermutationTable(permutation_table)
            self.logger.debug(f"{type(self).__name__} initialized with injected permutation table.")
        else:
            self.table = PermutationTable.from_seed(seed)
            self.logger.debug(f"{type(self).__name__} generated permutation table from seed {seed}.")

    def _coordinate_arrays(self, coords):
        if len(coords) != self.dimensions:
            raise ValueError(
                f"{type(self).__name__} expects {self.dimensions} coordinate arrays, got {len(coords)}."
            )
        arrays = np.broadcast_arrays(*[np.asarray(c, dtype=np.float64) for c in coords])
        shape = arrays[0].shape
        flat = [np.ascontiguousarray(a).ravel() for a in arrays]
        return shape, flat

    def eval_array(self, *coords) -> np.ndarray:
        """
        Evaluates the field at many points in one compiled loop.

        Args:
            *coords: One array-like per dimension. They broadcast against each
                other with NumPy rules.

        Returns:
            np.ndarray: float64 noise values with the broadcast shape.

        Raises:
            ValueError: If the number of coordinate arrays does not match
                the field's dimension count.
        """
        shape, flat = self._coordinate_arrays(coords)
        return self._eval_flat(*flat).reshape(shape)

    def __repr__(self):
        return f"{type(self).__name__}(table={self.table!r})"


class NoiseField2D(NoiseField):
    dimensions = 2

    def eval(self, x: float, y: float) -> float:
        return noise_2d(self.table.perm, float(x), float(y))

    def _eval_flat(self, x, y):
        return noise_2d_array(self.table.perm, x, y)


class NoiseField3D(NoiseField):
    dimensions = 3

    def eval(self, x: float, y: float, z: float) -> float:
        return noise_3d(self.table.perm, self.table.grad_index_3d, float(x), float(y), float(z))

    def _eval_flat(self, x, y, z):
        return noise_3d_array(self.table.perm, self.table.grad_index_3d, x, y, z)


class NoiseField4D(NoiseField):
    dimensions = 4

    def eval(self, x: float, y: float, z: float, w: float) -> float:
        return noise_4d(self.table.perm, float(x), float(y), float(z), float(w))

    def _eval_flat(self, x, y, z, w):
        return noise_4d_array(self.table.perm, x, y, z, w)


_FIELDS_BY_DIMENSION = {
    2: NoiseField2D,
    3: NoiseField3D,
    4: NoiseField4D,
}


def create_noise_field(dimensions: int, seed: int = DEFAULTS.DEFAULT_SEED,
                       permutation_table=None, logger: logging.Logger = None) -> NoiseField:
    """Builds the noise field for a dimension count of 2, 3 or 4."""
    field_class = _FIELDS_BY_DIMENSION.get(dimensions)
    if field_class is None:
        raise ValueError(f"Unsupported dimension count: {dimensions}. Expected 2, 3 or 4.")
    return field_class(seed=seed, permutation_table=permutation_table, logger=logger)
