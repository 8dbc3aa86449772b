# simplectic_noise/permutation.py

"""
================================================================================
PERMUTATION TABLE
================================================================================
This module builds the fixed permutation of 0..255 that drives gradient
selection, either from a 64-bit seed or from a caller-supplied table.

Data Contract:
---------------
- Inputs:
    - seed (int): Any integer. It is reduced to a signed 64-bit value, so
      every 64-bit bit pattern is a distinct, valid seed.
    - table (sequence of 256 ints): Stored verbatim, never validated as a
      permutation. A non-permutation degrades statistical quality but is
      always safe to evaluate, because every lookup is masked to a byte.
- Outputs:
    - perm (np.ndarray): int64[256], read-only.
    - grad_index_3d (np.ndarray): int64[256], read-only,
      (perm[i] mod 24) * 3, the start of a row in the 3D gradient table.
- Side Effects: None.
- Invariants: A table built from a seed is always a true permutation.
  Tables are immutable after construction and safe to share across threads.
================================================================================
"""

import numpy as np

from . import config as DEFAULTS
from .gradients import DEFAULT_PERMUTATION, GRADIENT_ROWS_3D

_INT64_WRAP = 1 << 64
_INT64_HALF = 1 << 63


def _to_int64(value: int) -> int:
    """Wraps an arbitrary Python int to a signed 64-bit two's complement value."""
    return ((value + _INT64_HALF) % _INT64_WRAP) - _INT64_HALF


def _lcg_step(seed: int) -> int:
    return _to_int64(seed * DEFAULTS.LCG_MULTIPLIER + DEFAULTS.LCG_INCREMENT)


def _frozen_copy(values: np.ndarray) -> np.ndarray:
    frozen = np.array(values, dtype=np.int64)
    frozen.flags.writeable = False
    return frozen


def shuffle_from_seed(seed: int) -> np.ndarray:
    """
    Returns a permutation of 0..255 produced by a Fisher-Yates shuffle driven
    by a 64-bit linear congruential generator.

    The source pool shrinks from the top: at step i an index r in [0, i] is
    drawn, source[r] is emitted as perm[i] and the slot is refilled with
    source[i]. source[0..i] therefore always holds exactly the values not yet
    emitted, which makes the result a bijection for every seed.
    """
    size = DEFAULTS.PERMUTATION_SIZE
    source = list(range(size))
    perm = [0] * size

    seed = _to_int64(seed)
    for _ in range(DEFAULTS.LCG_WARMUP_STEPS):
        seed = _lcg_step(seed)

    for i in range(size - 1, -1, -1):
        seed = _lcg_step(seed)
        # Python's modulo is already the non-negative residue.
        r = _to_int64(seed + DEFAULTS.LCG_SEED_OFFSET) % (i + 1)
        perm[i] = source[r]
        source[r] = source[i]

    return np.array(perm, dtype=np.int64)


class PermutationTable:
    """An immutable permutation table plus the derived 3D gradient index."""

    def __init__(self, table):
        """
        Stores a caller-supplied table verbatim.

        Args:
            table: A one-dimensional sequence of 256 integers. It is the
                caller's job to make it a permutation of 0..255.

        Raises:
            ValueError: If the table is not a flat sequence of 256 integers.
        """
        values = np.asarray(table)
        size = DEFAULTS.PERMUTATION_SIZE
        if values.ndim != 1 or values.shape[0] != size:
            raise ValueError(
                f"Permutation table must be a flat sequence of {size} integers, "
                f"got shape {values.shape}."
            )
        if values.dtype.kind not in "iu":
            raise ValueError(f"Permutation table must hold integers, got dtype {values.dtype}.")

        self._perm = _frozen_copy(values)
        self._grad_index_3d = _frozen_copy((self._perm % GRADIENT_ROWS_3D) * 3)

    @classmethod
    def from_seed(cls, seed: int = DEFAULTS.DEFAULT_SEED) -> "PermutationTable":
        """Builds a true permutation from a 64-bit seed."""
        return cls(shuffle_from_seed(seed))

    @classmethod
    def default(cls) -> "PermutationTable":
        """The reference permutation used by most gradient noise implementations."""
        return cls(DEFAULT_PERMUTATION)

    @property
    def perm(self) -> np.ndarray:
        return self._perm

    @property
    def grad_index_3d(self) -> np.ndarray:
        return self._grad_index_3d

    def is_permutation(self) -> bool:
        """True if every value 0..255 appears exactly once."""
        size = DEFAULTS.PERMUTATION_SIZE
        if self._perm.min() < 0 or self._perm.max() >= size:
            return False
        return bool(np.all(np.bincount(self._perm, minlength=size) == 1))

    def __len__(self) -> int:
        return len(self._perm)

    def __eq__(self, other):
        if not isinstance(other, PermutationTable):
            return NotImplemented
        return bool(np.array_equal(self._perm, other._perm))

    def __hash__(self):
        return hash(self._perm.tobytes())

    def __repr__(self):
        head = ", ".join(str(v) for v in self._perm[:4])
        return f"PermutationTable([{head}, ...])"
