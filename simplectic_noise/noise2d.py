# simplectic_noise/noise2d.py

"""
================================================================================
2D OPENSIMPLEX KERNELS
================================================================================
Compiled kernels for 2D noise. The plane is stretched onto a lattice of
rhombi, each split into two triangles along its short diagonal. A sample
point receives contributions from the three vertices of its triangle plus
one extra vertex just outside it.

Data Contract:
---------------
- Inputs:
    - perm: int64[256] permutation table.
    - x, y: float coordinates (scalars, or flat float64 arrays for the
      array kernel).
- Outputs:
    - Noise values, approximately within [-1, 1].
- Side Effects: None.
- Invariants: Pure functions of (perm, coordinates).
================================================================================
"""

import math

import numpy as np
from numba import njit

from .gradients import (
    GRADIENTS_2D,
    NORM_CONSTANT_2D,
    SQUISH_CONSTANT_2D,
    STRETCH_CONSTANT_2D,
)


@njit
def extrapolate_2d(perm, xsb, ysb, dx, dy):
    """Dot product of the vertex's hashed gradient with the offset (dx, dy)."""
    index = perm[(perm[xsb & 0xFF] + ysb) & 0xFF] & 0x0E
    return GRADIENTS_2D[index] * dx + GRADIENTS_2D[index + 1] * dy


@njit
def contribution_2d(perm, xsv, ysv, dx, dy):
    """Falloff-weighted contribution of lattice vertex (xsv, ysv)."""
    attn = 2.0 - (dx * dx + dy * dy)
    if attn <= 0.0:
        return 0.0
    attn *= attn
    return attn * attn * extrapolate_2d(perm, xsv, ysv, dx, dy)


@njit
def noise_2d(perm, x, y):
    """Evaluates 2D noise at a single point."""
    # Place the input on the stretched lattice.
    stretch_offset = (x + y) * STRETCH_CONSTANT_2D
    xs = x + stretch_offset
    ys = y + stretch_offset

    # Lattice coordinates of the rhombus containing the point.
    xsb = math.floor(xs)
    ysb = math.floor(ys)

    # Rhombus origin back in input space.
    squish_offset = (xsb + ysb) * SQUISH_CONSTANT_2D
    dx0 = x - (xsb + squish_offset)
    dy0 = y - (ysb + squish_offset)

    xins = xs - xsb
    yins = ys - ysb
    in_sum = xins + yins

    value = 0.0

    # (1,0) and (0,1) belong to both triangles.
    value += contribution_2d(perm, xsb + 1, ysb,
                             dx0 - 1.0 - SQUISH_CONSTANT_2D,
                             dy0 - SQUISH_CONSTANT_2D)
    value += contribution_2d(perm, xsb, ysb + 1,
                             dx0 - SQUISH_CONSTANT_2D,
                             dy0 - 1.0 - SQUISH_CONSTANT_2D)

    if in_sum <= 1.0:
        # Lower triangle, anchored at (0,0).
        zins = 1.0 - in_sum
        if zins > xins or zins > yins:
            # (0,0) is one of the two closest vertices.
            if xins > yins:
                value += contribution_2d(perm, xsb + 1, ysb - 1, dx0 - 1.0, dy0 + 1.0)
            else:
                value += contribution_2d(perm, xsb - 1, ysb + 1, dx0 + 1.0, dy0 - 1.0)
        else:
            value += contribution_2d(perm, xsb + 1, ysb + 1,
                                     dx0 - 1.0 - 2.0 * SQUISH_CONSTANT_2D,
                                     dy0 - 1.0 - 2.0 * SQUISH_CONSTANT_2D)
        value += contribution_2d(perm, xsb, ysb, dx0, dy0)
    else:
        # Upper triangle, anchored at (1,1).
        zins = 2.0 - in_sum
        if zins < xins or zins < yins:
            # (1,1) is one of the two closest vertices.
            if xins > yins:
                value += contribution_2d(perm, xsb + 2, ysb,
                                         dx0 - 2.0 - 2.0 * SQUISH_CONSTANT_2D,
                                         dy0 - 2.0 * SQUISH_CONSTANT_2D)
            else:
                value += contribution_2d(perm, xsb, ysb + 2,
                                         dx0 - 2.0 * SQUISH_CONSTANT_2D,
                                         dy0 - 2.0 - 2.0 * SQUISH_CONSTANT_2D)
        else:
            value += contribution_2d(perm, xsb, ysb, dx0, dy0)
        value += contribution_2d(perm, xsb + 1, ysb + 1,
                                 dx0 - 1.0 - 2.0 * SQUISH_CONSTANT_2D,
                                 dy0 - 1.0 - 2.0 * SQUISH_CONSTANT_2D)

    return value / NORM_CONSTANT_2D


@njit
def noise_2d_array(perm, x, y):
    """Evaluates 2D noise for each pair of a flat coordinate array."""
    out = np.empty(x.shape[0], dtype=np.float64)
    for i in range(x.shape[0]):
        out[i] = noise_2d(perm, x[i], y[i])
    return out
