# simplectic_noise/noise3d.py

"""
================================================================================
3D OPENSIMPLEX KERNELS
================================================================================
Compiled kernels for 3D noise. Space is stretched onto a lattice of
rhombohedra. The diagonal slices inSum = 1 and inSum = 2 cut each cell into
a tetrahedron at (0,0,0), an octahedron in between, and a tetrahedron at
(1,1,1). Each region picks its own two extra vertices from the two cell
vertices closest to the sample point.

Vertices inside the cell are identified by a 3-bit mask: bit 0 is x, bit 1
is y, bit 2 is z. The comparisons deciding the closest vertices are order
sensitive; ties resolve to whichever comparison runs first.

Data Contract:
---------------
- Inputs:
    - perm, grad_index: int64[256] tables from a PermutationTable.
    - x, y, z: float coordinates (scalars, or flat float64 arrays for the
      array kernel).
- Outputs:
    - Noise values, approximately within [-1, 1].
- Side Effects: None.
================================================================================
"""

import math

import numpy as np
from numba import njit

from .gradients import (
    GRADIENTS_3D,
    NORM_CONSTANT_3D,
    SQUISH_CONSTANT_3D,
    STRETCH_CONSTANT_3D,
)

# Bit masks for the axes of a vertex identifier.
X_BIT = 0x01
Y_BIT = 0x02
Z_BIT = 0x04

_SQUISH_1 = SQUISH_CONSTANT_3D
_SQUISH_2 = 2.0 * SQUISH_CONSTANT_3D
_SQUISH_3 = 3.0 * SQUISH_CONSTANT_3D


@njit
def extrapolate_3d(perm, grad_index, xsb, ysb, zsb, dx, dy, dz):
    """Dot product of the vertex's hashed gradient with the offset (dx, dy, dz)."""
    index = grad_index[(perm[(perm[xsb & 0xFF] + ysb) & 0xFF] + zsb) & 0xFF]
    return (GRADIENTS_3D[index] * dx
            + GRADIENTS_3D[index + 1] * dy
            + GRADIENTS_3D[index + 2] * dz)


@njit
def contribution_3d(perm, grad_index, xsv, ysv, zsv, dx, dy, dz):
    """Falloff-weighted contribution of lattice vertex (xsv, ysv, zsv)."""
    attn = 2.0 - (dx * dx + dy * dy + dz * dz)
    if attn <= 0.0:
        return 0.0
    attn *= attn
    return attn * attn * extrapolate_3d(perm, grad_index, xsv, ysv, zsv, dx, dy, dz)


@njit
def _origin_tetrahedron(perm, grad_index, xsb, ysb, zsb, dx0, dy0, dz0, xins, yins, zins, in_sum):
    # Two closest of (1,0,0), (0,1,0), (0,0,1).
    a_point = X_BIT
    a_score = xins
    b_point = Y_BIT
    b_score = yins
    if a_score < b_score and zins > a_score:
        a_score = zins
        a_point = Z_BIT
    elif a_score >= b_score and zins > b_score:
        b_score = zins
        b_point = Z_BIT

    wins = 1.0 - in_sum
    if wins > a_score or wins > b_score:
        # (0,0,0) is one of the two closest vertices; the other is c.
        c = b_point if b_score > a_score else a_point

        if c != X_BIT:
            xsv_ext0 = xsb - 1
            xsv_ext1 = xsb
            dx_ext0 = dx0 + 1.0
            dx_ext1 = dx0
        else:
            xsv_ext0 = xsv_ext1 = xsb + 1
            dx_ext0 = dx_ext1 = dx0 - 1.0

        if c != Y_BIT:
            ysv_ext0 = ysv_ext1 = ysb
            dy_ext0 = dy_ext1 = dy0
            if c == X_BIT:
                ysv_ext0 -= 1
                dy_ext0 += 1.0
            else:
                ysv_ext1 -= 1
                dy_ext1 += 1.0
        else:
            ysv_ext0 = ysv_ext1 = ysb + 1
            dy_ext0 = dy_ext1 = dy0 - 1.0

        if c != Z_BIT:
            zsv_ext0 = zsb
            zsv_ext1 = zsb - 1
            dz_ext0 = dz0
            dz_ext1 = dz0 + 1.0
        else:
            zsv_ext0 = zsv_ext1 = zsb + 1
            dz_ext0 = dz_ext1 = dz0 - 1.0
    else:
        # (0,0,0) is not among the two closest; both extras follow from a | b.
        c = a_point | b_point

        if c & X_BIT:
            xsv_ext0 = xsv_ext1 = xsb + 1
            dx_ext0 = dx0 - 1.0 - _SQUISH_2
            dx_ext1 = dx0 - 1.0 - _SQUISH_1
        else:
            xsv_ext0 = xsb
            xsv_ext1 = xsb - 1
            dx_ext0 = dx0 - _SQUISH_2
            dx_ext1 = dx0 + 1.0 - _SQUISH_1

        if c & Y_BIT:
            ysv_ext0 = ysv_ext1 = ysb + 1
            dy_ext0 = dy0 - 1.0 - _SQUISH_2
            dy_ext1 = dy0 - 1.0 - _SQUISH_1
        else:
            ysv_ext0 = ysb
            ysv_ext1 = ysb - 1
            dy_ext0 = dy0 - _SQUISH_2
            dy_ext1 = dy0 + 1.0 - _SQUISH_1

        if c & Z_BIT:
            zsv_ext0 = zsv_ext1 = zsb + 1
            dz_ext0 = dz0 - 1.0 - _SQUISH_2
            dz_ext1 = dz0 - 1.0 - _SQUISH_1
        else:
            zsv_ext0 = zsb
            zsv_ext1 = zsb - 1
            dz_ext0 = dz0 - _SQUISH_2
            dz_ext1 = dz0 + 1.0 - _SQUISH_1

    value = contribution_3d(perm, grad_index, xsb, ysb, zsb, dx0, dy0, dz0)
    value += contribution_3d(perm, grad_index, xsb + 1, ysb, zsb,
                             dx0 - 1.0 - _SQUISH_1, dy0 - _SQUISH_1, dz0 - _SQUISH_1)
    value += contribution_3d(perm, grad_index, xsb, ysb + 1, zsb,
                             dx0 - _SQUISH_1, dy0 - 1.0 - _SQUISH_1, dz0 - _SQUISH_1)
    value += contribution_3d(perm, grad_index, xsb, ysb, zsb + 1,
                             dx0 - _SQUISH_1, dy0 - _SQUISH_1, dz0 - 1.0 - _SQUISH_1)
    value += contribution_3d(perm, grad_index, xsv_ext0, ysv_ext0, zsv_ext0, dx_ext0, dy_ext0, dz_ext0)
    value += contribution_3d(perm, grad_index, xsv_ext1, ysv_ext1, zsv_ext1, dx_ext1, dy_ext1, dz_ext1)
    return value


@njit
def _far_tetrahedron(perm, grad_index, xsb, ysb, zsb, dx0, dy0, dz0, xins, yins, zins, in_sum):
    # Two closest of (1,1,0), (1,0,1), (0,1,1).
    a_point = 0x06
    a_score = xins
    b_point = 0x05
    b_score = yins
    if a_score <= b_score and zins < b_score:
        b_score = zins
        b_point = 0x03
    elif a_score > b_score and zins < a_score:
        a_score = zins
        a_point = 0x03

    wins = 3.0 - in_sum
    if wins < a_score or wins < b_score:
        # (1,1,1) is one of the two closest vertices; the other is c.
        c = b_point if b_score < a_score else a_point

        if c & X_BIT:
            xsv_ext0 = xsb + 2
            xsv_ext1 = xsb + 1
            dx_ext0 = dx0 - 2.0 - _SQUISH_3
            dx_ext1 = dx0 - 1.0 - _SQUISH_3
        else:
            xsv_ext0 = xsv_ext1 = xsb
            dx_ext0 = dx_ext1 = dx0 - _SQUISH_3

        if c & Y_BIT:
            ysv_ext0 = ysv_ext1 = ysb + 1
            dy_ext0 = dy_ext1 = dy0 - 1.0 - _SQUISH_3
            if c & X_BIT:
                ysv_ext1 += 1
                dy_ext1 -= 1.0
            else:
                ysv_ext0 += 1
                dy_ext0 -= 1.0
        else:
            ysv_ext0 = ysv_ext1 = ysb
            dy_ext0 = dy_ext1 = dy0 - _SQUISH_3

        if c & Z_BIT:
            zsv_ext0 = zsb + 1
            zsv_ext1 = zsb + 2
            dz_ext0 = dz0 - 1.0 - _SQUISH_3
            dz_ext1 = dz0 - 2.0 - _SQUISH_3
        else:
            zsv_ext0 = zsv_ext1 = zsb
            dz_ext0 = dz_ext1 = dz0 - _SQUISH_3
    else:
        # (1,1,1) is not among the two closest; both extras follow from a & b.
        c = a_point & b_point

        if c & X_BIT:
            xsv_ext0 = xsb + 1
            xsv_ext1 = xsb + 2
            dx_ext0 = dx0 - 1.0 - _SQUISH_1
            dx_ext1 = dx0 - 2.0 - _SQUISH_2
        else:
            xsv_ext0 = xsv_ext1 = xsb
            dx_ext0 = dx0 - _SQUISH_1
            dx_ext1 = dx0 - _SQUISH_2

        if c & Y_BIT:
            ysv_ext0 = ysb + 1
            ysv_ext1 = ysb + 2
            dy_ext0 = dy0 - 1.0 - _SQUISH_1
            dy_ext1 = dy0 - 2.0 - _SQUISH_2
        else:
            ysv_ext0 = ysv_ext1 = ysb
            dy_ext0 = dy0 - _SQUISH_1
            dy_ext1 = dy0 - _SQUISH_2

        if c & Z_BIT:
            zsv_ext0 = zsb + 1
            zsv_ext1 = zsb + 2
            dz_ext0 = dz0 - 1.0 - _SQUISH_1
            dz_ext1 = dz0 - 2.0 - _SQUISH_2
        else:
            zsv_ext0 = zsv_ext1 = zsb
            dz_ext0 = dz0 - _SQUISH_1
            dz_ext1 = dz0 - _SQUISH_2

    value = contribution_3d(perm, grad_index, xsb + 1, ysb + 1, zsb,
                            dx0 - 1.0 - _SQUISH_2, dy0 - 1.0 - _SQUISH_2, dz0 - _SQUISH_2)
    value += contribution_3d(perm, grad_index, xsb + 1, ysb, zsb + 1,
                             dx0 - 1.0 - _SQUISH_2, dy0 - _SQUISH_2, dz0 - 1.0 - _SQUISH_2)
    value += contribution_3d(perm, grad_index, xsb, ysb + 1, zsb + 1,
                             dx0 - _SQUISH_2, dy0 - 1.0 - _SQUISH_2, dz0 - 1.0 - _SQUISH_2)
    value += contribution_3d(perm, grad_index, xsb + 1, ysb + 1, zsb + 1,
                             dx0 - 1.0 - _SQUISH_3, dy0 - 1.0 - _SQUISH_3, dz0 - 1.0 - _SQUISH_3)
    value += contribution_3d(perm, grad_index, xsv_ext0, ysv_ext0, zsv_ext0, dx_ext0, dy_ext0, dz_ext0)
    value += contribution_3d(perm, grad_index, xsv_ext1, ysv_ext1, zsv_ext1, dx_ext1, dy_ext1, dz_ext1)
    return value


@njit
def _octahedron(perm, grad_index, xsb, ysb, zsb, dx0, dy0, dz0, xins, yins, zins):
    # Closer of (0,0,1) and (1,1,0).
    p1 = xins + yins
    if p1 <= 1.0:
        a_score = 1.0 - p1
        a_point = 0x04
        a_is_further_side = False
    else:
        a_score = p1 - 1.0
        a_point = 0x03
        a_is_further_side = True

    # Closer of (0,1,0) and (1,0,1).
    p2 = xins + zins
    if p2 <= 1.0:
        b_score = 1.0 - p2
        b_point = 0x02
        b_is_further_side = False
    else:
        b_score = p2 - 1.0
        b_point = 0x05
        b_is_further_side = True

    # The closer of (1,0,0) and (0,1,1) replaces the further of a and b if closer still.
    p3 = yins + zins
    if p3 > 1.0:
        score = p3 - 1.0
        if a_score > b_score and b_score < score:
            b_score = score
            b_point = 0x06
            b_is_further_side = True
        elif a_score <= b_score and a_score < score:
            a_score = score
            a_point = 0x06
            a_is_further_side = True
    else:
        score = 1.0 - p3
        if a_score > b_score and b_score < score:
            b_score = score
            b_point = 0x01
            b_is_further_side = False
        elif a_score <= b_score and a_score < score:
            a_score = score
            a_point = 0x01
            a_is_further_side = False

    if a_is_further_side == b_is_further_side:
        if a_is_further_side:
            # Both on the (1,1,1) side: extras are (1,1,1) and a (2,0,0)
            # permutation along the shared axis.
            xsv_ext0 = xsb + 1
            ysv_ext0 = ysb + 1
            zsv_ext0 = zsb + 1
            dx_ext0 = dx0 - 1.0 - _SQUISH_3
            dy_ext0 = dy0 - 1.0 - _SQUISH_3
            dz_ext0 = dz0 - 1.0 - _SQUISH_3

            c = a_point & b_point
            if c & X_BIT:
                xsv_ext1 = xsb + 2
                ysv_ext1 = ysb
                zsv_ext1 = zsb
                dx_ext1 = dx0 - 2.0 - _SQUISH_2
                dy_ext1 = dy0 - _SQUISH_2
                dz_ext1 = dz0 - _SQUISH_2
            elif c & Y_BIT:
                xsv_ext1 = xsb
                ysv_ext1 = ysb + 2
                zsv_ext1 = zsb
                dx_ext1 = dx0 - _SQUISH_2
                dy_ext1 = dy0 - 2.0 - _SQUISH_2
                dz_ext1 = dz0 - _SQUISH_2
            else:
                xsv_ext1 = xsb
                ysv_ext1 = ysb
                zsv_ext1 = zsb + 2
                dx_ext1 = dx0 - _SQUISH_2
                dy_ext1 = dy0 - _SQUISH_2
                dz_ext1 = dz0 - 2.0 - _SQUISH_2
        else:
            # Both on the (0,0,0) side: extras are (0,0,0) and a (-1,1,1)
            # permutation along the omitted axis.
            xsv_ext0 = xsb
            ysv_ext0 = ysb
            zsv_ext0 = zsb
            dx_ext0 = dx0
            dy_ext0 = dy0
            dz_ext0 = dz0

            c = a_point | b_point
            if (c & X_BIT) == 0:
                xsv_ext1 = xsb - 1
                ysv_ext1 = ysb + 1
                zsv_ext1 = zsb + 1
                dx_ext1 = dx0 + 1.0 - _SQUISH_1
                dy_ext1 = dy0 - 1.0 - _SQUISH_1
                dz_ext1 = dz0 - 1.0 - _SQUISH_1
            elif (c & Y_BIT) == 0:
                xsv_ext1 = xsb + 1
                ysv_ext1 = ysb - 1
                zsv_ext1 = zsb + 1
                dx_ext1 = dx0 - 1.0 - _SQUISH_1
                dy_ext1 = dy0 + 1.0 - _SQUISH_1
                dz_ext1 = dz0 - 1.0 - _SQUISH_1
            else:
                xsv_ext1 = xsb + 1
                ysv_ext1 = ysb + 1
                zsv_ext1 = zsb - 1
                dx_ext1 = dx0 - 1.0 - _SQUISH_1
                dy_ext1 = dy0 - 1.0 - _SQUISH_1
                dz_ext1 = dz0 + 1.0 - _SQUISH_1
    else:
        # One closest vertex on each side.
        if a_is_further_side:
            c1 = a_point
            c2 = b_point
        else:
            c1 = b_point
            c2 = a_point

        # A (1,1,-1) permutation from the (1,1,1)-side vertex.
        if (c1 & X_BIT) == 0:
            xsv_ext0 = xsb - 1
            ysv_ext0 = ysb + 1
            zsv_ext0 = zsb + 1
            dx_ext0 = dx0 + 1.0 - _SQUISH_1
            dy_ext0 = dy0 - 1.0 - _SQUISH_1
            dz_ext0 = dz0 - 1.0 - _SQUISH_1
        elif (c1 & Y_BIT) == 0:
            xsv_ext0 = xsb + 1
            ysv_ext0 = ysb - 1
            zsv_ext0 = zsb + 1
            dx_ext0 = dx0 - 1.0 - _SQUISH_1
            dy_ext0 = dy0 + 1.0 - _SQUISH_1
            dz_ext0 = dz0 - 1.0 - _SQUISH_1
        else:
            xsv_ext0 = xsb + 1
            ysv_ext0 = ysb + 1
            zsv_ext0 = zsb - 1
            dx_ext0 = dx0 - 1.0 - _SQUISH_1
            dy_ext0 = dy0 - 1.0 - _SQUISH_1
            dz_ext0 = dz0 + 1.0 - _SQUISH_1

        # A (2,0,0) permutation from the (0,0,0)-side vertex.
        if c2 & X_BIT:
            xsv_ext1 = xsb + 2
            ysv_ext1 = ysb
            zsv_ext1 = zsb
            dx_ext1 = dx0 - 2.0 - _SQUISH_2
            dy_ext1 = dy0 - _SQUISH_2
            dz_ext1 = dz0 - _SQUISH_2
        elif c2 & Y_BIT:
            xsv_ext1 = xsb
            ysv_ext1 = ysb + 2
            zsv_ext1 = zsb
            dx_ext1 = dx0 - _SQUISH_2
            dy_ext1 = dy0 - 2.0 - _SQUISH_2
            dz_ext1 = dz0 - _SQUISH_2
        else:
            xsv_ext1 = xsb
            ysv_ext1 = ysb
            zsv_ext1 = zsb + 2
            dx_ext1 = dx0 - _SQUISH_2
            dy_ext1 = dy0 - _SQUISH_2
            dz_ext1 = dz0 - 2.0 - _SQUISH_2

    # The six vertices of the octahedron.
    value = contribution_3d(perm, grad_index, xsb + 1, ysb, zsb,
                            dx0 - 1.0 - _SQUISH_1, dy0 - _SQUISH_1, dz0 - _SQUISH_1)
    value += contribution_3d(perm, grad_index, xsb, ysb + 1, zsb,
                             dx0 - _SQUISH_1, dy0 - 1.0 - _SQUISH_1, dz0 - _SQUISH_1)
    value += contribution_3d(perm, grad_index, xsb, ysb, zsb + 1,
                             dx0 - _SQUISH_1, dy0 - _SQUISH_1, dz0 - 1.0 - _SQUISH_1)
    value += contribution_3d(perm, grad_index, xsb + 1, ysb + 1, zsb,
                             dx0 - 1.0 - _SQUISH_2, dy0 - 1.0 - _SQUISH_2, dz0 - _SQUISH_2)
    value += contribution_3d(perm, grad_index, xsb + 1, ysb, zsb + 1,
                             dx0 - 1.0 - _SQUISH_2, dy0 - _SQUISH_2, dz0 - 1.0 - _SQUISH_2)
    value += contribution_3d(perm, grad_index, xsb, ysb + 1, zsb + 1,
                             dx0 - _SQUISH_2, dy0 - 1.0 - _SQUISH_2, dz0 - 1.0 - _SQUISH_2)
    value += contribution_3d(perm, grad_index, xsv_ext0, ysv_ext0, zsv_ext0, dx_ext0, dy_ext0, dz_ext0)
    value += contribution_3d(perm, grad_index, xsv_ext1, ysv_ext1, zsv_ext1, dx_ext1, dy_ext1, dz_ext1)
    return value


@njit
def noise_3d(perm, grad_index, x, y, z):
    """Evaluates 3D noise at a single point."""
    stretch_offset = (x + y + z) * STRETCH_CONSTANT_3D
    xs = x + stretch_offset
    ys = y + stretch_offset
    zs = z + stretch_offset

    xsb = math.floor(xs)
    ysb = math.floor(ys)
    zsb = math.floor(zs)

    squish_offset = (xsb + ysb + zsb) * SQUISH_CONSTANT_3D
    dx0 = x - (xsb + squish_offset)
    dy0 = y - (ysb + squish_offset)
    dz0 = z - (zsb + squish_offset)

    xins = xs - xsb
    yins = ys - ysb
    zins = zs - zsb
    in_sum = xins + yins + zins

    if in_sum > 1.0 and in_sum < 2.0:
        value = _octahedron(perm, grad_index, xsb, ysb, zsb, dx0, dy0, dz0, xins, yins, zins)
    elif in_sum <= 1.0:
        value = _origin_tetrahedron(perm, grad_index, xsb, ysb, zsb, dx0, dy0, dz0,
                                    xins, yins, zins, in_sum)
    else:
        value = _far_tetrahedron(perm, grad_index, xsb, ysb, zsb, dx0, dy0, dz0,
                                 xins, yins, zins, in_sum)

    return value / NORM_CONSTANT_3D


@njit
def noise_3d_array(perm, grad_index, x, y, z):
    """Evaluates 3D noise for each triple of a flat coordinate array."""
    out = np.empty(x.shape[0], dtype=np.float64)
    for i in range(x.shape[0]):
        out[i] = noise_3d(perm, grad_index, x[i], y[i], z[i])
    return out
