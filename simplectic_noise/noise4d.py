# simplectic_noise/noise4d.py

"""
================================================================================
4D OPENSIMPLEX KERNELS
================================================================================
Compiled kernels for 4D noise. Space is stretched onto a lattice of
4D rhombohedra. The slices inSum = 1, 2 and 3 cut each cell into five
regions: a pentachoron at (0,0,0,0), two dispentachora (rectified
4-simplices) and a pentachoron at (1,1,1,1). Every region contributes its
own vertices plus three extra vertices chosen from the two cell vertices
closest to the sample point.

Vertices inside the cell are identified by a 4-bit mask: bit 0 is x, bit 1
is y, bit 2 is z, bit 3 is w. The 4D gradient table has 64 rows of 4, so a
permutation byte masked with 0xFC indexes it directly.

Data Contract:
---------------
- Inputs:
    - perm: int64[256] permutation table.
    - x, y, z, w: float coordinates (scalars, or flat float64 arrays for
      the array kernel).
- Outputs:
    - Noise values, approximately within [-1, 1].
- Side Effects: None.
================================================================================
"""

import math

import numpy as np
from numba import njit

from .gradients import (
    GRADIENTS_4D,
    NORM_CONSTANT_4D,
    SQUISH_CONSTANT_4D,
    STRETCH_CONSTANT_4D,
)

X_BIT = 0x01
Y_BIT = 0x02
Z_BIT = 0x04
W_BIT = 0x08
XY_BITS = X_BIT | Y_BIT

_SQUISH_1 = SQUISH_CONSTANT_4D
_SQUISH_2 = 2.0 * SQUISH_CONSTANT_4D
_SQUISH_3 = 3.0 * SQUISH_CONSTANT_4D
_SQUISH_4 = 4.0 * SQUISH_CONSTANT_4D


@njit
def extrapolate_4d(perm, xsb, ysb, zsb, wsb, dx, dy, dz, dw):
    """Dot product of the vertex's hashed gradient with the offset (dx, dy, dz, dw)."""
    index = perm[(perm[(perm[(perm[xsb & 0xFF] + ysb) & 0xFF] + zsb) & 0xFF] + wsb) & 0xFF] & 0xFC
    return (GRADIENTS_4D[index] * dx
            + GRADIENTS_4D[index + 1] * dy
            + GRADIENTS_4D[index + 2] * dz
            + GRADIENTS_4D[index + 3] * dw)


@njit
def contribution_4d(perm, xsv, ysv, zsv, wsv, dx, dy, dz, dw):
    """Falloff-weighted contribution of lattice vertex (xsv, ysv, zsv, wsv)."""
    attn = 2.0 - (dx * dx + dy * dy + dz * dz + dw * dw)
    if attn <= 0.0:
        return 0.0
    attn *= attn
    return attn * attn * extrapolate_4d(perm, xsv, ysv, zsv, wsv, dx, dy, dz, dw)


@njit
def _single_axis_vertices(perm, xsb, ysb, zsb, wsb, dx0, dy0, dz0, dw0):
    # (1,0,0,0), (0,1,0,0), (0,0,1,0), (0,0,0,1)
    value = contribution_4d(perm, xsb + 1, ysb, zsb, wsb,
                            dx0 - 1.0 - _SQUISH_1, dy0 - _SQUISH_1, dz0 - _SQUISH_1, dw0 - _SQUISH_1)
    value += contribution_4d(perm, xsb, ysb + 1, zsb, wsb,
                             dx0 - _SQUISH_1, dy0 - 1.0 - _SQUISH_1, dz0 - _SQUISH_1, dw0 - _SQUISH_1)
    value += contribution_4d(perm, xsb, ysb, zsb + 1, wsb,
                             dx0 - _SQUISH_1, dy0 - _SQUISH_1, dz0 - 1.0 - _SQUISH_1, dw0 - _SQUISH_1)
    value += contribution_4d(perm, xsb, ysb, zsb, wsb + 1,
                             dx0 - _SQUISH_1, dy0 - _SQUISH_1, dz0 - _SQUISH_1, dw0 - 1.0 - _SQUISH_1)
    return value


@njit
def _two_axis_vertices(perm, xsb, ysb, zsb, wsb, dx0, dy0, dz0, dw0):
    # (1,1,0,0), (1,0,1,0), (1,0,0,1), (0,1,1,0), (0,1,0,1), (0,0,1,1)
    value = contribution_4d(perm, xsb + 1, ysb + 1, zsb, wsb,
                            dx0 - 1.0 - _SQUISH_2, dy0 - 1.0 - _SQUISH_2, dz0 - _SQUISH_2, dw0 - _SQUISH_2)
    value += contribution_4d(perm, xsb + 1, ysb, zsb + 1, wsb,
                             dx0 - 1.0 - _SQUISH_2, dy0 - _SQUISH_2, dz0 - 1.0 - _SQUISH_2, dw0 - _SQUISH_2)
    value += contribution_4d(perm, xsb + 1, ysb, zsb, wsb + 1,
                             dx0 - 1.0 - _SQUISH_2, dy0 - _SQUISH_2, dz0 - _SQUISH_2, dw0 - 1.0 - _SQUISH_2)
    value += contribution_4d(perm, xsb, ysb + 1, zsb + 1, wsb,
                             dx0 - _SQUISH_2, dy0 - 1.0 - _SQUISH_2, dz0 - 1.0 - _SQUISH_2, dw0 - _SQUISH_2)
    value += contribution_4d(perm, xsb, ysb + 1, zsb, wsb + 1,
                             dx0 - _SQUISH_2, dy0 - 1.0 - _SQUISH_2, dz0 - _SQUISH_2, dw0 - 1.0 - _SQUISH_2)
    value += contribution_4d(perm, xsb, ysb, zsb + 1, wsb + 1,
                             dx0 - _SQUISH_2, dy0 - _SQUISH_2, dz0 - 1.0 - _SQUISH_2, dw0 - 1.0 - _SQUISH_2)
    return value


@njit
def _three_axis_vertices(perm, xsb, ysb, zsb, wsb, dx0, dy0, dz0, dw0):
    # (1,1,1,0), (1,1,0,1), (1,0,1,1), (0,1,1,1)
    value = contribution_4d(perm, xsb + 1, ysb + 1, zsb + 1, wsb,
                            dx0 - 1.0 - _SQUISH_3, dy0 - 1.0 - _SQUISH_3, dz0 - 1.0 - _SQUISH_3, dw0 - _SQUISH_3)
    value += contribution_4d(perm, xsb + 1, ysb + 1, zsb, wsb + 1,
                             dx0 - 1.0 - _SQUISH_3, dy0 - 1.0 - _SQUISH_3, dz0 - _SQUISH_3, dw0 - 1.0 - _SQUISH_3)
    value += contribution_4d(perm, xsb + 1, ysb, zsb + 1, wsb + 1,
                             dx0 - 1.0 - _SQUISH_3, dy0 - _SQUISH_3, dz0 - 1.0 - _SQUISH_3, dw0 - 1.0 - _SQUISH_3)
    value += contribution_4d(perm, xsb, ysb + 1, zsb + 1, wsb + 1,
                             dx0 - _SQUISH_3, dy0 - 1.0 - _SQUISH_3, dz0 - 1.0 - _SQUISH_3, dw0 - 1.0 - _SQUISH_3)
    return value


@njit
def _origin_pentachoron(perm, xsb, ysb, zsb, wsb, dx0, dy0, dz0, dw0, xins, yins, zins, wins, in_sum):
    # Two closest of (1,0,0,0), (0,1,0,0), (0,0,1,0), (0,0,0,1).
    a_point = X_BIT
    a_score = xins
    b_point = Y_BIT
    b_score = yins
    if a_score >= b_score and zins > b_score:
        b_score = zins
        b_point = Z_BIT
    elif a_score < b_score and zins > a_score:
        a_score = zins
        a_point = Z_BIT

    if a_score >= b_score and wins > b_score:
        b_score = wins
        b_point = W_BIT
    elif a_score < b_score and wins > a_score:
        a_score = wins
        a_point = W_BIT

    uins = 1.0 - in_sum
    if uins > a_score or uins > b_score:
        # (0,0,0,0) is one of the two closest vertices; the other is c.
        c = b_point if b_score > a_score else a_point

        if (c & X_BIT) == 0:
            xsv_ext0 = xsb - 1
            xsv_ext1 = xsv_ext2 = xsb
            dx_ext0 = dx0 + 1.0
            dx_ext1 = dx_ext2 = dx0
        else:
            xsv_ext0 = xsv_ext1 = xsv_ext2 = xsb + 1
            dx_ext0 = dx_ext1 = dx_ext2 = dx0 - 1.0

        if (c & Y_BIT) == 0:
            ysv_ext0 = ysv_ext1 = ysv_ext2 = ysb
            dy_ext0 = dy_ext1 = dy_ext2 = dy0
            if (c & X_BIT) == X_BIT:
                ysv_ext0 -= 1
                dy_ext0 += 1.0
            else:
                ysv_ext1 -= 1
                dy_ext1 += 1.0
        else:
            ysv_ext0 = ysv_ext1 = ysv_ext2 = ysb + 1
            dy_ext0 = dy_ext1 = dy_ext2 = dy0 - 1.0

        if (c & Z_BIT) == 0:
            zsv_ext0 = zsv_ext1 = zsv_ext2 = zsb
            dz_ext0 = dz_ext1 = dz_ext2 = dz0
            if (c & XY_BITS) != 0:
                if (c & XY_BITS) == XY_BITS:
                    zsv_ext0 -= 1
                    dz_ext0 += 1.0
                else:
                    zsv_ext1 -= 1
                    dz_ext1 += 1.0
            else:
                zsv_ext2 -= 1
                dz_ext2 += 1.0
        else:
            zsv_ext0 = zsv_ext1 = zsv_ext2 = zsb + 1
            dz_ext0 = dz_ext1 = dz_ext2 = dz0 - 1.0

        if (c & W_BIT) == 0:
            wsv_ext0 = wsv_ext1 = wsb
            wsv_ext2 = wsb - 1
            dw_ext0 = dw_ext1 = dw0
            dw_ext2 = dw0 + 1.0
        else:
            wsv_ext0 = wsv_ext1 = wsv_ext2 = wsb + 1
            dw_ext0 = dw_ext1 = dw_ext2 = dw0 - 1.0
    else:
        # (0,0,0,0) is not among the two closest; the extras follow from a | b.
        c = a_point | b_point

        if (c & X_BIT) == 0:
            xsv_ext0 = xsv_ext2 = xsb
            xsv_ext1 = xsb - 1
            dx_ext0 = dx0 - _SQUISH_2
            dx_ext1 = dx0 + 1.0 - _SQUISH_1
            dx_ext2 = dx0 - _SQUISH_1
        else:
            xsv_ext0 = xsv_ext1 = xsv_ext2 = xsb + 1
            dx_ext0 = dx0 - 1.0 - _SQUISH_2
            dx_ext1 = dx_ext2 = dx0 - 1.0 - _SQUISH_1

        if (c & Y_BIT) == 0:
            ysv_ext0 = ysv_ext1 = ysv_ext2 = ysb
            dy_ext0 = dy0 - _SQUISH_2
            dy_ext1 = dy_ext2 = dy0 - _SQUISH_1
            if (c & X_BIT) == X_BIT:
                ysv_ext1 -= 1
                dy_ext1 += 1.0
            else:
                ysv_ext2 -= 1
                dy_ext2 += 1.0
        else:
            ysv_ext0 = ysv_ext1 = ysv_ext2 = ysb + 1
            dy_ext0 = dy0 - 1.0 - _SQUISH_2
            dy_ext1 = dy_ext2 = dy0 - 1.0 - _SQUISH_1

        if (c & Z_BIT) == 0:
            zsv_ext0 = zsv_ext1 = zsv_ext2 = zsb
            dz_ext0 = dz0 - _SQUISH_2
            dz_ext1 = dz_ext2 = dz0 - _SQUISH_1
            if (c & XY_BITS) == XY_BITS:
                zsv_ext1 -= 1
                dz_ext1 += 1.0
            else:
                zsv_ext2 -= 1
                dz_ext2 += 1.0
        else:
            zsv_ext0 = zsv_ext1 = zsv_ext2 = zsb + 1
            dz_ext0 = dz0 - 1.0 - _SQUISH_2
            dz_ext1 = dz_ext2 = dz0 - 1.0 - _SQUISH_1

        if (c & W_BIT) == 0:
            wsv_ext0 = wsv_ext1 = wsb
            wsv_ext2 = wsb - 1
            dw_ext0 = dw0 - _SQUISH_2
            dw_ext1 = dw0 - _SQUISH_1
            dw_ext2 = dw0 + 1.0 - _SQUISH_1
        else:
            wsv_ext0 = wsv_ext1 = wsv_ext2 = wsb + 1
            dw_ext0 = dw0 - 1.0 - _SQUISH_2
            dw_ext1 = dw_ext2 = dw0 - 1.0 - _SQUISH_1

    value = contribution_4d(perm, xsb, ysb, zsb, wsb, dx0, dy0, dz0, dw0)
    value += _single_axis_vertices(perm, xsb, ysb, zsb, wsb, dx0, dy0, dz0, dw0)
    value += contribution_4d(perm, xsv_ext0, ysv_ext0, zsv_ext0, wsv_ext0, dx_ext0, dy_ext0, dz_ext0, dw_ext0)
    value += contribution_4d(perm, xsv_ext1, ysv_ext1, zsv_ext1, wsv_ext1, dx_ext1, dy_ext1, dz_ext1, dw_ext1)
    value += contribution_4d(perm, xsv_ext2, ysv_ext2, zsv_ext2, wsv_ext2, dx_ext2, dy_ext2, dz_ext2, dw_ext2)
    return value


@njit
def _far_pentachoron(perm, xsb, ysb, zsb, wsb, dx0, dy0, dz0, dw0, xins, yins, zins, wins, in_sum):
    # Two closest of (1,1,1,0), (1,1,0,1), (1,0,1,1), (0,1,1,1).
    a_point = 0x0E
    a_score = xins
    b_point = 0x0D
    b_score = yins
    if a_score <= b_score and zins < b_score:
        b_score = zins
        b_point = 0x0B
    elif a_score > b_score and zins < a_score:
        a_score = zins
        a_point = 0x0B

    if a_score <= b_score and wins < b_score:
        b_score = wins
        b_point = 0x07
    elif a_score > b_score and wins < a_score:
        a_score = wins
        a_point = 0x07

    uins = 4.0 - in_sum
    if uins < a_score or uins < b_score:
        # (1,1,1,1) is one of the two closest vertices; the other is c.
        c = b_point if b_score < a_score else a_point

        if (c & X_BIT) != 0:
            xsv_ext0 = xsb + 2
            xsv_ext1 = xsv_ext2 = xsb + 1
            dx_ext0 = dx0 - 2.0 - _SQUISH_4
            dx_ext1 = dx_ext2 = dx0 - 1.0 - _SQUISH_4
        else:
            xsv_ext0 = xsv_ext1 = xsv_ext2 = xsb
            dx_ext0 = dx_ext1 = dx_ext2 = dx0 - _SQUISH_4

        if (c & Y_BIT) != 0:
            ysv_ext0 = ysv_ext1 = ysv_ext2 = ysb + 1
            dy_ext0 = dy_ext1 = dy_ext2 = dy0 - 1.0 - _SQUISH_4
            if (c & X_BIT) != 0:
                ysv_ext1 += 1
                dy_ext1 -= 1.0
            else:
                ysv_ext0 += 1
                dy_ext0 -= 1.0
        else:
            ysv_ext0 = ysv_ext1 = ysv_ext2 = ysb
            dy_ext0 = dy_ext1 = dy_ext2 = dy0 - _SQUISH_4

        if (c & Z_BIT) != 0:
            zsv_ext0 = zsv_ext1 = zsv_ext2 = zsb + 1
            dz_ext0 = dz_ext1 = dz_ext2 = dz0 - 1.0 - _SQUISH_4
            if (c & XY_BITS) != XY_BITS:
                if (c & XY_BITS) == 0:
                    zsv_ext0 += 1
                    dz_ext0 -= 1.0
                else:
                    zsv_ext1 += 1
                    dz_ext1 -= 1.0
            else:
                zsv_ext2 += 1
                dz_ext2 -= 1.0
        else:
            zsv_ext0 = zsv_ext1 = zsv_ext2 = zsb
            dz_ext0 = dz_ext1 = dz_ext2 = dz0 - _SQUISH_4

        if (c & W_BIT) != 0:
            wsv_ext0 = wsv_ext1 = wsb + 1
            wsv_ext2 = wsb + 2
            dw_ext0 = dw_ext1 = dw0 - 1.0 - _SQUISH_4
            dw_ext2 = dw0 - 2.0 - _SQUISH_4
        else:
            wsv_ext0 = wsv_ext1 = wsv_ext2 = wsb
            dw_ext0 = dw_ext1 = dw_ext2 = dw0 - _SQUISH_4
    else:
        # (1,1,1,1) is not among the two closest; the extras follow from a & b.
        c = a_point & b_point

        if (c & X_BIT) != 0:
            xsv_ext0 = xsv_ext2 = xsb + 1
            xsv_ext1 = xsb + 2
            dx_ext0 = dx0 - 1.0 - _SQUISH_2
            dx_ext1 = dx0 - 2.0 - _SQUISH_3
            dx_ext2 = dx0 - 1.0 - _SQUISH_3
        else:
            xsv_ext0 = xsv_ext1 = xsv_ext2 = xsb
            dx_ext0 = dx0 - _SQUISH_2
            dx_ext1 = dx_ext2 = dx0 - _SQUISH_3

        if (c & Y_BIT) != 0:
            ysv_ext0 = ysv_ext1 = ysv_ext2 = ysb + 1
            dy_ext0 = dy0 - 1.0 - _SQUISH_2
            dy_ext1 = dy_ext2 = dy0 - 1.0 - _SQUISH_3
            if (c & X_BIT) != 0:
                ysv_ext2 += 1
                dy_ext2 -= 1.0
            else:
                ysv_ext1 += 1
                dy_ext1 -= 1.0
        else:
            ysv_ext0 = ysv_ext1 = ysv_ext2 = ysb
            dy_ext0 = dy0 - _SQUISH_2
            dy_ext1 = dy_ext2 = dy0 - _SQUISH_3

        if (c & Z_BIT) != 0:
            zsv_ext0 = zsv_ext1 = zsv_ext2 = zsb + 1
            dz_ext0 = dz0 - 1.0 - _SQUISH_2
            dz_ext1 = dz_ext2 = dz0 - 1.0 - _SQUISH_3
            if (c & XY_BITS) != 0:
                zsv_ext2 += 1
                dz_ext2 -= 1.0
            else:
                zsv_ext1 += 1
                dz_ext1 -= 1.0
        else:
            zsv_ext0 = zsv_ext1 = zsv_ext2 = zsb
            dz_ext0 = dz0 - _SQUISH_2
            dz_ext1 = dz_ext2 = dz0 - _SQUISH_3

        if (c & W_BIT) != 0:
            wsv_ext0 = wsv_ext1 = wsb + 1
            wsv_ext2 = wsb + 2
            dw_ext0 = dw0 - 1.0 - _SQUISH_2
            dw_ext1 = dw0 - 1.0 - _SQUISH_3
            dw_ext2 = dw0 - 2.0 - _SQUISH_3
        else:
            wsv_ext0 = wsv_ext1 = wsv_ext2 = wsb
            dw_ext0 = dw0 - _SQUISH_2
            dw_ext1 = dw_ext2 = dw0 - _SQUISH_3

    value = _three_axis_vertices(perm, xsb, ysb, zsb, wsb, dx0, dy0, dz0, dw0)
    value += contribution_4d(perm, xsb + 1, ysb + 1, zsb + 1, wsb + 1,
                             dx0 - 1.0 - _SQUISH_4, dy0 - 1.0 - _SQUISH_4,
                             dz0 - 1.0 - _SQUISH_4, dw0 - 1.0 - _SQUISH_4)
    value += contribution_4d(perm, xsv_ext0, ysv_ext0, zsv_ext0, wsv_ext0, dx_ext0, dy_ext0, dz_ext0, dw_ext0)
    value += contribution_4d(perm, xsv_ext1, ysv_ext1, zsv_ext1, wsv_ext1, dx_ext1, dy_ext1, dz_ext1, dw_ext1)
    value += contribution_4d(perm, xsv_ext2, ysv_ext2, zsv_ext2, wsv_ext2, dx_ext2, dy_ext2, dz_ext2, dw_ext2)
    return value


@njit
def _first_dispentachoron(perm, xsb, ysb, zsb, wsb, dx0, dy0, dz0, dw0, xins, yins, zins, wins, in_sum):
    a_is_bigger_side = True
    b_is_bigger_side = True

    # Closer of (1,1,0,0) and (0,0,1,1).
    if xins + yins > zins + wins:
        a_score = xins + yins
        a_point = 0x03
    else:
        a_score = zins + wins
        a_point = 0x0C

    # Closer of (1,0,1,0) and (0,1,0,1).
    if xins + zins > yins + wins:
        b_score = xins + zins
        b_point = 0x05
    else:
        b_score = yins + wins
        b_point = 0x0A

    # The closer of (1,0,0,1) and (0,1,1,0) replaces the further of a and b if closer still.
    if xins + wins > yins + zins:
        score = xins + wins
        if a_score >= b_score and score > b_score:
            b_score = score
            b_point = 0x09
        elif a_score < b_score and score > a_score:
            a_score = score
            a_point = 0x09
    else:
        score = yins + zins
        if a_score >= b_score and score > b_score:
            b_score = score
            b_point = 0x06
        elif a_score < b_score and score > a_score:
            a_score = score
            a_point = 0x06

    # Each single-axis vertex may still be closer than the further of a and b.
    p1 = 2.0 - in_sum + xins
    if a_score >= b_score and p1 > b_score:
        b_score = p1
        b_point = X_BIT
        b_is_bigger_side = False
    elif a_score < b_score and p1 > a_score:
        a_score = p1
        a_point = X_BIT
        a_is_bigger_side = False

    p2 = 2.0 - in_sum + yins
    if a_score >= b_score and p2 > b_score:
        b_score = p2
        b_point = Y_BIT
        b_is_bigger_side = False
    elif a_score < b_score and p2 > a_score:
        a_score = p2
        a_point = Y_BIT
        a_is_bigger_side = False

    p3 = 2.0 - in_sum + zins
    if a_score >= b_score and p3 > b_score:
        b_score = p3
        b_point = Z_BIT
        b_is_bigger_side = False
    elif a_score < b_score and p3 > a_score:
        a_score = p3
        a_point = Z_BIT
        a_is_bigger_side = False

    p4 = 2.0 - in_sum + wins
    if a_score >= b_score and p4 > b_score:
        b_score = p4
        b_point = W_BIT
        b_is_bigger_side = False
    elif a_score < b_score and p4 > a_score:
        a_score = p4
        a_point = W_BIT
        a_is_bigger_side = False

    if a_is_bigger_side == b_is_bigger_side:
        if a_is_bigger_side:
            # Both closest vertices are two-axis vertices.
            c1 = a_point | b_point
            c2 = a_point & b_point
            if (c1 & X_BIT) == 0:
                xsv_ext0 = xsb
                xsv_ext1 = xsb - 1
                dx_ext0 = dx0 - _SQUISH_3
                dx_ext1 = dx0 + 1.0 - _SQUISH_2
            else:
                xsv_ext0 = xsv_ext1 = xsb + 1
                dx_ext0 = dx0 - 1.0 - _SQUISH_3
                dx_ext1 = dx0 - 1.0 - _SQUISH_2

            if (c1 & Y_BIT) == 0:
                ysv_ext0 = ysb
                ysv_ext1 = ysb - 1
                dy_ext0 = dy0 - _SQUISH_3
                dy_ext1 = dy0 + 1.0 - _SQUISH_2
            else:
                ysv_ext0 = ysv_ext1 = ysb + 1
                dy_ext0 = dy0 - 1.0 - _SQUISH_3
                dy_ext1 = dy0 - 1.0 - _SQUISH_2

            if (c1 & Z_BIT) == 0:
                zsv_ext0 = zsb
                zsv_ext1 = zsb - 1
                dz_ext0 = dz0 - _SQUISH_3
                dz_ext1 = dz0 + 1.0 - _SQUISH_2
            else:
                zsv_ext0 = zsv_ext1 = zsb + 1
                dz_ext0 = dz0 - 1.0 - _SQUISH_3
                dz_ext1 = dz0 - 1.0 - _SQUISH_2

            if (c1 & W_BIT) == 0:
                wsv_ext0 = wsb
                wsv_ext1 = wsb - 1
                dw_ext0 = dw0 - _SQUISH_3
                dw_ext1 = dw0 + 1.0 - _SQUISH_2
            else:
                wsv_ext0 = wsv_ext1 = wsb + 1
                dw_ext0 = dw0 - 1.0 - _SQUISH_3
                dw_ext1 = dw0 - 1.0 - _SQUISH_2

            # A (2,0,0,0) permutation along the shared axis.
            xsv_ext2 = xsb
            ysv_ext2 = ysb
            zsv_ext2 = zsb
            wsv_ext2 = wsb
            dx_ext2 = dx0 - _SQUISH_2
            dy_ext2 = dy0 - _SQUISH_2
            dz_ext2 = dz0 - _SQUISH_2
            dw_ext2 = dw0 - _SQUISH_2
            if (c2 & X_BIT) != 0:
                xsv_ext2 += 2
                dx_ext2 -= 2.0
            elif (c2 & Y_BIT) != 0:
                ysv_ext2 += 2
                dy_ext2 -= 2.0
            elif (c2 & Z_BIT) != 0:
                zsv_ext2 += 2
                dz_ext2 -= 2.0
            else:
                wsv_ext2 += 2
                dw_ext2 -= 2.0
        else:
            # Both closest vertices are single-axis vertices; one extra is (0,0,0,0).
            xsv_ext2 = xsb
            ysv_ext2 = ysb
            zsv_ext2 = zsb
            wsv_ext2 = wsb
            dx_ext2 = dx0
            dy_ext2 = dy0
            dz_ext2 = dz0
            dw_ext2 = dw0

            c = a_point | b_point
            if (c & X_BIT) == 0:
                xsv_ext0 = xsb - 1
                xsv_ext1 = xsb
                dx_ext0 = dx0 + 1.0 - _SQUISH_1
                dx_ext1 = dx0 - _SQUISH_1
            else:
                xsv_ext0 = xsv_ext1 = xsb + 1
                dx_ext0 = dx_ext1 = dx0 - 1.0 - _SQUISH_1

            if (c & Y_BIT) == 0:
                ysv_ext0 = ysv_ext1 = ysb
                dy_ext0 = dy_ext1 = dy0 - _SQUISH_1
                if (c & X_BIT) == X_BIT:
                    ysv_ext0 -= 1
                    dy_ext0 += 1.0
                else:
                    ysv_ext1 -= 1
                    dy_ext1 += 1.0
            else:
                ysv_ext0 = ysv_ext1 = ysb + 1
                dy_ext0 = dy_ext1 = dy0 - 1.0 - _SQUISH_1

            if (c & Z_BIT) == 0:
                zsv_ext0 = zsv_ext1 = zsb
                dz_ext0 = dz_ext1 = dz0 - _SQUISH_1
                if (c & XY_BITS) == XY_BITS:
                    zsv_ext0 -= 1
                    dz_ext0 += 1.0
                else:
                    zsv_ext1 -= 1
                    dz_ext1 += 1.0
            else:
                zsv_ext0 = zsv_ext1 = zsb + 1
                dz_ext0 = dz_ext1 = dz0 - 1.0 - _SQUISH_1

            if (c & W_BIT) == 0:
                wsv_ext0 = wsb
                wsv_ext1 = wsb - 1
                dw_ext0 = dw0 - _SQUISH_1
                dw_ext1 = dw0 + 1.0 - _SQUISH_1
            else:
                wsv_ext0 = wsv_ext1 = wsb + 1
                dw_ext0 = dw_ext1 = dw0 - 1.0 - _SQUISH_1
    else:
        # One closest vertex on each side.
        if a_is_bigger_side:
            c1 = a_point
            c2 = b_point
        else:
            c1 = b_point
            c2 = a_point

        # The two-axis vertex with each 0 replaced by -1, one axis at a time.
        if (c1 & X_BIT) == 0:
            xsv_ext0 = xsb - 1
            xsv_ext1 = xsb
            dx_ext0 = dx0 + 1.0 - _SQUISH_1
            dx_ext1 = dx0 - _SQUISH_1
        else:
            xsv_ext0 = xsv_ext1 = xsb + 1
            dx_ext0 = dx_ext1 = dx0 - 1.0 - _SQUISH_1

        if (c1 & Y_BIT) == 0:
            ysv_ext0 = ysv_ext1 = ysb
            dy_ext0 = dy_ext1 = dy0 - _SQUISH_1
            if (c1 & X_BIT) == X_BIT:
                ysv_ext0 -= 1
                dy_ext0 += 1.0
            else:
                ysv_ext1 -= 1
                dy_ext1 += 1.0
        else:
            ysv_ext0 = ysv_ext1 = ysb + 1
            dy_ext0 = dy_ext1 = dy0 - 1.0 - _SQUISH_1

        if (c1 & Z_BIT) == 0:
            zsv_ext0 = zsv_ext1 = zsb
            dz_ext0 = dz_ext1 = dz0 - _SQUISH_1
            if (c1 & XY_BITS) == XY_BITS:
                zsv_ext0 -= 1
                dz_ext0 += 1.0
            else:
                zsv_ext1 -= 1
                dz_ext1 += 1.0
        else:
            zsv_ext0 = zsv_ext1 = zsb + 1
            dz_ext0 = dz_ext1 = dz0 - 1.0 - _SQUISH_1

        if (c1 & W_BIT) == 0:
            wsv_ext0 = wsb
            wsv_ext1 = wsb - 1
            dw_ext0 = dw0 - _SQUISH_1
            dw_ext1 = dw0 + 1.0 - _SQUISH_1
        else:
            wsv_ext0 = wsv_ext1 = wsb + 1
            dw_ext0 = dw_ext1 = dw0 - 1.0 - _SQUISH_1

        # A (2,0,0,0) permutation along the single-axis vertex's axis.
        xsv_ext2 = xsb
        ysv_ext2 = ysb
        zsv_ext2 = zsb
        wsv_ext2 = wsb
        dx_ext2 = dx0 - _SQUISH_2
        dy_ext2 = dy0 - _SQUISH_2
        dz_ext2 = dz0 - _SQUISH_2
        dw_ext2 = dw0 - _SQUISH_2
        if (c2 & X_BIT) != 0:
            xsv_ext2 += 2
            dx_ext2 -= 2.0
        elif (c2 & Y_BIT) != 0:
            ysv_ext2 += 2
            dy_ext2 -= 2.0
        elif (c2 & Z_BIT) != 0:
            zsv_ext2 += 2
            dz_ext2 -= 2.0
        else:
            wsv_ext2 += 2
            dw_ext2 -= 2.0

    value = _single_axis_vertices(perm, xsb, ysb, zsb, wsb, dx0, dy0, dz0, dw0)
    value += _two_axis_vertices(perm, xsb, ysb, zsb, wsb, dx0, dy0, dz0, dw0)
    value += contribution_4d(perm, xsv_ext0, ysv_ext0, zsv_ext0, wsv_ext0, dx_ext0, dy_ext0, dz_ext0, dw_ext0)
    value += contribution_4d(perm, xsv_ext1, ysv_ext1, zsv_ext1, wsv_ext1, dx_ext1, dy_ext1, dz_ext1, dw_ext1)
    value += contribution_4d(perm, xsv_ext2, ysv_ext2, zsv_ext2, wsv_ext2, dx_ext2, dy_ext2, dz_ext2, dw_ext2)
    return value


@njit
def _second_dispentachoron(perm, xsb, ysb, zsb, wsb, dx0, dy0, dz0, dw0, xins, yins, zins, wins, in_sum):
    a_is_bigger_side = True
    b_is_bigger_side = True

    # Closer of (0,0,1,1) and (1,1,0,0).
    if xins + yins < zins + wins:
        a_score = xins + yins
        a_point = 0x0C
    else:
        a_score = zins + wins
        a_point = 0x03

    # Closer of (0,1,0,1) and (1,0,1,0).
    if xins + zins < yins + wins:
        b_score = xins + zins
        b_point = 0x0A
    else:
        b_score = yins + wins
        b_point = 0x05

    # The closer of (0,1,1,0) and (1,0,0,1) replaces the further of a and b if closer still.
    if xins + wins < yins + zins:
        score = xins + wins
        if a_score <= b_score and score < b_score:
            b_score = score
            b_point = 0x06
        elif a_score > b_score and score < a_score:
            a_score = score
            a_point = 0x06
    else:
        score = yins + zins
        if a_score <= b_score and score < b_score:
            b_score = score
            b_point = 0x09
        elif a_score > b_score and score < a_score:
            a_score = score
            a_point = 0x09

    # Each three-axis vertex may still be closer than the further of a and b.
    p1 = 3.0 - in_sum + xins
    if a_score <= b_score and p1 < b_score:
        b_score = p1
        b_point = 0x0E
        b_is_bigger_side = False
    elif a_score > b_score and p1 < a_score:
        a_score = p1
        a_point = 0x0E
        a_is_bigger_side = False

    p2 = 3.0 - in_sum + yins
    if a_score <= b_score and p2 < b_score:
        b_score = p2
        b_point = 0x0D
        b_is_bigger_side = False
    elif a_score > b_score and p2 < a_score:
        a_score = p2
        a_point = 0x0D
        a_is_bigger_side = False

    p3 = 3.0 - in_sum + zins
    if a_score <= b_score and p3 < b_score:
        b_score = p3
        b_point = 0x0B
        b_is_bigger_side = False
    elif a_score > b_score and p3 < a_score:
        a_score = p3
        a_point = 0x0B
        a_is_bigger_side = False

    p4 = 3.0 - in_sum + wins
    if a_score <= b_score and p4 < b_score:
        b_score = p4
        b_point = 0x07
        b_is_bigger_side = False
    elif a_score > b_score and p4 < a_score:
        a_score = p4
        a_point = 0x07
        a_is_bigger_side = False

    if a_is_bigger_side == b_is_bigger_side:
        if a_is_bigger_side:
            # Both closest vertices are two-axis vertices.
            c1 = a_point & b_point
            c2 = a_point | b_point

            # (1,0,0,0) and (2,0,0,0) permutations along the shared axis.
            xsv_ext0 = xsv_ext1 = xsb
            ysv_ext0 = ysv_ext1 = ysb
            zsv_ext0 = zsv_ext1 = zsb
            wsv_ext0 = wsv_ext1 = wsb
            dx_ext0 = dx0 - _SQUISH_1
            dy_ext0 = dy0 - _SQUISH_1
            dz_ext0 = dz0 - _SQUISH_1
            dw_ext0 = dw0 - _SQUISH_1
            dx_ext1 = dx0 - _SQUISH_2
            dy_ext1 = dy0 - _SQUISH_2
            dz_ext1 = dz0 - _SQUISH_2
            dw_ext1 = dw0 - _SQUISH_2
            if (c1 & X_BIT) != 0:
                xsv_ext0 += 1
                dx_ext0 -= 1.0
                xsv_ext1 += 2
                dx_ext1 -= 2.0
            elif (c1 & Y_BIT) != 0:
                ysv_ext0 += 1
                dy_ext0 -= 1.0
                ysv_ext1 += 2
                dy_ext1 -= 2.0
            elif (c1 & Z_BIT) != 0:
                zsv_ext0 += 1
                dz_ext0 -= 1.0
                zsv_ext1 += 2
                dz_ext1 -= 2.0
            else:
                wsv_ext0 += 1
                dw_ext0 -= 1.0
                wsv_ext1 += 2
                dw_ext1 -= 2.0

            # A (1,1,1,-1) permutation along the omitted axis.
            xsv_ext2 = xsb + 1
            ysv_ext2 = ysb + 1
            zsv_ext2 = zsb + 1
            wsv_ext2 = wsb + 1
            dx_ext2 = dx0 - 1.0 - _SQUISH_2
            dy_ext2 = dy0 - 1.0 - _SQUISH_2
            dz_ext2 = dz0 - 1.0 - _SQUISH_2
            dw_ext2 = dw0 - 1.0 - _SQUISH_2
            if (c2 & X_BIT) == 0:
                xsv_ext2 -= 2
                dx_ext2 += 2.0
            elif (c2 & Y_BIT) == 0:
                ysv_ext2 -= 2
                dy_ext2 += 2.0
            elif (c2 & Z_BIT) == 0:
                zsv_ext2 -= 2
                dz_ext2 += 2.0
            else:
                wsv_ext2 -= 2
                dw_ext2 += 2.0
        else:
            # Both closest vertices are three-axis vertices; one extra is (1,1,1,1).
            xsv_ext2 = xsb + 1
            ysv_ext2 = ysb + 1
            zsv_ext2 = zsb + 1
            wsv_ext2 = wsb + 1
            dx_ext2 = dx0 - 1.0 - _SQUISH_4
            dy_ext2 = dy0 - 1.0 - _SQUISH_4
            dz_ext2 = dz0 - 1.0 - _SQUISH_4
            dw_ext2 = dw0 - 1.0 - _SQUISH_4

            c = a_point & b_point
            if (c & X_BIT) != 0:
                xsv_ext0 = xsb + 2
                xsv_ext1 = xsb + 1
                dx_ext0 = dx0 - 2.0 - _SQUISH_3
                dx_ext1 = dx0 - 1.0 - _SQUISH_3
            else:
                xsv_ext0 = xsv_ext1 = xsb
                dx_ext0 = dx_ext1 = dx0 - _SQUISH_3

            if (c & Y_BIT) != 0:
                ysv_ext0 = ysv_ext1 = ysb + 1
                dy_ext0 = dy_ext1 = dy0 - 1.0 - _SQUISH_3
                if (c & X_BIT) == 0:
                    ysv_ext0 += 1
                    dy_ext0 -= 1.0
                else:
                    ysv_ext1 += 1
                    dy_ext1 -= 1.0
            else:
                ysv_ext0 = ysv_ext1 = ysb
                dy_ext0 = dy_ext1 = dy0 - _SQUISH_3

            if (c & Z_BIT) != 0:
                zsv_ext0 = zsv_ext1 = zsb + 1
                dz_ext0 = dz_ext1 = dz0 - 1.0 - _SQUISH_3
                if (c & XY_BITS) == 0:
                    zsv_ext0 += 1
                    dz_ext0 -= 1.0
                else:
                    zsv_ext1 += 1
                    dz_ext1 -= 1.0
            else:
                zsv_ext0 = zsv_ext1 = zsb
                dz_ext0 = dz_ext1 = dz0 - _SQUISH_3

            if (c & W_BIT) != 0:
                wsv_ext0 = wsb + 1
                wsv_ext1 = wsb + 2
                dw_ext0 = dw0 - 1.0 - _SQUISH_3
                dw_ext1 = dw0 - 2.0 - _SQUISH_3
            else:
                wsv_ext0 = wsv_ext1 = wsb
                dw_ext0 = dw_ext1 = dw0 - _SQUISH_3
    else:
        # One closest vertex on each side.
        if a_is_bigger_side:
            c1 = a_point
            c2 = b_point
        else:
            c1 = b_point
            c2 = a_point

        # The two-axis vertex with each 1 replaced by 2, one axis at a time.
        if (c1 & X_BIT) != 0:
            xsv_ext0 = xsb + 2
            xsv_ext1 = xsb + 1
            dx_ext0 = dx0 - 2.0 - _SQUISH_3
            dx_ext1 = dx0 - 1.0 - _SQUISH_3
        else:
            xsv_ext0 = xsv_ext1 = xsb
            dx_ext0 = dx_ext1 = dx0 - _SQUISH_3

        if (c1 & Y_BIT) != 0:
            ysv_ext0 = ysv_ext1 = ysb + 1
            dy_ext0 = dy_ext1 = dy0 - 1.0 - _SQUISH_3
            if (c1 & X_BIT) == 0:
                ysv_ext0 += 1
                dy_ext0 -= 1.0
            else:
                ysv_ext1 += 1
                dy_ext1 -= 1.0
        else:
            ysv_ext0 = ysv_ext1 = ysb
            dy_ext0 = dy_ext1 = dy0 - _SQUISH_3

        if (c1 & Z_BIT) != 0:
            zsv_ext0 = zsv_ext1 = zsb + 1
            dz_ext0 = dz_ext1 = dz0 - 1.0 - _SQUISH_3
            if (c1 & XY_BITS) == 0:
                zsv_ext0 += 1
                dz_ext0 -= 1.0
            else:
                zsv_ext1 += 1
                dz_ext1 -= 1.0
        else:
            zsv_ext0 = zsv_ext1 = zsb
            dz_ext0 = dz_ext1 = dz0 - _SQUISH_3

        if (c1 & W_BIT) != 0:
            wsv_ext0 = wsb + 1
            wsv_ext1 = wsb + 2
            dw_ext0 = dw0 - 1.0 - _SQUISH_3
            dw_ext1 = dw0 - 2.0 - _SQUISH_3
        else:
            wsv_ext0 = wsv_ext1 = wsb
            dw_ext0 = dw_ext1 = dw0 - _SQUISH_3

        # A (1,1,1,-1) permutation along the three-axis vertex's missing axis.
        xsv_ext2 = xsb + 1
        ysv_ext2 = ysb + 1
        zsv_ext2 = zsb + 1
        wsv_ext2 = wsb + 1
        dx_ext2 = dx0 - 1.0 - _SQUISH_2
        dy_ext2 = dy0 - 1.0 - _SQUISH_2
        dz_ext2 = dz0 - 1.0 - _SQUISH_2
        dw_ext2 = dw0 - 1.0 - _SQUISH_2
        if (c2 & X_BIT) == 0:
            xsv_ext2 -= 2
            dx_ext2 += 2.0
        elif (c2 & Y_BIT) == 0:
            ysv_ext2 -= 2
            dy_ext2 += 2.0
        elif (c2 & Z_BIT) == 0:
            zsv_ext2 -= 2
            dz_ext2 += 2.0
        else:
            wsv_ext2 -= 2
            dw_ext2 += 2.0

    value = _three_axis_vertices(perm, xsb, ysb, zsb, wsb, dx0, dy0, dz0, dw0)
    value += _two_axis_vertices(perm, xsb, ysb, zsb, wsb, dx0, dy0, dz0, dw0)
    value += contribution_4d(perm, xsv_ext0, ysv_ext0, zsv_ext0, wsv_ext0, dx_ext0, dy_ext0, dz_ext0, dw_ext0)
    value += contribution_4d(perm, xsv_ext1, ysv_ext1, zsv_ext1, wsv_ext1, dx_ext1, dy_ext1, dz_ext1, dw_ext1)
    value += contribution_4d(perm, xsv_ext2, ysv_ext2, zsv_ext2, wsv_ext2, dx_ext2, dy_ext2, dz_ext2, dw_ext2)
    return value


@njit
def noise_4d(perm, x, y, z, w):
    """Evaluates 4D noise at a single point."""
    stretch_offset = (x + y + z + w) * STRETCH_CONSTANT_4D
    xs = x + stretch_offset
    ys = y + stretch_offset
    zs = z + stretch_offset
    ws = w + stretch_offset

    xsb = math.floor(xs)
    ysb = math.floor(ys)
    zsb = math.floor(zs)
    wsb = math.floor(ws)

    squish_offset = (xsb + ysb + zsb + wsb) * SQUISH_CONSTANT_4D
    dx0 = x - (xsb + squish_offset)
    dy0 = y - (ysb + squish_offset)
    dz0 = z - (zsb + squish_offset)
    dw0 = w - (wsb + squish_offset)

    xins = xs - xsb
    yins = ys - ysb
    zins = zs - zsb
    wins = ws - wsb
    in_sum = xins + yins + zins + wins

    if in_sum <= 1.0:
        value = _origin_pentachoron(perm, xsb, ysb, zsb, wsb, dx0, dy0, dz0, dw0,
                                    xins, yins, zins, wins, in_sum)
    elif in_sum >= 3.0:
        value = _far_pentachoron(perm, xsb, ysb, zsb, wsb, dx0, dy0, dz0, dw0,
                                 xins, yins, zins, wins, in_sum)
    elif in_sum <= 2.0:
        value = _first_dispentachoron(perm, xsb, ysb, zsb, wsb, dx0, dy0, dz0, dw0,
                                      xins, yins, zins, wins, in_sum)
    else:
        value = _second_dispentachoron(perm, xsb, ysb, zsb, wsb, dx0, dy0, dz0, dw0,
                                       xins, yins, zins, wins, in_sum)

    return value / NORM_CONSTANT_4D


@njit
def noise_4d_array(perm, x, y, z, w):
    """Evaluates 4D noise for each quadruple of a flat coordinate array."""
    out = np.empty(x.shape[0], dtype=np.float64)
    for i in range(x.shape[0]):
        out[i] = noise_4d(perm, x[i], y[i], z[i], w[i])
    return out
