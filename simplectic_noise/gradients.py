# simplectic_noise/gradients.py

"""
================================================================================
LATTICE CONSTANTS AND GRADIENT TABLES
================================================================================
Process-wide immutable constants shared by the 2D, 3D and 4D kernels.

- Stretch/squish constants map between the orthogonal input space and the
  simplectic lattice: STRETCH = (1/sqrt(N+1) - 1) / N and
  SQUISH = (sqrt(N+1) - 1) / N.
- Gradient tables are flat int64 arrays, one row of N components per
  gradient. All rows in a table have (approximately) the same length.
- Normalization constants are empirical divisors that keep the output
  inside roughly [-1, 1]. They are tuning constants, not derived bounds.

The arrays are marked read-only; the compiled kernels freeze them as
constants at compile time.
================================================================================
"""

import numpy as np


def _frozen(values) -> np.ndarray:
    table = np.array(values, dtype=np.int64)
    table.flags.writeable = False
    return table


# --- Stretch / Squish ---
STRETCH_CONSTANT_2D = -0.211324865405187    # (1/sqrt(2+1)-1)/2
SQUISH_CONSTANT_2D = 0.366025403784439      # (sqrt(2+1)-1)/2
STRETCH_CONSTANT_3D = -1.0 / 6.0            # (1/sqrt(3+1)-1)/3
SQUISH_CONSTANT_3D = 1.0 / 3.0              # (sqrt(3+1)-1)/3
STRETCH_CONSTANT_4D = -0.138196601125011    # (1/sqrt(4+1)-1)/4
SQUISH_CONSTANT_4D = 0.309016994374947      # (sqrt(4+1)-1)/4

# --- Normalization ---
NORM_CONSTANT_2D = 47.0
# Safe bound found over ~4 billion evaluations; observed extremes were
# -28.12974224468639 and 28.134269887817773.
NORM_CONSTANT_3D = 28.25
NORM_CONSTANT_4D = 30.0

# --- Gradients ---
# Directions toward the vertices of an octagon.
GRADIENTS_2D = _frozen([
     5,  2,    2,  5,
    -5,  2,   -2,  5,
     5, -2,    2, -5,
    -5, -2,   -2, -5,
])

# Directions toward the vertices of a rhombicuboctahedron, 24 rows of 3.
GRADIENTS_3D = _frozen([
     0,  3,  2,    0,  2,  3,    3,  0,  2,    2,  0,  3,    3,  2,  0,    2,  3,  0,
     0, -3,  2,    0,  2, -3,   -3,  0,  2,    2,  0, -3,   -3,  2,  0,    2, -3,  0,
     0,  3, -2,    0, -2,  3,    3,  0, -2,   -2,  0,  3,    3, -2,  0,   -2,  3,  0,
     0, -3, -2,    0, -2, -3,   -3,  0, -2,   -2,  0, -3,   -3, -2,  0,   -2, -3,  0,
])

# Directions toward the vertices of a disprismatotesseractihexadecachoron,
# 64 rows of 4 so that a byte masked with 0xFC always lands on a row start.
GRADIENTS_4D = _frozen([
     3,  1,  1,  1,    1,  3,  1,  1,    1,  1,  3,  1,    1,  1,  1,  3,
    -3,  1,  1,  1,   -1,  3,  1,  1,   -1,  1,  3,  1,   -1,  1,  1,  3,
     3, -1,  1,  1,    1, -3,  1,  1,    1, -1,  3,  1,    1, -1,  1,  3,
    -3, -1,  1,  1,   -1, -3,  1,  1,   -1, -1,  3,  1,   -1, -1,  1,  3,
     3,  1, -1,  1,    1,  3, -1,  1,    1,  1, -3,  1,    1,  1, -1,  3,
    -3,  1, -1,  1,   -1,  3, -1,  1,   -1,  1, -3,  1,   -1,  1, -1,  3,
     3, -1, -1,  1,    1, -3, -1,  1,    1, -1, -3,  1,    1, -1, -1,  3,
    -3, -1, -1,  1,   -1, -3, -1,  1,   -1, -1, -3,  1,   -1, -1, -1,  3,
     3,  1,  1, -1,    1,  3,  1, -1,    1,  1,  3, -1,    1,  1,  1, -3,
    -3,  1,  1, -1,   -1,  3,  1, -1,   -1,  1,  3, -1,   -1,  1,  1, -3,
     3, -1,  1, -1,    1, -3,  1, -1,    1, -1,  3, -1,    1, -1,  1, -3,
    -3, -1,  1, -1,   -1, -3,  1, -1,   -1, -1,  3, -1,   -1, -1,  1, -3,
     3,  1, -1, -1,    1,  3, -1, -1,    1,  1, -3, -1,    1,  1, -1, -3,
    -3,  1, -1, -1,   -1,  3, -1, -1,   -1,  1, -3, -1,   -1,  1, -1, -3,
     3, -1, -1, -1,    1, -3, -1, -1,    1, -1, -3, -1,    1, -1, -1, -3,
    -3, -1, -1, -1,   -1, -3, -1, -1,   -1, -1, -3, -1,   -1, -1, -1, -3,
])

# Number of rows in the 3D table. It is not a power of two, so the lookup goes
# through a precomputed per-table index instead of a bit mask.
GRADIENT_ROWS_3D = len(GRADIENTS_3D) // 3

# --- Default Permutation ---
# The standard order from Ken Perlin's "Improved Noise" reference implementation.
DEFAULT_PERMUTATION = _frozen([
    151, 160, 137,  91,  90,  15, 131,  13, 201,  95,  96,  53, 194, 233,   7, 225,
    140,  36, 103,  30,  69, 142,   8,  99,  37, 240,  21,  10,  23, 190,   6, 148,
    247, 120, 234,  75,   0,  26, 197,  62,  94, 252, 219, 203, 117,  35,  11,  32,
     57, 177,  33,  88, 237, 149,  56,  87, 174,  20, 125, 136, 171, 168,  68, 175,
     74, 165,  71, 134, 139,  48,  27, 166,  77, 146, 158, 231,  83, 111, 229, 122,
     60, 211, 133, 230, 220, 105,  92,  41,  55,  46, 245,  40, 244, 102, 143,  54,
     65,  25,  63, 161,   1, 216,  80,  73, 209,  76, 132, 187, 208,  89,  18, 169,
    200, 196, 135, 130, 116, 188, 159,  86, 164, 100, 109, 198, 173, 186,   3,  64,
     52, 217, 226, 250, 124, 123,   5, 202,  38, 147, 118, 126, 255,  82,  85, 212,
    207, 206,  59, 227,  47,  16,  58,  17, 182, 189,  28,  42, 223, 183, 170, 213,
    119, 248, 152,   2,  44, 154, 163,  70, 221, 153, 101, 155, 167,  43, 172,   9,
    129,  22,  39, 253,  19,  98, 108, 110,  79, 113, 224, 232, 178, 185, 112, 104,
    218, 246,  97, 228, 251,  34, 242, 193, 238, 210, 144,  12, 191, 179, 162, 241,
     81,  51, 145, 235, 249,  14, 239, 107,  49, 192, 214,  31, 181, 199, 106, 157,
    184,  84, 204, 176, 115, 121,  50,  45, 127,   4, 150, 254, 138, 236, 205,  93,
    222, 114,  67,  29,  24,  72, 243, 141, 128, 195,  78,  66, 215,  61, 156, 180,
])
