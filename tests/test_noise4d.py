import itertools
import math

import numpy as np
import pytest

from simplectic_noise import NoiseField4D, PermutationTable
from simplectic_noise.gradients import NORM_CONSTANT_4D, SQUISH_CONSTANT_4D, STRETCH_CONSTANT_4D
from simplectic_noise.noise4d import contribution_4d, extrapolate_4d, noise_4d

# Regression baselines for the default permutation. Together they cover all
# four regions of the stretched hypercube.
GOLDEN_4D = [
    ((0.05, 0.1, 0.05, 0.1), 0.20237422673302566),
    ((0.1, 0.2, 0.3, 0.4), 0.35525251953849973),
    ((-7.7, 3.14, 12.5, -0.6), 0.33944855159649584),
    ((1.5, -2.25, 0.33, 0.8), -0.48843037266995915),
    ((1.35, 1.4, 1.45, 1.3), 0.0038434245509725517),
    ((1.8, 1.85, 1.9, 1.75), 0.20113651171514763),
]


@pytest.fixture(scope="module")
def field():
    return NoiseField4D(permutation_table=PermutationTable.default())


def _neighbourhood_sum(perm, x, y, z, w):
    """Sums the contribution of every lattice vertex around the point."""
    stretch_offset = (x + y + z + w) * STRETCH_CONSTANT_4D
    base = [math.floor(c + stretch_offset) for c in (x, y, z, w)]
    total = 0.0
    for offset in itertools.product(range(-1, 3), repeat=4):
        xv, yv, zv, wv = (b + o for b, o in zip(base, offset))
        squish = (xv + yv + zv + wv) * SQUISH_CONSTANT_4D
        total += contribution_4d(perm, xv, yv, zv, wv,
                                 x - xv - squish, y - yv - squish, z - zv - squish, w - wv - squish)
    return total / NORM_CONSTANT_4D


@pytest.mark.parametrize("point, expected", GOLDEN_4D)
def test_golden_values(field, point, expected):
    assert field.eval(*point) == pytest.approx(expected, abs=1e-12)


def test_origin_is_near_zero(field):
    assert field.eval(0.0, 0.0, 0.0, 0.0) == pytest.approx(0.0, abs=1e-12)


def test_seeded_golden_value():
    assert NoiseField4D(seed=0).eval(0.1, 0.2, 0.3, 0.4) == pytest.approx(0.016224808478817857, abs=1e-12)


def test_range(field):
    rng = np.random.default_rng(11)
    x, y, z, w = rng.uniform(-100.0, 100.0, (4, 20000))
    values = field.eval_array(x, y, z, w)
    assert np.all(np.isfinite(values))
    assert values.min() >= -1.0 and values.max() <= 1.0
    assert values.min() < -0.5 and values.max() > 0.5


def test_continuity(field):
    rng = np.random.default_rng(12)
    x, y, z, w = rng.uniform(-50.0, 50.0, (4, 5000))
    step = 1e-4
    jumps = np.abs(field.eval_array(x + step, y - step, z + step, w - step)
                   - field.eval_array(x, y, z, w))
    assert jumps.max() < 0.01


def test_matches_neighbourhood_sum(field):
    # Vertices outside the contributing set can still sit just inside the
    # falloff radius, so the kernel only agrees with the full sum to ~1e-3.
    rng = np.random.default_rng(13)
    perm = field.table.perm
    for x, y, z, w in rng.uniform(-20.0, 20.0, (60, 4)):
        assert noise_4d(perm, x, y, z, w) == pytest.approx(_neighbourhood_sum(perm, x, y, z, w), abs=1e-3)


def test_negative_lattice_coordinates_wrap(field):
    perm = field.table.perm
    assert (extrapolate_4d(perm, -1, -2, -3, -4, 0.1, 0.2, 0.3, 0.4)
            == extrapolate_4d(perm, 255, 254, 253, 252, 0.1, 0.2, 0.3, 0.4))


def test_far_from_origin(field):
    for point in [(-1e6, 2.5, 0.0, 1.0), (1e7 + 0.3, -1e7 + 0.7, 3.3, -4.4)]:
        value = field.eval(*point)
        assert math.isfinite(value) and -1.0 <= value <= 1.0


@pytest.mark.parametrize("table", [
    [0] * 256,
    [255] * 256,
    list(range(-128, 128)),
    [10 ** 12 + i for i in range(256)],
])
def test_non_permutation_tables_evaluate(table):
    field = NoiseField4D(permutation_table=table)
    rng = np.random.default_rng(14)
    x, y, z, w = rng.uniform(-10.0, 10.0, (4, 500))
    assert np.all(np.isfinite(field.eval_array(x, y, z, w)))
