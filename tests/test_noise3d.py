import math

import numpy as np
import pytest

from simplectic_noise import NoiseField3D, PermutationTable
from simplectic_noise.gradients import NORM_CONSTANT_3D, SQUISH_CONSTANT_3D, STRETCH_CONSTANT_3D
from simplectic_noise.noise3d import contribution_3d, extrapolate_3d, noise_3d

# Reference values with the default permutation, captured from the C++ port
# of OpenSimplex this library follows.
GOLDEN_3D = [
    ((1.5, -2.25, 0.33), 0.13000670259201672),
    ((0.1, 0.2, 0.3), 0.026697350796460292),
    ((-7.7, 3.14, 12.5), 0.43560335006725287),
    ((100.25, -50.5, 0.75), 0.046976660799965465),
    ((2.0 / 12.0, 5.0 / 12.0, 0.0), 0.38928595121854515),
]


@pytest.fixture(scope="module")
def field():
    return NoiseField3D(permutation_table=PermutationTable.default())


def _neighbourhood_sum(perm, grad_index, x, y, z):
    """Sums the contribution of every lattice vertex around the point."""
    stretch_offset = (x + y + z) * STRETCH_CONSTANT_3D
    xsb = math.floor(x + stretch_offset)
    ysb = math.floor(y + stretch_offset)
    zsb = math.floor(z + stretch_offset)
    total = 0.0
    for i in range(-1, 3):
        for j in range(-1, 3):
            for k in range(-1, 3):
                xv, yv, zv = xsb + i, ysb + j, zsb + k
                squish = (xv + yv + zv) * SQUISH_CONSTANT_3D
                total += contribution_3d(perm, grad_index, xv, yv, zv,
                                         x - xv - squish, y - yv - squish, z - zv - squish)
    return total / NORM_CONSTANT_3D


@pytest.mark.parametrize("point, expected", GOLDEN_3D)
def test_golden_values(field, point, expected):
    assert field.eval(*point) == pytest.approx(expected, abs=1e-12)


def test_origin_is_zero(field):
    assert field.eval(0.0, 0.0, 0.0) == 0.0


def test_seeded_golden_value():
    assert NoiseField3D(seed=0).eval(1.5, -2.25, 0.33) == pytest.approx(0.072185071024098227, abs=1e-12)


def test_seed_changes_output():
    a = NoiseField3D(seed=1)
    b = NoiseField3D(seed=2)
    rng = np.random.default_rng(6)
    x, y, z = rng.uniform(-10.0, 10.0, (3, 100))
    assert not np.allclose(a.eval_array(x, y, z), b.eval_array(x, y, z))


def test_range(field):
    rng = np.random.default_rng(7)
    x, y, z = rng.uniform(-100.0, 100.0, (3, 20000))
    values = field.eval_array(x, y, z)
    assert np.all(np.isfinite(values))
    assert values.min() >= -1.0 and values.max() <= 1.0
    assert values.min() < -0.5 and values.max() > 0.5


def test_continuity(field):
    rng = np.random.default_rng(8)
    x, y, z = rng.uniform(-50.0, 50.0, (3, 5000))
    step = 1e-4
    jumps = np.abs(field.eval_array(x + step, y - step, z + step) - field.eval_array(x, y, z))
    assert jumps.max() < 0.01


def test_matches_neighbourhood_sum(field):
    rng = np.random.default_rng(9)
    perm, grad_index = field.table.perm, field.table.grad_index_3d
    for x, y, z in rng.uniform(-20.0, 20.0, (200, 3)):
        expected = _neighbourhood_sum(perm, grad_index, x, y, z)
        assert noise_3d(perm, grad_index, x, y, z) == pytest.approx(expected, abs=1e-3)


def test_negative_lattice_coordinates_wrap(field):
    perm, grad_index = field.table.perm, field.table.grad_index_3d
    assert (extrapolate_3d(perm, grad_index, -1, -2, -3, 0.1, 0.2, 0.3)
            == extrapolate_3d(perm, grad_index, 255, 254, 253, 0.1, 0.2, 0.3))


def test_far_from_origin(field):
    for point in [(-1e6, 2.5, 0.0), (1e7 + 0.3, -1e7 + 0.7, 3.3), (-12345.678, -98765.4321, -5.5)]:
        value = field.eval(*point)
        assert math.isfinite(value) and -1.0 <= value <= 1.0


@pytest.mark.parametrize("table", [
    [0] * 256,
    [255] * 256,
    list(range(-128, 128)),
    [10 ** 12 + i for i in range(256)],
])
def test_non_permutation_tables_evaluate(table):
    field = NoiseField3D(permutation_table=table)
    rng = np.random.default_rng(10)
    x, y, z = rng.uniform(-10.0, 10.0, (3, 500))
    assert np.all(np.isfinite(field.eval_array(x, y, z)))


def test_zero_slice_grid_is_reproducible(field):
    xs, ys = np.meshgrid(np.arange(32) / 12.0, np.arange(24) / 12.0)
    first = field.eval_array(xs, ys, 0.0)
    second = NoiseField3D(permutation_table=PermutationTable.default()).eval_array(xs, ys, 0.0)
    assert np.array_equal(first, second)
    assert first.shape == (24, 32)
