import numpy as np
import pytest

from simplectic_noise import NoiseField2D, NoiseField3D, fractal_noise


@pytest.fixture(scope="module")
def field():
    return NoiseField3D(seed=11)


@pytest.fixture(scope="module")
def coords():
    rng = np.random.default_rng(15)
    return rng.uniform(-10.0, 10.0, (3, 300))


def test_single_octave_is_plain_noise(field, coords):
    assert np.array_equal(fractal_noise(field, *coords), field.eval_array(*coords))


def test_octaves_are_summed(field, coords):
    result = fractal_noise(field, *coords, octaves=3, persistence=0.5, lacunarity=2.0)
    expected = (field.eval_array(*coords)
                + 0.5 * field.eval_array(*(coords * 2.0))
                + 0.25 * field.eval_array(*(coords * 4.0)))
    assert np.allclose(result, expected, atol=1e-12)


def test_zero_persistence_keeps_first_octave(field, coords):
    result = fractal_noise(field, *coords, octaves=4, persistence=0.0)
    assert np.array_equal(result, field.eval_array(*coords))


def test_sum_is_not_renormalised():
    field = NoiseField2D(seed=3)
    rng = np.random.default_rng(16)
    x, y = rng.uniform(-100.0, 100.0, (2, 20000))
    result = fractal_noise(field, x, y, octaves=6, persistence=1.0)
    assert np.abs(result).max() > 1.0


def test_output_shape_follows_broadcast(field):
    xs = np.linspace(0.0, 3.0, 6)
    ys = np.linspace(0.0, 3.0, 4)[:, np.newaxis]
    assert fractal_noise(field, xs, ys, 0.0, octaves=2).shape == (4, 6)


@pytest.mark.parametrize("octaves", [0, -2])
def test_invalid_octaves(field, octaves):
    with pytest.raises(ValueError):
        fractal_noise(field, 0.0, 0.0, 0.0, octaves=octaves)
