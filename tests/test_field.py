import logging
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from simplectic_noise import (
    NoiseField2D,
    NoiseField3D,
    NoiseField4D,
    PermutationTable,
    create_noise_field,
)


@pytest.mark.parametrize("dimensions, field_class", [
    (2, NoiseField2D),
    (3, NoiseField3D),
    (4, NoiseField4D),
])
def test_create_noise_field(dimensions, field_class):
    field = create_noise_field(dimensions, seed=5)
    assert isinstance(field, field_class)
    assert field.dimensions == dimensions
    assert field.table == PermutationTable.from_seed(5)


@pytest.mark.parametrize("dimensions", [0, 1, 5, "3"])
def test_unsupported_dimensions(dimensions):
    with pytest.raises(ValueError):
        create_noise_field(dimensions)


def test_default_seed_is_zero():
    assert NoiseField3D().table == PermutationTable.from_seed(0)


def test_injected_table_overrides_seed():
    table = PermutationTable.from_seed(77)
    field = NoiseField3D(seed=1, permutation_table=table)
    assert field.table is table


def test_raw_sequence_is_accepted():
    values = list(range(255, -1, -1))
    field = NoiseField2D(permutation_table=values)
    assert field.table.perm.tolist() == values


def test_malformed_injected_table():
    with pytest.raises(ValueError):
        NoiseField4D(permutation_table=[1, 2, 3])


def test_equal_tables_give_equal_output():
    a = NoiseField3D(seed=314)
    b = NoiseField3D(permutation_table=PermutationTable.from_seed(314).perm.tolist())
    for point in [(0.1, 0.2, 0.3), (-5.5, 12.25, 0.75), (1000.5, -3.0, 2.0)]:
        assert a.eval(*point) == b.eval(*point)


@pytest.mark.parametrize("dimensions", [2, 3, 4])
def test_array_matches_scalar(dimensions):
    field = create_noise_field(dimensions, seed=21)
    rng = np.random.default_rng(dimensions)
    coords = rng.uniform(-30.0, 30.0, (dimensions, 200))
    values = field.eval_array(*coords)
    expected = [field.eval(*point) for point in coords.T]
    assert values.dtype == np.float64
    assert np.allclose(values, expected, rtol=0.0, atol=1e-12)


def test_eval_array_broadcasts():
    field = NoiseField3D(seed=2)
    xs = np.linspace(0.0, 4.0, 7)
    ys = np.linspace(-2.0, 2.0, 5)[:, np.newaxis]
    values = field.eval_array(xs, ys, 0.5)
    assert values.shape == (5, 7)
    assert values[3, 2] == pytest.approx(field.eval(xs[2], ys[3, 0], 0.5), abs=1e-12)


def test_eval_array_accepts_integer_and_list_input():
    field = NoiseField2D(seed=2)
    values = field.eval_array([0, 1, 2], [3, 4, 5])
    assert values.shape == (3,)
    assert values[1] == pytest.approx(field.eval(1.0, 4.0), abs=1e-12)


def test_eval_array_rejects_wrong_arity():
    field = NoiseField4D(seed=2)
    with pytest.raises(ValueError):
        field.eval_array(np.zeros(3), np.zeros(3), np.zeros(3))


def test_eval_array_non_contiguous_input():
    field = NoiseField2D(seed=8)
    grid = np.arange(40, dtype=np.float64).reshape(5, 8) * 0.37
    values = field.eval_array(grid.T, grid.T[::-1])
    assert values.shape == (8, 5)
    assert values[2, 1] == pytest.approx(field.eval(grid.T[2, 1], grid.T[::-1][2, 1]), abs=1e-12)


def test_construction_is_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="simplectic_noise.field")
    NoiseField3D(seed=7)
    assert "NoiseField3D generated permutation table from seed 7." in caplog.text


def test_injected_logger_is_used(caplog):
    logger = logging.getLogger("RenderTest")
    caplog.set_level(logging.DEBUG, logger="RenderTest")
    field = NoiseField2D(permutation_table=PermutationTable.default(), logger=logger)
    assert field.logger is logger
    assert "injected permutation table" in caplog.text


def test_concurrent_evaluation_matches_serial():
    field = NoiseField4D(seed=99)
    rng = np.random.default_rng(40)
    batches = [rng.uniform(-20.0, 20.0, (4, 100)) for _ in range(8)]
    serial = [field.eval_array(*batch) for batch in batches]
    with ThreadPoolExecutor(max_workers=4) as pool:
        threaded = list(pool.map(lambda batch: field.eval_array(*batch), batches))
    for expected, actual in zip(serial, threaded):
        assert np.array_equal(expected, actual)
