import numpy as np
import pytest

from simplectic_noise import PermutationTable, shuffle_from_seed
from simplectic_noise.gradients import DEFAULT_PERMUTATION


def test_seed_zero_prefix():
    assert shuffle_from_seed(0)[:8].tolist() == [254, 50, 92, 24, 36, 10, 190, 16]


def test_other_seed_prefixes():
    assert shuffle_from_seed(42)[:8].tolist() == [48, 76, 40, 154, 62, 22, 64, 58]
    assert shuffle_from_seed(-1)[:8].tolist() == [112, 72, 97, 7, 156, 36, 163, 13]


def test_seeded_tables_are_permutations():
    seeds = list(range(-50, 50)) + [2 ** 63 - 1, -(2 ** 63), 123456789, 0xDEADBEEF]
    for seed in seeds:
        table = PermutationTable.from_seed(seed)
        assert table.is_permutation(), seed
        assert sorted(table.perm.tolist()) == list(range(256))


def test_seed_wraps_to_64_bits():
    assert PermutationTable.from_seed(2 ** 64 + 5) == PermutationTable.from_seed(5)
    assert PermutationTable.from_seed(2 ** 64 - 1) == PermutationTable.from_seed(-1)


def test_different_seeds_give_different_tables():
    tables = {PermutationTable.from_seed(seed) for seed in range(32)}
    assert len(tables) == 32


def test_seeding_is_deterministic():
    assert np.array_equal(shuffle_from_seed(9001), shuffle_from_seed(9001))


def test_default_table_is_reference_order():
    table = PermutationTable.default()
    assert np.array_equal(table.perm, DEFAULT_PERMUTATION)
    assert table.perm[0] == 151
    assert table.is_permutation()


def test_grad_index_is_row_start():
    table = PermutationTable.from_seed(3)
    expected = (table.perm % 24) * 3
    assert np.array_equal(table.grad_index_3d, expected)
    assert table.grad_index_3d.max() <= 69


def test_injected_table_is_stored_verbatim():
    values = [7] * 256
    table = PermutationTable(values)
    assert table.perm.tolist() == values
    assert not table.is_permutation()


def test_tables_are_read_only():
    table = PermutationTable.from_seed(1)
    with pytest.raises(ValueError):
        table.perm[0] = 1
    with pytest.raises(ValueError):
        table.grad_index_3d[0] = 1


def test_injected_table_is_copied():
    values = np.arange(256)
    table = PermutationTable(values)
    values[0] = 99
    assert table.perm[0] == 0


@pytest.mark.parametrize("bad", [
    list(range(255)),
    list(range(257)),
    np.zeros((16, 16), dtype=np.int64),
    [0.5] * 256,
    [True] * 256,
])
def test_malformed_tables_are_rejected(bad):
    with pytest.raises(ValueError):
        PermutationTable(bad)


def test_len_and_repr():
    table = PermutationTable.default()
    assert len(table) == 256
    assert repr(table).startswith("PermutationTable([151, 160, 137, 91")
