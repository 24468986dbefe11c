import pytest

from kxo.game import N_GRIDS
from kxo.zobrist import ZobristEntry, ZobristTable, wyhash64


def test_wyhash_is_deterministic_and_64_bit():
    assert wyhash64(12345) == wyhash64(12345)
    assert 0 <= wyhash64(12345) < 2**64


def test_wyhash_spreads_nearby_seeds():
    values = {wyhash64(seed) for seed in range(100)}
    assert len(values) == 100


def test_same_seed_same_keys():
    a = ZobristTable(seed=42)
    b = ZobristTable(seed=42)
    for index in range(N_GRIDS):
        for player in "OX":
            assert a.key(index, player) == b.key(index, player)


def test_keys_are_distinct():
    table = ZobristTable(seed=3)
    keys = {table.key(i, p) for i in range(N_GRIDS) for p in "OX"}
    assert len(keys) == 2 * N_GRIDS


def test_key_rejects_unknown_player():
    with pytest.raises(ValueError):
        ZobristTable(seed=1).key(0, "Z")


def test_get_on_empty_table_returns_none():
    assert ZobristTable(seed=1).get(99) is None


def test_put_then_get():
    table = ZobristTable(seed=1)
    table.put(99, 17, 4)
    assert table.get(99) == ZobristEntry(99, 17, 4)
    assert 99 in table


def test_latest_put_wins():
    table = ZobristTable(seed=1)
    table.put(5, 1, 2)
    table.put(5, -3, 7)
    assert table.get(5) == ZobristEntry(5, -3, 7)
    assert len(table) == 1


def test_clear_empties_table():
    table = ZobristTable(seed=1)
    table.put(1, 0, 0)
    table.put(2, 0, 1)
    table.clear()
    assert len(table) == 0
    assert table.get(1) is None