"""Zobrist keys for board cells and a transposition table keyed by them."""

from __future__ import annotations

import time
from dataclasses import dataclass

from .game import N_GRIDS

_MASK64 = (1 << 64) - 1
_WY_INCREMENT = 0x60BEE2BEE120FC15
_WY_MUL1 = 0xA3B195354A39B70D
_WY_MUL2 = 0x1B03738712FAD5C9


def _fold(product: int) -> int:
    return ((product >> 64) ^ product) & _MASK64


def wyhash64(seed: int) -> int:
    """Stateless wyhash step: hash the seed advanced by one increment."""
    advanced = (seed + _WY_INCREMENT) & _MASK64
    mixed = _fold(advanced * _WY_MUL1)
    return _fold(mixed * _WY_MUL2)


@dataclass(frozen=True)
class ZobristEntry:
    """A cached search result."""

    key: int
    score: int
    move: int


class ZobristTable:
    """Random per-cell keys plus a cache of search results by position hash."""

    def __init__(self, seed: int | None = None) -> None:
        state = time.monotonic_ns() if seed is None else seed
        keys = []
        for _ in range(N_GRIDS):
            pair = []
            for _ in range(2):
                pair.append(wyhash64(state))
                state = (state + _WY_INCREMENT) & _MASK64
            keys.append(tuple(pair))
        self._keys: tuple[tuple[int, int], ...] = tuple(keys)
        self._entries: dict[int, ZobristEntry] = {}

    def key(self, index: int, player: str) -> int:
        """The random key for ``player`` occupying cell ``index``."""
        if player not in ("O", "X"):
            raise ValueError(f"unknown player {player!r}")
        return self._keys[index][player == "X"]

    def get(self, key: int) -> ZobristEntry | None:
        """The most recently stored entry for ``key``, if any."""
        return self._entries.get(key)

    def put(self, key: int, score: int, move: int) -> None:
        """Store a result; it shadows any earlier one for the same key."""
        self._entries[key] = ZobristEntry(key, score, move)

    def clear(self) -> None:
        """Drop every cached entry."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries