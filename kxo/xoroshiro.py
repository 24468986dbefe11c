"""Small xoroshiro128-style pseudo-random generator with a jump function."""

from __future__ import annotations

_MASK64 = (1 << 64) - 1
_JUMP = (0xDF900294D8F554A5, 0x170865DF4B3201FC)

DEFAULT_SEED = (314159265, 1618033989)


def _rotl(x: int, k: int) -> int:
    return ((x << k) | (x >> (64 - k))) & _MASK64


class Xoroshiro128:
    """128-bit state generator producing 64-bit outputs."""

    __slots__ = ("_s0", "_s1")

    def __init__(self, s0: int = DEFAULT_SEED[0], s1: int = DEFAULT_SEED[1]) -> None:
        self._s0 = s0 & _MASK64
        self._s1 = s1 & _MASK64

    @property
    def state(self) -> tuple[int, int]:
        """The two 64-bit state words."""
        return self._s0, self._s1

    def next(self) -> int:
        """Advance the generator and return the next 64-bit value."""
        s0, s1 = self._s0, self._s1
        result = (_rotl((s0 + s1) & _MASK64, 24) + s0) & _MASK64
        s1 ^= s0
        self._s0 = _rotl(s0, 24) ^ s1 ^ ((s1 << 16) & _MASK64)
        self._s1 = _rotl(s1, 37)
        return result

    def jump(self) -> None:
        """Jump the state far ahead in the sequence."""
        s0 = s1 = 0
        for word in _JUMP:
            for bit in range(64):
                if (word >> bit) & 1:
                    s0 ^= self._s0
                    s1 ^= self._s1
                self.next()
        self._s0, self._s1 = s0, s1