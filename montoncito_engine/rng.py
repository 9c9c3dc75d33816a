"""Deterministic random numbers for reproducible deals.

The engine never shuffles. Callers that want a replayable game shuffle the
deck here, from a seed they keep, before building the initial state.
"""

from __future__ import annotations

from typing import Callable, Sequence, TypeVar

T = TypeVar("T")

_MASK32 = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK32


class Mulberry32:
    """Mulberry32 generator: a 32-bit counter hashed into floats in [0, 1).

    Two generators built from the same seed yield the same stream.
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int):
        self._state = seed & _MASK32

    def __call__(self) -> float:
        return self.next_float()

    def next_float(self) -> float:
        self._state = (self._state + 0x6D2B79F5) & _MASK32
        t = self._state
        r = _imul(t ^ (t >> 15), 1 | t)
        r = (r ^ ((r + _imul(r ^ (r >> 7), 61 | r)) & _MASK32)) & _MASK32
        return ((r ^ (r >> 14)) & _MASK32) / 4294967296

    def next_index(self, n: int) -> int:
        """Uniform integer in ``[0, n)``."""
        if n <= 0:
            raise ValueError("n must be positive")
        return int(self.next_float() * n)


def make_rng(seed: int) -> Callable[[], float]:
    """Return a float stream for ``seed``."""
    return Mulberry32(seed)


def shuffle(items: Sequence[T], rng: Callable[[], float]) -> list[T]:
    """Fisher-Yates shuffle into a new list; ``items`` is left untouched."""
    arr = list(items)
    for i in range(len(arr) - 1, 0, -1):
        j = int(rng() * (i + 1))
        arr[i], arr[j] = arr[j], arr[i]
    return arr


def shuffle_deck(deck: Sequence[T], seed: int) -> list[T]:
    """Return a shuffled copy of the deck, reproducible for a given seed."""
    return shuffle(deck, make_rng(seed))
