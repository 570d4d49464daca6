"""Seed-string deterministic RNG using xxhash.

The Golden Rule: a cache's existence and contents depend ONLY on the seed
string built from its cell coordinates.  Nothing else may feed the hash.

Formula: luck(seed) = xxh32(seed) / 2**32
"""

from __future__ import annotations

from typing import Callable

import xxhash

Luck = Callable[[str], float]

_MAX_UINT32 = (1 << 32) - 1

INITIAL_VALUE_TAG = "initialValue"


def seed_key(*parts: object) -> str:
    """Join parts the way ``Array.prototype.toString`` does: ``"5,-3,initialValue"``."""
    return ",".join(str(p) for p in parts)


def luck(seed: str) -> float:
    """Return a deterministic float in [0.0, 1.0) for *seed*."""
    return xxhash.xxh32_intdigest(seed.encode("utf-8")) / (_MAX_UINT32 + 1)


class DeterministicRNG:
    """Cell-keyed view over a :data:`Luck` function.

    Stateless apart from the injected function, so repeated calls with the
    same cell are pure.
    """

    __slots__ = ("_luck",)

    def __init__(self, luck_fn: Luck = luck) -> None:
        self._luck = luck_fn

    def cell_float(self, i: int, j: int, *tags: str) -> float:
        return self._luck(seed_key(i, j, *tags))

    def cell_bool(self, i: int, j: int, probability: float, *tags: str) -> bool:
        """Return True with the given probability."""
        return self.cell_float(i, j, *tags) < probability

    def cell_int(self, i: int, j: int, scale: int, *tags: str) -> int:
        """Return a deterministic integer in [0, scale)."""
        return int(self.cell_float(i, j, *tags) * scale)
