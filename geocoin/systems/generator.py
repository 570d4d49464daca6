"""Cache generator — decides which cells hold caches and what they start with."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Mapping

from geocoin.core.coins import mint_coin
from geocoin.core.grid import cell_key
from geocoin.core.models import Cache
from geocoin.systems.rng import INITIAL_VALUE_TAG

if TYPE_CHECKING:
    from geocoin.config import GameConfig
    from geocoin.core.grid import GridIndex
    from geocoin.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)


class CacheGenerator:
    """Deterministic cache factory.

    The spawn decision and the initial value are hashed from different seed
    strings (``"i,j"`` and ``"i,j,initialValue"``) so they are uncorrelated.
    """

    __slots__ = ("_config", "_grid", "_rng")

    def __init__(self, config: GameConfig, grid: GridIndex, rng: DeterministicRNG) -> None:
        self._config = config
        self._grid = grid
        self._rng = rng

    def should_spawn(self, i: int, j: int) -> bool:
        return self._rng.cell_bool(i, j, self._config.spawn_probability)

    def initial_coin_value(self, i: int, j: int) -> int:
        return self._rng.cell_int(i, j, self._config.max_initial_coins, INITIAL_VALUE_TAG)

    def create_cache(self, lat: float, lng: float, known: Mapping[str, Cache]) -> Cache:
        """Return the cache for the cell containing (lat, lng).

        An already-known cache is returned untouched; otherwise a new hidden
        cache is built and its starting coins are minted.  The spawn
        predicate is the caller's concern.
        """
        i, j = self._grid.cell_of(lat, lng)
        return self.create_cache_at(i, j, known)

    def create_cache_at(self, i: int, j: int, known: Mapping[str, Cache]) -> Cache:
        cid = cell_key(i, j)
        existing = known.get(cid)
        if existing is not None:
            return existing

        cell = self._grid.cell(i, j)
        value = self.initial_coin_value(i, j)
        coin_ids = [mint_coin(cell) for _ in range(value)]
        cache = Cache(
            cache_id=cid,
            i=i,
            j=j,
            anchor=self._grid.cell_anchor(i, j),
            coin_value=value,
            coin_ids=coin_ids,
            is_visible=False,
        )
        logger.debug("Generated cache %s with %d coins", cid, value)
        return cache
