"""Cache registry — every cache generated this session, keyed by cell id."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

from geocoin.core.enums import CommandStatus, SpawnOutcome
from geocoin.core.grid import cell_key
from geocoin.core.models import Cache, CommandResult, PlayerState

if TYPE_CHECKING:
    from geocoin.core.grid import GridIndex
    from geocoin.systems.generator import CacheGenerator
    from geocoin.systems.render import RenderLayer

logger = logging.getLogger(__name__)

NOTHING_TO_DEPOSIT = "You don't have any coins to deposit."


def describe_cache(cache: Cache) -> str:
    """Popup text for a cache."""
    return f'There is a cache here at "{cache.cache_id}". It has value {cache.coin_value}.'


class CacheRegistry:
    """Owns cache identity and visibility.

    Caches are never destroyed during a session: leaving the viewport only
    hides them, and coming back reveals the same object with whatever value
    it had.
    """

    __slots__ = ("_grid", "_generator", "_render", "_caches")

    def __init__(self, grid: GridIndex, generator: CacheGenerator, render: RenderLayer) -> None:
        self._grid = grid
        self._generator = generator
        self._render = render
        self._caches: dict[str, Cache] = {}

    # -- access --

    def get(self, cache_id: str) -> Cache | None:
        return self._caches.get(cache_id)

    def __contains__(self, cache_id: str) -> bool:
        return cache_id in self._caches

    def __len__(self) -> int:
        return len(self._caches)

    def __iter__(self) -> Iterator[Cache]:
        return iter(list(self._caches.values()))

    def visible(self) -> list[Cache]:
        return [c for c in self._caches.values() if c.is_visible]

    def total_coins(self) -> int:
        return sum(c.coin_value for c in self._caches.values())

    # -- lifecycle --

    def spawn_or_reveal(self, lat: float, lng: float) -> SpawnOutcome:
        i, j = self._grid.cell_of(lat, lng)
        return self.spawn_or_reveal_cell(i, j)

    def spawn_or_reveal_cell(self, i: int, j: int) -> SpawnOutcome:
        existing = self._caches.get(cell_key(i, j))
        if existing is not None:
            if existing.is_visible:
                return SpawnOutcome.ALREADY_VISIBLE
            self._reveal(existing)
            return SpawnOutcome.REVEALED

        if not self._generator.should_spawn(i, j):
            return SpawnOutcome.EMPTY_CELL

        cache = self._generator.create_cache_at(i, j, self._caches)
        self._caches[cache.cache_id] = cache
        self._reveal(cache)
        logger.info("Spawned cache %s (%d coins)", cache.cache_id, cache.coin_value)
        return SpawnOutcome.SPAWNED

    def register(self, cache: Cache) -> None:
        """Add a rebuilt cache, hidden, without running the spawn predicate."""
        if cache.layer is not None:
            self._render.remove_layer(cache.layer)
        cache.is_visible = False
        cache.layer = None
        self._caches[cache.cache_id] = cache

    def hide(self, cache_id: str) -> bool:
        cache = self._caches.get(cache_id)
        if cache is None or not cache.is_visible:
            return False
        if cache.layer is not None:
            self._render.remove_layer(cache.layer)
        cache.layer = None
        cache.is_visible = False
        return True

    def hide_all(self) -> None:
        for cache in self._caches.values():
            if cache.is_visible:
                self.hide(cache.cache_id)

    def clear(self) -> None:
        """Detach every layer and forget every cache."""
        self.hide_all()
        self._caches.clear()

    def _reveal(self, cache: Cache) -> None:
        handle = self._render.add_rectangle(self._grid.cell_bounds(cache.i, cache.j))
        self._render.attach_popup(handle, lambda: describe_cache(cache))
        cache.layer = handle
        cache.is_visible = True

    # -- player commands --

    def collect(self, cache_id: str, player: PlayerState) -> CommandResult:
        cache = self._caches.get(cache_id)
        if cache is None:
            return CommandResult(CommandStatus.NOOP, "No such cache.", cache_id, None, player.points)
        if cache.is_empty:
            return CommandResult(CommandStatus.NOOP, "This cache is empty.", cache_id, 0, player.points)

        cache.coin_value -= 1
        player.points += 1
        player.has_scored = True
        return CommandResult(
            CommandStatus.OK, f"Collected a coin from {cache_id}.", cache_id, cache.coin_value, player.points,
        )

    def deposit(self, cache_id: str, player: PlayerState) -> CommandResult:
        if player.points <= 0:
            return CommandResult(CommandStatus.NOTHING_TO_DEPOSIT, NOTHING_TO_DEPOSIT, cache_id, None, 0)
        cache = self._caches.get(cache_id)
        if cache is None:
            return CommandResult(CommandStatus.NOOP, "No such cache.", cache_id, None, player.points)

        cache.coin_value += 1
        player.points -= 1
        return CommandResult(
            CommandStatus.OK, f"Deposited a coin into {cache_id}.", cache_id, cache.coin_value, player.points,
        )
