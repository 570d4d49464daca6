"""Memento save/restore for a GameSession."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from geocoin.core.coins import reserve_coin
from geocoin.core.models import Cache, LatLng
from geocoin.core.snapshot import (
    CacheMemento,
    PersistedSnapshot,
    PositionModel,
    SnapshotError,
    dumps,
    loads,
)
from geocoin.systems.viewport import SyncReport, update_caches

if TYPE_CHECKING:
    from geocoin.core.session import GameSession
    from geocoin.systems.storage import KeyValueStore

logger = logging.getLogger(__name__)


def serialize_cache(cache: Cache) -> CacheMemento:
    return CacheMemento(
        id=cache.cache_id,
        lat=cache.anchor.lat,
        lng=cache.anchor.lng,
        coin_value=cache.coin_value,
        coin_ids=tuple(cache.coin_ids),
    )


def deserialize_cache(memento: CacheMemento) -> Cache:
    """Rebuild a hidden cache straight from its memento (no spawn check)."""
    i, j = memento.cell
    return Cache(
        cache_id=memento.id,
        i=i,
        j=j,
        anchor=LatLng(memento.lat, memento.lng),
        coin_value=memento.coin_value,
        coin_ids=list(memento.coin_ids),
        is_visible=False,
    )


def snapshot(session: GameSession) -> PersistedSnapshot:
    """Capture the player, the trail, and every cache (hidden ones too)."""
    player = session.player
    return PersistedSnapshot(
        player_position=PositionModel(lat=player.position.lat, lng=player.position.lng),
        player_points=player.points,
        movement_history=[(p.lat, p.lng) for p in player.trail],
        caches=[serialize_cache(c) for c in session.registry],
        has_scored=player.has_scored,
    )


def restore(session: GameSession, snap: PersistedSnapshot) -> SyncReport:
    """Replace the session's state with *snap*, then resync visibility.

    *snap* is already validated, so nothing below can fail halfway.
    Caches that are still registered keep their object identity.  Coin ids
    are re-reserved in the grid so new mints never collide with them.
    """
    registry = session.registry
    previous = {c.cache_id: c for c in registry}
    registry.clear()

    for memento in snap.caches:
        cache = previous.get(memento.id)
        if cache is None:
            cache = deserialize_cache(memento)
        else:
            cache.coin_value = memento.coin_value
            cache.coin_ids = list(memento.coin_ids)
        registry.register(cache)

        cell = session.grid.cell(cache.i, cache.j)
        for coin in cache.coin_ids:
            reserve_coin(cell, coin)

    player = session.player
    player.position = LatLng(snap.player_position.lat, snap.player_position.lng)
    player.points = snap.player_points
    player.trail = [LatLng(lat, lng) for lat, lng in snap.movement_history]
    player.has_scored = snap.has_scored or player.points > 0

    report = update_caches(session)
    logger.info(
        "Restored %d caches, player at %s with %d points",
        len(snap.caches), player.position, player.points,
    )
    return report


# -- key-value store glue --

def save_game(store: KeyValueStore, session: GameSession, key: str | None = None) -> PersistedSnapshot:
    snap = snapshot(session)
    store.set(key or session.config.save_key, dumps(snap))
    logger.debug("Saved %d caches under %r", len(snap.caches), key or session.config.save_key)
    return snap


def load_game(store: KeyValueStore, session: GameSession, key: str | None = None) -> SyncReport | None:
    """Restore the saved game into *session*.

    Returns the viewport sync that followed the restore, or None (leaving the
    session untouched) when there is no save or the save is corrupt.
    """
    key = key or session.config.save_key
    text = store.get(key)
    if text is None:
        logger.info("No saved game under %r", key)
        return None
    try:
        snap = loads(text)
    except SnapshotError as exc:
        logger.warning("Discarding corrupt saved game %r: %s", key, exc)
        return None
    return restore(session, snap)


def clear_save(store: KeyValueStore, key: str) -> None:
    store.remove(key)
