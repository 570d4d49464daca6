"""GET /api/v1/state and /api/v1/caches — what the map polls."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from geocoin.api.dependencies import get_game_manager
from geocoin.api.game_manager import GameManager
from geocoin.api.schemas import (
    BoundsSchema,
    CacheDetailSchema,
    CacheSchema,
    EventSchema,
    GameStateResponse,
    PlayerSchema,
    PositionSchema,
)
from geocoin.core.grid import GridIndex
from geocoin.core.models import Bounds, Cache
from geocoin.engine.commands import status_text
from geocoin.systems.registry import describe_cache
from geocoin.systems.viewport import visible_bounds

router = APIRouter()


def _bounds(b: Bounds) -> BoundsSchema:
    return BoundsSchema(south=b.south, west=b.west, north=b.north, east=b.east)


def _serialize_cache(cache: Cache, grid: GridIndex) -> CacheSchema:
    return CacheSchema(
        id=cache.cache_id,
        i=cache.i,
        j=cache.j,
        lat=cache.anchor.lat,
        lng=cache.anchor.lng,
        coin_value=cache.coin_value,
        coin_count=len(cache.coin_ids),
        is_visible=cache.is_visible,
        bounds=_bounds(grid.cell_bounds(cache.i, cache.j)),
        popup=describe_cache(cache),
    )


@router.get("/state", response_model=GameStateResponse)
def get_state(
    since: int = Query(0, ge=0, description="Only return events with seq greater than this"),
    manager: GameManager = Depends(get_game_manager),
) -> GameStateResponse:
    with manager.lock:
        session = manager.session
        player = session.player
        caches = [_serialize_cache(c, session.grid) for c in session.registry.visible()]
        response = GameStateResponse(
            player=PlayerSchema(
                position=PositionSchema(lat=player.position.lat, lng=player.position.lng),
                points=player.points,
                trail=[p.as_pair() for p in player.trail],
            ),
            status=status_text(player),
            tracking=manager.tracking,
            viewport=_bounds(visible_bounds(session)),
            caches=caches,
            known_caches=len(session.registry),
            total_coins=session.total_coins(),
        )
    events = manager.event_log.since(since) if since else manager.event_log.latest(50)
    response.events = [
        EventSchema(seq=e.seq, category=e.category, message=e.message, cache_id=e.cache_id)
        for e in events
    ]
    return response


@router.get("/caches", response_model=list[CacheSchema])
def list_caches(
    visible_only: bool = Query(False, description="Restrict to caches currently on the map"),
    manager: GameManager = Depends(get_game_manager),
) -> list[CacheSchema]:
    with manager.lock:
        session = manager.session
        caches = session.registry.visible() if visible_only else list(session.registry)
        return [_serialize_cache(c, session.grid) for c in caches]


@router.get("/caches/{cache_id}", response_model=CacheDetailSchema)
def get_cache(
    cache_id: str,
    manager: GameManager = Depends(get_game_manager),
) -> CacheDetailSchema:
    with manager.lock:
        session = manager.session
        cache = session.registry.get(cache_id)
        if cache is None:
            raise HTTPException(status_code=404, detail=f"Unknown cache {cache_id!r}.")
        base = _serialize_cache(cache, session.grid)
        return CacheDetailSchema(**base.model_dump(), coin_ids=list(cache.coin_ids))
