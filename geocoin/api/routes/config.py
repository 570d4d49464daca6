"""GET /api/v1/config — expose game configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from geocoin.api.dependencies import get_game_manager
from geocoin.api.game_manager import GameManager
from geocoin.api.schemas import GameConfigResponse, PositionSchema

router = APIRouter()


@router.get("/config", response_model=GameConfigResponse)
def get_config(
    manager: GameManager = Depends(get_game_manager),
) -> GameConfigResponse:
    cfg = manager.config
    return GameConfigResponse(
        origin=PositionSchema(lat=cfg.origin_lat, lng=cfg.origin_lng),
        tile_degrees=cfg.tile_degrees,
        neighborhood_size=cfg.neighborhood_size,
        spawn_probability=cfg.spawn_probability,
        max_initial_coins=cfg.max_initial_coins,
        zoom_level=cfg.zoom_level,
        autosave=cfg.autosave,
        resync_interval=cfg.resync_interval,
    )
