"""Versioned API route modules."""

from fastapi import APIRouter

from geocoin.api.routes.config import router as config_router
from geocoin.api.routes.game import router as game_router
from geocoin.api.routes.player import router as player_router
from geocoin.api.routes.state import router as state_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(state_router, tags=["State"])
api_router.include_router(player_router, tags=["Player"])
api_router.include_router(game_router, tags=["Game"])
api_router.include_router(config_router, tags=["Config"])

__all__ = ["api_router"]
