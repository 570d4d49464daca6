"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING, AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from geocoin.api.dependencies import set_game_manager
from geocoin.api.game_manager import GameManager
from geocoin.api.routes import api_router
from geocoin.config import GameConfig
from geocoin.utils.logging import setup_logging

if TYPE_CHECKING:
    from geocoin.systems.rng import Luck
    from geocoin.systems.storage import KeyValueStore

logger = logging.getLogger(__name__)

FRONTEND_DIR = Path(__file__).resolve().parent.parent.parent / "frontend"
STATIC_DIR = FRONTEND_DIR / "dist"


def create_app(
    config: GameConfig | None = None,
    store: KeyValueStore | None = None,
    luck_fn: Luck | None = None,
) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = GameConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = GameManager(_config, store=store, luck_fn=luck_fn)
        set_game_manager(manager)
        manager.start()
        logger.info("API server started — game session ready.")
        yield
        manager.stop()
        set_game_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Geocoin",
        description=(
            "Geolocation coin-cache game — deterministic cache generation with save/restore.\n\n"
            "## API Groups\n\n"
            "- **State** — Player, trail, caches on the map, event feed\n"
            "- **Player** — Movement, location tracking, collect and deposit\n"
            "- **Game** — Save, load, reset, new game\n"
            "- **Config** — Read-only grid and spawn settings\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "State", "description": "Live game state polled by the map: player, visible caches, events."},
            {"name": "Player", "description": "One-tile moves, sensor position fixes, and per-cache collect/deposit."},
            {"name": "Game", "description": "Save-game lifecycle: save, load, reset (deletes the save), new game."},
            {"name": "Config", "description": "Read-only game configuration (origin, tile size, spawn probability)."},
        ],
    )

    # CORS: allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    # Serve the map frontend if it has been built
    if STATIC_DIR.exists():
        app.mount("/", StaticFiles(directory=str(STATIC_DIR), html=True), name="frontend")

    return app
