"""Pydantic response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from geocoin.core.models import CommandResult


# --- Geometry ---

class PositionSchema(BaseModel):
    lat: float
    lng: float


class BoundsSchema(BaseModel):
    south: float
    west: float
    north: float
    east: float


# --- Caches ---

class CacheSchema(BaseModel):
    id: str
    i: int
    j: int
    lat: float
    lng: float
    coin_value: int
    coin_count: int = Field(description="Number of coin identities ever minted into this cache")
    is_visible: bool
    bounds: BoundsSchema
    popup: str = ""


class CacheDetailSchema(CacheSchema):
    coin_ids: list[str] = Field(default_factory=list)


# --- Player / state ---

class PlayerSchema(BaseModel):
    position: PositionSchema
    points: int
    trail: list[list[float]] = Field(default_factory=list, description="[[lat, lng], ...] oldest first")


class EventSchema(BaseModel):
    seq: int
    category: str
    message: str
    cache_id: str | None = None


class GameStateResponse(BaseModel):
    player: PlayerSchema
    status: str
    tracking: bool
    viewport: BoundsSchema
    caches: list[CacheSchema]
    known_caches: int
    total_coins: int
    events: list[EventSchema] = Field(default_factory=list)


# --- Commands ---

class PositionRequest(BaseModel):
    lat: float = Field(ge=-90.0, le=90.0)
    lng: float = Field(ge=-180.0, le=180.0)


class CommandResponse(BaseModel):
    status: str
    message: str
    points: int = 0
    cache_id: str | None = None
    coin_value: int | None = None
    status_text: str = ""

    @classmethod
    def from_result(cls, result: CommandResult, status_text: str = "") -> CommandResponse:
        return cls(
            status=result.status.value,
            message=result.message,
            points=result.points,
            cache_id=result.cache_id,
            coin_value=result.coin_value,
            status_text=status_text,
        )


# --- Config ---

class GameConfigResponse(BaseModel):
    origin: PositionSchema
    tile_degrees: float
    neighborhood_size: int
    spawn_probability: float
    max_initial_coins: int
    zoom_level: int
    autosave: bool
    resync_interval: float
