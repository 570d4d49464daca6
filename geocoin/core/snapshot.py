"""Persisted snapshot schema — the JSON shape a save game is stored in.

Pydantic validates a snapshot completely before anything is applied, so a
damaged save is rejected as a whole instead of half-restoring a game.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from geocoin.core.coins import parse_coin_id
from geocoin.core.grid import parse_cell_key


class SnapshotError(ValueError):
    """Raised when a stored snapshot cannot be parsed or validated."""


class PositionModel(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    lat: float
    lng: float


class CacheMemento(BaseModel):
    """Minimal self-describing record needed to rebuild one cache."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)

    id: str
    lat: float
    lng: float
    coin_value: int = Field(alias="coinValue", ge=0, strict=True)
    coin_ids: tuple[str, ...] = Field(default=(), alias="coinIds")

    @field_validator("id")
    @classmethod
    def _check_id(cls, value: str) -> str:
        parse_cell_key(value)
        return value

    @model_validator(mode="after")
    def _check_coins(self) -> CacheMemento:
        cell = parse_cell_key(self.id)
        for coin in self.coin_ids:
            i, j, _serial = parse_coin_id(coin)
            if (i, j) != cell:
                raise ValueError(f"coin {coin!r} does not belong to cache {self.id!r}")
        if len(set(self.coin_ids)) != len(self.coin_ids):
            raise ValueError(f"duplicate coin ids in cache {self.id!r}")
        return self

    @property
    def cell(self) -> tuple[int, int]:
        return parse_cell_key(self.id)


class PersistedSnapshot(BaseModel):
    """Player state, movement trail, and one memento per cache ever created."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)

    player_position: PositionModel = Field(alias="playerPosition")
    player_points: int = Field(alias="playerPoints", ge=0, strict=True)
    movement_history: list[tuple[float, float]] = Field(default_factory=list, alias="movementHistory")
    caches: list[CacheMemento] = Field(default_factory=list)
    # Older saves lack the flag; a positive balance still implies it
    has_scored: bool = Field(default=False, alias="hasScored", strict=True)

    @model_validator(mode="after")
    def _check_unique_caches(self) -> PersistedSnapshot:
        ids = [m.id for m in self.caches]
        if len(set(ids)) != len(ids):
            raise ValueError("duplicate cache ids in snapshot")
        return self


def dumps(snapshot: PersistedSnapshot) -> str:
    return snapshot.model_dump_json(by_alias=True)


def loads(text: str | bytes | None) -> PersistedSnapshot:
    """Parse and validate a stored snapshot.  Raises :class:`SnapshotError`."""
    if text is None or not text:
        raise SnapshotError("empty snapshot")
    try:
        return PersistedSnapshot.model_validate_json(text)
    except ValidationError as exc:
        raise SnapshotError(f"invalid snapshot: {exc.error_count()} error(s)") from exc
