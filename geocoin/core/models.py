"""Core data models: LatLng, Bounds, Cache, PlayerState, CommandResult."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from geocoin.core.enums import CommandStatus


@dataclass(frozen=True, slots=True)
class LatLng:
    """Immutable geographic coordinate in degrees."""

    lat: float = 0.0
    lng: float = 0.0

    def offset(self, dlat: float, dlng: float) -> LatLng:
        return LatLng(self.lat + dlat, self.lng + dlng)

    def as_pair(self) -> list[float]:
        return [self.lat, self.lng]

    def __repr__(self) -> str:
        return f"({self.lat:.6f}, {self.lng:.6f})"


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned lat/lng rectangle, south-west corner to north-east corner."""

    south: float
    west: float
    north: float
    east: float

    @classmethod
    def around(cls, center: LatLng, half_extent: float) -> Bounds:
        return cls(
            south=center.lat - half_extent,
            west=center.lng - half_extent,
            north=center.lat + half_extent,
            east=center.lng + half_extent,
        )


# Movement offsets in tiles: (d_lat, d_lng) keyed by Direction value
DIRECTION_OFFSETS: dict[int, tuple[int, int]] = {
    0: (1, 0),    # NORTH
    1: (0, 1),    # EAST
    2: (-1, 0),   # SOUTH
    3: (0, -1),   # WEST
}


@dataclass(slots=True, eq=False)
class Cache:
    """A coin container bound to exactly one grid cell.

    ``coin_ids`` is provenance: every coin identity that was minted into
    this cache.  Collect/deposit only move ``coin_value``.
    """

    cache_id: str
    i: int
    j: int
    anchor: LatLng
    coin_value: int = 0
    coin_ids: list[str] = field(default_factory=list)
    is_visible: bool = False
    # Opaque handle returned by the render layer while visible
    layer: Any = field(default=None, repr=False)

    @property
    def cell(self) -> tuple[int, int]:
        return self.i, self.j

    @property
    def is_empty(self) -> bool:
        return self.coin_value <= 0


@dataclass(slots=True)
class PlayerState:
    """Mutable player state: position, points, and the movement trail."""

    position: LatLng
    points: int = 0
    trail: list[LatLng] = field(default_factory=list)
    # Set once the player has ever held a coin; drives the status text
    has_scored: bool = False

    def move_to(self, position: LatLng) -> None:
        self.position = position
        self.trail.append(position)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Synchronous outcome of a collect/deposit/move command."""

    status: CommandStatus
    message: str = ""
    cache_id: str | None = None
    coin_value: int | None = None
    points: int = 0

    @property
    def ok(self) -> bool:
        return self.status == CommandStatus.OK
