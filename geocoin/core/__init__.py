"""Core data models: grid, coins, caches, player, session, snapshots."""

from geocoin.core.enums import CommandStatus, Direction, SpawnOutcome
from geocoin.core.grid import Cell, GridIndex, cell_key, parse_cell_key
from geocoin.core.models import Bounds, Cache, CommandResult, LatLng, PlayerState
from geocoin.core.session import GameSession
from geocoin.core.snapshot import CacheMemento, PersistedSnapshot, SnapshotError

__all__ = [
    "Bounds",
    "Cache",
    "CacheMemento",
    "Cell",
    "CommandResult",
    "CommandStatus",
    "Direction",
    "GameSession",
    "GridIndex",
    "LatLng",
    "PersistedSnapshot",
    "PlayerState",
    "SnapshotError",
    "SpawnOutcome",
    "cell_key",
    "parse_cell_key",
]
