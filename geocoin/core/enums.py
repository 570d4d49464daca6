"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import Enum, IntEnum, unique


@unique
class Direction(IntEnum):
    """Cardinal movement directions (one tile per step)."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3


@unique
class SpawnOutcome(IntEnum):
    """Result of a spawn-or-reveal attempt on a single cell."""

    EMPTY_CELL = 0       # spawn predicate failed, no cache here
    SPAWNED = 1          # first visit, cache generated and shown
    REVEALED = 2         # known hidden cache shown again
    ALREADY_VISIBLE = 3


@unique
class CommandStatus(str, Enum):
    """Outcome of a player command, reported back to the UI layer."""

    OK = "ok"
    NOOP = "noop"
    NOTHING_TO_DEPOSIT = "nothing_to_deposit"
    NOT_TRACKING = "not_tracking"
    NO_SAVE = "no_save"
