"""Synchronous player commands applied to a GameSession.

Each command runs to completion and reports a :class:`CommandResult`; the
caller decides how (or whether) to show it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from geocoin.core.enums import CommandStatus, Direction
from geocoin.core.models import DIRECTION_OFFSETS, CommandResult, LatLng, PlayerState
from geocoin.systems.viewport import SyncReport, update_caches

if TYPE_CHECKING:
    from geocoin.core.session import GameSession


def status_text(player: PlayerState) -> str:
    if player.points == 0 and not player.has_scored:
        return "No points yet..."
    return f"{player.points} points accumulated"


def apply_move(session: GameSession, direction: Direction) -> tuple[CommandResult, SyncReport]:
    """Step one tile in *direction* and resync the viewport."""
    d_lat, d_lng = DIRECTION_OFFSETS[direction]
    tile = session.config.tile_degrees
    target = session.player.position.offset(d_lat * tile, d_lng * tile)
    return apply_move_to(session, target)


def apply_move_to(session: GameSession, position: LatLng) -> tuple[CommandResult, SyncReport]:
    player = session.player
    player.move_to(position)
    report = update_caches(session)
    result = CommandResult(
        CommandStatus.OK,
        f"Moved to {position}.",
        points=player.points,
    )
    return result, report


def apply_collect(session: GameSession, cache_id: str) -> CommandResult:
    return session.registry.collect(cache_id, session.player)


def apply_deposit(session: GameSession, cache_id: str) -> CommandResult:
    return session.registry.deposit(cache_id, session.player)
