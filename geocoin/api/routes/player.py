"""POST /api/v1 player commands — movement, sensor fixes, collect/deposit."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends

from geocoin.api.dependencies import get_game_manager
from geocoin.api.game_manager import GameManager
from geocoin.api.schemas import CommandResponse, PositionRequest
from geocoin.core.enums import CommandStatus, Direction
from geocoin.core.models import CommandResult, LatLng

router = APIRouter()


class MoveDirection(str, Enum):
    north = "north"
    south = "south"
    east = "east"
    west = "west"


class TrackingAction(str, Enum):
    start = "start"
    stop = "stop"


@router.post("/move/{direction}", response_model=CommandResponse)
def move(
    direction: MoveDirection,
    manager: GameManager = Depends(get_game_manager),
) -> CommandResponse:
    result = manager.move(Direction[direction.name.upper()])
    return CommandResponse.from_result(result, manager.status())


@router.post("/position", response_model=CommandResponse)
def push_position(
    fix: PositionRequest,
    manager: GameManager = Depends(get_game_manager),
) -> CommandResponse:
    result = manager.push_position(LatLng(fix.lat, fix.lng))
    return CommandResponse.from_result(result, manager.status())


@router.post("/tracking/{action}", response_model=CommandResponse)
def tracking(
    action: TrackingAction,
    manager: GameManager = Depends(get_game_manager),
) -> CommandResponse:
    match action:
        case TrackingAction.start:
            if manager.tracking:
                result = CommandResult(CommandStatus.NOOP, "Already tracking.")
            else:
                manager.start_tracking()
                result = CommandResult(CommandStatus.OK, "Location tracking on.")
        case TrackingAction.stop:
            if not manager.tracking:
                result = CommandResult(CommandStatus.NOOP, "Not tracking.")
            else:
                manager.stop_tracking()
                result = CommandResult(CommandStatus.OK, "Location tracking off.")
    return CommandResponse.from_result(result, manager.status())


@router.post("/caches/{cache_id}/collect", response_model=CommandResponse)
def collect(
    cache_id: str,
    manager: GameManager = Depends(get_game_manager),
) -> CommandResponse:
    result = manager.collect(cache_id)
    return CommandResponse.from_result(result, manager.status())


@router.post("/caches/{cache_id}/deposit", response_model=CommandResponse)
def deposit(
    cache_id: str,
    manager: GameManager = Depends(get_game_manager),
) -> CommandResponse:
    result = manager.deposit(cache_id)
    return CommandResponse.from_result(result, manager.status())
