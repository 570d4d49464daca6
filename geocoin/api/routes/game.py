"""POST /api/v1/game/{action} — save, load, reset, new game."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends

from geocoin.api.dependencies import get_game_manager
from geocoin.api.game_manager import GameManager
from geocoin.api.schemas import CommandResponse

router = APIRouter()


class GameAction(str, Enum):
    save = "save"
    load = "load"
    reset = "reset"
    new = "new"


@router.post("/game/{action}", response_model=CommandResponse)
def game_control(
    action: GameAction,
    manager: GameManager = Depends(get_game_manager),
) -> CommandResponse:
    match action:
        case GameAction.save:
            result = manager.save()
        case GameAction.load:
            result = manager.load()
        case GameAction.reset:
            result = manager.reset()
        case GameAction.new:
            result = manager.new_game()
    return CommandResponse.from_result(result, manager.status())
