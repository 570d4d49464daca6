"""Engine layer: player commands and the location-tracking queue."""

from geocoin.engine.commands import apply_collect, apply_deposit, apply_move, apply_move_to, status_text
from geocoin.engine.tracking import PositionTracker

__all__ = [
    "PositionTracker",
    "apply_collect",
    "apply_deposit",
    "apply_move",
    "apply_move_to",
    "status_text",
]
