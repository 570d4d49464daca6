"""Route access to the one GameManager the app lifespan creates.

Routes take ``Depends(get_game_manager)``; tests swap in their own manager
by building the app with a custom store and luck function.
"""

from __future__ import annotations

from geocoin.api.game_manager import GameManager

_game_manager: GameManager | None = None


def set_game_manager(manager: GameManager | None) -> None:
    """Install the running game, or ``None`` once the server shuts down."""
    global _game_manager
    _game_manager = manager


def get_game_manager() -> GameManager:
    if _game_manager is None:
        raise RuntimeError("No game is running; the API lifespan has not started.")
    return _game_manager
