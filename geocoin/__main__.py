"""Entry point: ``python -m geocoin``.

Supports two modes:
  - ``python -m geocoin``            → Launch the FastAPI server
  - ``python -m geocoin cli``        → Headless walk from the command line
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)

_MOVE_KEYS = {"N": "NORTH", "S": "SOUTH", "E": "EAST", "W": "WEST"}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Geocoin — deterministic geolocation coin caches")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--save-path", type=str, default="geocoin_save.json")
    srv.add_argument("--resync", type=float, default=0.0, help="Viewport resync interval in seconds (0 = off)")
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Walk the player headlessly and print the caches in view")
    cli.add_argument("--moves", type=str, default="", help="Sequence of N/S/E/W steps, e.g. NNEESW")
    cli.add_argument("--collect", type=int, default=0, help="Coins to collect from the nearest cache after walking")
    cli.add_argument("--save-path", type=str, default="geocoin_save.json")
    cli.add_argument("--load", action="store_true", help="Resume the saved game before walking")
    cli.add_argument("--save", action="store_true", help="Save the game after walking")
    cli.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from geocoin.api.app import create_app
    from geocoin.config import GameConfig

    config = GameConfig(
        save_path=args.save_path,
        resync_interval=args.resync,
        log_level=args.log_level,
    )
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> None:
    from geocoin.config import GameConfig
    from geocoin.core.enums import Direction
    from geocoin.core.session import GameSession
    from geocoin.engine.commands import apply_collect, apply_move, status_text
    from geocoin.systems.persistence import load_game, save_game
    from geocoin.systems.storage import JsonFileStore
    from geocoin.systems.viewport import update_caches
    from geocoin.utils.logging import setup_logging

    config = GameConfig(save_path=args.save_path, log_level=args.log_level)
    setup_logging(config.log_level)

    store = JsonFileStore(config.save_path)
    session = GameSession.create(config)
    if not args.load or load_game(store, session) is None:
        update_caches(session)

    for key in args.moves.upper():
        if key not in _MOVE_KEYS:
            raise SystemExit(f"Unknown move {key!r}; use N, S, E or W.")
        apply_move(session, Direction[_MOVE_KEYS[key]])

    player = session.player
    visible = session.registry.visible()
    if args.collect and visible:
        here = session.grid.cell_of_point(player.position)
        nearest = min(visible, key=lambda c: abs(c.i - here[0]) + abs(c.j - here[1]))
        for _ in range(args.collect):
            if not apply_collect(session, nearest.cache_id).ok:
                break

    print(f"Player at {player.position} after {len(player.trail) - 1} moves — {status_text(player)}")
    for cache in sorted(visible, key=lambda c: (c.i, c.j)):
        print(f"  cache {cache.cache_id:>16}  value {cache.coin_value:3d}  ({len(cache.coin_ids)} coins minted)")

    if args.save:
        save_game(store, session)
        logger.info("Saved game to %s", config.save_path)


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None or args.command == "serve":
        if args.command is None:
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "cli":
        _run_cli(args)


if __name__ == "__main__":
    main()
