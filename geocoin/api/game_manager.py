"""GameManager — singleton owning the GameSession behind the HTTP API.

Every mutation (move, sensor fix, collect, deposit, save/load, periodic
resync) runs to completion under one lock, so the session only ever has a
single writer even though FastAPI serves requests from a thread pool.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from geocoin.core.enums import CommandStatus, Direction
from geocoin.core.models import CommandResult, LatLng
from geocoin.core.session import GameSession
from geocoin.engine.commands import apply_collect, apply_deposit, apply_move, apply_move_to, status_text
from geocoin.engine.tracking import PositionTracker
from geocoin.systems.persistence import clear_save, load_game, save_game
from geocoin.systems.render import MemoryRenderLayer
from geocoin.systems.storage import JsonFileStore, KeyValueStore
from geocoin.systems.viewport import SyncReport, update_caches
from geocoin.utils.event_log import EventLog

if TYPE_CHECKING:
    from geocoin.config import GameConfig
    from geocoin.systems.rng import Luck

logger = logging.getLogger(__name__)


class GameManager:
    """Serializes all game commands and owns the optional resync thread."""

    def __init__(
        self,
        config: GameConfig,
        store: KeyValueStore | None = None,
        luck_fn: Luck | None = None,
    ) -> None:
        self.config = config
        self._luck = luck_fn
        self._store: KeyValueStore = store if store is not None else JsonFileStore(Path(config.save_path))

        self._lock = threading.RLock()
        self._event_log = EventLog()
        self._tracker = PositionTracker()

        self._session: GameSession | None = None

        # Resync thread control
        self._thread: threading.Thread | None = None
        self._stop_requested = threading.Event()

        # Nothing is spawned until start() knows whether a save exists
        self._build(sync=False)

    # -- public properties --

    @property
    def session(self) -> GameSession:
        assert self._session is not None
        return self._session

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def tracking(self) -> bool:
        return self._tracker.active

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def status(self) -> str:
        with self._lock:
            return status_text(self.session.player)

    # -- lifecycle --

    def start(self) -> None:
        """Resume the saved game (or start fresh) and launch periodic resync."""
        with self._lock:
            report = load_game(self._store, self.session)
            if report is not None:
                self._event_log.append("load", "Resumed saved game.")
                self._after_sync(report)
            else:
                self._event_log.append("system", "Started a new game.")
                self._after_sync(update_caches(self.session))

        if self.config.resync_interval > 0 and self._thread is None:
            self._stop_requested.clear()
            self._thread = threading.Thread(target=self._run_resync, name="viewport-resync", daemon=True)
            self._thread.start()
            logger.info("Viewport resync every %.1fs", self.config.resync_interval)

    def stop(self) -> None:
        self._tracker.stop()
        self._stop_requested.set()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)
        self._thread = None
        logger.info("GameManager stopped.")

    # -- movement --

    def move(self, direction: Direction) -> CommandResult:
        with self._lock:
            result, report = apply_move(self.session, direction)
            self._after_sync(report)
            self._event_log.append("move", f"Moved {direction.name.lower()} to {self.session.player.position}.")
            return result

    def move_to(self, position: LatLng) -> CommandResult:
        with self._lock:
            result, report = apply_move_to(self.session, position)
            self._after_sync(report)
            return result

    # -- location sensor --

    def start_tracking(self) -> None:
        self._tracker.start()
        self._event_log.append("system", "Location tracking on.")

    def stop_tracking(self) -> None:
        """Halt sensor-driven movement.  Already-applied moves stay applied."""
        with self._lock:
            self._tracker.stop()
        self._event_log.append("system", "Location tracking off.")

    def push_position(self, position: LatLng) -> CommandResult:
        """Feed one sensor fix.  Ignored unless tracking is on."""
        if not self._tracker.push(position):
            return CommandResult(CommandStatus.NOT_TRACKING, "Location tracking is off.")
        result = CommandResult(CommandStatus.NOOP, "No pending fixes.")
        with self._lock:
            fixes = self._tracker.drain()
            if not self._tracker.active:
                return CommandResult(CommandStatus.NOT_TRACKING, "Location tracking is off.")
            for fix in fixes:
                result = self.move_to(fix)
        return result

    # -- cache commands --

    def collect(self, cache_id: str) -> CommandResult:
        with self._lock:
            result = apply_collect(self.session, cache_id)
            if result.ok:
                self._event_log.append("collect", result.message, cache_id)
                self._autosave()
            return result

    def deposit(self, cache_id: str) -> CommandResult:
        with self._lock:
            result = apply_deposit(self.session, cache_id)
            if result.ok:
                self._event_log.append("deposit", result.message, cache_id)
                self._autosave()
            elif result.status == CommandStatus.NOTHING_TO_DEPOSIT:
                self._event_log.append("deposit", result.message, cache_id)
            return result

    # -- save games --

    def save(self) -> CommandResult:
        with self._lock:
            snap = save_game(self._store, self.session)
            self._event_log.append("save", f"Saved game ({len(snap.caches)} caches).")
            return CommandResult(CommandStatus.OK, "Game saved.", points=self.session.player.points)

    def load(self) -> CommandResult:
        with self._lock:
            report = load_game(self._store, self.session)
            if report is None:
                return CommandResult(CommandStatus.NO_SAVE, "No saved game.", points=self.session.player.points)
            self._event_log.append("load", "Loaded saved game.")
            self._after_sync(report)
            return CommandResult(CommandStatus.OK, "Game loaded.", points=self.session.player.points)

    def new_game(self) -> CommandResult:
        """Fresh session at the origin, autosaved over the stored game."""
        with self._lock:
            self._event_log.clear()
            self._build()
            self._event_log.append("system", "Started a new game.")
            self._autosave()
            return CommandResult(CommandStatus.OK, "New game started.")

    def reset(self) -> CommandResult:
        """Fresh session and delete the saved game.  Nothing is stored until the next change."""
        with self._lock:
            clear_save(self._store, self.config.save_key)
            self._event_log.clear()
            self._build()
            self._event_log.append("system", "Game reset.")
            return CommandResult(CommandStatus.OK, "Game reset.")

    def resync(self) -> SyncReport:
        with self._lock:
            report = update_caches(self.session)
            self._after_sync(report)
            return report

    # -- internals --

    def _build(self, sync: bool = True) -> None:
        if self._session is not None:
            self._session.registry.clear()
        self._tracker.stop()
        self._session = GameSession.create(self.config, luck_fn=self._luck, render=MemoryRenderLayer())
        if not sync:
            return
        self._after_sync(update_caches(self._session), persist=False)
        logger.info(
            "New session at %s with %d caches in view",
            self._session.player.position, len(self._session.registry.visible()),
        )

    def _after_sync(self, report: SyncReport, persist: bool = True) -> None:
        for cache_id in report.spawned:
            self._event_log.append("spawn", f"Found a new cache at {cache_id}.", cache_id)
        if report.spawned and persist:
            self._autosave()

    def _autosave(self) -> None:
        if self.config.autosave:
            save_game(self._store, self.session)

    def _run_resync(self) -> None:
        """Background thread main loop."""
        logger.info("Resync thread started.")
        while not self._stop_requested.wait(self.config.resync_interval):
            self.resync()
        logger.info("Resync thread exited.")
