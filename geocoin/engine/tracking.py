"""Location-sensor subscription feeding positions into the command lock."""

from __future__ import annotations

import queue
import threading

from geocoin.core.models import LatLng


class PositionTracker:
    """MPSC queue of sensor fixes, gated by an on/off subscription.

    Sensor callbacks push from any thread; the GameManager drains and
    applies fixes under its lock.  ``stop()`` drops pending fixes, so no
    position-driven mutation happens after it returns.
    """

    __slots__ = ("_queue", "_active")

    def __init__(self) -> None:
        self._queue: queue.Queue[LatLng] = queue.Queue()
        self._active = threading.Event()

    @property
    def active(self) -> bool:
        return self._active.is_set()

    def start(self) -> None:
        self._active.set()

    def stop(self) -> None:
        self._active.clear()
        self.drain()

    def push(self, position: LatLng) -> bool:
        """Thread-safe enqueue.  Returns False when tracking is off."""
        if not self._active.is_set():
            return False
        self._queue.put_nowait(position)
        return True

    def drain(self) -> list[LatLng]:
        fixes: list[LatLng] = []
        while True:
            try:
                fixes.append(self._queue.get_nowait())
            except queue.Empty:
                break
        return fixes
