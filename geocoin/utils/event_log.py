"""Thread-safe ring buffer of game events exposed via the API."""

from __future__ import annotations

import itertools
import threading
from collections import deque
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GameEvent:
    """A single entry in the player's event feed."""

    seq: int
    category: str
    message: str
    cache_id: str | None = None


class EventLog:
    """Bounded event log.  Writers append; readers copy a slice.

    Sequence numbers keep increasing across ``clear()`` so pollers can ask
    for everything after the last seq they saw.
    """

    __slots__ = ("_buffer", "_lock", "_seq")

    def __init__(self, capacity: int = 500) -> None:
        self._buffer: deque[GameEvent] = deque(maxlen=capacity)
        self._lock = threading.Lock()
        self._seq = itertools.count(1)

    def append(self, category: str, message: str, cache_id: str | None = None) -> GameEvent:
        with self._lock:
            event = GameEvent(next(self._seq), category, message, cache_id)
            self._buffer.append(event)
        return event

    def since(self, seq: int) -> list[GameEvent]:
        """Return all events with seq > *seq*."""
        with self._lock:
            return [e for e in self._buffer if e.seq > seq]

    def latest(self, count: int = 50) -> list[GameEvent]:
        """Return the *count* most recent events."""
        with self._lock:
            items = list(self._buffer)
        return items[-count:] if count > 0 else []

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)
