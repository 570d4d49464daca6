"""Render-layer collaborator.

The engine never draws anything itself: it hands cache rectangles to a
``RenderLayer`` and keeps the returned handle on the cache while visible.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Any, Callable, Protocol

from geocoin.core.models import Bounds

PopupBuilder = Callable[[], str]


class RenderLayer(Protocol):
    def add_rectangle(self, bounds: Bounds) -> Any: ...

    def remove_layer(self, handle: Any) -> None: ...

    def attach_popup(self, handle: Any, builder: PopupBuilder) -> None: ...


class NullRenderLayer:
    """Accepts every call and draws nothing (headless runs)."""

    __slots__ = ("_ids",)

    def __init__(self) -> None:
        self._ids = itertools.count(1)

    def add_rectangle(self, bounds: Bounds) -> int:
        return next(self._ids)

    def remove_layer(self, handle: Any) -> None:
        return None

    def attach_popup(self, handle: Any, builder: PopupBuilder) -> None:
        return None


@dataclass(slots=True)
class Rectangle:
    handle: int
    bounds: Bounds
    popup: PopupBuilder | None = None

    def popup_text(self) -> str:
        return self.popup() if self.popup is not None else ""


class MemoryRenderLayer:
    """Keeps the live rectangles in a dict so the API (and tests) can list them."""

    __slots__ = ("_ids", "_layers")

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._layers: dict[int, Rectangle] = {}

    def add_rectangle(self, bounds: Bounds) -> int:
        handle = next(self._ids)
        self._layers[handle] = Rectangle(handle, bounds)
        return handle

    def remove_layer(self, handle: Any) -> None:
        self._layers.pop(handle, None)

    def attach_popup(self, handle: Any, builder: PopupBuilder) -> None:
        rect = self._layers.get(handle)
        if rect is not None:
            rect.popup = builder

    def get(self, handle: Any) -> Rectangle | None:
        return self._layers.get(handle)

    @property
    def rectangles(self) -> list[Rectangle]:
        return list(self._layers.values())

    def __len__(self) -> int:
        return len(self._layers)
