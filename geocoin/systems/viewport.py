"""Viewport sync — keep visible caches in step with the player's position."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from geocoin.core.enums import SpawnOutcome
from geocoin.core.grid import cell_key
from geocoin.core.models import Bounds, LatLng

if TYPE_CHECKING:
    from geocoin.core.session import GameSession

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SyncReport:
    """Cache ids touched by one viewport sync."""

    spawned: list[str] = field(default_factory=list)
    revealed: list[str] = field(default_factory=list)
    hidden: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.spawned or self.revealed or self.hidden)


def visible_bounds(session: GameSession, position: LatLng | None = None) -> Bounds:
    """Square of ``neighborhood_size`` tiles around *position* (default: the player)."""
    center = position if position is not None else session.player.position
    return Bounds.around(center, session.config.view_radius)


def update_caches(session: GameSession) -> SyncReport:
    """Hide caches that left the viewport, then spawn or reveal every cell inside it.

    A cache counts as inside when its cell is one of the cells the spawn
    loop walks, so the two steps never disagree about a boundary cell.
    Re-running is a no-op.
    """
    grid = session.grid
    registry = session.registry
    bounds = visible_bounds(session)
    cells = list(grid.cells_in_bounds(bounds))
    in_view = set(cells)
    report = SyncReport()

    for cache in registry.visible():
        if cache.cell not in in_view:
            registry.hide(cache.cache_id)
            report.hidden.append(cache.cache_id)

    for i, j in cells:
        outcome = registry.spawn_or_reveal_cell(i, j)
        if outcome == SpawnOutcome.SPAWNED:
            report.spawned.append(cell_key(i, j))
        elif outcome == SpawnOutcome.REVEALED:
            report.revealed.append(cell_key(i, j))

    if report.changed:
        logger.debug(
            "Viewport sync: %d spawned, %d revealed, %d hidden",
            len(report.spawned), len(report.revealed), len(report.hidden),
        )
    return report
