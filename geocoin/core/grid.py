"""Grid index: quantizes lat/lng into integer cells and owns cell flyweights."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator

from geocoin.core.models import Bounds, LatLng


@dataclass(slots=True)
class Cell:
    """Per-cell metadata shared by everyone who mints coins in the cell."""

    i: int
    j: int
    coin_serial: int = 0
    coin_ids: list[str] = field(default_factory=list)


def cell_key(i: int, j: int) -> str:
    """Canonical cell id, used as the cache key everywhere."""
    return f"{i}:{j}"


def parse_cell_key(key: str) -> tuple[int, int]:
    """Inverse of :func:`cell_key`.  Raises ``ValueError`` on malformed keys."""
    left, sep, right = key.partition(":")
    if not sep:
        raise ValueError(f"Malformed cell key: {key!r}")
    return int(left), int(right)


class GridIndex:
    """Fixed-size lat/lng grid with a lazily-grown cell flyweight cache.

    Cells are created on first reference and never evicted, so coin
    serials stay monotonic for the lifetime of the index.
    """

    __slots__ = ("tile_size", "_cells")

    def __init__(self, tile_size: float) -> None:
        if tile_size <= 0:
            raise ValueError("tile_size must be positive")
        self.tile_size = tile_size
        self._cells: dict[tuple[int, int], Cell] = {}

    # -- quantization --

    def cell_of(self, lat: float, lng: float) -> tuple[int, int]:
        return math.floor(lat / self.tile_size), math.floor(lng / self.tile_size)

    def cell_of_point(self, point: LatLng) -> tuple[int, int]:
        return self.cell_of(point.lat, point.lng)

    def cell_anchor(self, i: int, j: int) -> LatLng:
        """Lower-left (south-west) corner of cell (i, j)."""
        return LatLng(i * self.tile_size, j * self.tile_size)

    def cell_bounds(self, i: int, j: int) -> Bounds:
        return Bounds(
            south=i * self.tile_size,
            west=j * self.tile_size,
            north=(i + 1) * self.tile_size,
            east=(j + 1) * self.tile_size,
        )

    def cells_in_bounds(self, bounds: Bounds) -> Iterator[tuple[int, int]]:
        """Yield every cell overlapping *bounds*, row-major (lat, then lng).

        Both boundary cells are included on each axis.
        """
        i_min, j_min = self.cell_of(bounds.south, bounds.west)
        i_max, j_max = self.cell_of(bounds.north, bounds.east)
        for i in range(i_min, i_max + 1):
            for j in range(j_min, j_max + 1):
                yield i, j

    # -- flyweights --

    def cell(self, i: int, j: int) -> Cell:
        key = (i, j)
        found = self._cells.get(key)
        if found is None:
            found = Cell(i, j)
            self._cells[key] = found
        return found

    def __len__(self) -> int:
        return len(self._cells)
