"""Coin identity allocation.

Coin ids have the form ``"{i}:{j}#{serial}"`` where the serial comes from
the owning cell's monotonic counter.  Mutating a cell is not thread-safe;
callers mint only while holding the game's command lock.
"""

from __future__ import annotations

from geocoin.core.grid import Cell, cell_key, parse_cell_key


def coin_id(i: int, j: int, serial: int) -> str:
    return f"{cell_key(i, j)}#{serial}"


def parse_coin_id(value: str) -> tuple[int, int, int]:
    """Split a coin id into ``(i, j, serial)``.  Raises ``ValueError``."""
    key, sep, serial = value.rpartition("#")
    if not sep:
        raise ValueError(f"Malformed coin id: {value!r}")
    i, j = parse_cell_key(key)
    number = int(serial)
    if number < 0:
        raise ValueError(f"Negative coin serial: {value!r}")
    return i, j, number


def mint_coin(cell: Cell) -> str:
    """Allocate the next coin id in *cell* and record it in its provenance."""
    new_id = coin_id(cell.i, cell.j, cell.coin_serial)
    cell.coin_ids.append(new_id)
    cell.coin_serial += 1
    return new_id


def reserve_coin(cell: Cell, existing_id: str) -> None:
    """Record an already-minted coin so future mints never reuse its serial."""
    i, j, serial = parse_coin_id(existing_id)
    if (i, j) != (cell.i, cell.j):
        raise ValueError(f"Coin {existing_id!r} does not belong to cell {cell_key(cell.i, cell.j)}")
    if existing_id not in cell.coin_ids:
        cell.coin_ids.append(existing_id)
    if serial >= cell.coin_serial:
        cell.coin_serial = serial + 1
