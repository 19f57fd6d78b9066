# placement.py
# -*- coding: utf-8 -*-

"""
Spielbrett: welche Kachel liegt in welcher Zelle.

- Jede Kachel ist entweder im Pool (None) oder in genau einer Zelle.
- Eine Zelle hält höchstens eine Kachel; ein Ablegen auf eine belegte
  Zelle schiebt die bisherige Kachel zurück in den Pool.
- Nach freeze() (Abgabe) wird nichts mehr verändert.

FREE ist das normale Verhalten (alles darf abgelegt werden, bewertet
wird erst bei der Abgabe). STRICT lehnt Ablagen in die falsche Zelle ab
(älteres Spielprinzip ohne Abgabe-Schritt).
"""

import logging
from enum import Enum
from typing import Iterable

from .dataset import Cell, GridLayout
from .tiles import Tile

logger = logging.getLogger(__name__)

POOL = None


class PlacementPolicy(str, Enum):
    FREE = "free"
    STRICT = "strict"


class PlaceOutcome(str, Enum):
    PLACED = "placed"
    REJECTED = "rejected"   # STRICT: falsche Zelle ("shake")
    IGNORED = "ignored"     # Brett eingefroren, unbekannte Kachel oder Zelle


class Board:
    def __init__(self, tiles: Iterable[Tile], layout: GridLayout,
                 policy: PlacementPolicy = PlacementPolicy.FREE):
        self.layout = layout
        self.policy = PlacementPolicy(policy)
        self._tiles = {t.id: t for t in tiles}
        self._order = list(self._tiles)
        self._location: dict[str, Cell | None] = {tid: POOL for tid in self._order}
        self._cells: dict[Cell, str] = {}
        self._frozen = False

    # ---------- Abfragen ----------
    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def total(self) -> int:
        return len(self._order)

    @property
    def placed_count(self) -> int:
        return sum(1 for loc in self._location.values() if loc is not POOL)

    @property
    def ready(self) -> bool:
        return self.placed_count == self.total

    def tile(self, tile_id: str) -> Tile:
        return self._tiles[tile_id]

    def location(self, tile_id: str) -> Cell | None:
        return self._location[tile_id]

    def occupant(self, cell) -> Tile | None:
        tid = self._cells.get(Cell(*cell))
        return self._tiles[tid] if tid is not None else None

    def pool(self) -> list[Tile]:
        return [self._tiles[tid] for tid in self._order if self._location[tid] is POOL]

    def placements(self) -> dict[Cell, Tile]:
        return {cell: self._tiles[tid] for cell, tid in self._cells.items()}

    # ---------- Züge ----------
    def _accepts(self, tile: Tile, cell: Cell) -> bool:
        if self.policy == PlacementPolicy.STRICT:
            return (tile.source_row, tile.source_column) == (cell.row, cell.col)
        return True

    def place(self, tile_id: str, cell) -> PlaceOutcome:
        if self._frozen:
            logger.debug("Board frozen, ignoring place(%s, %s)", tile_id, cell)
            return PlaceOutcome.IGNORED
        if tile_id not in self._tiles:
            logger.debug("Unknown tile %s", tile_id)
            return PlaceOutcome.IGNORED
        cell = Cell(*cell)
        if cell not in self.layout:
            logger.debug("Cell %s outside %dx%d grid", cell, self.layout.rows, self.layout.cols)
            return PlaceOutcome.IGNORED

        tile = self._tiles[tile_id]
        if not self._accepts(tile, cell):
            return PlaceOutcome.REJECTED

        if self._location[tile_id] == cell:
            return PlaceOutcome.PLACED

        prev = self._cells.get(cell)
        if prev is not None:
            self._location[prev] = POOL
            logger.debug("Evicted %s from %s", prev, cell)

        source = self._location[tile_id]
        if source is not POOL:
            del self._cells[source]

        self._cells[cell] = tile_id
        self._location[tile_id] = cell
        return PlaceOutcome.PLACED

    def to_pool(self, tile_id: str) -> PlaceOutcome:
        if self._frozen or tile_id not in self._tiles:
            return PlaceOutcome.IGNORED
        source = self._location[tile_id]
        if source is not POOL:
            del self._cells[source]
            self._location[tile_id] = POOL
        return PlaceOutcome.PLACED

    def freeze(self) -> None:
        self._frozen = True
