# grading.py
# -*- coding: utf-8 -*-

"""
Bewertung bei der Abgabe.

COLUMN (Standard): belegte Zelle ist richtig, wenn die Kachel aus dieser
Spalte stammt; die Zeile ist egal. Leere Zellen sind neutral.
EXACT: Spalte und Datenzeile müssen stimmen; leere Zellen zählen als falsch.

Kacheln, die noch im Pool liegen, sind in jedem Fall falsch.
Die Punktzahl wird immer als (score, total) geliefert, nie als Prozentwert.
"""

import logging
from dataclasses import dataclass

import pandas as pd

from .dataset import Cell, GradingPolicy, GridLayout
from .placement import Board
from .tiles import Tile

logger = logging.getLogger(__name__)

__all__ = ["GradingPolicy", "GradeResult", "grade", "is_correct"]


@dataclass(frozen=True, eq=False)
class GradeResult:
    score: int
    total: int
    cells: dict[Cell, bool | None]   # None = neutral
    tiles: dict[str, bool]
    policy: GradingPolicy
    rows: tuple = ()

    @property
    def fraction(self) -> tuple[int, int]:
        return self.score, self.total

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            list(self.rows),
            columns=["Word", "Category", "Placed in", "Correct"],
        )


def is_correct(tile: Tile, cell: Cell, policy: GradingPolicy = GradingPolicy.COLUMN) -> bool:
    if policy == GradingPolicy.EXACT:
        return tile.source_column == cell.col and tile.source_row == cell.row
    return tile.source_column == cell.col


def grade(board: Board, tiles: list[Tile], layout: GridLayout,
          policy: GradingPolicy = GradingPolicy.COLUMN,
          titles: tuple[str, ...] = ()) -> GradeResult:
    policy = GradingPolicy(policy)
    cells: dict[Cell, bool | None] = {}
    tile_flags = {t.id: False for t in tiles}
    score = 0

    for cell in layout.cells():
        tile = board.occupant(cell)
        if tile is None:
            cells[cell] = False if policy == GradingPolicy.EXACT else None
            continue
        ok = is_correct(tile, cell, policy)
        cells[cell] = ok
        tile_flags[tile.id] = ok
        if ok:
            score += 1

    def _title(c):
        return titles[c] if c < len(titles) and titles[c] else f"Title {c + 1}"

    rows = []
    for t in tiles:
        loc = board.location(t.id)
        placed = f"{_title(loc.col)} / row {loc.row + 1}" if loc is not None else "—"
        rows.append((t.text, _title(t.source_column), placed, tile_flags[t.id]))

    result = GradeResult(
        score=score, total=len(tiles), cells=cells, tiles=tile_flags,
        policy=policy, rows=tuple(rows),
    )
    logger.info("Graded (%s): %d / %d", policy.value, score, len(tiles))
    return result
