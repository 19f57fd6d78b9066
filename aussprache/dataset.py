# dataset.py
# -*- coding: utf-8 -*-

"""
Datensatz-Modell: Zeile 0 = Titel (N Kategorien), Zeilen 1.. = Wörter.

Spalten dürfen unterschiedlich lang sein. Jede Datenzeile wird auf genau
N Zellen aufgefüllt bzw. abgeschnitten, damit der Zugriff per Spaltenindex
immer sicher ist.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, NamedTuple

import pandas as pd

from .errors import FormatError

logger = logging.getLogger(__name__)

MAX_COLUMNS = 26  # Spalten a–z (Audio-Dateinamen)


class GradingPolicy(str, Enum):
    COLUMN = "column"   # nur die Kategorie zählt, leere Zellen neutral
    EXACT = "exact"     # Kategorie und Zeile müssen stimmen, leere Zellen falsch


class Cell(NamedTuple):
    row: int
    col: int


@dataclass(frozen=True)
class GridLayout:
    rows: int
    cols: int

    def __contains__(self, cell) -> bool:
        row, col = cell
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cells(self) -> Iterator[Cell]:
        for r in range(self.rows):
            for c in range(self.cols):
                yield Cell(r, c)

    @property
    def size(self) -> int:
        return self.rows * self.cols


@dataclass(frozen=True, eq=False)
class Dataset:
    name: str
    header: tuple[str, ...]
    frame: pd.DataFrame
    columns: tuple[tuple[str, ...], ...]
    layout: GridLayout

    @property
    def num_columns(self) -> int:
        return len(self.header)

    @property
    def word_count(self) -> int:
        return sum(len(c) for c in self.columns)

    def title(self, col: int) -> str:
        return self.header[col] or f"Title {col + 1}"


def _normalize_rows(rows: list[list[str]], width: int) -> pd.DataFrame:
    padded = [
        [str(c).strip() for c in (list(r[:width]) + [""] * width)[:width]]
        for r in rows
    ]
    return pd.DataFrame(padded, columns=range(width), dtype=object)


def build_dataset(table: list[list[str]], name: str,
                  policy: GradingPolicy = GradingPolicy.COLUMN,
                  location: str | None = None) -> Dataset:
    if not table:
        raise FormatError(
            f"Dataset {location or name} is empty or could not be parsed.",
            location=location,
        )

    header = tuple(str(c).strip() for c in table[0])
    n = len(header)
    if n > MAX_COLUMNS:
        logger.warning("Dataset %s has %d columns (limit %d)", name, n, MAX_COLUMNS)
        raise FormatError(
            f"Dataset {location or name} has {n} columns, at most {MAX_COLUMNS} are supported.",
            location=location, count=n, limit=MAX_COLUMNS,
        )

    frame = _normalize_rows(table[1:], n)
    columns = tuple(
        tuple(w for w in frame[c].tolist() if w)
        for c in range(n)
    )

    if policy == GradingPolicy.EXACT:
        rows = len(frame)
    else:
        rows = int((frame != "").sum().max()) if len(frame) else 0

    layout = GridLayout(rows=rows, cols=n)
    logger.info("Dataset %s: %d categories, %d words, grid %dx%d",
                name, n, sum(len(c) for c in columns), layout.rows, layout.cols)
    return Dataset(name=name, header=header, frame=frame, columns=columns, layout=layout)
