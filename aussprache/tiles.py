# tiles.py
# -*- coding: utf-8 -*-

"""
Kacheln aus den Datenspalten erzeugen und mischen.

ordinal: 1-basierte Position des Worts in seiner Spalte (für word_<a><n>.mp3)
source_row: 0-basierte Datenzeile in der CSV (nur für die EXACT-Bewertung)
"""

import logging
import random
from dataclasses import dataclass

from .dataset import Dataset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Tile:
    id: str
    text: str
    source_column: int
    source_row: int
    ordinal: int


def make_tiles(dataset: Dataset, rng: random.Random | None = None) -> list[Tile]:
    tiles = []
    for c in range(dataset.num_columns):
        ordinal = 0
        for row_idx, word in enumerate(dataset.frame[c].tolist()):
            word = str(word).strip()
            if not word:
                continue
            ordinal += 1
            tiles.append(Tile(
                id=f"t_{c}_{ordinal}",
                text=word,
                source_column=c,
                source_row=row_idx,
                ordinal=ordinal,
            ))

    rng = rng or random.Random()
    rng.shuffle(tiles)
    logger.debug("Created %d tiles for %s", len(tiles), dataset.name)
    return tiles


def make_rng(seed_val: str = "") -> random.Random:
    # leerer Seed => jede Runde neu gemischt
    return random.Random(seed_val) if seed_val else random.Random()
