# session.py
# -*- coding: utf-8 -*-

"""
Eine Spielrunde: Datensatz, Kacheln, Brett, Abgabe, Uhr.

Wird pro Laden neu gebaut; "Reset" heißt immer: neue GameSession.
Audio für Wörter bleibt bis zur Abgabe gesperrt, sonst wäre die
Aussprache ein Lösungsschlüssel.
"""

import functools
import logging
import random
import time
from dataclasses import dataclass
from typing import Callable

from . import audio
from .config import GameConfig, dataset_location
from .dataset import Cell, Dataset, GradingPolicy, build_dataset
from .errors import ConfigError
from .grading import GradeResult, grade
from .loader import load_table
from .placement import Board, PlaceOutcome, PlacementPolicy
from .tiles import Tile, make_rng, make_tiles

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class SessionClock:
    started_ms: int = 0
    stopped_ms: int | None = None
    running: bool = False

    def start(self, now_ms: int | None = None) -> None:
        if self.stopped_ms is not None:
            return
        self.started_ms = _now_ms() if now_ms is None else now_ms
        self.running = True

    def stop(self, now_ms: int | None = None) -> None:
        if not self.running:
            return
        self.stopped_ms = _now_ms() if now_ms is None else now_ms
        self.running = False

    def elapsed_ms(self, now_ms: int | None = None) -> int:
        if self.stopped_ms is not None:
            return self.stopped_ms - self.started_ms
        if not self.running:
            return 0
        now_ms = _now_ms() if now_ms is None else now_ms
        return max(0, now_ms - self.started_ms)


class GameSession:
    def __init__(self, dataset: Dataset, tiles: list[Tile],
                 grading_policy: GradingPolicy = GradingPolicy.COLUMN,
                 placement_policy: PlacementPolicy = PlacementPolicy.FREE,
                 audio_roots: tuple[str, ...] = (),
                 probe: Callable[[str], bool] = audio.exists):
        self.dataset = dataset
        self.tiles = list(tiles)
        self.grading_policy = GradingPolicy(grading_policy)
        placement_policy = PlacementPolicy(placement_policy)
        if placement_policy == PlacementPolicy.STRICT and self.grading_policy != GradingPolicy.EXACT:
            raise ConfigError("Strict placement needs exact grading (one grid row per data row)")
        self.board = Board(self.tiles, dataset.layout, placement_policy)
        self.audio_roots = tuple(audio_roots)
        self.probe = probe
        self.result: GradeResult | None = None
        self.clock = SessionClock()
        self.clock.start()

    @classmethod
    def from_table(cls, table: list[list[str]], name: str, config: GameConfig | None = None,
                   rng: random.Random | None = None, location: str | None = None,
                   probe: Callable[[str], bool] | None = None) -> "GameSession":
        config = config or GameConfig()
        policy = GradingPolicy(config.grading_policy)
        dataset = build_dataset(table, name, policy, location=location)
        tiles = make_tiles(dataset, rng or make_rng(config.seed))
        return cls(
            dataset, tiles,
            grading_policy=policy,
            placement_policy=PlacementPolicy(config.placement_policy),
            audio_roots=tuple(config.audio_roots),
            probe=probe or functools.partial(audio.exists, timeout=config.http_timeout),
        )

    @classmethod
    def load(cls, name: str, config: GameConfig | None = None,
             rng: random.Random | None = None) -> "GameSession":
        """Lädt den Datensatz <data_root>/<name>.csv. LoadError / FormatError gehen an den Aufrufer."""
        config = config or GameConfig()
        location = dataset_location(config, name)
        table = load_table(location, timeout=config.http_timeout)
        return cls.from_table(table, name, config, rng=rng, location=location)

    # ---------- Zustand ----------
    @property
    def submitted(self) -> bool:
        return self.result is not None

    @property
    def placed_count(self) -> int:
        return self.board.placed_count

    @property
    def total(self) -> int:
        return self.board.total

    @property
    def ready(self) -> bool:
        return not self.submitted and self.board.ready

    # ---------- Züge ----------
    def place(self, tile_id: str, cell) -> PlaceOutcome:
        return self.board.place(tile_id, cell)

    def to_pool(self, tile_id: str) -> PlaceOutcome:
        return self.board.to_pool(tile_id)

    def submit(self) -> GradeResult:
        if self.result is not None:
            return self.result
        self.board.freeze()
        self.clock.stop()
        titles = tuple(self.dataset.title(c) for c in range(self.dataset.num_columns))
        self.result = grade(self.board, self.tiles, self.dataset.layout,
                            self.grading_policy, titles=titles)
        return self.result

    def is_cell_correct(self, cell) -> bool | None:
        if self.result is None:
            return None
        return self.result.cells.get(Cell(*cell))

    # ---------- Audio ----------
    def title_audio(self, col: int) -> str | None:
        return audio.resolve_title_audio(col, self.dataset.name, self.audio_roots, self.probe)

    def tile_audio(self, tile_id: str) -> str | None:
        if not self.submitted:
            return None
        tile = self.board.tile(tile_id)
        return audio.resolve_word_audio(tile.source_column, tile.ordinal,
                                        self.dataset.name, self.audio_roots, self.probe)
