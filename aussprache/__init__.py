# -*- coding: utf-8 -*-

"""Aussprache-Spiel: Wörter per Tippen den richtigen Kategorien zuordnen."""

from .config import GameConfig, load_config
from .dataset import Cell, Dataset, GradingPolicy, GridLayout, MAX_COLUMNS, build_dataset
from .errors import AusspracheError, ConfigError, FormatError, LoadError
from .grading import GradeResult, grade
from .loader import load_table, parse_table
from .placement import Board, PlaceOutcome, PlacementPolicy, POOL
from .session import GameSession, SessionClock
from .tiles import Tile, make_tiles

__version__ = "0.1.0"
