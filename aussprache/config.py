# config.py
# -*- coding: utf-8 -*-

"""
Einstellungen des Aussprache-Spiels.

config.json (optional, im Arbeitsverzeichnis):
    {
      "default_dataset": "dataset01",
      "data_root": "data",
      "audio_roots": ["audio/"],
      "grading_policy": "column",     # "column" | "exact"
      "placement_policy": "free",     # "free" | "strict" (strict nur mit "exact")
      "seed": "",
      "http_timeout": 5.0,
      "log_level": "INFO"
    }
Fehlt die Datei oder ist sie kaputt, gelten die Standardwerte.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields, replace

from .errors import ConfigError
from .loader import join_location

logger = logging.getLogger(__name__)

CONFIG_FILE = "config.json"

GRADING_POLICIES = ("column", "exact")
PLACEMENT_POLICIES = ("free", "strict")


@dataclass
class GameConfig:
    default_dataset: str = "dataset01"
    data_root: str = "data"
    audio_roots: list[str] = field(default_factory=lambda: ["audio/"])
    grading_policy: str = "column"
    placement_policy: str = "free"
    seed: str = ""
    http_timeout: float = 5.0
    log_level: str = "INFO"

    def __post_init__(self):
        if self.grading_policy not in GRADING_POLICIES:
            raise ConfigError(f"Unknown grading_policy {self.grading_policy!r}, expected one of {GRADING_POLICIES}")
        if self.placement_policy not in PLACEMENT_POLICIES:
            raise ConfigError(f"Unknown placement_policy {self.placement_policy!r}, expected one of {PLACEMENT_POLICIES}")
        # strict vergleicht mit der Datenzeile, das Raster hat nur bei "exact" eine Zeile pro Datenzeile
        if self.placement_policy == "strict" and self.grading_policy != "exact":
            raise ConfigError("placement_policy \"strict\" requires grading_policy \"exact\"")
        if isinstance(self.audio_roots, str):
            self.audio_roots = [self.audio_roots]


def load_config(path: str = CONFIG_FILE, defaults: GameConfig | None = None) -> GameConfig:
    defaults = defaults or GameConfig()
    if not os.path.exists(path):
        return defaults
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f) or {}
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return defaults
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level is not an object", path)
        return defaults

    known = {f.name for f in fields(GameConfig)}
    overrides = {k: v for k, v in data.items() if k in known}
    if "http_timeout" in overrides:
        overrides["http_timeout"] = float(overrides["http_timeout"])
    return replace(defaults, **overrides)


def save_config(config: GameConfig, path: str = CONFIG_FILE) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(asdict(config), f, indent=2, ensure_ascii=False)


def check_dataset_name(name: str) -> str:
    name = (name or "").strip()
    if not name or "/" in name or "\\" in name or ".." in name:
        raise ConfigError(f"Invalid dataset name {name!r}")
    return name


def dataset_location(config: GameConfig, name: str) -> str:
    name = check_dataset_name(name)
    return join_location(config.data_root, f"{name}.csv")
