# audio.py
# -*- coding: utf-8 -*-

"""
Audio-Dateien finden.

Dateinamen ergeben sich aus den Indizes:
    title_<buchstabe>.mp3        (Spaltentitel; 0 -> a, 25 -> z)
    word_<buchstabe><n>.mp3      (n = 1-basierte Position des Worts in der Spalte)

Gesucht wird in dieser Reihenfolge:
    <root>/<dataset>/<datei>   für jede Audio-Wurzel
    <root>/<datei>             für jede Audio-Wurzel
Die erste vorhandene Datei gewinnt; gibt es keine, liefert resolve() None
und es wird einfach nichts abgespielt.
"""

import logging
import string
from pathlib import Path
from typing import Callable, Iterable, Iterator

import requests

from .loader import is_url, join_location

logger = logging.getLogger(__name__)

LETTERS = string.ascii_lowercase


def letter(i: int) -> str:
    if not 0 <= i < len(LETTERS):
        raise ValueError(f"Column index {i} has no letter (0..{len(LETTERS) - 1})")
    return LETTERS[i]


def filename_for_title(col: int) -> str:
    return f"title_{letter(col)}.mp3"


def filename_for_word(col: int, ordinal: int) -> str:
    return f"word_{letter(col)}{ordinal}.mp3"


def candidates(filename: str, dataset_name: str, roots: Iterable[str]) -> Iterator[str]:
    roots = list(roots)
    if dataset_name:
        for root in roots:
            yield join_location(root, dataset_name, filename)
    for root in roots:
        yield join_location(root, filename)


def exists(location: str, timeout: float = 5.0) -> bool:
    """Nur prüfen, nicht laden (HEAD bzw. Dateisystem)."""
    if is_url(location):
        try:
            resp = requests.head(location, timeout=timeout, allow_redirects=True)
        except requests.RequestException as e:
            logger.debug("Probe %s failed: %s", location, e)
            return False
        return 200 <= resp.status_code < 300
    return Path(location).is_file()


def resolve(filename: str, dataset_name: str, roots: Iterable[str],
            probe: Callable[[str], bool] = exists) -> str | None:
    found = next((c for c in candidates(filename, dataset_name, roots) if probe(c)), None)
    if found is None:
        logger.debug("No audio for %s (dataset %s)", filename, dataset_name)
    return found


def resolve_title_audio(col: int, dataset_name: str, roots: Iterable[str],
                        probe: Callable[[str], bool] = exists) -> str | None:
    return resolve(filename_for_title(col), dataset_name, roots, probe)


def resolve_word_audio(col: int, ordinal: int, dataset_name: str, roots: Iterable[str],
                       probe: Callable[[str], bool] = exists) -> str | None:
    return resolve(filename_for_word(col, ordinal), dataset_name, roots, probe)
