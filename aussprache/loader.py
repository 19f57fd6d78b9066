# loader.py
# -*- coding: utf-8 -*-

"""
CSV laden mit automatischer Trennzeichen-Erkennung.

Kandidaten: ',', ';', Tab, '|'. Für jeden Kandidaten werden alle Zeilen
gesplittet; gewählt wird der mit dem höchsten Median der Spaltenanzahl
(bei Gleichstand der zuerst genannte, Standard ',').

Quelle ist entweder eine http(s)-URL oder ein lokaler Pfad.
"""

import logging
import re
from pathlib import Path

import requests

from .errors import LoadError

logger = logging.getLogger(__name__)

DELIMITERS = (",", ";", "\t", "|")
QUOTE = '"'

_URL_RE = re.compile(r"^https?://", re.IGNORECASE)


# ============================ Orte (URL oder Pfad) ============================

def is_url(location: str) -> bool:
    return bool(_URL_RE.match(str(location)))


def join_location(base: str, *parts: str) -> str:
    """Hängt Teile mit '/' an – für URLs und lokale Pfade gleichermaßen."""
    out = str(base or "")
    for part in parts:
        part = str(part).strip("/")
        if not part:
            continue
        out = f"{out.rstrip('/')}/{part}" if out else part
    return out


# ============================ Holen ============================

ENCODINGS = ("utf-8", "iso-8859-1")


def decode_bytes(data: bytes) -> str:
    """UTF-8 zuerst, sonst ISO-8859-1 (Excel-Export unter Windows)."""
    for enc in ENCODINGS[:-1]:
        try:
            return data.decode(enc)
        except UnicodeDecodeError:
            logger.debug("Not %s, trying next encoding", enc)
    return data.decode(ENCODINGS[-1])


def fetch_text(location: str, timeout: float = 5.0) -> str:
    if is_url(location):
        try:
            resp = requests.get(location, timeout=timeout)
        except requests.RequestException as e:
            logger.error("Fetching %s failed: %s", location, e)
            raise LoadError(location, None, str(e)) from e
        if not resp.ok:
            logger.error("Fetching %s failed with HTTP %s", location, resp.status_code)
            raise LoadError(location, resp.status_code, resp.reason or "")
        return decode_bytes(resp.content)

    path = Path(location)
    try:
        return decode_bytes(path.read_bytes())
    except OSError as e:
        logger.error("Reading %s failed: %s", location, e)
        raise LoadError(location, None, str(e)) from e


# ============================ Parsen ============================

def split_line(line: str, delimiter: str) -> list[str]:
    """Einfaches CSV-Splitting: '"' schaltet Quote-Modus um, '""' im Quote ist ein Literal."""
    out = []
    cur = []
    in_quote = False
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == QUOTE:
            if in_quote and i + 1 < len(line) and line[i + 1] == QUOTE:
                cur.append(QUOTE)
                i += 1
            else:
                in_quote = not in_quote
        elif ch == delimiter and not in_quote:
            out.append("".join(cur))
            cur = []
        else:
            cur.append(ch)
        i += 1
    out.append("".join(cur))
    return out


def _median(widths: list[int]) -> int:
    widths = sorted(widths)
    return widths[len(widths) // 2]


def detect_delimiter(lines: list[str]) -> str:
    best, best_score = DELIMITERS[0], 0
    for d in DELIMITERS:
        score = _median([len(split_line(line, d)) for line in lines])
        if score > best_score:
            best, best_score = d, score
    logger.debug("Delimiter %r chosen (median width %d)", best, best_score)
    return best


def split_lines(raw: str) -> list[str]:
    """BOM weg, Zeilenenden vereinheitlichen, Leerzeilen entfernen."""
    text = raw[1:] if raw.startswith("\ufeff") else raw
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return [line for line in text.split("\n") if line.strip()]


def _clean_row(cells: list[str]) -> list[str]:
    row = [c.strip() for c in cells]
    while row and not row[-1]:
        row.pop()
    return row


def parse_table(raw: str) -> list[list[str]]:
    lines = split_lines(raw)
    if not lines:
        return []
    delimiter = detect_delimiter(lines)
    rows = [_clean_row(split_line(line, delimiter)) for line in lines]
    return [r for r in rows if r]


def load_table(location: str, timeout: float = 5.0) -> list[list[str]]:
    rows = parse_table(fetch_text(location, timeout=timeout))
    logger.info("Loaded %s: %d rows", location, len(rows))
    return rows
