# errors.py
# -*- coding: utf-8 -*-

"""Fehlerklassen für Laden, Format und Konfiguration."""


class AusspracheError(Exception):
    pass


class LoadError(AusspracheError):
    """Datensatz konnte nicht geholt werden (HTTP-Status oder Datei/Netz-Fehler)."""

    def __init__(self, location: str, status: int | None = None, reason: str = ""):
        self.location = location
        self.status = status
        self.reason = reason
        msg = f"Could not load {location}"
        if status is not None:
            msg += f" (HTTP {status})"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class FormatError(AusspracheError):
    """Datensatz geladen, aber unbrauchbar (leer oder zu viele Spalten)."""

    def __init__(self, message: str, location: str | None = None,
                 count: int | None = None, limit: int | None = None):
        self.location = location
        self.count = count
        self.limit = limit
        super().__init__(message)


class ConfigError(AusspracheError, ValueError):
    pass
