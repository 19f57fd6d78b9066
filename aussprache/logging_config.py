# logging_config.py
# -*- coding: utf-8 -*-

"""
Logging-Konfiguration für den Namensraum 'aussprache'.
Wird einmal pro Streamlit-Lauf aufgerufen; alte Handler werden entfernt,
damit Reruns keine doppelten Zeilen erzeugen.
"""

import logging
import sys
from typing import Optional


def setup_logging(level: int | str = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Args:
        level: Loglevel (logging.DEBUG, "INFO", ...)
        log_file: optionaler Pfad für eine zusätzliche Logdatei
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger("aussprache")
    logger.setLevel(level)

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
