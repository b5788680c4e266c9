"""Logging configuration helpers shared by the CLI and the mixing pipeline."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from logging import Handler, Logger
from pathlib import Path
from typing import Any

__all__ = ["LOG_FORMATS", "configure_logging", "get_logger", "set_log_level"]

DETAILED_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
PLAIN_FORMAT = "%(levelname)s: %(message)s"
LOG_FORMATS = {"detailed": DETAILED_FORMAT, "plain": PLAIN_FORMAT}


def configure_logging(settings: Mapping[str, Any] | None = None, *, force: bool = True) -> None:
    """Configure the root logger from the ``logging`` section of the configuration.

    .. code-block:: yaml

        logging:
          level: INFO
          format: plain
          file:
            enabled: true
            path: logs/corpus-mixer.log

    ``format`` selects the console layout (``plain`` or ``detailed``); the file
    handler always uses the detailed layout. Diagnostics about rejected datasets
    and skipped manifest lines are WARNING records, so a level above WARNING
    silences them.
    """

    settings = settings or {}
    level = _coerce_level(settings.get("level"))
    console_format = LOG_FORMATS.get(str(settings.get("format", "detailed")), DETAILED_FORMAT)

    logging.basicConfig(level=level, format=console_format, force=force)

    file_settings = settings.get("file")
    handler: Handler | None = None
    if isinstance(file_settings, Mapping) and file_settings.get("enabled"):
        path_value = file_settings.get("path")
        if path_value:
            log_path = Path(path_value).expanduser()
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(log_path, encoding="utf-8")
            handler.setFormatter(logging.Formatter(DETAILED_FORMAT))

    if handler:
        logging.getLogger().addHandler(handler)


def get_logger(name: str | None = None) -> Logger:
    """Return a module logger, falling back to the package logger."""
    return logging.getLogger(name if name else "corpus_mixer")


def set_log_level(level: str | int) -> None:
    """Set the log level on the root logger."""
    logging.getLogger().setLevel(_coerce_level(level))


def _coerce_level(level: Any) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str) and level:
        try:
            return logging._nameToLevel[level.upper()]
        except KeyError:
            return logging.INFO
    return logging.INFO
