"""Logging for the munin_probes plugins.

One project logger, :data:`logger`, shared by every module.  Munin reads
plugin data from stdout, so the default console handler writes to stderr
and only lets warnings through; ``cron verbose`` switches it to stdout at
DEBUG level.  An optional rotating log file can be added via
:func:`configure`.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, TextIO, Union

_DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOGGER_NAME: Final[str] = "munin_probes"

_LevelT = Union[int, str]


def _stream_handler(stream: TextIO, fmt: str) -> logging.StreamHandler:
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _file_handler(file: Path | str, fmt: str) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=str(file),
        maxBytes=1024 * 1024,
        backupCount=2,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def configure(
    *,
    level: _LevelT = "WARNING",
    log_file: str | Path | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Replace the handlers of the plugin logger.

    *stream* defaults to ``sys.stderr`` as it is at call time, so that
    stdout stays reserved for munin values.  *log_file* adds a small
    rotating file next to the console output.
    """
    lg = logging.getLogger(_LOGGER_NAME)
    lg.setLevel(level)
    lg.handlers.clear()
    lg.addHandler(_stream_handler(stream if stream is not None else sys.stderr, _DEFAULT_FORMAT))
    if log_file is not None:
        lg.addHandler(_file_handler(log_file, _DEFAULT_FORMAT))
    lg.propagate = False
    return lg


def init_logging(level: _LevelT = "WARNING", log_file: str | Path | None = None) -> logging.Logger:
    """Quiet default used at import time and by the plugin entry points."""
    return configure(level=level, log_file=log_file)


def enable_verbose() -> logging.Logger:
    """Send DEBUG diagnostics to stdout, as ``cron verbose`` expects."""
    return configure(level="DEBUG", stream=sys.stdout)


logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging", "enable_verbose"]
