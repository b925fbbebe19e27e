"""Logging for wrapgen builds.

Everything logs under the ``wrapgen`` logger: ``wrapgen.builder`` for the
batch driver, ``wrapgen.harvester`` for metadata collection, and so on.
The console shows a short ``[wrapgen]`` line per record; the optional build
log keeps timestamps and the emitting area so failures across a large
component tree can be traced afterwards.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import IO, Optional

ROOT_LOGGER = "wrapgen"

CONSOLE_FORMAT = "[wrapgen] %(levelname)s %(message)s"
BUILD_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(area: str | None = None) -> logging.Logger:
    """Return the logger for one area of wrapgen (``builder``, ``harvester``...)."""
    return logging.getLogger(f"{ROOT_LOGGER}.{area}" if area else ROOT_LOGGER)


def _reset_handlers(logger: logging.Logger) -> None:
    # File handlers hold the build log open; close them before replacing.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _build_log_handler(log_file: Path, level: int) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(BUILD_LOG_FORMAT))
    return handler


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """Route wrapgen records to stderr and, when ``log_file`` is given, a build log.

    The build log always records debug detail, whatever the console level,
    and is truncated at the start of each run.
    """
    console_level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(ROOT_LOGGER)
    logger.propagate = False
    _reset_handlers(logger)

    console = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        logger.addHandler(_build_log_handler(log_file, logging.DEBUG))
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(console_level)

    return logger


__all__ = ["configure_logging", "get_logger"]
