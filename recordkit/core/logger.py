from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .settings import get_settings

ROOT_LOGGER_NAME = "recordkit"

_LOGGER: logging.Logger | None = None


def _configure(log_dir: Path | None) -> logging.Logger:
    settings = get_settings()
    base = Path(log_dir) if log_dir is not None else settings.log_dir
    base.mkdir(parents=True, exist_ok=True)
    log_path = base / "recordkit.log"

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    fmt = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = RotatingFileHandler(log_path, maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8")
    file_handler.setFormatter(fmt)
    logger.addHandler(file_handler)

    # stdout carries CSV output for join-csv/extract-pdf, so the console goes to stderr.
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(fmt)
    logger.addHandler(console)
    return logger


def get_logger(name: str | None = None, log_dir: Path | None = None) -> logging.Logger:
    """Return the application logger writing to ``<log_dir>/recordkit.log`` and stderr.

    The log directory defaults to the ``log_dir`` setting. Configuration happens once
    per process; ``name`` selects a child logger such as ``recordkit.csv_join``.
    """
    global _LOGGER
    if _LOGGER is None:
        _LOGGER = _configure(log_dir)
    if name:
        return _LOGGER.getChild(name)
    return _LOGGER


def set_level(level: str) -> None:
    """Change the level of the application logger."""

    value = getattr(logging, level.upper(), None)
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    get_logger().setLevel(value)


def reset_logger() -> None:
    """Drop handlers so the next ``get_logger`` call reconfigures from settings."""

    global _LOGGER
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    _LOGGER = None
