# src/utbanner/logging.py
"""Logging helpers: console output for the CLI and the per-run diagnostic log."""

from __future__ import annotations

import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path

_LOGGER_NAME = "utbanner"
_DIAGNOSTICS_NAME = f"{_LOGGER_NAME}.diagnostics"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the utbanner hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Configure the utbanner console logger."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI runs more than once.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("[utbanner] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)
    return logger


def default_log_path() -> Path:
    """A per-run file name in the temp directory. The file itself is not created."""
    stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    return Path(tempfile.gettempdir()) / f"utbanner-{stamp}-{os.getpid()}.log"


def open_diagnostic_log(log_file: Path) -> logging.Logger:
    """
    Logger whose records are appended to ``log_file``.
    The handler opens the file on the first record only.
    """
    logger = logging.getLogger(_DIAGNOSTICS_NAME)
    logger.setLevel(logging.ERROR)
    logger.propagate = False
    close_diagnostic_log(logger)

    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8", delay=True)
    file_handler.setLevel(logging.ERROR)
    file_handler.setFormatter(logging.Formatter("%(asctime)s %(message)s"))
    logger.addHandler(file_handler)
    return logger


def close_diagnostic_log(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


__all__ = [
    "close_diagnostic_log",
    "configure_logging",
    "default_log_path",
    "get_logger",
    "open_diagnostic_log",
]
