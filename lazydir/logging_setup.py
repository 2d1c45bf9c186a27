"""Optional file logging.

The terminal belongs to the UI, so nothing is logged unless a log file is
requested with ``--log-file`` or the ``LAZYDIR_LOG`` environment variable.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

LOG_ENV_VAR = "LAZYDIR_LOG"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
PACKAGE_LOGGER = "lazydir"


def resolve_log_path(cli_value: str | None) -> Path | None:
    value = cli_value if cli_value else os.environ.get(LOG_ENV_VAR, "")
    value = value.strip()
    return Path(value).expanduser() if value else None


def configure_logging(log_path: Path | None) -> logging.Logger:
    """Attach a DEBUG file handler to the package logger when ``log_path`` is set."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    if log_path is None:
        logger.addHandler(logging.NullHandler())
        return logger
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return logger
