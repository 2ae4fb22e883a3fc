"""Logging configuration for the MLflow API client."""

from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

# Package-wide logger, child loggers are not used
logger = logging.getLogger("mlflow_api")

_LEVEL_ENV_VAR = "MLFLOW_API_LOG_LEVEL"


def _level_from_env(default: int) -> int:
    """Resolve the log level from MLFLOW_API_LOG_LEVEL, falling back to ``default``."""
    name = os.environ.get(_LEVEL_ENV_VAR, "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


def setup_logger(level: int = logging.WARNING, stream: TextIO | None = None) -> None:
    """Attach the default handler to the mlflow_api logger.

    The client is a library, so the default level is WARNING: request
    tracing (DEBUG) and session lifecycle messages (INFO) only show up when
    MLFLOW_API_LOG_LEVEL or an explicit ``set_log_level`` asks for them.

    Args:
        level: Logging level used when MLFLOW_API_LOG_LEVEL is not set
        stream: Output stream (default: stderr)
    """
    if logger.handlers:
        # Already configured
        return

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter("mlflow_api [%(levelname)s] %(message)s"))

    logger.addHandler(handler)
    logger.setLevel(_level_from_env(level))
    logger.propagate = False


def set_log_level(level: int | str) -> None:
    """Change the mlflow_api log level at runtime.

    Args:
        level: A ``logging`` level constant or its name (e.g. "DEBUG")
    """
    logger.setLevel(level.upper() if isinstance(level, str) else level)


# Initialize logger on import
setup_logger()
