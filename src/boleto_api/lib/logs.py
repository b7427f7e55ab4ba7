"""
Logging utilities for the Boleto API.

Provides a simple logger factory that creates configured Python loggers
with consistent formatting across the application.
"""

import logging
import os
from pathlib import Path

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level() -> int:
    """Resolve the log level from LOG_LEVEL, defaulting to INFO."""
    name = os.getenv("LOG_LEVEL", "INFO").upper()
    return getattr(logging, name, logging.INFO)


def logger(name: str) -> logging.Logger:
    """
    Create and configure a logger for the given name.

    If name is a file path (e.g., __file__), the module stem is used
    so log lines read ``app`` instead of the full path.

    Args:
        name: Logger name or __file__ path.

    Returns:
        Configured logging.Logger instance.
    """
    if "/" in name or "\\" in name:
        name = f"boleto_api.{Path(name).stem}"

    log = logging.getLogger(name)

    # Only configure if not already configured
    if not log.handlers:
        log.setLevel(_level())
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
        log.addHandler(handler)

    return log
