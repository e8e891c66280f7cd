"""Logging helpers shared across the backend."""

from __future__ import annotations

import logging

from ..config import LoggingConfig

__all__ = ["configure_logging", "get_logger"]

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a module logger; callers pass structured fields via ``extra``."""

    return logging.getLogger(name)


def configure_logging(config: LoggingConfig | None = None) -> None:
    """Apply the configured level and format to the root logger once."""

    global _configured
    if _configured:
        return
    config = config or LoggingConfig()
    logging.basicConfig(level=config.level, format=config.format)
    _configured = True
