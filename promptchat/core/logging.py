"""Logging bootstrap for the service."""

from __future__ import annotations

import logging
import logging.config

from promptchat.core.config import Settings

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Install a console handler on the root logger at the configured level."""
    level = settings.logging.level.upper()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": settings.logging.format},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {"level": level, "handlers": ["console"]},
            "loggers": {
                "sqlalchemy.engine": {"level": "INFO" if settings.database.echo else "WARNING"},
                "httpx": {"level": "WARNING"},
            },
        }
    )
    logger.debug("Logging configured at level %s", level)


__all__ = ["configure_logging"]
