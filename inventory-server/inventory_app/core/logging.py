"""Console logging configuration applied at application startup."""

from __future__ import annotations

import logging.config
from typing import Any

from inventory_app.core.config import Settings


def build_logging_config(settings: Settings) -> dict[str, Any]:
    level = "DEBUG" if settings.debug else settings.logging.level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": settings.logging.format},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "level": level,
            },
        },
        "loggers": {
            "inventory_app": {"handlers": ["console"], "level": level, "propagate": False},
            # sqlalchemy echo is controlled by settings.database.echo
            "sqlalchemy.engine": {"level": "WARNING"},
        },
        "root": {"handlers": ["console"], "level": "WARNING"},
    }


def configure_logging(settings: Settings) -> None:
    logging.config.dictConfig(build_logging_config(settings))
