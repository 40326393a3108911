"""Logging configuration.

Audit events are logged with a fixed message name and their context in
``extra``; the JSON formatter renders those fields as top-level keys.
"""

import logging.config
import sys
from typing import Any

from erpaccess.config import Settings


def build_logging_config(level: str = "INFO", fmt: str = "json") -> dict[str, Any]:
    """dictConfig for the service: one stdout handler, JSON or console format."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
                "json_ensure_ascii": False,
            },
            "console": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": fmt,
                "stream": sys.stdout,
            },
        },
        "loggers": {
            "erpaccess": {
                "handlers": ["stdout"],
                "level": level.upper(),
                "propagate": False,
            },
        },
        "root": {
            "handlers": ["stdout"],
            "level": "WARNING",
        },
    }


def configure_logging(settings: Settings) -> None:
    """Apply logging configuration for the given settings."""
    level = "DEBUG" if settings.debug else settings.log_level
    logging.config.dictConfig(build_logging_config(level, settings.log_format))
