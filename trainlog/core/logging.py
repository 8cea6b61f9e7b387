"""
Logging configuration.

Every module logs through ``logging.getLogger(__name__)``; this module only
wires handlers and levels once at startup.
"""

import logging.config

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Apply the application logging configuration."""
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
            },
        },
        "loggers": {
            "trainlog": {"handlers": ["console"], "level": level.upper(), "propagate": False},
            "sqlalchemy.engine": {"level": "WARNING"},
        },
    })
