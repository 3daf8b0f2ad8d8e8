from __future__ import annotations

import logging
import logging.config

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "basic": {
            "format": "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "basic",
            "level": "DEBUG",
            "stream": "ext://sys.stderr",
        },
    },
    "loggers": {
        "": {"handlers": ["console"], "level": "WARNING"},
        "httpx": {"handlers": ["console"], "level": "WARNING", "propagate": False},
    },
}


def setup_logging(level: str = "WARNING") -> None:
    config = dict(LOGGING_CONFIG)
    config["loggers"] = {
        **LOGGING_CONFIG["loggers"],
        "": {"handlers": ["console"], "level": level.upper()},
    }
    logging.config.dictConfig(config)
