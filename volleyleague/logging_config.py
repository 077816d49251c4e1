"""Process-wide logging setup for the API server."""

import logging.config


def setup_logging(level: str = "INFO", access_log: bool = True, sql_echo: bool = False) -> None:
    """Configure root, league, uvicorn and SQLAlchemy loggers.

    ``sql_echo`` raises ``sqlalchemy.engine`` to INFO so every statement is
    logged through the console handler instead of engine-level echo.
    """
    level = level.upper()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                    "datefmt": "%H:%M:%S",
                },
                # Uvicorn pre-formats access log lines
                "access_simple": {"format": "%(message)s"},
            },
            "handlers": {
                "console": {"class": "logging.StreamHandler", "formatter": "default"},
                "access": {"class": "logging.StreamHandler", "formatter": "access_simple"},
            },
            "loggers": {
                "volleyleague": {"level": level, "handlers": ["console"], "propagate": False},
                "uvicorn.error": {"level": level, "handlers": ["console"], "propagate": False},
                "uvicorn.access": {
                    "level": "INFO" if access_log else "WARNING",
                    "handlers": ["access"],
                    "propagate": False,
                },
                "sqlalchemy.engine": {
                    "level": "INFO" if sql_echo else "WARNING",
                    "handlers": ["console"],
                    "propagate": False,
                },
            },
            "root": {"level": level, "handlers": ["console"]},
        }
    )
