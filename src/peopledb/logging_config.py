import logging
import logging.config

from peopledb.config import config


def setup_logging(level: str = None) -> None:
    """
    Configure log output for the peopledb package.

    The level defaults to the configured PEOPLEDB_LOG_LEVEL. psycopg is kept
    at WARNING so driver chatter does not drown out repository messages.
    """
    log_level = (level or config.log_level).upper()

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "peopledb": {
                "handlers": ["console"],
                "level": log_level,
                "propagate": False,
            },
            "psycopg": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False,
            },
        },
    }

    logging.config.dictConfig(logging_config)
