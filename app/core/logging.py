import logging
from logging.config import dictConfig
import sys
from .config import settings

LOG_LEVEL = settings.LOG_LEVEL or ("DEBUG" if settings.DEBUG else "INFO")

log_config = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": LOG_LEVEL,
            "formatter": "default",
            "stream": sys.stdout,
        },
    },
    "loggers": {
        # Module loggers (app.services.*, app.api.*) inherit this level and
        # emit through the root console handler
        "app": {"level": LOG_LEVEL},
        # SQL echo is too noisy even in DEBUG
        "sqlalchemy.engine": {"level": "WARNING"},
        "httpx": {"level": "WARNING"},
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
}

dictConfig(log_config)

logger = logging.getLogger("app")
