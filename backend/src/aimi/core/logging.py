import logging
import logging.config
from typing import Optional

from .settings import AppSettings, get_settings


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(settings: Optional[AppSettings] = None) -> None:
    """Configure root logging; development defaults to DEBUG, production to INFO."""
    s = settings or get_settings()
    level = (s.log_level or ("DEBUG" if s.is_dev else "INFO")).upper()
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
        "root": {"level": level, "handlers": ["console"]},
        "loggers": {
            # 避免 httpx 在 DEBUG 下刷屏
            "httpx": {"level": "WARNING"},
            "httpcore": {"level": "WARNING"},
        },
    })
