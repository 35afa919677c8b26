"""
Logging setup shared by every entry point (API, UI, scripts).

Modules log through ``logging.getLogger(__name__)``; this only configures
the root handler once from ``settings.LOG_LEVEL``.
"""

import logging

from config.settings import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = None) -> None:
    """Configure the root logger. Safe to call more than once."""
    log_level = getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO)

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=log_level, format=LOG_FORMAT)
    root.setLevel(log_level)

    # SQL echo is controlled by DATABASE_ECHO, keep the engine logger quiet otherwise
    if not settings.DATABASE_ECHO:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
