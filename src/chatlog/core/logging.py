"""Logging setup for the chatlog service."""

from __future__ import annotations

import logging

from chatlog.core.settings import settings

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger using the ``LOG_LEVEL`` setting."""
    resolved = (level or settings.log_level).upper()
    logging.basicConfig(level=resolved, format=_LOG_FORMAT)
    logging.getLogger("chatlog").setLevel(resolved)
    if not settings.sql_debug:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
