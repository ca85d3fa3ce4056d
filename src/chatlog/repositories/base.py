"""Helpers shared by the SQLAlchemy repositories."""
from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import Table
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from chatlog.core.errors import StoreError, StoreUnavailable

logger = logging.getLogger(__name__)

__all__ = ["store_call", "upsert_statement"]


@contextmanager
def store_call(session: Session, action: str) -> Iterator[None]:
    """Translate SQLAlchemy failures raised inside the block into store errors.

    The session is rolled back so it can be reused; nothing is retried.
    """
    try:
        yield
    except OperationalError as exc:
        session.rollback()
        logger.warning("Store unavailable during %s: %s", action, exc)
        raise StoreUnavailable(f"{action} failed: store unavailable") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Store error during %s: %s", action, exc)
        raise StoreError(f"{action} failed") from exc


def upsert_statement(
    session: Session,
    table: Table,
    values: dict[str, Any],
    *,
    key: str,
    update: dict[str, Any],
) -> Any:
    """Build an ``INSERT ... ON CONFLICT (key) DO UPDATE`` for the bound dialect.

    Args:
        session: Session whose bind decides the SQL dialect.
        table: Target table.
        values: Column values for the insert branch.
        key: Primary key column the conflict is detected on.
        update: Column assignments applied when the row already exists.

    Raises:
        StoreError: If the bound dialect has no native upsert support.
    """
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        stmt = postgresql.insert(table).values(**values)
    elif dialect == "sqlite":
        stmt = sqlite.insert(table).values(**values)
    else:
        raise StoreError(f"Unsupported database dialect for upsert: {dialect}")
    return stmt.on_conflict_do_update(index_elements=[table.c[key]], set_=update)
