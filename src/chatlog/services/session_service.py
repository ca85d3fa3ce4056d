"""Anonymous session lifecycle: issue, look up and extend session ids."""
from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass

from chatlog.core.settings import settings
from chatlog.db.time import now_ts
from chatlog.repositories.session_repo import SessionRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResolvedSession:
    """Session attached to a request.

    ``is_new`` tells the caller to send the id back as a cookie.
    """

    session_id: str
    expires_at: int
    is_new: bool


def create_session(
    repo: SessionRepository,
    *,
    ttl_seconds: int | None = None,
    clock: Callable[[], int] = now_ts,
) -> ResolvedSession:
    """Issue a new random session id valid for ``ttl_seconds``."""
    ttl = settings.session_ttl_seconds if ttl_seconds is None else ttl_seconds
    session_id = str(uuid.uuid4())
    expires_at = clock() + ttl
    repo.upsert_session(session_id, expires_at)
    logger.info("Created session %s", session_id)
    return ResolvedSession(session_id=session_id, expires_at=expires_at, is_new=True)


def refresh_session(
    repo: SessionRepository,
    session_id: str,
    *,
    ttl_seconds: int | None = None,
    clock: Callable[[], int] = now_ts,
) -> ResolvedSession:
    """Push the expiry of an existing session ``ttl_seconds`` into the future."""
    ttl = settings.session_ttl_seconds if ttl_seconds is None else ttl_seconds
    expires_at = clock() + ttl
    repo.upsert_session(session_id, expires_at)
    return ResolvedSession(session_id=session_id, expires_at=expires_at, is_new=False)


def get_session(
    repo: SessionRepository,
    session_id: str,
    *,
    clock: Callable[[], int] = now_ts,
) -> int | None:
    """Return the expiry of ``session_id`` if it exists and has not expired."""
    expires_at = repo.get_expiry(session_id)
    if expires_at is None or expires_at < clock():
        return None
    return expires_at


def resolve_session(
    repo: SessionRepository,
    session_id: str | None,
    *,
    ttl_seconds: int | None = None,
    clock: Callable[[], int] = now_ts,
) -> ResolvedSession:
    """Return the live session for ``session_id``, creating one when needed.

    A known session has its expiry extended; a missing, unknown or expired
    one is replaced by a freshly issued id.
    """
    if session_id and session_id.strip():
        if get_session(repo, session_id, clock=clock) is not None:
            return refresh_session(repo, session_id, ttl_seconds=ttl_seconds, clock=clock)
        logger.debug("Session %s unknown or expired; issuing a new one", session_id)
    return create_session(repo, ttl_seconds=ttl_seconds, clock=clock)
