"""Shared API dependencies for sessions and repositories."""

from typing import Annotated

from fastapi import Depends, Request, Response
from sqlalchemy.orm import Session

from chatlog.core.settings import settings
from chatlog.db.session import get_db
from chatlog.repositories import (
    MessageCounterRepository,
    MessageRangeRepository,
    MessageRepository,
    SessionRepository,
)
from chatlog.services.session_service import ResolvedSession, resolve_session

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_chat_session(request: Request, response: Response, db: SessionDep) -> ResolvedSession:
    """Resolve the caller's session cookie, issuing a new session when needed.

    A new session id is sent back with ``Set-Cookie``; a known one only has
    its expiry extended server side.
    """
    cookie_value = request.cookies.get(settings.session_cookie_name)
    resolved = resolve_session(SessionRepository(db), cookie_value)
    if resolved.is_new:
        response.set_cookie(
            key=settings.session_cookie_name,
            value=resolved.session_id,
            max_age=settings.session_ttl_seconds,
            httponly=True,
            secure=settings.session_cookie_secure,
            samesite="strict",
            path="/",
        )
    return resolved


def get_counter_repo(db: SessionDep) -> MessageCounterRepository:
    return MessageCounterRepository(db)


def get_message_repo(db: SessionDep) -> MessageRepository:
    return MessageRepository(db)


def get_range_repo(db: SessionDep) -> MessageRangeRepository:
    return MessageRangeRepository(db)


# Type aliases for the dependencies above
ChatSessionDep = Annotated[ResolvedSession, Depends(get_chat_session)]
CounterRepoDep = Annotated[MessageCounterRepository, Depends(get_counter_repo)]
MessageRepoDep = Annotated[MessageRepository, Depends(get_message_repo)]
RangeRepoDep = Annotated[MessageRangeRepository, Depends(get_range_repo)]
