"""Persistence for anonymous chat sessions."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from chatlog.core.errors import InvalidArgument
from chatlog.models.chat_session import ChatSession
from chatlog.repositories.base import store_call, upsert_statement

__all__ = ["SessionRepository"]


class SessionRepository:
    """Stores session ids with their expiry timestamps."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def upsert_session(self, session_id: str, expires_at: int) -> None:
        """Create ``session_id`` or move its expiry to ``expires_at``."""
        if not session_id or not session_id.strip():
            raise InvalidArgument("SessionId cannot be empty")
        stmt = upsert_statement(
            self.session,
            ChatSession.__table__,
            {"session_id": session_id, "expires_at": expires_at},
            key="session_id",
            update={"expires_at": expires_at},
        )
        with store_call(self.session, "upsert_session"):
            self.session.execute(stmt)
            self.session.commit()

    def get_expiry(self, session_id: str) -> int | None:
        """Return the expiry of ``session_id`` or None when it is unknown."""
        if not session_id or not session_id.strip():
            raise InvalidArgument("SessionId cannot be empty")
        with store_call(self.session, "get_session"):
            value = self.session.execute(
                select(ChatSession.expires_at).where(ChatSession.session_id == session_id)
            ).scalar_one_or_none()
        return int(value) if value is not None else None
