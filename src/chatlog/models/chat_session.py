# src/chatlog/models/chat_session.py
"""Anonymous browser sessions identified by an opaque cookie value."""

from sqlalchemy import BigInteger, Text
from sqlalchemy.orm import Mapped, mapped_column

from chatlog.db.session import Base


class ChatSession(Base):
    """Opaque session id with a sliding expiry."""

    __tablename__ = "chat_session"

    session_id: Mapped[str] = mapped_column(Text, primary_key=True)
    expires_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
