# src/chatlog/models/message.py
"""SQLAlchemy model for the append-only message log."""

from sqlalchemy import BigInteger, Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from chatlog.db.session import Base


class Message(Base):
    """A single chat message keyed by its allocated message number.

    Rows are written once and never updated or deleted.
    """

    __tablename__ = "message"
    __table_args__ = (Index("ix_message_created_at", "created_at", "message_no"),)

    # Allocated by MessageCounter; gaps are possible, duplicates are not.
    message_no: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    user_id: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    # Unix seconds.
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
