# src/chatlog/models/message_range.py
"""Aggregated usage summaries over a window of the message log."""

from sqlalchemy import BigInteger, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from chatlog.db.session import Base


class MessageRange(Base):
    """Message and distinct-user counts for one aggregation window."""

    __tablename__ = "message_range"

    # "hourly-YYYY-MM-DDTHH" of the window start; reruns upsert the same row.
    record_id: Mapped[str] = mapped_column(Text, primary_key=True)
    start: Mapped[int] = mapped_column(BigInteger, nullable=False)
    end: Mapped[int] = mapped_column(BigInteger, nullable=False)
    message_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    user_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    expires_at: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
