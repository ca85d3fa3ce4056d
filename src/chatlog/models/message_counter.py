# src/chatlog/models/message_counter.py
"""Single-row counter used to number messages."""

from sqlalchemy import BigInteger, Text
from sqlalchemy.orm import Mapped, mapped_column

from chatlog.db.session import Base

MESSAGE_COUNTER_ID = "MESSAGE_COUNTER"


class MessageCounter(Base):
    """Monotonic counter holding the highest allocated message number.

    Only ever touched through the atomic increment in
    :class:`chatlog.repositories.message_counter_repo.MessageCounterRepository`.
    """

    __tablename__ = "message_counter"

    counter_id: Mapped[str] = mapped_column(Text, primary_key=True, default=MESSAGE_COUNTER_ID)
    count: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
