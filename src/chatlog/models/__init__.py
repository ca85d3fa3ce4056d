# src/chatlog/models/__init__.py
"""SQLAlchemy models for the chatlog application."""

from .chat_session import ChatSession
from .message import Message
from .message_counter import MESSAGE_COUNTER_ID, MessageCounter
from .message_range import MessageRange

__all__ = [
    "ChatSession",
    "Message",
    "MESSAGE_COUNTER_ID", "MessageCounter",
    "MessageRange",
]
