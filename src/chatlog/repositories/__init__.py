"""Repositories wrapping database access for each stored entity."""

from .message_counter_repo import MessageCounterRepository
from .message_range_repo import MessageRangeRepository
from .message_repo import MessageRepository
from .session_repo import SessionRepository

__all__ = [
    "MessageCounterRepository",
    "MessageRangeRepository",
    "MessageRepository",
    "SessionRepository",
]
