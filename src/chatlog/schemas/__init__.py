# src/chatlog/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .message import MessageCreate, MessagePostResponse, MessageResponse, MessagesSinceResponse
from .message_range import CounterResponse, MessageRangeResponse, RangeWithMessagesResponse

__all__ = [
    "MessageCreate", "MessagePostResponse", "MessageResponse", "MessagesSinceResponse",
    "CounterResponse", "MessageRangeResponse", "RangeWithMessagesResponse",
]
