# src/chatlog/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .message_counter import router as message_counter_router
from .messages import router as messages_router

__all__ = [
    "messages_router",
    "message_counter_router",
]
