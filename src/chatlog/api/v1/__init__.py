# src/chatlog/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import message_counter_router, messages_router

__all__ = [
    "messages_router",
    "message_counter_router",
]
