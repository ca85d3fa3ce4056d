"""Error taxonomy shared by the repositories, services and API layer."""

from __future__ import annotations


class ChatlogError(Exception):
    """Base class for all chatlog errors."""


class InvalidArgument(ChatlogError, ValueError):
    """Raised when a caller supplies out-of-contract values.

    Always raised before any store call is made.
    """


class StoreError(ChatlogError):
    """Raised when the backing store rejects or fails a call."""


class StoreUnavailable(StoreError):
    """Raised when the backing store cannot be reached."""


__all__ = ["ChatlogError", "InvalidArgument", "StoreError", "StoreUnavailable"]
