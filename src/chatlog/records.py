"""Typed records exchanged between the repositories and the service layer.

Each record validates its fields on construction so that an out-of-range
value is rejected where it is created rather than where it is used.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from chatlog.core.errors import InvalidArgument

MAX_CONTENT_LENGTH = 2048


def _require_int(name: str, value: object, minimum: int) -> None:
    # bool is an int subclass but never a valid count or number here
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{name} must be an integer")
    if value < minimum:
        raise InvalidArgument(f"{name} must be >= {minimum}")


def validate_content(content: object) -> str:
    """Return ``content`` if it is a non-empty string of at most 2048 characters."""
    if not isinstance(content, str) or content == "" or len(content) > MAX_CONTENT_LENGTH:
        raise InvalidArgument(
            f"contents is required and must be a string <= {MAX_CONTENT_LENGTH} characters"
        )
    return content


@dataclass(frozen=True, slots=True)
class NewMessage:
    """Message payload before a number and timestamp are assigned."""

    user_id: str
    content: str

    def __post_init__(self) -> None:
        if not isinstance(self.user_id, str) or not self.user_id:
            raise InvalidArgument("user_id must be a non-empty string")
        validate_content(self.content)


@dataclass(frozen=True, slots=True)
class Message:
    """A stored message."""

    message_no: int
    user_id: str
    content: str
    created_at: int

    def __post_init__(self) -> None:
        _require_int("message_no", self.message_no, 1)
        _require_int("created_at", self.created_at, 0)
        if not isinstance(self.user_id, str):
            raise InvalidArgument("user_id must be a string")
        validate_content(self.content)


@dataclass(frozen=True, slots=True)
class CounterState:
    """Snapshot of the message counter."""

    counter_id: str
    count: int

    def __post_init__(self) -> None:
        if not self.counter_id:
            raise InvalidArgument("counter_id must be a non-empty string")
        _require_int("count", self.count, 0)


@dataclass(frozen=True, slots=True)
class RangeSummary:
    """Usage counts for one aggregation window."""

    record_id: str
    start: int
    end: int
    message_count: int
    user_count: int
    created_at: int
    expires_at: int

    def __post_init__(self) -> None:
        if not isinstance(self.record_id, str) or not self.record_id:
            raise InvalidArgument("record_id must be a non-empty string")
        _require_int("start", self.start, 0)
        _require_int("end", self.end, 0)
        if self.start > self.end:
            raise InvalidArgument("start must be <= end")
        _require_int("message_count", self.message_count, 0)
        _require_int("user_count", self.user_count, 0)
        if self.user_count > self.message_count:
            raise InvalidArgument("user_count cannot exceed message_count")
        _require_int("created_at", self.created_at, 0)
        _require_int("expires_at", self.expires_at, 0)


@dataclass(frozen=True, slots=True)
class MessagesSince:
    """Result of a catch-up fetch.

    ``is_complete`` is False when the limit truncated the window and the
    caller has to poll again from the highest ``message_no`` it received.
    """

    data: Sequence[Message]
    is_complete: bool


@dataclass(frozen=True, slots=True)
class RangeWithMessages:
    """A stored summary joined with the messages of its window."""

    range: RangeSummary
    messages: Sequence[Message]


__all__ = [
    "MAX_CONTENT_LENGTH",
    "CounterState",
    "Message",
    "MessagesSince",
    "NewMessage",
    "RangeSummary",
    "RangeWithMessages",
    "validate_content",
]
