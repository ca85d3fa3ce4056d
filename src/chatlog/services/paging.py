"""Window arithmetic for paging and catch-up reads over the message log.

Message numbers start at 1 and are allocated by the message counter, so the
highest allocated number (``max_no``) bounds every read. The functions here
turn a page request or a "last seen" cursor plus ``max_no`` into an inclusive
``[low, high]`` range of message numbers. They perform no I/O so the
repositories can validate and bound a query before touching the database.
"""

from __future__ import annotations

from dataclasses import dataclass

from chatlog.core.errors import InvalidArgument

DEFAULT_SINCE_LIMIT = 100


@dataclass(frozen=True, slots=True)
class PageWindow:
    """Inclusive range of message numbers making up one page."""

    low: int
    high: int


@dataclass(frozen=True, slots=True)
class SinceWindow:
    """Inclusive range of message numbers newer than a client's last seen one.

    ``low > high`` means there is nothing to fetch.
    """

    low: int
    high: int
    is_complete: bool

    @property
    def is_empty(self) -> bool:
        return self.low > self.high


def validate_page_request(page: int, per_page: int) -> None:
    """Raise InvalidArgument unless ``page`` and ``per_page`` are both >= 1."""
    if page < 1:
        raise InvalidArgument("page must be >= 1")
    if per_page < 1:
        raise InvalidArgument("perPage must be >= 1")


def validate_since_request(last: int, limit: int) -> None:
    """Raise InvalidArgument unless ``last >= 0`` and ``limit >= 1``."""
    if last < 0:
        raise InvalidArgument("last must be >= 0")
    if limit < 1:
        raise InvalidArgument("limit must be >= 1")


def page_window(page: int, per_page: int, max_no: int) -> PageWindow | None:
    """Return the number range for ``page`` when pages are counted from the newest.

    Page 1 ends at ``max_no``; each page covers ``per_page`` numbers and the
    range never extends below 1.

    Returns:
        The window, or None when the page lies entirely outside the log.

    Raises:
        InvalidArgument: If ``page < 1``, ``per_page < 1`` or ``max_no < 0``.
    """
    validate_page_request(page, per_page)
    if max_no < 0:
        raise InvalidArgument("max must be >= 0")
    if max_no == 0:
        return None
    if max_no < (page - 1) * per_page + 1:
        return None

    high = max(max_no - (page - 1) * per_page, 1)
    low = max(high - per_page + 1, 1)
    if low > high:
        return None
    return PageWindow(low=low, high=high)


def since_window(last: int, max_no: int, limit: int = DEFAULT_SINCE_LIMIT) -> SinceWindow:
    """Return the number range a client at ``last`` needs to catch up to ``max_no``.

    At most ``limit`` numbers are covered. ``is_complete`` is True exactly when
    the window reaches ``max_no``; a caller that is already caught up (or
    ahead of the server) gets an empty, complete window.

    Raises:
        InvalidArgument: If ``last < 0``, ``max_no < 0`` or ``limit < 1``.
    """
    validate_since_request(last, limit)
    if max_no < 0:
        raise InvalidArgument("max must be >= 0")
    if last >= max_no:
        return SinceWindow(low=last + 1, high=last, is_complete=True)

    count = min(max_no - last, limit)
    return SinceWindow(low=last + 1, high=last + count, is_complete=count == max_no - last)


def time_range(start: int, end: int) -> tuple[int, int]:
    """Validate an inclusive ``[start, end]`` range of unix seconds."""
    if start > end:
        raise InvalidArgument("startTimestamp must be <= endTimestamp")
    return start, end


__all__ = [
    "DEFAULT_SINCE_LIMIT",
    "PageWindow",
    "SinceWindow",
    "page_window",
    "since_window",
    "time_range",
    "validate_page_request",
    "validate_since_request",
]
