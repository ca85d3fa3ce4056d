"""Usage aggregation over a trailing window of the message log."""
from __future__ import annotations

import logging
from collections.abc import Callable

from chatlog.core.errors import InvalidArgument
from chatlog.core.settings import settings
from chatlog.db.time import hour_label, now_ts
from chatlog.records import RangeSummary
from chatlog.repositories.message_range_repo import MessageRangeRepository
from chatlog.repositories.message_repo import MessageRepository

logger = logging.getLogger(__name__)

DEFAULT_LOOKBACK_SECONDS = 21_600  # 6 hours


def range_record_id(start: int) -> str:
    """Return the summary id for a window starting at ``start``."""
    return f"hourly-{hour_label(start)}"


class RangeAggregator:
    """Counts messages and distinct authors over a trailing window.

    The summary id is derived from the UTC hour of the window start, so runs
    within the same hour overwrite one record instead of adding another.
    Either the whole summary is computed and stored or the run raises.
    """

    def __init__(
        self,
        messages: MessageRepository,
        ranges: MessageRangeRepository,
        *,
        clock: Callable[[], int] = now_ts,
        ttl_seconds: int | None = None,
    ) -> None:
        self.messages = messages
        self.ranges = ranges
        self._clock = clock
        self._ttl_seconds = settings.range_ttl_seconds if ttl_seconds is None else ttl_seconds

    def run(self, lookback_seconds: int = DEFAULT_LOOKBACK_SECONDS) -> RangeSummary:
        """Aggregate the last ``lookback_seconds`` and upsert the summary."""
        if lookback_seconds < 0:
            raise InvalidArgument("lookback_seconds must be >= 0")

        end = self._clock()
        start = end - lookback_seconds
        if start < 0:
            raise InvalidArgument("lookback_seconds reaches before the unix epoch")
        window = self.messages.get_messages_from_timestamp_range(start, end)
        users = {message.user_id for message in window}

        summary = RangeSummary(
            record_id=range_record_id(start),
            start=start,
            end=end,
            message_count=len(window),
            user_count=len(users),
            created_at=end,
            expires_at=end + self._ttl_seconds,
        )
        self.ranges.save_range(summary)
        logger.info(
            "Saved range %s: %d messages from %d users",
            summary.record_id,
            summary.message_count,
            summary.user_count,
        )
        return summary
