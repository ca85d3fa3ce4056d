"""Background task that periodically runs the range aggregator."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from sqlalchemy.orm import Session

from chatlog.core.errors import ChatlogError, StoreError
from chatlog.core.settings import settings
from chatlog.db.session import SessionLocal
from chatlog.records import RangeSummary
from chatlog.repositories.message_range_repo import MessageRangeRepository
from chatlog.repositories.message_repo import MessageRepository
from chatlog.services.range_aggregator import RangeAggregator

logger = logging.getLogger(__name__)


def run_aggregation(
    session_factory: Callable[[], Session] = SessionLocal,
    lookback_seconds: int | None = None,
) -> RangeSummary:
    """Run one aggregation in a fresh database session."""
    lookback = settings.aggregation_lookback_seconds if lookback_seconds is None else lookback_seconds
    db = session_factory()
    try:
        aggregator = RangeAggregator(MessageRepository(db), MessageRangeRepository(db))
        summary = aggregator.run(lookback)
        MessageRangeRepository(db).delete_expired()
        return summary
    finally:
        db.close()


class AggregationWorker:
    """Runs the aggregator every ``interval`` seconds until stopped.

    Store and data errors are logged and retried after a back-off; the loop
    itself never raises.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        interval: float | None = None,
        lookback_seconds: int | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._interval = max(
            0.1,
            float(settings.aggregation_interval_seconds if interval is None else interval),
        )
        self._lookback_seconds = lookback_seconds
        self._task: asyncio.Task[None] | None = None
        self._stopping = asyncio.Event()
        self.last_summary: RangeSummary | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the background aggregation loop."""
        if self._task is None or self._task.done():
            self._stopping.clear()
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Stop the background aggregation loop."""
        if self._task is None:
            return

        self._stopping.set()
        await self._task
        self._task = None

    async def _run(self) -> None:
        while not self._stopping.is_set():
            delay = self._interval
            try:
                self.last_summary = await asyncio.to_thread(
                    run_aggregation, self._session_factory, self._lookback_seconds
                )
            except StoreError as e:
                logger.warning("AggregationWorker encountered store error: %s", e)
                delay = min(self._interval * 4, 300.0)
            except (ChatlogError, ValueError, TypeError, KeyError, AttributeError) as e:
                logger.error(
                    "AggregationWorker encountered data processing error: %s", e, exc_info=True
                )
                delay = min(self._interval * 4, 300.0)

            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=delay)
            except TimeoutError:
                continue
