"""Persistence for aggregated message ranges."""
from __future__ import annotations

from collections.abc import Callable

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from chatlog.db.time import now_ts
from chatlog.models.message_range import MessageRange
from chatlog.records import RangeSummary
from chatlog.repositories.base import store_call, upsert_statement

__all__ = ["MessageRangeRepository"]


class MessageRangeRepository:
    """Upsert-by-id store for :class:`RangeSummary` records.

    Records past their ``expires_at`` are treated as already gone.
    """

    def __init__(self, session: Session, clock: Callable[[], int] = now_ts) -> None:
        self.session = session
        self._clock = clock

    def save_range(self, summary: RangeSummary) -> RangeSummary:
        """Insert ``summary`` or overwrite the record with the same ``record_id``."""
        table = MessageRange.__table__
        values = {
            "record_id": summary.record_id,
            "start": summary.start,
            "end": summary.end,
            "message_count": summary.message_count,
            "user_count": summary.user_count,
            "created_at": summary.created_at,
            "expires_at": summary.expires_at,
        }
        update = {name: value for name, value in values.items() if name != "record_id"}
        stmt = upsert_statement(self.session, table, values, key="record_id", update=update)
        with store_call(self.session, "save_range"):
            self.session.execute(stmt)
            self.session.commit()
        return summary

    def get_range(self, record_id: str) -> RangeSummary | None:
        with store_call(self.session, "get_range"):
            row = self.session.execute(
                select(MessageRange).where(MessageRange.record_id == record_id)
            ).scalar_one_or_none()
        return _to_record(row) if row is not None else None

    def get_all_ranges(self, now: int | None = None) -> list[RangeSummary]:
        """Return every unexpired summary ordered by window start."""
        cutoff = self._clock() if now is None else now
        stmt = (
            select(MessageRange)
            .where(MessageRange.expires_at >= cutoff)
            .order_by(MessageRange.start.asc(), MessageRange.record_id.asc())
        )
        with store_call(self.session, "get_all_ranges"):
            rows = self.session.execute(stmt).scalars().all()
        return [_to_record(row) for row in rows]

    def delete_expired(self, now: int | None = None) -> int:
        """Remove summaries that expired before ``now``; return how many were removed."""
        cutoff = self._clock() if now is None else now
        with store_call(self.session, "delete_expired"):
            result = self.session.execute(
                delete(MessageRange).where(MessageRange.expires_at < cutoff)
            )
            self.session.commit()
        return int(result.rowcount or 0)


def _to_record(row: MessageRange) -> RangeSummary:
    return RangeSummary(
        record_id=row.record_id,
        start=int(row.start),
        end=int(row.end),
        message_count=int(row.message_count),
        user_count=int(row.user_count),
        created_at=int(row.created_at),
        expires_at=int(row.expires_at),
    )
