"""Atomic allocation of message numbers."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from chatlog.models.message_counter import MESSAGE_COUNTER_ID, MessageCounter
from chatlog.records import CounterState
from chatlog.repositories.base import store_call, upsert_statement

__all__ = ["MessageCounterRepository"]


class MessageCounterRepository:
    """Single serialization point for message numbering.

    The counter row is read and written only through the database; its value
    is never cached in process memory, so any number of processes can share
    the same counter.
    """

    def __init__(self, session: Session, counter_id: str = MESSAGE_COUNTER_ID) -> None:
        self.session = session
        self.counter_id = counter_id

    def next_message_no(self) -> int:
        """Increment the counter and return the new value.

        Runs as one ``INSERT ... ON CONFLICT DO UPDATE ... RETURNING`` statement
        so a missing row starts from zero and concurrent callers never receive
        the same number. The allocation is committed before returning.
        """
        table = MessageCounter.__table__
        count_col = table.c["count"]
        stmt = upsert_statement(
            self.session,
            table,
            {"counter_id": self.counter_id, "count": 1},
            key="counter_id",
            update={"count": count_col + 1},
        ).returning(count_col)
        with store_call(self.session, "next_message_no"):
            value = self.session.execute(stmt).scalar_one()
            self.session.commit()
        return int(value)

    def get_current(self) -> int:
        """Return the highest allocated number without changing it (0 if never used)."""
        with store_call(self.session, "get_current"):
            value = self.session.execute(
                select(MessageCounter.count).where(MessageCounter.counter_id == self.counter_id)
            ).scalar_one_or_none()
        return int(value or 0)

    def get_state(self) -> CounterState:
        """Return the counter as a typed snapshot."""
        return CounterState(counter_id=self.counter_id, count=self.get_current())
