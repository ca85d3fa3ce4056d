"""Data access for the numbered message log."""
from __future__ import annotations

from collections.abc import Callable

from sqlalchemy import select
from sqlalchemy.orm import Session

from chatlog.core.errors import InvalidArgument
from chatlog.db.time import now_ts
from chatlog.models.message import Message as MessageRow
from chatlog.records import Message, MessagesSince, NewMessage
from chatlog.repositories.base import store_call
from chatlog.services.paging import DEFAULT_SINCE_LIMIT, page_window, since_window, time_range

__all__ = ["MessageRepository"]


class MessageRepository:
    """Append-only store of messages keyed by their allocated number.

    Every read validates its arguments before issuing a query; requests that
    fall outside the known range return an empty result without touching the
    database.
    """

    def __init__(self, session: Session, clock: Callable[[], int] = now_ts) -> None:
        """Initialize the repository with a SQLAlchemy session and a unix-seconds clock."""
        self.session = session
        self._clock = clock

    def put_message(self, item: NewMessage, message_no: int) -> Message:
        """Store ``item`` under a number previously returned by the counter.

        Args:
            item: Author and content of the message.
            message_no: Number allocated by ``MessageCounterRepository.next_message_no``.

        Returns:
            The stored message, stamped with the current time.

        Raises:
            InvalidArgument: If ``message_no`` is below 1.
            StoreError: If the number is already taken or the insert fails.
        """
        if message_no < 1:
            raise InvalidArgument("message_no must be >= 1")
        message = Message(
            message_no=message_no,
            user_id=item.user_id,
            content=item.content,
            created_at=self._clock(),
        )
        with store_call(self.session, "put_message"):
            self.session.add(
                MessageRow(
                    message_no=message.message_no,
                    user_id=message.user_id,
                    content=message.content,
                    created_at=message.created_at,
                )
            )
            self.session.commit()
        return message

    def get_messages_by_page(self, page: int, per_page: int, max_no: int) -> list[Message]:
        """Return page ``page`` of the log, newest first.

        Page 1 holds ``max_no`` down to ``max_no - per_page + 1``.
        """
        window = page_window(page, per_page, max_no)
        if window is None:
            return []
        return self._select_range(window.low, window.high, descending=True)

    def get_messages_from_last(
        self,
        last: int,
        max_no: int,
        limit: int = DEFAULT_SINCE_LIMIT,
    ) -> MessagesSince:
        """Return messages newer than ``last``, oldest first, at most ``limit`` of them."""
        window = since_window(last, max_no, limit)
        if window.is_empty:
            return MessagesSince(data=[], is_complete=window.is_complete)
        data = self._select_range(window.low, window.high, descending=False)
        return MessagesSince(data=data, is_complete=window.is_complete)

    def get_messages_from_timestamp_range(self, start: int, end: int) -> list[Message]:
        """Return messages created within ``[start, end]`` (inclusive), oldest first."""
        start, end = time_range(start, end)
        stmt = (
            select(MessageRow)
            .where(MessageRow.created_at.between(start, end))
            .order_by(MessageRow.created_at.asc(), MessageRow.message_no.asc())
        )
        with store_call(self.session, "get_messages_from_timestamp_range"):
            rows = self.session.execute(stmt).scalars().all()
        return [_to_record(row) for row in rows]

    def _select_range(self, low: int, high: int, *, descending: bool) -> list[Message]:
        order = MessageRow.message_no.desc() if descending else MessageRow.message_no.asc()
        stmt = select(MessageRow).where(MessageRow.message_no.between(low, high)).order_by(order)
        with store_call(self.session, "select_message_range"):
            rows = self.session.execute(stmt).scalars().all()
        return [_to_record(row) for row in rows]


def _to_record(row: MessageRow) -> Message:
    return Message(
        message_no=int(row.message_no),
        user_id=row.user_id,
        content=row.content,
        created_at=int(row.created_at),
    )
