"""Use cases behind the message endpoints."""
from __future__ import annotations

import logging

from chatlog.core.errors import StoreError
from chatlog.records import Message, MessagesSince, NewMessage, RangeWithMessages
from chatlog.repositories.message_counter_repo import MessageCounterRepository
from chatlog.repositories.message_range_repo import MessageRangeRepository
from chatlog.repositories.message_repo import MessageRepository
from chatlog.services.paging import (
    DEFAULT_SINCE_LIMIT,
    validate_page_request,
    validate_since_request,
)

logger = logging.getLogger(__name__)


def post_message(
    *,
    counter: MessageCounterRepository,
    messages: MessageRepository,
    user_id: str,
    content: str,
) -> Message:
    """Allocate the next message number and store the message under it.

    Args:
        counter: Repository that allocates message numbers.
        messages: Repository the message is written to.
        user_id: Session id of the author.
        content: Message text, 1 to 2048 characters.

    Returns:
        The stored message.

    Raises:
        InvalidArgument: If the author or content is invalid; nothing is written.
        StoreError: If either step fails.

    Notes:
        Allocation and insert are separate commits. A failure between them
        leaves the allocated number permanently unused, never duplicated.
    """
    item = NewMessage(user_id=user_id, content=content)
    try:
        message_no = counter.next_message_no()
    except StoreError:
        logger.error("Failed to allocate a message number")
        raise
    try:
        message = messages.put_message(item, message_no)
    except StoreError:
        logger.error("Failed to put message %d; the number is left unused", message_no)
        raise
    logger.debug("Stored message %d from %s", message_no, user_id)
    return message


def get_message_page(
    *,
    counter: MessageCounterRepository,
    messages: MessageRepository,
    page: int,
    per_page: int,
) -> list[Message]:
    """Return one page of messages, newest first, bounded by the current counter."""
    validate_page_request(page, per_page)
    try:
        max_no = counter.get_current()
    except StoreError:
        logger.error("Failed to get current message count")
        raise
    return messages.get_messages_by_page(page, per_page, max_no)


def get_messages_since(
    *,
    counter: MessageCounterRepository,
    messages: MessageRepository,
    last_number: int,
    limit: int = DEFAULT_SINCE_LIMIT,
) -> MessagesSince:
    """Return messages newer than ``last_number``, oldest first."""
    validate_since_request(last_number, limit)
    try:
        max_no = counter.get_current()
    except StoreError:
        logger.error("Failed to get current message count")
        raise
    return messages.get_messages_from_last(last_number, max_no, limit)


def get_range_summaries(
    *,
    ranges: MessageRangeRepository,
    messages: MessageRepository,
) -> list[RangeWithMessages]:
    """Return every stored usage summary with the messages of its window."""
    result: list[RangeWithMessages] = []
    for summary in ranges.get_all_ranges():
        window_messages = messages.get_messages_from_timestamp_range(summary.start, summary.end)
        result.append(RangeWithMessages(range=summary, messages=window_messages))
    return result


def get_current_count(*, counter: MessageCounterRepository) -> int:
    """Return the highest allocated message number."""
    return counter.get_current()
