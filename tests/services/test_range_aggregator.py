"""Tests for the usage range aggregator."""

from collections.abc import Callable

import pytest

from chatlog.core.errors import InvalidArgument
from chatlog.records import NewMessage
from chatlog.repositories import MessageRangeRepository, MessageRepository
from chatlog.services.range_aggregator import RangeAggregator, range_record_id


def test_record_id_uses_utc_hour_of_start() -> None:
    # 2024-01-15 12:34:56 UTC
    assert range_record_id(1_705_322_096) == "hourly-2024-01-15T12"


def test_run_counts_messages_and_distinct_users(
    message_repo: MessageRepository,
    range_repo: MessageRangeRepository,
    seed_messages: Callable[[int], list[int]],
    clock,
) -> None:  # type: ignore[no-untyped-def]
    seed_messages(5)  # u1, u2, u1, u2, u1
    aggregator = RangeAggregator(message_repo, range_repo, clock=clock, ttl_seconds=600)

    summary = aggregator.run(lookback_seconds=3600)

    assert summary.message_count == 5
    assert summary.user_count == 2
    assert summary.end == clock.now
    assert summary.start == clock.now - 3600
    assert summary.created_at == clock.now
    assert summary.expires_at == clock.now + 600
    assert summary.record_id == range_record_id(summary.start)
    assert range_repo.get_range(summary.record_id) == summary


def test_run_matches_timestamp_range_query(
    message_repo: MessageRepository,
    range_repo: MessageRangeRepository,
    clock,
) -> None:  # type: ignore[no-untyped-def]
    """The stored count equals what a range query over the same window returns."""
    message_repo.put_message(NewMessage(user_id="old", content="outside"), 1)
    clock.advance(100)
    message_repo.put_message(NewMessage(user_id="a", content="edge"), 2)
    clock.advance(30)
    message_repo.put_message(NewMessage(user_id="a", content="inside"), 3)
    clock.advance(20)

    summary = RangeAggregator(message_repo, range_repo, clock=clock).run(lookback_seconds=50)

    window = message_repo.get_messages_from_timestamp_range(summary.start, summary.end)
    assert summary.message_count == len(window) == 2
    assert summary.user_count == 1


def test_run_on_empty_window(
    message_repo: MessageRepository, range_repo: MessageRangeRepository, clock
) -> None:  # type: ignore[no-untyped-def]
    summary = RangeAggregator(message_repo, range_repo, clock=clock).run(lookback_seconds=60)
    assert summary.message_count == 0
    assert summary.user_count == 0


def test_rerun_in_same_hour_overwrites(
    message_repo: MessageRepository,
    range_repo: MessageRangeRepository,
    seed_messages: Callable[[int], list[int]],
    clock,
) -> None:  # type: ignore[no-untyped-def]
    clock.now = 1_705_320_000  # 2024-01-15 12:00:00 UTC
    aggregator = RangeAggregator(message_repo, range_repo, clock=clock)
    first = aggregator.run(lookback_seconds=0)
    seed_messages(2)
    second = aggregator.run(lookback_seconds=2)

    assert first.record_id == second.record_id
    assert second.message_count == 2
    assert len(range_repo.get_all_ranges(now=0)) == 1


def test_negative_lookback_rejected(
    message_repo: MessageRepository, range_repo: MessageRangeRepository
) -> None:
    with pytest.raises(InvalidArgument):
        RangeAggregator(message_repo, range_repo).run(lookback_seconds=-1)


def test_lookback_before_epoch_rejected_without_store_calls(mocker, clock) -> None:  # type: ignore[no-untyped-def]
    messages = mocker.MagicMock(spec=MessageRepository)
    ranges = mocker.MagicMock(spec=MessageRangeRepository)
    aggregator = RangeAggregator(messages, ranges, clock=clock)

    with pytest.raises(InvalidArgument):
        aggregator.run(lookback_seconds=clock.now + 1)

    messages.get_messages_from_timestamp_range.assert_not_called()
    ranges.save_range.assert_not_called()
