# src/chatlog/api/v1/endpoints/message_counter.py
"""Usage summary and counter endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from chatlog.api.dependencies import ChatSessionDep, CounterRepoDep, MessageRepoDep, RangeRepoDep
from chatlog.schemas.message_range import CounterResponse, RangeWithMessagesResponse
from chatlog.services import message_service

router = APIRouter(prefix="/message-counter", tags=["message-counter"])


@router.get("", response_model=list[RangeWithMessagesResponse])
async def list_message_ranges(
    _session: ChatSessionDep,
    ranges: RangeRepoDep,
    messages: MessageRepoDep,
) -> list[RangeWithMessagesResponse]:
    """Return stored usage summaries, each with the messages of its window."""
    records = message_service.get_range_summaries(ranges=ranges, messages=messages)
    return [RangeWithMessagesResponse.model_validate(record) for record in records]


@router.get("/current", response_model=CounterResponse)
async def get_current_counter(
    _session: ChatSessionDep,
    counter: CounterRepoDep,
) -> CounterResponse:
    """Return the highest allocated message number."""
    return CounterResponse(count=message_service.get_current_count(counter=counter))
