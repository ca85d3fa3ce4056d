# src/chatlog/api/v1/endpoints/messages.py
"""Message log endpoints for the chatlog API."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from chatlog.api.dependencies import ChatSessionDep, CounterRepoDep, MessageRepoDep
from chatlog.core.errors import InvalidArgument
from chatlog.core.settings import settings
from chatlog.schemas.message import (
    MessageCreate,
    MessagePostResponse,
    MessageResponse,
    MessagesSinceResponse,
)
from chatlog.services import message_service

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get("", response_model=list[MessageResponse])
async def list_messages(
    _session: ChatSessionDep,
    counter: CounterRepoDep,
    messages: MessageRepoDep,
    page: int = Query(1, description="Page number, 1 is the newest page"),
    per_page: int = Query(
        settings.default_per_page,
        alias="perPage",
        le=settings.max_per_page,
        description="Messages per page",
    ),
) -> list[MessageResponse]:
    """Return one page of messages, newest first."""
    records = message_service.get_message_page(
        counter=counter,
        messages=messages,
        page=page,
        per_page=per_page,
    )
    return [MessageResponse.model_validate(record) for record in records]


@router.get("/latest", response_model=MessagesSinceResponse)
async def list_latest_messages(
    _session: ChatSessionDep,
    counter: CounterRepoDep,
    messages: MessageRepoDep,
    last_number: int | None = Query(
        None,
        alias="lastNumber",
        description="Highest message number the client already has",
    ),
) -> MessagesSinceResponse:
    """Return messages newer than ``lastNumber``, oldest first.

    ``isGetAll`` is False when the batch was cut at the fetch limit and the
    client should poll again from the highest number it received.
    """
    if last_number is None:
        raise InvalidArgument("lastNumber is required")
    result = message_service.get_messages_since(
        counter=counter,
        messages=messages,
        last_number=last_number,
        limit=settings.fetch_since_limit,
    )
    return MessagesSinceResponse(
        data=[MessageResponse.model_validate(record) for record in result.data],
        is_get_all=result.is_complete,
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=MessagePostResponse)
async def post_message(
    payload: MessageCreate,
    session: ChatSessionDep,
    counter: CounterRepoDep,
    messages: MessageRepoDep,
) -> MessagePostResponse:
    """Append a message authored by the caller's session."""
    message = message_service.post_message(
        counter=counter,
        messages=messages,
        user_id=session.session_id,
        content=payload.contents,
    )
    return MessagePostResponse(message_no=message.message_no)
