# src/chatlog/schemas/message_range.py
"""Schemas for aggregated usage ranges."""

from pydantic import BaseModel, ConfigDict, Field

from .message import MessageResponse


class MessageRangeResponse(BaseModel):
    """Schema for one usage summary."""

    record_id: str = Field(..., serialization_alias="RecordId")
    start: int = Field(..., serialization_alias="Start")
    end: int = Field(..., serialization_alias="End")
    message_count: int = Field(..., serialization_alias="MessageCount")
    user_count: int = Field(..., serialization_alias="UserCount")
    created_at: int = Field(..., serialization_alias="CreatedAt")
    expires_at: int = Field(..., serialization_alias="ExpirationDate")

    model_config = ConfigDict(from_attributes=True)


class RangeWithMessagesResponse(BaseModel):
    """Schema pairing a summary with the messages of its window."""

    range: MessageRangeResponse
    messages: list[MessageResponse]

    model_config = ConfigDict(from_attributes=True)


class CounterResponse(BaseModel):
    """Schema for the current message counter value."""

    count: int = Field(..., ge=0)
