# src/chatlog/schemas/message.py
"""Message-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field

from chatlog.records import MAX_CONTENT_LENGTH


class MessageCreate(BaseModel):
    """Schema for posting a new message."""

    contents: str = Field(
        ...,
        min_length=1,
        max_length=MAX_CONTENT_LENGTH,
        description="Message text",
    )


class MessageResponse(BaseModel):
    """Schema for a stored message returned by the API."""

    message_no: int = Field(..., serialization_alias="MessageNo")
    user_id: str = Field(..., serialization_alias="UserId")
    content: str = Field(..., serialization_alias="Content")
    created_at: int = Field(..., serialization_alias="CreatedAt")

    model_config = ConfigDict(from_attributes=True)


class MessagesSinceResponse(BaseModel):
    """Schema for a catch-up fetch.

    ``is_get_all`` is False when more messages remain after the returned batch.
    """

    data: list[MessageResponse]
    is_get_all: bool = Field(..., serialization_alias="isGetAll")


class MessagePostResponse(BaseModel):
    """Schema acknowledging a stored message."""

    message: str = "Message posted successfully"
    message_no: int = Field(..., serialization_alias="messageNo")
