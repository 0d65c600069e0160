"""Chat data models."""

from pydantic import BaseModel, StrictStr, field_validator


class ChatRequest(BaseModel):
    """Chat request from the widget."""
    message: StrictStr

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("message must not be blank")
        return value


class ChatReply(BaseModel):
    """Sanitized reply, also used for fixed failure messages."""
    reply: str


class ErrorResponse(BaseModel):
    """Client error."""
    error: str
