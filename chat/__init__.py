"""Medical assistant chat feature."""

from .models import ChatRequest, ChatReply, ErrorResponse
from .service import ChatService
from .routes import router

__all__ = ["ChatRequest", "ChatReply", "ErrorResponse", "ChatService", "router"]
