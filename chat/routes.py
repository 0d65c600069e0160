"""Chat API routes."""

from fastapi import APIRouter, Depends, Request, Response
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

from config import Settings, get_settings
from chat.models import ChatRequest, ChatReply, ErrorResponse
from chat.service import ChatService
from inference import ErrorKind, HuggingFaceClient, InferenceError, get_inference_client

logger = structlog.get_logger()

router = APIRouter()

INVALID_MESSAGE = "Invalid message format"
METHOD_NOT_ALLOWED = "Method not allowed"
CONFIG_ERROR_REPLY = "⚠️ Server configuration error. Please contact support."
TIMEOUT_REPLY = (
    "⚠️ Our medical assistant is taking longer than usual to respond. "
    "Please try again in a moment."
)
UNAVAILABLE_REPLY = "⚠️ Our medical assistant is currently unavailable. Please try again later."


def get_chat_service(
    client: HuggingFaceClient = Depends(get_inference_client),
    settings: Settings = Depends(get_settings),
) -> ChatService:
    """FastAPI dependency for ChatService."""
    return ChatService(client, settings)


def _reply(status_code: int, text: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ChatReply(reply=text).model_dump())


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@router.options("")
async def preflight():
    """CORS pre-flight."""
    return Response(status_code=200)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Answer any disallowed method with the chat error body; defer everything else."""
    if exc.status_code == 405:
        response = _error(405, METHOD_NOT_ALLOWED)
        response.headers.update(exc.headers or {})
        return response
    return await http_exception_handler(request, exc)


@router.post("", response_model=ChatReply, responses={400: {"model": ErrorResponse}})
async def chat(request: Request, service: ChatService = Depends(get_chat_service)):
    """Send a message to the medical assistant and get a sanitized reply.

    Failures are reported with fixed, user-facing ``reply`` strings:
    500 for a missing token or an unavailable model, 504 when the model
    kept timing out.
    """
    try:
        chat_request = ChatRequest.model_validate(await request.json())
    except ValueError:
        logger.info("chat_invalid_message")
        return _error(400, INVALID_MESSAGE)

    try:
        reply = await service.reply(chat_request.message)
    except InferenceError as e:
        logger.error("chat_failed", kind=e.kind.value, status=e.status_code, error=str(e))
        if e.kind is ErrorKind.CONFIG_MISSING:
            return _reply(500, CONFIG_ERROR_REPLY)
        if e.kind is ErrorKind.TIMEOUT:
            return _reply(504, TIMEOUT_REPLY)
        return _reply(500, UNAVAILABLE_REPLY)
    except Exception as e:
        logger.exception("chat_unexpected_error", error=str(e))
        return _reply(500, UNAVAILABLE_REPLY)

    logger.info("chat_completed", message_length=len(chat_request.message), reply_length=len(reply))
    return ChatReply(reply=reply)
