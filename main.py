"""MediGuide Chat Proxy - Main Application."""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

from config import get_settings
from chat import router as chat_router
from chat.routes import http_error_handler

logger = structlog.get_logger()
settings = get_settings()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST",
    "Access-Control-Allow-Headers": "Content-Type",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    logger.info(
        "starting_mediguide_chat_proxy",
        environment=settings.environment,
        model=settings.hf_model,
        token_configured=settings.huggingface_token is not None,
    )
    yield
    logger.info("shutting_down_mediguide_chat_proxy")


app = FastAPI(
    title="MediGuide Chat Proxy",
    version="1.0.0",
    description="Proxy between the MediGuide chat widget and a hosted medical language model",
    lifespan=lifespan,
)

app.add_exception_handler(StarletteHTTPException, http_error_handler)


# CORS headers on every response, pre-flight included
@app.middleware("http")
async def add_cors_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


# Include routers
app.include_router(chat_router, prefix="/api/chat", tags=["Chat"])


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "service": "mediguide-chat-proxy"}


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "MediGuide Chat Proxy",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True  # Auto-reload on code changes (dev mode)
    )
