"""Pytest configuration and fixtures."""

import pytest
import httpx
from httpx import AsyncClient, ASGITransport
from unittest.mock import AsyncMock, MagicMock

from main import app
from config import Settings
from chat.routes import get_chat_service
from chat.service import ChatService
from inference import HuggingFaceClient


class SleepRecorder:
    """Stand-in for asyncio.sleep that records requested delays."""

    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
async def async_client():
    """Async HTTP client for testing API endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def test_settings():
    """Settings with a dummy token and no .env lookup."""
    return Settings(_env_file=None, huggingface_token="hf_test_token")


@pytest.fixture
def unconfigured_settings():
    """Settings without a Hugging Face token."""
    return Settings(_env_file=None, huggingface_token=None)


@pytest.fixture
def sleep_recorder():
    return SleepRecorder()


@pytest.fixture
def mock_inference_client():
    """Mock HuggingFaceClient for testing."""
    client = MagicMock(spec=HuggingFaceClient)
    client.is_configured = True
    client.attempt = AsyncMock()
    client.close = AsyncMock()
    return client


@pytest.fixture
def override_chat_service():
    """Install a ChatService override for the chat route; cleared afterwards."""

    def install(service: ChatService) -> ChatService:
        app.dependency_overrides[get_chat_service] = lambda: service
        return service

    yield install
    app.dependency_overrides.pop(get_chat_service, None)


@pytest.fixture
def chat_service(mock_inference_client, test_settings, sleep_recorder, override_chat_service):
    """ChatService backed by the mock client, installed on the app."""
    return override_chat_service(
        ChatService(mock_inference_client, test_settings, sleep=sleep_recorder)
    )


@pytest.fixture
def make_transport():
    """Factory for a MockTransport that replays responses in order.

    Items may be httpx.Response objects or exceptions to raise; the last
    item repeats once the others are used up. Sent requests are collected
    on ``transport.requests``.
    """

    def factory(*responses):
        queue = list(responses)
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            item = queue.pop(0) if len(queue) > 1 else queue[0]
            if isinstance(item, Exception):
                raise item
            return httpx.Response(item.status_code, headers=item.headers, content=item.content)

        transport = httpx.MockTransport(handler)
        transport.requests = requests
        return transport

    return factory
