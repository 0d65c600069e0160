"""Tests for the Hugging Face client (single attempts)."""

import asyncio
import json

import httpx
import pytest

from inference import ErrorKind, Failure, HuggingFaceClient, InferenceError, RetryAfter, Success


@pytest.mark.asyncio
async def test_attempt_success_sends_prompt_and_parameters(test_settings, make_transport):
    transport = make_transport(httpx.Response(200, json=[{"generated_text": "Hello"}]))
    client = HuggingFaceClient(test_settings, transport=transport)

    result = await client.attempt("### Instruction:\nhi\n\n### Response:\n")
    await client.close()

    assert result == Success([{"generated_text": "Hello"}])
    request = transport.requests[0]
    assert request.method == "POST"
    assert str(request.url) == "https://api-inference.huggingface.co/models/epfl-llm/medalpaca-7b"
    assert request.headers["authorization"] == "Bearer hf_test_token"
    body = json.loads(request.content)
    assert body["inputs"].startswith("### Instruction:")
    assert body["parameters"] == {
        "max_new_tokens": 150,
        "temperature": 0.7,
        "repetition_penalty": 1.2,
        "return_full_text": False,
    }


@pytest.mark.asyncio
async def test_attempt_model_loading(test_settings, make_transport):
    transport = make_transport(httpx.Response(503, json={"error": "loading", "estimated_time": 5.5}))
    client = HuggingFaceClient(test_settings, transport=transport)

    result = await client.attempt("prompt")

    assert isinstance(result, RetryAfter)
    assert result.delay_ms == 5500 + 5000
    assert result.error.kind is ErrorKind.MODEL_LOADING


@pytest.mark.asyncio
async def test_attempt_503_without_estimate_is_failure(test_settings, make_transport):
    transport = make_transport(httpx.Response(503, text="Service Unavailable"))
    client = HuggingFaceClient(test_settings, transport=transport)

    result = await client.attempt("prompt")

    assert isinstance(result, Failure)
    assert result.error.kind is ErrorKind.HTTP_ERROR
    assert result.error.status_code == 503


@pytest.mark.asyncio
async def test_attempt_http_error(test_settings, make_transport):
    transport = make_transport(httpx.Response(401, json={"error": "Unauthorized"}))
    client = HuggingFaceClient(test_settings, transport=transport)

    result = await client.attempt("prompt")

    assert isinstance(result, Failure)
    assert result.error.kind is ErrorKind.HTTP_ERROR
    assert result.error.status_code == 401


@pytest.mark.asyncio
async def test_attempt_timeout(test_settings, make_transport):
    transport = make_transport(httpx.ReadTimeout("timed out"))
    client = HuggingFaceClient(test_settings, transport=transport)

    result = await client.attempt("prompt")

    assert isinstance(result, Failure)
    assert result.error.kind is ErrorKind.TIMEOUT


@pytest.mark.asyncio
async def test_attempt_total_deadline(test_settings):
    """A response that is slow overall fails even if each phase is quick."""
    async def slow_handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(1)
        return httpx.Response(200, json=[{"generated_text": "late"}])

    settings = test_settings.model_copy(update={"hf_timeout_seconds": 0.05})
    client = HuggingFaceClient(settings, transport=httpx.MockTransport(slow_handler))

    result = await client.attempt("prompt")
    await client.close()

    assert isinstance(result, Failure)
    assert result.error.kind is ErrorKind.TIMEOUT


@pytest.mark.asyncio
async def test_attempt_network_error(test_settings, make_transport):
    transport = make_transport(httpx.ConnectError("connection refused"))
    client = HuggingFaceClient(test_settings, transport=transport)

    result = await client.attempt("prompt")

    assert isinstance(result, Failure)
    assert result.error.kind is ErrorKind.NETWORK_ERROR


@pytest.mark.asyncio
async def test_attempt_non_json_success(test_settings, make_transport):
    transport = make_transport(httpx.Response(200, text="<html>oops</html>"))
    client = HuggingFaceClient(test_settings, transport=transport)

    result = await client.attempt("prompt")

    assert isinstance(result, Failure)
    assert result.error.kind is ErrorKind.MALFORMED_RESPONSE


@pytest.mark.asyncio
async def test_attempt_without_token_raises(unconfigured_settings, make_transport):
    transport = make_transport(httpx.Response(200, json=[]))
    client = HuggingFaceClient(unconfigured_settings, transport=transport)

    assert not client.is_configured
    with pytest.raises(InferenceError) as exc_info:
        await client.attempt("prompt")

    assert exc_info.value.kind is ErrorKind.CONFIG_MISSING
    assert transport.requests == []
