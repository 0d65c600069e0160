"""Hugging Face Inference API client."""

import asyncio
import math
from typing import Optional, Any
import httpx
import structlog
from fastapi import Depends

from config import Settings, get_settings
from inference.errors import ErrorKind, InferenceError
from inference.models import (
    AttemptResult, Failure, GenerationParameters, InferencePayload, RetryAfter, Success
)

logger = structlog.get_logger()


class HuggingFaceClient:
    """Async client for a single hosted text-generation model.

    Each call to :meth:`attempt` issues exactly one request and reports the
    outcome as an :data:`AttemptResult`; retrying is left to the caller.
    """

    def __init__(self, settings: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        settings = settings or get_settings()
        self.settings = settings
        self.model_url = f"{settings.hf_api_base_url.rstrip('/')}/{settings.hf_model}"
        self.parameters = GenerationParameters(
            max_new_tokens=settings.max_new_tokens,
            temperature=settings.temperature,
            repetition_penalty=settings.repetition_penalty,
        )
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def is_configured(self) -> bool:
        """Whether an access token is available."""
        token = self.settings.huggingface_token
        return token is not None and bool(token.get_secret_value())

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client with authentication."""
        if not self.is_configured:
            raise InferenceError(ErrorKind.CONFIG_MISSING, "Hugging Face token is missing")
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={
                    "Authorization": f"Bearer {self.settings.huggingface_token.get_secret_value()}",
                    "Content-Type": "application/json",
                },
                timeout=httpx.Timeout(self.settings.hf_timeout_seconds),
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def attempt(self, prompt: str) -> AttemptResult:
        """Send one generation request for ``prompt``."""
        client = await self._get_client()
        payload = InferencePayload(inputs=prompt, parameters=self.parameters)

        try:
            response = await asyncio.wait_for(
                client.post(self.model_url, json=payload.model_dump()),
                timeout=self.settings.hf_timeout_seconds,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.warning("inference_timeout", model=self.settings.hf_model, error=str(e))
            return Failure(InferenceError(ErrorKind.TIMEOUT, "Inference request timed out"))
        except httpx.RequestError as e:
            logger.warning("inference_network_error", model=self.settings.hf_model, error=str(e))
            return Failure(InferenceError(ErrorKind.NETWORK_ERROR, str(e)))

        if response.is_success:
            try:
                return Success(response.json())
            except ValueError:
                logger.error("inference_invalid_json", status=response.status_code)
                return Failure(InferenceError(
                    ErrorKind.MALFORMED_RESPONSE, "Response body is not JSON", response.status_code
                ))

        logger.error(
            "inference_api_error",
            status=response.status_code,
            body=response.text[:200],
        )

        if response.status_code == 503:
            wait_ms = self._loading_delay_ms(response)
            if wait_ms is not None:
                logger.info("model_loading", wait_ms=wait_ms)
                return RetryAfter(
                    wait_ms,
                    InferenceError(ErrorKind.MODEL_LOADING, "Model is loading", response.status_code),
                )

        return Failure(InferenceError(
            ErrorKind.HTTP_ERROR,
            f"Inference API error: {response.status_code}",
            response.status_code,
        ))

    def _loading_delay_ms(self, response: httpx.Response) -> Optional[int]:
        """Delay hinted by a 503 ``estimated_time`` field, plus the warm-up margin."""
        try:
            body: Any = response.json()
        except ValueError:
            return None
        if not isinstance(body, dict):
            return None
        estimated = body.get("estimated_time")
        if isinstance(estimated, bool) or not isinstance(estimated, (int, float)) or estimated <= 0:
            return None
        return math.ceil(estimated * 1000) + self.settings.warmup_margin_ms


# Dependency injection helper
async def get_inference_client(settings: Settings = Depends(get_settings)):
    """FastAPI dependency for HuggingFaceClient."""
    client = HuggingFaceClient(settings)
    try:
        yield client
    finally:
        await client.close()
