"""Chat service: prompt the hosted model and shape its reply."""

import asyncio
from typing import Any, Optional
import structlog

from config import Settings, get_settings
from inference import (
    ErrorKind, HuggingFaceClient, InferenceError, RetryPolicy, call_with_retry
)
from inference.retry import Sleep
from safety import sanitize

logger = structlog.get_logger()

PROMPT_TEMPLATE = "### Instruction:\n{message}\n\n### Response:\n"
RESPONSE_MARKER = "### Response:"
FALLBACK_TEXT = "I couldn't process that request."


def format_prompt(message: str) -> str:
    """Wrap a user message in the instruction template the model was tuned on."""
    return PROMPT_TEMPLATE.format(message=message)


def extract_generated_text(data: Any) -> str:
    """Pull the generated text out of a successful inference body.

    Raises:
        InferenceError: If the body is not a non-empty list
    """
    if not isinstance(data, list) or not data:
        raise InferenceError(ErrorKind.MALFORMED_RESPONSE, "Invalid response format from inference API")

    first = data[0]
    text = first.get("generated_text") if isinstance(first, dict) else None
    if not isinstance(text, str) or not text:
        text = FALLBACK_TEXT

    if RESPONSE_MARKER in text:
        text = text.split(RESPONSE_MARKER)[1].strip()
    return text


class ChatService:
    """Turns one user message into one sanitized reply."""

    def __init__(
        self,
        client: HuggingFaceClient,
        settings: Optional[Settings] = None,
        sleep: Optional[Sleep] = None,
    ):
        self.client = client
        self.settings = settings or get_settings()
        self.policy = RetryPolicy.from_settings(self.settings)
        self._sleep = sleep or asyncio.sleep

    async def reply(self, message: str) -> str:
        """Generate a sanitized reply to ``message``.

        Raises:
            InferenceError: If the token is missing, retries are exhausted,
                or the model returns an unusable body
        """
        if not self.client.is_configured:
            logger.error("huggingface_token_missing")
            raise InferenceError(ErrorKind.CONFIG_MISSING, "Hugging Face token is missing")

        prompt = format_prompt(message)
        logger.info("sending_prompt", model=self.settings.hf_model, prompt_length=len(prompt))

        data = await call_with_retry(lambda: self.client.attempt(prompt), self.policy, self._sleep)

        return sanitize(extract_generated_text(data))
