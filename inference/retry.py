"""Retry loop around single inference attempts."""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional
import structlog

from config import Settings
from inference.errors import ErrorKind, InferenceError
from inference.models import AttemptResult, Failure, RetryAfter, Success

logger = structlog.get_logger()

MAX_RETRIES = 3
INITIAL_DELAY_MS = 2000

Sleep = Callable[[float], Awaitable[Any]]


@dataclass(frozen=True)
class RetryPolicy:
    """Attempt ceiling and backoff base for one inbound request."""
    max_retries: int = MAX_RETRIES
    initial_delay_ms: int = INITIAL_DELAY_MS

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryPolicy":
        return cls(max_retries=settings.max_retries, initial_delay_ms=settings.initial_delay_ms)

    def backoff_ms(self, attempts: int) -> int:
        """Exponential delay after ``attempts`` failed attempts."""
        return self.initial_delay_ms * 2 ** attempts


async def call_with_retry(
    attempt: Callable[[], Awaitable[AttemptResult]],
    policy: RetryPolicy = RetryPolicy(),
    sleep: Sleep = asyncio.sleep,
) -> Any:
    """Run ``attempt`` until it succeeds or the attempt ceiling is reached.

    A ``RetryAfter`` result waits for its hinted delay; a ``Failure`` waits
    for an exponentially growing delay. Both count toward the ceiling. When
    the ceiling is reached the last error is raised.
    """
    attempts = 0
    last_error: Optional[InferenceError] = None

    while attempts < policy.max_retries:
        result = await attempt()

        if isinstance(result, Success):
            return result.data
        if not isinstance(result, (RetryAfter, Failure)):
            raise TypeError(f"Unexpected attempt result: {result!r}")

        attempts += 1
        last_error = result.error
        if attempts >= policy.max_retries:
            break

        if isinstance(result, RetryAfter):
            delay_ms = result.delay_ms
            logger.info("inference_warmup_wait", attempt=attempts, delay_ms=delay_ms)
        else:
            delay_ms = policy.backoff_ms(attempts)
            logger.warning(
                "inference_retry_scheduled",
                attempt=attempts,
                delay_ms=delay_ms,
                kind=result.error.kind.value,
            )

        await sleep(delay_ms / 1000)

    if last_error is None:
        last_error = InferenceError(ErrorKind.NETWORK_ERROR, "No attempts were made")
    logger.error(
        "inference_failed",
        attempts=attempts,
        kind=last_error.kind.value,
        status=last_error.status_code,
    )
    raise last_error
