"""Inference request payloads and attempt results."""

from dataclasses import dataclass
from typing import Any, Union
from pydantic import BaseModel, Field

from inference.errors import InferenceError


class GenerationParameters(BaseModel):
    """Text generation parameters sent with every prompt."""
    max_new_tokens: int = Field(150, gt=0)
    temperature: float = Field(0.7, ge=0)
    repetition_penalty: float = Field(1.2, gt=0)
    return_full_text: bool = False


class InferencePayload(BaseModel):
    """Body of an outbound call to the inference endpoint."""
    inputs: str
    parameters: GenerationParameters = Field(default_factory=GenerationParameters)


@dataclass(frozen=True)
class Success:
    """The endpoint answered with a decoded JSON body."""
    data: Any


@dataclass(frozen=True)
class RetryAfter:
    """The model is loading; try again after ``delay_ms``."""
    delay_ms: int
    error: InferenceError


@dataclass(frozen=True)
class Failure:
    """The attempt failed and should be retried with backoff."""
    error: InferenceError


AttemptResult = Union[Success, RetryAfter, Failure]
