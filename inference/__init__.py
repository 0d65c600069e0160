"""Hosted model inference with retry."""

from .errors import ErrorKind, InferenceError
from .models import AttemptResult, Failure, RetryAfter, Success
from .client import HuggingFaceClient, get_inference_client
from .retry import RetryPolicy, call_with_retry

__all__ = [
    "ErrorKind", "InferenceError",
    "AttemptResult", "Failure", "RetryAfter", "Success",
    "HuggingFaceClient", "get_inference_client",
    "RetryPolicy", "call_with_retry",
]
