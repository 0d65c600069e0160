"""Inference error kinds."""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Why a call to the inference endpoint failed."""
    TIMEOUT = "timeout"
    HTTP_ERROR = "http_error"
    NETWORK_ERROR = "network_error"
    MALFORMED_RESPONSE = "malformed_response"
    MODEL_LOADING = "model_loading"
    CONFIG_MISSING = "config_missing"


class InferenceError(Exception):
    """Raised when the inference endpoint cannot produce a usable result."""

    def __init__(self, kind: ErrorKind, message: str = "", status_code: Optional[int] = None):
        super().__init__(message or kind.value)
        self.kind = kind
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"InferenceError(kind={self.kind.value!r}, status_code={self.status_code!r})"
