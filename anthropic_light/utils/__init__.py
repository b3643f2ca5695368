"""
Utility modules for anthropic-sdk-light.

This package contains the SSE streaming pipeline, error classification and
logging helpers used by the client.
"""

from .error_handling import (
    ErrorClassifier,
    HTTPStatusCode,
    classify_error,
    raise_for_response,
)
from .streaming import (
    MessageStream,
    SSEParser,
    SSERecord,
    decode_event,
    decode_events,
)

__all__ = [
    "SSEParser",
    "SSERecord",
    "MessageStream",
    "decode_event",
    "decode_events",
    "ErrorClassifier",
    "HTTPStatusCode",
    "classify_error",
    "raise_for_response",
]
