"""
Centralized error classification for Anthropic API responses.

This module maps non-success HTTP responses, and error events that arrive
inside a stream, onto the client's error taxonomy. A malformed or missing
error body never breaks classification; the HTTP status text is used instead.
"""

import json
from enum import Enum
from typing import Any, Mapping, Optional, Tuple, Union

from pydantic import ValidationError as PydanticValidationError
from requests.structures import CaseInsensitiveDict

from ..core.exceptions import (
    AnthropicError,
    APIError,
    AuthenticationError,
    RateLimitError,
)
from ..models.anthropic import ErrorResponse, ErrorType


class HTTPStatusCode(int, Enum):
    """HTTP status codes the API answers with."""
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    PAYLOAD_TOO_LARGE = 413
    TOO_MANY_REQUESTS = 429
    INTERNAL_SERVER_ERROR = 500
    SERVICE_UNAVAILABLE = 503
    OVERLOADED = 529


# Status implied by an error type when no HTTP status is available (stream errors)
ERROR_TYPE_STATUS = {
    ErrorType.INVALID_REQUEST_ERROR: HTTPStatusCode.BAD_REQUEST,
    ErrorType.AUTHENTICATION_ERROR: HTTPStatusCode.UNAUTHORIZED,
    ErrorType.PERMISSION_ERROR: HTTPStatusCode.FORBIDDEN,
    ErrorType.NOT_FOUND_ERROR: HTTPStatusCode.NOT_FOUND,
    ErrorType.REQUEST_TOO_LARGE: HTTPStatusCode.PAYLOAD_TOO_LARGE,
    ErrorType.RATE_LIMIT_ERROR: HTTPStatusCode.TOO_MANY_REQUESTS,
    ErrorType.API_ERROR: HTTPStatusCode.INTERNAL_SERVER_ERROR,
    ErrorType.OVERLOADED_ERROR: HTTPStatusCode.OVERLOADED,
}


class ErrorClassifier:
    """Maps error responses to the client's exception types."""

    @classmethod
    def classify(
        cls,
        status_code: int,
        body: Union[str, bytes, None] = None,
        headers: Optional[Mapping[str, str]] = None,
        reason: Optional[str] = None,
    ) -> AnthropicError:
        """
        Build the error for a non-success response.

        Args:
            status_code: HTTP status code of the response
            body: Raw response body, expected to be an Anthropic error JSON
            headers: Response headers, consulted for retry-after
            reason: HTTP status text, used when the body is unusable

        Returns:
            The AnthropicError subclass matching the status code
        """
        message, error_type = cls._extract_error_fields(body)
        if message is None:
            message = reason or None

        if status_code == HTTPStatusCode.UNAUTHORIZED:
            return AuthenticationError(message) if message else AuthenticationError()

        if status_code == HTTPStatusCode.TOO_MANY_REQUESTS:
            retry_after = cls._parse_retry_after(headers)
            if message:
                return RateLimitError(message, retry_after=retry_after)
            return RateLimitError(retry_after=retry_after)

        return APIError(
            message or f"API error ({status_code})",
            status_code=status_code,
            error_type=error_type,
        )

    @classmethod
    def classify_stream_error(cls, data: str) -> AnthropicError:
        """Build the error for an ``event: error`` record inside a stream."""
        _, error_type = cls._extract_error_fields(data)
        try:
            status = ERROR_TYPE_STATUS[ErrorType(error_type)]
        except ValueError:
            status = HTTPStatusCode.INTERNAL_SERVER_ERROR
        return cls.classify(int(status), data, reason="Stream error")

    @classmethod
    def _extract_error_fields(cls, body: Union[str, bytes, None]) -> Tuple[Optional[str], Optional[str]]:
        """Pull error.message and error.type out of a JSON error body."""
        if not body:
            return None, None
        try:
            payload: Any = json.loads(body)
        except (TypeError, ValueError):
            return None, None
        if not isinstance(payload, dict) or not isinstance(payload.get("error"), dict):
            return None, None

        try:
            detail = ErrorResponse.model_validate({"error": payload["error"]}).error
        except PydanticValidationError:
            return None, None
        return detail.message or None, detail.type or None

    @staticmethod
    def _parse_retry_after(headers: Optional[Mapping[str, str]]) -> Optional[int]:
        """Parse the retry-after header as whole seconds."""
        if not headers:
            return None
        value = CaseInsensitiveDict(headers).get("retry-after")
        if value is None:
            return None
        try:
            return int(str(value).strip())
        except ValueError:
            return None


# Utility functions for common error scenarios

def classify_error(
    status_code: int,
    body: Union[str, bytes, None] = None,
    headers: Optional[Mapping[str, str]] = None,
    reason: Optional[str] = None,
) -> AnthropicError:
    """Classify an error response. See ErrorClassifier.classify."""
    return ErrorClassifier.classify(status_code, body, headers=headers, reason=reason)


def raise_for_response(response) -> None:
    """
    Raise the classified error for a non-success ``requests.Response``.

    The body is read exactly once here; the caller remains responsible for
    closing the response.
    """
    raise ErrorClassifier.classify(
        response.status_code,
        response.content,
        headers=response.headers,
        reason=response.reason,
    )
