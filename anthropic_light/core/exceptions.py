"""
Error taxonomy raised by the Anthropic client.

Every error derives from AnthropicError, which carries a human-readable
message and, where one applies, the HTTP status code:

- ValidationError: request parameters rejected locally, nothing was sent
- AuthenticationError: 401 from the API
- RateLimitError: 429 from the API, with the retry-after hint when given
- APIError: any other non-success status, with the API error type
- NetworkError: the HTTP call itself failed before a response arrived
- StreamInterruptedError: an active stream failed while reading or decoding
"""

from typing import Optional


class AnthropicError(Exception):
    """Base error for everything raised by the client."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, status_code={self.status_code!r})"


class ValidationError(AnthropicError):
    """Request parameters failed local validation."""

    def __init__(self, message: str):
        super().__init__(message)


class AuthenticationError(AnthropicError):
    """Authentication failed (401 responses)."""

    def __init__(self, message: str = "Invalid API key"):
        super().__init__(message, status_code=401)


class RateLimitError(AnthropicError):
    """Rate limit error with retry information (429 responses)."""

    def __init__(self, message: str = "Rate limit exceeded", retry_after: Optional[int] = None):
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


class APIError(AnthropicError):
    """Any other 4xx/5xx response from the API."""

    def __init__(self, message: str, status_code: int, error_type: Optional[str] = None):
        super().__init__(message, status_code=status_code)
        self.error_type = error_type


class NetworkError(AnthropicError):
    """Transport failure before an HTTP response was obtained."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class StreamInterruptedError(AnthropicError):
    """An active stream failed after the response headers were received."""

    def __init__(self, message: str = "Stream was interrupted unexpectedly"):
        super().__init__(message)
