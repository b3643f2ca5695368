"""
anthropic-sdk-light: a lightweight client for the Anthropic Messages API.

    from anthropic_light import Anthropic

    client = Anthropic()
    message = client.messages.create(
        model="claude-3-5-haiku-20241022",
        max_tokens=256,
        messages=[{"role": "user", "content": "Hello"}],
    )

    with client.messages.create(..., stream=True) as stream:
        for text in stream.text_stream():
            print(text, end="")
"""

from loguru import logger

from .core.client import Anthropic, Messages, close_client, get_client
from .core.config import ClientConfig, ClientSettings, configure_logging
from .core.exceptions import (
    AnthropicError,
    APIError,
    AuthenticationError,
    NetworkError,
    RateLimitError,
    StreamInterruptedError,
    ValidationError,
)
from .models import (
    ContentBlock,
    Message,
    MessageCreateParams,
    MessageParam,
    StreamEvent,
)
from .utils.error_handling import classify_error
from .utils.streaming import MessageStream, SSEParser, SSERecord

# Library default: silent until configure_logging() is called
logger.disable("anthropic_light")

__version__ = "0.1.0"

__all__ = [
    # Client
    "Anthropic",
    "Messages",
    "MessageStream",
    "get_client",
    "close_client",
    # Configuration
    "ClientConfig",
    "ClientSettings",
    "configure_logging",
    # Errors
    "AnthropicError",
    "APIError",
    "AuthenticationError",
    "NetworkError",
    "RateLimitError",
    "StreamInterruptedError",
    "ValidationError",
    "classify_error",
    # Models
    "ContentBlock",
    "Message",
    "MessageCreateParams",
    "MessageParam",
    "StreamEvent",
    # Streaming internals
    "SSEParser",
    "SSERecord",
]
