"""
Models package for anthropic-sdk-light.

This package contains the Pydantic models for request parameters, responses,
streaming events and error bodies of the Anthropic Messages API.
"""

from .anthropic import (  # Request models; Response models; Streaming models; Error models; Enums
    AnyStreamEvent,
    ContentBlock,
    ContentBlockDeltaEvent,
    ContentBlockStartEvent,
    ContentBlockStopEvent,
    ContentType,
    DeltaUsage,
    ErrorDetail,
    ErrorResponse,
    ErrorType,
    Message,
    MessageCreateParams,
    MessageDelta,
    MessageDeltaEvent,
    MessageParam,
    MessageRole,
    MessageStartEvent,
    MessageStopEvent,
    PingEvent,
    StopReason,
    StreamEvent,
    TextDelta,
    Usage,
    stream_event_adapter,
)

__all__ = [
    # Request models
    "MessageCreateParams",
    "MessageParam",
    "ContentBlock",
    # Response models
    "Message",
    "Usage",
    # Streaming models
    "StreamEvent",
    "AnyStreamEvent",
    "MessageStartEvent",
    "ContentBlockStartEvent",
    "ContentBlockDeltaEvent",
    "ContentBlockStopEvent",
    "MessageDeltaEvent",
    "MessageStopEvent",
    "PingEvent",
    "TextDelta",
    "MessageDelta",
    "DeltaUsage",
    "stream_event_adapter",
    # Error models
    "ErrorDetail",
    "ErrorResponse",
    # Enums
    "ContentType",
    "MessageRole",
    "StopReason",
    "ErrorType",
]
