"""
Pydantic models for the Anthropic Messages API wire format.

This module contains the request parameters sent to /v1/messages, the
non-streaming Message response, the closed set of streaming events and the
error body returned by the API.
"""

from typing import Annotated, List, Literal, Optional, Union
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class ContentType(str, Enum):
    """Content block types supported by the client."""
    TEXT = "text"


class MessageRole(str, Enum):
    """Message roles in conversations."""
    USER = "user"
    ASSISTANT = "assistant"


class StopReason(str, Enum):
    """Possible reasons for stopping generation."""
    END_TURN = "end_turn"
    MAX_TOKENS = "max_tokens"
    STOP_SEQUENCE = "stop_sequence"


class ContentBlock(BaseModel):
    """A single unit of content, addressed by its position in a message."""
    model_config = ConfigDict(frozen=True)

    type: ContentType = Field(ContentType.TEXT, description="Type of content block")
    text: str = Field(..., description="Text content")


class MessageParam(BaseModel):
    """A message in the conversation sent to the API."""
    role: MessageRole = Field(..., description="Role of the message sender")
    content: Union[str, List[ContentBlock]] = Field(..., description="Message content")


class Usage(BaseModel):
    """Token usage information."""
    model_config = ConfigDict(frozen=True)

    input_tokens: int = Field(0, ge=0, description="Number of input tokens")
    output_tokens: int = Field(0, ge=0, description="Number of output tokens")

    @property
    def total_tokens(self) -> int:
        """Calculate total tokens used."""
        return self.input_tokens + self.output_tokens


class MessageCreateParams(BaseModel):
    """Request body for POST /v1/messages.

    Fields not declared here (``metadata``, newer API options) are passed
    through to the request body unchanged.
    """
    model_config = ConfigDict(extra="allow")

    model: str = Field(..., min_length=1, description="Model identifier")
    max_tokens: int = Field(..., gt=0, description="Maximum tokens to generate")
    messages: List[MessageParam] = Field(..., min_length=1, description="Conversation so far")
    system: Optional[str] = Field(None, description="System prompt")
    stream: Optional[bool] = Field(None, description="Whether to stream the response")
    temperature: Optional[float] = Field(None, ge=0.0, le=1.0, description="Sampling temperature")
    top_p: Optional[float] = Field(None, ge=0.0, le=1.0, description="Nucleus sampling parameter")
    top_k: Optional[int] = Field(None, ge=1, description="Top-k sampling parameter")
    stop_sequences: Optional[List[str]] = Field(None, description="Stop sequences")

    @field_validator("stop_sequences")
    @classmethod
    def validate_stop_sequences(cls, v):
        """Validate stop sequences."""
        if v is not None:
            for seq in v:
                if not seq or len(seq.strip()) == 0:
                    raise ValueError("Stop sequences cannot be empty or whitespace-only")
        return v

    def to_request_body(self) -> dict:
        """JSON body for the HTTP request, leaving out unset options."""
        return self.model_dump(mode="json", exclude_none=True)


class Message(BaseModel):
    """Response of a non-streaming /v1/messages call."""
    model_config = ConfigDict(frozen=True, extra="allow")

    id: str = Field(..., description="Unique message identifier")
    type: Literal["message"] = Field("message", description="Response type")
    role: Literal["assistant"] = Field("assistant", description="Role of the response")
    content: List[ContentBlock] = Field(default_factory=list, description="Response content blocks")
    model: str = Field(..., description="Model that generated the response")
    stop_reason: Optional[StopReason] = Field(None, description="Reason for stopping generation")
    stop_sequence: Optional[str] = Field(None, description="Stop sequence that triggered stopping")
    usage: Usage = Field(default_factory=Usage, description="Token usage information")

    @property
    def text(self) -> str:
        """Concatenated text of all content blocks."""
        return "".join(block.text for block in self.content)


class TextDelta(BaseModel):
    """Incremental text appended to a content block."""
    model_config = ConfigDict(frozen=True)

    type: Literal["text_delta"] = "text_delta"
    text: str


class MessageDelta(BaseModel):
    """Message-level fields that become known at the end of generation."""
    model_config = ConfigDict(frozen=True)

    stop_reason: Optional[StopReason] = None
    stop_sequence: Optional[str] = None


class DeltaUsage(BaseModel):
    """Cumulative output token count reported by message_delta."""
    model_config = ConfigDict(frozen=True)

    output_tokens: int = Field(0, ge=0)


class StreamEvent(BaseModel):
    """Base class for streaming events."""
    model_config = ConfigDict(frozen=True)

    type: str = Field(..., description="Event type")


class MessageStartEvent(StreamEvent):
    """Event sent at the start of a streaming response."""
    type: Literal["message_start"] = "message_start"
    message: Message = Field(..., description="Initial message data")


class ContentBlockStartEvent(StreamEvent):
    """Event sent when a content block starts."""
    type: Literal["content_block_start"] = "content_block_start"
    index: int = Field(..., ge=0, description="Index of the content block")
    content_block: ContentBlock = Field(..., description="Content block data")


class ContentBlockDeltaEvent(StreamEvent):
    """Event sent for incremental content updates."""
    type: Literal["content_block_delta"] = "content_block_delta"
    index: int = Field(..., ge=0, description="Index of the content block")
    delta: TextDelta = Field(..., description="Incremental content update")


class ContentBlockStopEvent(StreamEvent):
    """Event sent when a content block ends."""
    type: Literal["content_block_stop"] = "content_block_stop"
    index: int = Field(..., ge=0, description="Index of the content block")


class MessageDeltaEvent(StreamEvent):
    """Event sent for message-level updates."""
    type: Literal["message_delta"] = "message_delta"
    delta: MessageDelta = Field(..., description="Message-level updates")
    usage: DeltaUsage = Field(default_factory=DeltaUsage, description="Updated usage information")


class MessageStopEvent(StreamEvent):
    """Event sent when streaming ends."""
    type: Literal["message_stop"] = "message_stop"


class PingEvent(StreamEvent):
    """Ping event to keep connection alive."""
    type: Literal["ping"] = "ping"


AnyStreamEvent = Annotated[
    Union[
        MessageStartEvent,
        ContentBlockStartEvent,
        ContentBlockDeltaEvent,
        ContentBlockStopEvent,
        MessageDeltaEvent,
        MessageStopEvent,
        PingEvent,
    ],
    Field(discriminator="type"),
]

stream_event_adapter: TypeAdapter = TypeAdapter(AnyStreamEvent)


class ErrorType(str, Enum):
    """Types of API errors."""
    INVALID_REQUEST_ERROR = "invalid_request_error"
    AUTHENTICATION_ERROR = "authentication_error"
    PERMISSION_ERROR = "permission_error"
    NOT_FOUND_ERROR = "not_found_error"
    REQUEST_TOO_LARGE = "request_too_large"
    RATE_LIMIT_ERROR = "rate_limit_error"
    API_ERROR = "api_error"
    OVERLOADED_ERROR = "overloaded_error"


class ErrorDetail(BaseModel):
    """Error information following Anthropic's format."""
    type: Optional[str] = Field(None, description="Error type")
    message: Optional[str] = Field(None, description="Human-readable error message")


class ErrorResponse(BaseModel):
    """Error body returned by the API, also used by in-stream error events."""
    type: Literal["error"] = Field("error", description="Response type")
    error: ErrorDetail = Field(default_factory=ErrorDetail, description="Error details")
