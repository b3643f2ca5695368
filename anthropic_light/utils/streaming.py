"""
Streaming utilities for Server-Sent Events (SSE) responses.

This module turns the chunked text of a ``text/event-stream`` response into
typed stream events:

- SSEParser buffers raw text and frames complete ``event:``/``data:`` records
- decode_events maps records onto the StreamEvent models, stopping at message_stop
- MessageStream drives both from an HTTP response and owns its release
"""

import codecs
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import AnthropicError, StreamInterruptedError
from ..models.anthropic import (
    ContentBlock,
    ContentBlockDeltaEvent,
    ContentBlockStartEvent,
    Message,
    MessageDeltaEvent,
    MessageStartEvent,
    MessageStopEvent,
    StreamEvent,
    Usage,
    stream_event_adapter,
)
from .error_handling import ErrorClassifier
from .loguru_utils import LoguruLogger


log = LoguruLogger(__name__)

RECORD_SEPARATOR = "\n\n"
MESSAGE_STOP = "message_stop"
ERROR_EVENT = "error"


@dataclass(frozen=True)
class SSERecord:
    """One blank-line delimited SSE record."""
    event: str
    data: str


class SSEParser:
    """
    Incremental SSE tokenizer.

    Text fed to ``parse`` may split a record anywhere; the incomplete tail is
    kept in ``pending`` until a later chunk completes it. One parser belongs
    to one stream; call ``reset`` before reusing it for another.
    """

    def __init__(self):
        self._pending = ""

    @property
    def pending(self) -> str:
        """Text received but not yet framed into a record."""
        return self._pending

    def parse(self, chunk: str) -> List[SSERecord]:
        """
        Feed a chunk of text and return the records it completes.

        Args:
            chunk: Raw SSE text of any length

        Returns:
            Complete records, in arrival order
        """
        self._pending += chunk
        parts = self._pending.split(RECORD_SEPARATOR)
        self._pending = parts.pop()

        records = []
        for part in parts:
            text = part.strip()
            if not text:
                continue
            record = self._parse_record(text)
            if record is not None:
                records.append(record)
        return records

    def reset(self) -> None:
        """Drop any buffered text."""
        self._pending = ""

    @staticmethod
    def _parse_record(text: str) -> Optional[SSERecord]:
        event = ""
        data = ""
        for raw_line in text.split("\n"):
            line = raw_line.strip()
            if line.startswith("event:"):
                event = line[len("event:"):].strip()
            elif line.startswith("data:"):
                data = line[len("data:"):].strip()

        # Both fields are required
        if event and data:
            return SSERecord(event=event, data=data)
        return None


def decode_event(record: SSERecord) -> StreamEvent:
    """
    Decode a single record's JSON payload into its StreamEvent variant.

    Raises:
        AnthropicError: If the payload is not JSON or names no known event type
    """
    try:
        event = stream_event_adapter.validate_json(record.data)
    except PydanticValidationError as e:
        raise AnthropicError(f"Failed to parse event data: {e}") from e

    if event.type != record.event:
        raise AnthropicError(
            f"Failed to parse event data: '{record.event}' record carries a '{event.type}' payload"
        )
    return event


def decode_events(records: Iterable[SSERecord]) -> Iterator[StreamEvent]:
    """
    Lazily decode records into stream events.

    A ``message_stop`` record ends the sequence; records after it are never
    read. An ``error`` record raises the classified API error.
    """
    for record in records:
        if record.event == MESSAGE_STOP:
            yield MessageStopEvent()
            return
        if record.event == ERROR_EVENT:
            raise ErrorClassifier.classify_stream_error(record.data)
        yield decode_event(record)


class MessageStream:
    """
    Single-pass iterator over the events of a streaming response.

    Nothing is read from the network until the next event is requested. The
    response is closed exactly once, whichever way iteration ends: the
    message_stop event, end of body, an error, ``close()``, leaving a ``with``
    block, or the stream being garbage collected.
    """

    def __init__(self, response, chunk_size: Optional[int] = None):
        """
        Args:
            response: Streaming ``requests.Response`` with a 2xx status
            chunk_size: Read size passed to ``iter_content``; None reads
                whatever the connection delivers
        """
        self.response = response
        self.chunk_size = chunk_size
        self.event_count = 0
        self._events = decode_events(self._iter_records())
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _iter_text(self) -> Iterator[str]:
        # Incremental decoding keeps multi-byte characters split across chunks intact
        decoder = codecs.getincrementaldecoder("utf-8")()
        for chunk in self.response.iter_content(chunk_size=self.chunk_size):
            text = decoder.decode(chunk)
            if text:
                yield text
        tail = decoder.decode(b"", final=True)
        if tail:
            yield tail

    def _iter_records(self) -> Iterator[SSERecord]:
        parser = SSEParser()
        for text in self._iter_text():
            yield from parser.parse(text)

    def __iter__(self) -> "MessageStream":
        return self

    def __next__(self) -> StreamEvent:
        if self._closed:
            raise StopIteration

        try:
            event = next(self._events)
        except StopIteration:
            log.debug("Stream ended without message_stop", event_count=self.event_count)
            self.close()
            raise
        except AnthropicError:
            self.close()
            raise
        except Exception as e:
            self.close()
            raise StreamInterruptedError(f"Stream interrupted: {e}") from e

        self.event_count += 1
        if event.type == MESSAGE_STOP:
            log.debug("Stream completed", event_count=self.event_count)
            self.close()
        return event

    def close(self) -> None:
        """Stop the stream and release the underlying response."""
        if self._closed:
            return
        self._closed = True
        self._events.close()
        self.response.close()

    def __enter__(self) -> "MessageStream":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __del__(self):
        if "_closed" in self.__dict__:
            self.close()

    def text_stream(self) -> Iterator[str]:
        """Yield only the text of content_block_delta events."""
        for event in self:
            if isinstance(event, ContentBlockDeltaEvent):
                yield event.delta.text

    def get_final_message(self) -> Message:
        """
        Consume the rest of the stream and assemble the complete Message.

        Raises:
            AnthropicError: If the stream never sent message_start
        """
        message: Optional[Message] = None
        blocks = {}
        stop_reason = None
        stop_sequence = None
        output_tokens = None

        for event in self:
            if isinstance(event, MessageStartEvent):
                message = event.message
                blocks = {i: block.text for i, block in enumerate(message.content)}
            elif isinstance(event, ContentBlockStartEvent):
                blocks[event.index] = event.content_block.text
            elif isinstance(event, ContentBlockDeltaEvent):
                blocks[event.index] = blocks.get(event.index, "") + event.delta.text
            elif isinstance(event, MessageDeltaEvent):
                stop_reason = event.delta.stop_reason
                stop_sequence = event.delta.stop_sequence
                output_tokens = event.usage.output_tokens

        if message is None:
            raise AnthropicError("Stream ended before message_start was received")

        usage = message.usage
        if output_tokens is not None:
            usage = Usage(input_tokens=usage.input_tokens, output_tokens=output_tokens)

        return message.model_copy(update={
            "content": [ContentBlock(text=blocks[i]) for i in sorted(blocks)],
            "stop_reason": stop_reason if stop_reason is not None else message.stop_reason,
            "stop_sequence": stop_sequence if stop_sequence is not None else message.stop_sequence,
            "usage": usage,
        })
