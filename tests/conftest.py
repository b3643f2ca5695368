"""
Shared fixtures: a stand-in for ``requests.Response`` and SSE payload builders.
"""

import json
from typing import Any, Dict, Iterable, List, Optional, Union
from unittest.mock import Mock

import pytest
import requests
from requests.structures import CaseInsensitiveDict


class FakeResponse:
    """Minimal requests.Response stand-in that records how often it is closed."""

    def __init__(
        self,
        status_code: int = 200,
        chunks: Iterable[Union[bytes, str, Exception]] = (),
        body: Union[bytes, str] = b"",
        headers: Optional[Dict[str, str]] = None,
        reason: str = "OK",
    ):
        self.status_code = status_code
        self.headers = CaseInsensitiveDict(headers or {})
        self.reason = reason
        self._chunks = list(chunks)
        self._body = body.encode("utf-8") if isinstance(body, str) else body
        self.close_calls = 0
        self.chunks_read = 0

    @property
    def content(self) -> bytes:
        return self._body

    def iter_content(self, chunk_size=None):
        for chunk in self._chunks:
            if isinstance(chunk, Exception):
                raise chunk
            self.chunks_read += 1
            yield chunk.encode("utf-8") if isinstance(chunk, str) else chunk

    def close(self) -> None:
        self.close_calls += 1


def sse(event: str, data: Any) -> str:
    """Encode one SSE record."""
    payload = data if isinstance(data, str) else json.dumps(data, ensure_ascii=False)
    return f"event: {event}\ndata: {payload}\n\n"


MESSAGE_START = {
    "type": "message_start",
    "message": {
        "id": "msg_123",
        "type": "message",
        "role": "assistant",
        "content": [],
        "model": "claude-3-5-haiku-20241022",
        "stop_reason": None,
        "stop_sequence": None,
        "usage": {"input_tokens": 12, "output_tokens": 1},
    },
}


def text_delta(text: str, index: int = 0) -> Dict[str, Any]:
    return {
        "type": "content_block_delta",
        "index": index,
        "delta": {"type": "text_delta", "text": text},
    }


def full_stream(*texts: str) -> List[str]:
    """Records of a complete single-block response streaming ``texts``."""
    records = [
        sse("message_start", MESSAGE_START),
        sse("content_block_start", {
            "type": "content_block_start",
            "index": 0,
            "content_block": {"type": "text", "text": ""},
        }),
        sse("ping", {"type": "ping"}),
    ]
    records.extend(sse("content_block_delta", text_delta(t)) for t in texts)
    records.extend([
        sse("content_block_stop", {"type": "content_block_stop", "index": 0}),
        sse("message_delta", {
            "type": "message_delta",
            "delta": {"stop_reason": "end_turn", "stop_sequence": None},
            "usage": {"output_tokens": 7},
        }),
        sse("message_stop", {"type": "message_stop"}),
    ])
    return records


@pytest.fixture
def session():
    """A mocked requests.Session; set ``session.post.return_value`` per test."""
    return Mock(spec=requests.Session)
