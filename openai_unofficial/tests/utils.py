"""Shared testing utilities for the adapter test suite.

Purpose:
    Build OpenAI-shaped stream chunks and SSE byte streams without repeating
    JSON literals in every test module, and provide an in-memory transport
    that records what the provider facade sends.

Exports:
    - chunk(...) -> dict
    - sse(*payloads, done=True) -> bytes
    - split_every(data, size) -> list[bytes]
    - FakeTransport
"""
from __future__ import annotations

import json
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union


def chunk(
    content: Optional[str] = None,
    *,
    tool_calls: Optional[List[Dict[str, Any]]] = None,
    finish: Optional[str] = None,
    usage: Optional[Dict[str, int]] = None,
    role: Optional[str] = None,
    model: str = "gpt-unit",
) -> Dict[str, Any]:
    """Return one ``chat.completion.chunk`` object."""
    delta: Dict[str, Any] = {}
    if role is not None:
        delta["role"] = role
    if content is not None:
        delta["content"] = content
    if tool_calls is not None:
        delta["tool_calls"] = tool_calls
    payload: Dict[str, Any] = {
        "id": "chatcmpl-unit",
        "object": "chat.completion.chunk",
        "model": model,
        "choices": [{"index": 0, "delta": delta, "finish_reason": finish}],
    }
    if usage is not None:
        payload["usage"] = usage
    return payload


def tool_fragment(index: int, *, id: Optional[str] = None, name: Optional[str] = None, arguments: Optional[str] = None) -> Dict[str, Any]:
    """Return one streamed ``delta.tool_calls[]`` entry."""
    entry: Dict[str, Any] = {"index": index}
    if id is not None:
        entry["id"] = id
        entry["type"] = "function"
    function: Dict[str, Any] = {}
    if name is not None:
        function["name"] = name
    if arguments is not None:
        function["arguments"] = arguments
    entry["function"] = function
    return entry


def sse(*payloads: Union[Mapping[str, Any], str, bytes], done: bool = True) -> bytes:
    """Frame payloads as ``data:`` events, optionally followed by ``[DONE]``."""
    out = bytearray()
    for payload in payloads:
        if isinstance(payload, Mapping):
            data = json.dumps(payload).encode("utf-8")
        elif isinstance(payload, str):
            data = payload.encode("utf-8")
        else:
            data = payload
        out += b"data: " + data + b"\n\n"
    if done:
        out += b"data: [DONE]\n\n"
    return bytes(out)


def split_every(data: bytes, size: int) -> List[bytes]:
    """Split ``data`` into chunks of ``size`` bytes."""
    return [data[i : i + size] for i in range(0, len(data), size)]


class FakeTransport:
    """In-memory transport recording every request.

    ``send`` returns ``body``; ``stream`` yields ``chunks`` and raises any
    exception instance found among them at that position. ``error`` is raised
    when the call is made.
    """

    def __init__(
        self,
        *,
        body: bytes = b"",
        chunks: Sequence[Union[bytes, Exception]] = (),
        error: Optional[Exception] = None,
    ) -> None:
        self.body = body
        self.chunks = list(chunks)
        self.error = error
        self.calls: List[Tuple[str, Dict[str, str], bytes]] = []
        self.pulled = 0
        self.closed = False

    def send(self, url: str, headers: Mapping[str, str], body: bytes) -> bytes:
        self.calls.append((url, dict(headers), body))
        if self.error is not None:
            raise self.error
        return self.body

    def stream(self, url: str, headers: Mapping[str, str], body: bytes) -> Iterator[bytes]:
        self.calls.append((url, dict(headers), body))
        if self.error is not None:
            raise self.error
        return self._iter()

    def _iter(self) -> Iterator[bytes]:
        try:
            for item in self.chunks:
                if isinstance(item, Exception):
                    raise item
                self.pulled += 1
                yield item
        finally:
            self.closed = True


__all__ = ["chunk", "tool_fragment", "sse", "split_every", "FakeTransport"]
