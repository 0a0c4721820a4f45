"""Typed stream deltas.

Every decoded SSE payload is classified into these variants before it reaches
the aggregation engine, so fold logic never touches raw JSON. Deltas are
partial by construction: fragments for one tool-call index may span many
frames and are concatenated in receipt order.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..models import FinishReason


@dataclass(frozen=True)
class ContentDelta:
    """A fragment of assistant text."""

    text: str


@dataclass(frozen=True)
class ToolCallDelta:
    """A fragment of one streamed tool call.

    Attributes:
        index: Tool call index within the response.
        id: Call id; normally present only on the first fragment.
        name: Function name fragment, if any.
        arguments: Arguments string fragment (may be empty).
    """

    index: int
    id: Optional[str] = None
    name: Optional[str] = None
    arguments: str = ""


@dataclass(frozen=True)
class FinishDelta:
    """The completion's terminal status.

    ``message`` carries the server's description when ``reason`` is ``error``.
    """

    reason: FinishReason
    message: Optional[str] = None


@dataclass(frozen=True)
class UsageDelta:
    """Token usage reported by the trailing usage chunk."""

    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None


@dataclass(frozen=True)
class StreamEnd:
    """Sentinel: the ``[DONE]`` marker was received."""


STREAM_END = StreamEnd()

Delta = Union[ContentDelta, ToolCallDelta, FinishDelta, UsageDelta, StreamEnd]


__all__ = [
    "ContentDelta",
    "ToolCallDelta",
    "FinishDelta",
    "UsageDelta",
    "StreamEnd",
    "STREAM_END",
    "Delta",
]
