"""
AggregatedResponse DTO: the single consolidated result of one request.

Produced by the aggregation engine (streaming) or the batch decoder. It keeps
whatever partial content was successfully aggregated next to the recoverable
errors observed along the way.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ..errors import IncompleteStreamError, ProviderError
from .finish_reason import FinishReason
from .tool_call import ToolCall


@dataclass(frozen=True)
class AggregatedResponse:
    """Consolidated chat completion.

    Attributes:
        text: Accumulated assistant text.
        tool_calls: Finalized tool calls in first-seen index order.
        finish_reason: Terminal status, ``None`` when the stream was cut off.
        pending_tool_calls: Accumulator entries that were never finalized
            (interrupted streams, ``length``/``content_filter`` finishes).
            Their arguments are not validated.
        errors: Recoverable errors in the order they were recorded.
        usage: Token usage mapping (``prompt``/``completion``/``total``).
        model: Model reported by the endpoint, when present.
    """

    text: str = ""
    tool_calls: Tuple[ToolCall, ...] = field(default_factory=tuple)
    finish_reason: Optional[FinishReason] = None
    pending_tool_calls: Tuple[ToolCall, ...] = field(default_factory=tuple)
    errors: Tuple[ProviderError, ...] = field(default_factory=tuple)
    usage: Optional[Dict[str, Optional[int]]] = None
    model: Optional[str] = None

    @property
    def error(self) -> Optional[ProviderError]:
        """Return the most significant error, if any.

        An :class:`IncompleteStreamError` wins over per-frame and per-call
        errors since it qualifies the whole response.
        """
        for err in self.errors:
            if isinstance(err, IncompleteStreamError):
                return err
        return self.errors[0] if self.errors else None

    @property
    def is_complete(self) -> bool:
        """True when the response ended with a terminal signal."""
        return self.finish_reason is not None and not any(
            isinstance(err, IncompleteStreamError) for err in self.errors
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation."""
        return {
            "text": self.text,
            "tool_calls": [c.to_dict() for c in self.tool_calls],
            "pending_tool_calls": [c.to_dict() for c in self.pending_tool_calls],
            "finish_reason": self.finish_reason.value if self.finish_reason else None,
            "errors": [{"code": e.code.value, "message": e.message} for e in self.errors],
            "usage": self.usage,
            "model": self.model,
        }


__all__ = ["AggregatedResponse"]
