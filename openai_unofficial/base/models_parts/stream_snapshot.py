"""
StreamSnapshot: the read-only view handed to the host after each fold step.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .aggregated_response import AggregatedResponse
from .finish_reason import FinishReason
from .tool_call import ToolCall


@dataclass(frozen=True)
class StreamSnapshot:
    """Incremental state after one fold step.

    Attributes:
        text_delta: Text appended by this step (empty when none).
        text: Full text accumulated so far.
        new_tool_calls: Tool calls finalized by this step.
        finish_reason: Finish reason recorded so far.
        done: True only on the terminal snapshot.
        response: The consolidated response, set only when ``done``.
    """

    text_delta: str = ""
    text: str = ""
    new_tool_calls: Tuple[ToolCall, ...] = field(default_factory=tuple)
    finish_reason: Optional[FinishReason] = None
    done: bool = False
    response: Optional[AggregatedResponse] = None


__all__ = ["StreamSnapshot"]
