"""Per-call finalization error for streamed tool-call arguments."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class ToolArgumentsCorruptError(ProviderError):
    """The concatenated arguments of one tool call are not valid JSON.

    Recorded against that call only; the rest of the response stays valid.

    Attributes:
        index: Stream index of the affected tool call.
        call_id: Tool call id, when known.
        arguments: The concatenated arguments string as received.
    """

    code: ErrorCode = field(default=ErrorCode.TOOL_ARGUMENTS_CORRUPT, init=False)
    message: str = "tool call arguments are not valid JSON"
    index: int = 0
    call_id: Optional[str] = None
    arguments: str = ""


__all__ = ["ToolArgumentsCorruptError"]
