"""
Finish reasons of one completion.

``parse_finish_reason`` maps wire values onto :class:`FinishReason`; the
legacy ``function_call`` value is folded into ``tool_calls``.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


class FinishReason(str, Enum):
    """Terminal status of a completion."""

    STOP = "stop"
    TOOL_CALLS = "tool_calls"
    LENGTH = "length"
    CONTENT_FILTER = "content_filter"
    ERROR = "error"


_ALIASES = {"function_call": FinishReason.TOOL_CALLS}


def parse_finish_reason(value: object) -> Optional[FinishReason]:
    """Return the matching :class:`FinishReason` or ``None`` if unknown."""
    if not isinstance(value, str):
        return None
    if value in _ALIASES:
        return _ALIASES[value]
    try:
        return FinishReason(value)
    except ValueError:
        return None


__all__ = ["FinishReason", "parse_finish_reason"]
