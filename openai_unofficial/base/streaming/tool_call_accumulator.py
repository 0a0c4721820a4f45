"""Streaming tool-call accumulator.

OpenAI streams each tool call as fragments addressed by ``index``: the id and
function name normally arrive on the first fragment, the JSON arguments are
split across any number of later ones. This table concatenates fragments per
index in receipt order and keeps the order in which indices were first seen.

Arguments are only parsed when :meth:`ToolCallAccumulator.finalize` runs. A
call whose arguments fail to parse is returned with its error attached instead
of failing the whole response.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple

from ..errors import ToolArgumentsCorruptError
from ..models import ToolCall
from .deltas import ToolCallDelta


@dataclass
class _Entry:
    index: int
    id: Optional[str] = None
    name: str = ""
    arguments: str = ""


class ToolCallAccumulator:
    """Index-addressed table of partial tool calls for one response."""

    def __init__(self) -> None:
        self._entries: Dict[int, _Entry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[int]:
        return iter(self._entries)

    def add(self, delta: ToolCallDelta) -> None:
        """Merge one fragment into the entry for ``delta.index``."""
        entry = self._entries.get(delta.index)
        if entry is None:
            entry = _Entry(index=delta.index)
            self._entries[delta.index] = entry
        if delta.id and entry.id is None:
            entry.id = delta.id
        if delta.name:
            entry.name += delta.name
        if delta.arguments:
            entry.arguments += delta.arguments

    def pending(self) -> Tuple[ToolCall, ...]:
        """Return the raw, unvalidated entries in first-seen order."""
        return tuple(
            ToolCall(index=e.index, id=e.id, name=e.name, arguments=e.arguments)
            for e in self._entries.values()
        )

    def finalize(self) -> Tuple[ToolCall, ...]:
        """Validate every entry and return the finalized calls.

        Empty arguments become ``{}`` and a missing id is synthesized as
        ``call_<index>``. Each call is validated independently.
        """
        return tuple(_finalize_entry(e) for e in self._entries.values())

    def clear(self) -> None:
        self._entries.clear()


def _finalize_entry(entry: _Entry) -> ToolCall:
    call_id = entry.id or f"call_{entry.index}"
    arguments = entry.arguments if entry.arguments.strip() else "{}"
    return ToolCall(
        index=entry.index,
        id=call_id,
        name=entry.name,
        arguments=arguments,
        error=validate_arguments(arguments, index=entry.index, call_id=call_id),
    )


def validate_arguments(arguments: str, *, index: int, call_id: Optional[str]) -> Optional[ToolArgumentsCorruptError]:
    """Return a :class:`ToolArgumentsCorruptError` when ``arguments`` is not JSON."""
    try:
        json.loads(arguments)
    except json.JSONDecodeError as exc:
        return ToolArgumentsCorruptError(
            message=f"tool call {call_id or index} arguments are not valid JSON: {exc.msg} at {exc.pos}",
            index=index,
            call_id=call_id,
            arguments=arguments,
            raw=exc,
        )
    return None


__all__ = ["ToolCallAccumulator", "validate_arguments"]
