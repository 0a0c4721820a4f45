"""
Finalized tool call produced by the aggregation engine or the batch decoder.

``arguments`` stays the opaque JSON string the model produced; ``error`` is set
when it failed to parse at finalization.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..errors import ToolArgumentsCorruptError


@dataclass(frozen=True)
class ToolCall:
    """A tool invocation requested by the model.

    Attributes:
        index: Position of the call in the response (stream index).
        id: Tool call id used by the host to answer with a ``tool`` message.
        name: Function name.
        arguments: JSON-encoded arguments string.
        error: Set when ``arguments`` is not valid JSON.
    """

    index: int
    id: Optional[str]
    name: str
    arguments: str
    error: Optional[ToolArgumentsCorruptError] = None

    @property
    def is_valid(self) -> bool:
        return self.error is None

    def parsed_arguments(self) -> Any:
        """Decode ``arguments``; raises the recorded error for corrupt calls."""
        if self.error is not None:
            raise self.error
        return json.loads(self.arguments)

    def to_dict(self) -> Dict[str, Any]:
        """Return the OpenAI-shaped ``tool_calls[]`` entry for this call."""
        return {
            "id": self.id,
            "type": "function",
            "function": {"name": self.name, "arguments": self.arguments},
        }


__all__ = ["ToolCall"]
