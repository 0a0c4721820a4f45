"""
Message DTO used by the request assembler.

Defines the immutable `Message` dataclass and the `Role` literal. Content is
plain text; tool messages reference the call they answer through
``tool_call_id`` and assistant messages may echo back the tool calls the model
previously requested.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional, Tuple


# Message roles accepted by the Chat Completions protocol.
Role = Literal["system", "user", "assistant", "tool"]


@dataclass(frozen=True)
class Message:
    """A chat message in the host's normalized representation.

    Attributes:
        role: The role of the message author (``"system"``, ``"user"``,
            ``"assistant"``, or ``"tool"``).
        content: Message text. ``None`` is allowed for assistant messages that
            only carry tool calls.
        tool_call_id: Id of the tool call a ``"tool"`` message answers.
        tool_calls: OpenAI-shaped tool call objects previously emitted by the
            model, echoed back on ``"assistant"`` messages.
    """

    role: Role
    content: Optional[str] = None
    tool_call_id: Optional[str] = None
    tool_calls: Tuple[Dict[str, Any], ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.tool_calls, tuple):
            object.__setattr__(self, "tool_calls", tuple(self.tool_calls or ()))

    def has_tool_calls(self) -> bool:
        """Return True when an assistant message carries tool calls."""
        return bool(self.tool_calls)


__all__ = [
    "Message",
    "Role",
]
