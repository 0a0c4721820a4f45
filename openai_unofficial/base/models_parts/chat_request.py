"""
ChatRequest DTO for provider-agnostic chat invocations.

The request assembler maps this normalized, immutable request shape to a
Chat Completions body. Sampling parameters (temperature, max_tokens, top_p,
stop, seed, ...) are opaque pass-through values; ``None`` entries are dropped
when the body is built.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

from .message import Message
from .tool_spec import ToolSpec


@dataclass(frozen=True)
class ChatRequest:
    """Normalized chat request sent to the adapter.

    Attributes:
        messages: Ordered messages of the conversation.
        model: Target model identifier; falls back to the endpoint's default
            model when ``None``.
        tools: Function tools offered to the model.
        tool_choice: Optional tool choice directive (``"auto"``,
            ``"required"``, ``"none"``, ``{"Specific": name}`` or an
            OpenAI-shaped object).
        stream: Whether the response is requested as server-sent events.
        sampling: Opaque sampling parameters forwarded as top-level body keys.
    """

    messages: Tuple[Message, ...]
    model: Optional[str] = None
    tools: Tuple[ToolSpec, ...] = field(default_factory=tuple)
    tool_choice: Any = None
    stream: bool = False
    sampling: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "messages", tuple(self.messages or ()))
        object.__setattr__(self, "tools", tuple(self.tools or ()))
        object.__setattr__(self, "sampling", MappingProxyType(dict(self.sampling or {})))


__all__ = [
    "ChatRequest",
]
