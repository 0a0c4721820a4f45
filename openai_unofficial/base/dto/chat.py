"""
Pydantic DTOs and validators for host-supplied chat payloads.

Purpose
-------
Hosts that speak JSON (rather than building :class:`ChatRequest` values
directly) hand the adapter a message list, optional tool definitions and
sampling values. These DTOs validate that input before it is mapped onto the
immutable domain models, enforcing roles, tool-message references and numeric
parameter bounds so malformed input fails before any request is built.

External dependencies: Pydantic only (no network calls). No timeouts.

Fallback semantics: Not applicable. Validation either succeeds or raises a
`pydantic.ValidationError`; the host JSON boundary converts it into the
adapter's own ``ValidationError``.

Design
------
- Accept the host's message shape: assistant tool calls travel in
  ``metadata.tool_calls`` (a direct ``tool_calls`` field is accepted too).
- Keep content loose (``Any``): structured content is JSON-encoded later.
- Unknown keys are ignored so hosts can attach their own bookkeeping.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


Role = Literal["system", "user", "assistant", "tool"]


class MessageDTO(BaseModel):
    """A host chat message.

    Rules:
        - `role` must be one of Role.
        - `tool` messages must reference the call they answer via
          `tool_call_id`.
        - `tool_calls` (direct or under `metadata`) are only meaningful on
          `assistant` messages and must be a list of objects.

    Failure Modes:
        Raises `ValidationError` when constraints are not met.
    """

    model_config = ConfigDict(extra="ignore")

    role: Role
    content: Any = None
    tool_call_id: Optional[str] = None
    tool_calls: Optional[List[Dict[str, Any]]] = None
    metadata: Optional[Dict[str, Any]] = None

    @model_validator(mode="after")
    def _validate_references(self) -> "MessageDTO":
        """Validate role-specific fields.

        Returns:
            MessageDTO: The validated message DTO.

        Raises:
            ValueError: If a tool message lacks ``tool_call_id`` or the
                metadata tool calls are not a list of objects.
        """
        if self.role == "tool" and not (self.tool_call_id and self.tool_call_id.strip()):
            raise ValueError("tool message requires a non-empty tool_call_id")
        meta_calls = (self.metadata or {}).get("tool_calls")
        if meta_calls is not None and (
            not isinstance(meta_calls, list) or not all(isinstance(c, dict) for c in meta_calls)
        ):
            raise ValueError("metadata.tool_calls must be a list of objects")
        return self

    def resolved_tool_calls(self) -> List[Dict[str, Any]]:
        """Return the assistant's tool calls, preferring ``metadata.tool_calls``."""
        if self.role != "assistant":
            return []
        meta_calls = (self.metadata or {}).get("tool_calls")
        if meta_calls:
            return list(meta_calls)
        return list(self.tool_calls or [])


class ToolSpecDTO(BaseModel):
    """Function tool definition supplied by the host.

    ``parameters`` is a JSON-schema object forwarded verbatim.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    parameters: Dict[str, Any] = Field(default_factory=dict)


class ChatRequestDTO(BaseModel):
    """Validated host request prior to mapping onto ``ChatRequest``.

    Parameters:
        model: Target model identifier; ``None`` defers to the endpoint default.
        messages: Ordered list of MessageDTO (non-empty).
        max_tokens: If provided, must be positive.
        temperature: If provided, must be within [0.0, 2.0].
        tools: Optional tool specifications.
        tool_choice: Optional tool choice directive (normalized later).
        stream: Whether a streamed response is requested.

    Raises:
        ValidationError: On invalid roles, missing tool references or
            out-of-range params.
    """

    model: Optional[str] = None
    messages: List[MessageDTO] = Field(..., min_length=1)
    max_tokens: Optional[int] = Field(default=None, gt=0)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    tools: Optional[List[ToolSpecDTO]] = None
    tool_choice: Any = None
    stream: bool = False


__all__ = [
    "Role",
    "MessageDTO",
    "ToolSpecDTO",
    "ChatRequestDTO",
]
