"""
Host JSON boundary.

Some hosts keep their conversation as JSON and pass it through as strings:
a message list, tool definitions and a tool-choice value. This module parses
and validates that input with the pydantic DTOs and produces the immutable
:class:`ChatRequest` the request assembler consumes.

Mapping rules:
    - assistant messages take their tool calls from ``metadata.tool_calls``;
    - structured (object/array) content is JSON-encoded into a string;
    - ``tool_choice`` accepts the same spellings as the assembler and is
      normalized eagerly so bad values fail here.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from ..dto import ChatRequestDTO, MessageDTO
from ..errors import ValidationError
from ..models import ChatRequest, Message, ToolSpec
from .style_helpers import content_as_text, normalize_tool_choice


def _loads(text: str, what: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValidationError(message=f"failed to parse {what} JSON: {exc.msg} at {exc.pos}", raw=exc) from exc


def _parse_tool_choice(tool_choice_json: Optional[str]) -> Any:
    if tool_choice_json is None or not tool_choice_json.strip():
        return None
    try:
        choice = json.loads(tool_choice_json)
    except json.JSONDecodeError:
        # Bare mode names (auto, none, required) are accepted unquoted.
        choice = tool_choice_json.strip()
    return normalize_tool_choice(choice)


def _to_message(dto: MessageDTO) -> Message:
    if dto.role == "assistant":
        content = dto.content if isinstance(dto.content, str) else None
        return Message(role="assistant", content=content or None, tool_calls=tuple(dto.resolved_tool_calls()))
    return Message(
        role=dto.role,
        content=content_as_text(dto.content),
        tool_call_id=dto.tool_call_id if dto.role == "tool" else None,
    )


def chat_request_from_json(
    messages_json: str,
    model: Optional[str] = None,
    tools_json: Optional[str] = None,
    tool_choice_json: Optional[str] = None,
    max_tokens: Optional[int] = None,
    temperature: Optional[float] = None,
    stream: bool = False,
) -> ChatRequest:
    """Build a :class:`ChatRequest` from host-supplied JSON strings.

    Parameters:
        messages_json: JSON array of host messages.
        model: Model identifier; ``None`` defers to the endpoint default.
        tools_json: Optional JSON array of ``{name, description, parameters}``.
        tool_choice_json: Optional tool choice (``"auto"``,
            ``{"Specific": "name"}`` or an OpenAI-shaped object).
        max_tokens: Optional completion token cap.
        temperature: Optional sampling temperature.
        stream: Whether to request a streamed response.

    Returns:
        The validated, immutable request.

    Raises:
        ValidationError: invalid JSON, DTO constraint violations or an
            unsupported tool choice.
    """
    messages = _loads(messages_json, "messages")
    tools = _loads(tools_json, "tools") if tools_json and tools_json.strip() else None
    try:
        dto = ChatRequestDTO(
            model=model or None,
            messages=messages,
            max_tokens=max_tokens,
            temperature=temperature,
            tools=tools or None,
            tool_choice=_parse_tool_choice(tool_choice_json),
            stream=stream,
        )
    except PydanticValidationError as exc:
        raise ValidationError(message=f"invalid chat request: {exc.error_count()} error(s): {exc}", raw=exc) from exc

    return ChatRequest(
        messages=tuple(_to_message(m) for m in dto.messages),
        model=dto.model,
        tools=tuple(
            ToolSpec(name=t.name, parameters=t.parameters, description=t.description)
            for t in (dto.tools or [])
        ),
        tool_choice=dto.tool_choice,
        stream=dto.stream,
        sampling={"temperature": dto.temperature, "max_tokens": dto.max_tokens},
    )


__all__ = ["chat_request_from_json"]
