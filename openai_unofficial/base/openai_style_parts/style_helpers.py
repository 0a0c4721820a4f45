"""
Helper utilities for the Chat Completions wire format.

Purpose:
- Keep the request assembler small by isolating message serialization,
  ``tool_choice`` normalization and body encoding.
- Share the compact JSON encoding between the assembler and the provider
  facade's ``format_request`` surface.

External dependencies:
- Standard library ``json`` only. No network I/O.
"""

from __future__ import annotations

import json
import typing as _t

from ..errors import ValidationError
from ..models import Message


_TOOL_CHOICE_MODES = {"auto": "auto", "required": "required", "none": "none"}


def dumps_compact(value: _t.Any) -> str:
    """Serialize ``value`` deterministically: insertion order, no whitespace, UTF-8."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def content_as_text(content: _t.Any) -> str:
    """Return message content as the string the endpoint expects.

    Objects, arrays and other non-string values are JSON-encoded; ``None``
    becomes the empty string.
    """
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    return dumps_compact(content)


def serialize_message(message: Message) -> dict[str, _t.Any]:
    """Translate one :class:`Message` into a ``messages[]`` entry.

    Rules:
        - ``tool``: ``role``, ``tool_call_id`` and string content.
        - ``assistant`` with tool calls: ``content`` is ``null`` when the text
          is empty, followed by the echoed ``tool_calls``.
        - everything else: ``role`` and string content.
    """
    if message.role == "tool":
        return {
            "role": "tool",
            "tool_call_id": message.tool_call_id or "",
            "content": content_as_text(message.content),
        }
    if message.role == "assistant" and message.has_tool_calls():
        text = content_as_text(message.content)
        return {
            "role": "assistant",
            "content": text or None,
            "tool_calls": [dict(call) for call in message.tool_calls],
        }
    return {"role": message.role, "content": content_as_text(message.content)}


def normalize_tool_choice(choice: _t.Any) -> _t.Any:
    """Map the accepted ``tool_choice`` spellings onto the OpenAI form.

    Accepted inputs:
        - ``"auto"``, ``"required"``, ``"none"`` in any letter case;
        - ``{"Specific": name}`` naming one function;
        - an OpenAI-shaped object (anything with a ``type`` key), unchanged.

    Raises:
        ValidationError: for any other value.
    """
    if isinstance(choice, str):
        mode = _TOOL_CHOICE_MODES.get(choice.strip().lower())
        if mode is None:
            raise ValidationError(message=f"unsupported tool_choice {choice!r}")
        return mode
    if isinstance(choice, _t.Mapping):
        if "Specific" in choice:
            name = choice["Specific"]
            if not isinstance(name, str) or not name.strip():
                raise ValidationError(message="tool_choice 'Specific' requires a function name")
            return {"type": "function", "function": {"name": name}}
        if "type" in choice:
            return dict(choice)
    raise ValidationError(message=f"unsupported tool_choice {choice!r}")


__all__ = [
    "dumps_compact",
    "content_as_text",
    "serialize_message",
    "normalize_tool_choice",
]
