"""Delta decoder: one SSE payload in, typed deltas out.

Pure and stateless. Parses an OpenAI ``chat.completion.chunk`` object and
classifies it into the variants of :mod:`.deltas`. A single chunk can carry
several pieces; they are returned in a fixed order the aggregation engine
relies on:

    ContentDelta, ToolCallDelta (array order), FinishDelta, UsageDelta

Shapes handled beyond the plain text/tool-call chunk:

- ``delta.function_call`` (legacy functions API) becomes a tool-call fragment
  for index 0;
- a top-level ``error`` object (mid-stream server failure) becomes
  ``FinishDelta(error)`` carrying the server's message;
- ``choices: []`` with ``usage`` (``stream_options.include_usage``) becomes a
  ``UsageDelta``;
- tool-call entries without ``index`` use their array position and mapping
  ``arguments`` are re-encoded as JSON text.

Anything else that does not match the chunk schema raises
:class:`DecodeError` carrying the raw payload.
"""
from __future__ import annotations

import json
from typing import Any, List, Mapping, Optional, Tuple, Union

from ..errors import DecodeError
from ..models import FinishReason, parse_finish_reason
from .deltas import ContentDelta, Delta, FinishDelta, ToolCallDelta, UsageDelta


def decode(payload: Union[bytes, bytearray, str]) -> Tuple[Delta, ...]:
    """Decode one frame payload into its deltas.

    Parameters:
        payload: The joined ``data:`` bytes of one SSE frame.

    Returns:
        The deltas carried by the chunk, possibly empty (role-only chunks,
        keep-alive chunks with empty deltas).

    Raises:
        DecodeError: invalid UTF-8/JSON, a non-object payload, missing
            ``choices`` or fields of the wrong type.
    """
    raw = payload.encode("utf-8") if isinstance(payload, str) else bytes(payload)
    data = _load_object(raw)

    if "error" in data and data["error"] is not None:
        return (FinishDelta(FinishReason.ERROR, message=_error_message(data["error"])),)

    choices = data.get("choices")
    if not isinstance(choices, list):
        raise _fail(raw, "chunk has no 'choices' array")

    deltas: List[Delta] = []
    if choices:
        choice = choices[0]
        if not isinstance(choice, Mapping):
            raise _fail(raw, "choices[0] is not an object")
        delta = choice.get("delta") or {}
        if not isinstance(delta, Mapping):
            raise _fail(raw, "choices[0].delta is not an object")
        _decode_content(raw, delta, deltas)
        _decode_tool_calls(raw, delta, deltas)
        reason = choice.get("finish_reason")
        if reason is not None:
            parsed = parse_finish_reason(reason)
            if parsed is None:
                raise _fail(raw, f"unknown finish_reason {reason!r}")
            deltas.append(FinishDelta(parsed))

    usage = data.get("usage")
    if isinstance(usage, Mapping):
        deltas.append(
            UsageDelta(
                prompt_tokens=_opt_int(usage.get("prompt_tokens")),
                completion_tokens=_opt_int(usage.get("completion_tokens")),
                total_tokens=_opt_int(usage.get("total_tokens")),
            )
        )
    return tuple(deltas)


def _load_object(raw: bytes) -> Mapping[str, Any]:
    try:
        data = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise _fail(raw, f"payload is not UTF-8: {exc}", exc) from exc
    except json.JSONDecodeError as exc:
        raise _fail(raw, f"payload is not valid JSON: {exc.msg} at {exc.pos}", exc) from exc
    if not isinstance(data, dict):
        raise _fail(raw, "payload is not a JSON object")
    return data


def _decode_content(raw: bytes, delta: Mapping[str, Any], out: List[Delta]) -> None:
    content = delta.get("content")
    if content is None:
        return
    if not isinstance(content, str):
        raise _fail(raw, "delta.content is not a string")
    if content:
        out.append(ContentDelta(content))


def _decode_tool_calls(raw: bytes, delta: Mapping[str, Any], out: List[Delta]) -> None:
    tool_calls = delta.get("tool_calls")
    if tool_calls is not None:
        if not isinstance(tool_calls, list):
            raise _fail(raw, "delta.tool_calls is not an array")
        for position, entry in enumerate(tool_calls):
            out.append(_decode_tool_call(raw, entry, position))
        return
    function_call = delta.get("function_call")
    if function_call is not None:
        out.append(_decode_tool_call(raw, {"index": 0, "function": function_call}, 0))


def _decode_tool_call(raw: bytes, entry: Any, position: int) -> ToolCallDelta:
    if not isinstance(entry, Mapping):
        raise _fail(raw, "tool call entry is not an object")
    index = entry.get("index", position)
    if isinstance(index, bool) or not isinstance(index, int) or index < 0:
        raise _fail(raw, f"tool call index {index!r} is not a non-negative integer")
    call_id = entry.get("id")
    if call_id is not None and not isinstance(call_id, str):
        raise _fail(raw, "tool call id is not a string")
    function = entry.get("function") or {}
    if not isinstance(function, Mapping):
        raise _fail(raw, "tool call function is not an object")
    name = function.get("name")
    if name is not None and not isinstance(name, str):
        raise _fail(raw, "tool call function name is not a string")
    arguments = function.get("arguments")
    if arguments is None:
        arguments = ""
    elif isinstance(arguments, Mapping):
        arguments = json.dumps(arguments, ensure_ascii=False, separators=(",", ":"))
    elif not isinstance(arguments, str):
        raise _fail(raw, "tool call arguments is not a string")
    return ToolCallDelta(index=index, id=call_id or None, name=name, arguments=arguments)


def _error_message(error: Any) -> str:
    if isinstance(error, Mapping):
        message = error.get("message")
        if isinstance(message, str) and message:
            return message
        return json.dumps(error, ensure_ascii=False, default=str)
    return str(error)


def _opt_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _fail(raw: bytes, message: str, cause: Optional[Exception] = None) -> DecodeError:
    return DecodeError(message=message, payload=raw, raw=cause)


__all__ = ["decode"]
