"""Helpers for non-streaming chat completions.

Purpose
-------
- Decode a complete ``chat.completion`` body into an ``AggregatedResponse``
  in one pass, without going through frames or deltas.
- Emit the normalized ``chat.end`` / ``chat.error`` events for batch calls.

Validation
----------
Tool-call arguments are checked exactly as at stream finalization: a call
whose arguments are not valid JSON keeps its raw text and carries a
``ToolArgumentsCorruptError``; the rest of the response stays usable.

Failure modes
-------------
- ``DecodeError`` for bodies that are not JSON objects, lack a non-empty
  ``choices`` array, or carry fields of the wrong type.
- ``ProviderError`` for an ``error`` body returned with a success status.
"""

from __future__ import annotations

import json
import logging
from typing import Any, List, Mapping, Optional, Union

from ..errors import DecodeError, ErrorCode, ProviderError
from ..logging import LogContext, normalized_log_event
from ..models import AggregatedResponse, ToolCall, parse_finish_reason
from ..streaming.streaming_metrics import build_token_usage
from ..streaming.tool_call_accumulator import validate_arguments
from .style_helpers import dumps_compact


# OpenAI ``error.type`` / ``error.code`` values with a dedicated ErrorCode.
_ERROR_TYPE_MAP = {
    "authentication_error": ErrorCode.AUTH,
    "invalid_api_key": ErrorCode.AUTH,
    "permission_error": ErrorCode.AUTH,
    "rate_limit_exceeded": ErrorCode.RATE_LIMIT,
    "insufficient_quota": ErrorCode.RATE_LIMIT,
    "invalid_request_error": ErrorCode.VALIDATION,
    "model_not_found": ErrorCode.NOT_FOUND,
    "server_error": ErrorCode.SERVER_ERROR,
}


def decode_batch_response(body: Union[bytes, bytearray, str], *, model: Optional[str] = None) -> AggregatedResponse:
    """Decode a non-streaming ``chat/completions`` response body.

    Parameters:
        body: Raw response body.
        model: Requested model, used when the body does not report one.

    Returns:
        AggregatedResponse with text, validated tool calls, finish reason and
        usage.

    Raises:
        DecodeError: malformed body.
        ProviderError: the body is an ``error`` object.
    """
    raw = body.encode("utf-8") if isinstance(body, str) else bytes(body)
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DecodeError(message=f"failed to parse response: {exc}", payload=raw, model=model, raw=exc) from exc
    if not isinstance(data, dict):
        raise DecodeError(message="response body is not a JSON object", payload=raw, model=model)
    if data.get("error") is not None:
        raise _error_from_body(data["error"], model)

    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        raise DecodeError(message="no choices in response", payload=raw, model=model)
    choice = choices[0]
    message = choice.get("message") if isinstance(choice, Mapping) else None
    if not isinstance(message, Mapping):
        raise DecodeError(message="choices[0].message is not an object", payload=raw, model=model)

    content = message.get("content")
    if content is not None and not isinstance(content, str):
        raise DecodeError(message="message content is not a string", payload=raw, model=model)

    calls = _decode_tool_calls(message, raw, model)
    reason_value = choice.get("finish_reason")
    finish_reason = parse_finish_reason(reason_value)
    if reason_value is not None and finish_reason is None:
        raise DecodeError(message=f"unknown finish_reason {reason_value!r}", payload=raw, model=model)

    usage = data.get("usage")
    return AggregatedResponse(
        text=content or "",
        tool_calls=tuple(calls),
        finish_reason=finish_reason,
        errors=tuple(c.error for c in calls if c.error is not None),
        usage=_usage(usage) if isinstance(usage, Mapping) else None,
        model=data.get("model") if isinstance(data.get("model"), str) else model,
    )


def _decode_tool_calls(message: Mapping[str, Any], raw: bytes, model: Optional[str]) -> List[ToolCall]:
    entries = message.get("tool_calls")
    if entries is None and isinstance(message.get("function_call"), Mapping):
        entries = [{"function": message["function_call"]}]
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise DecodeError(message="message tool_calls is not an array", payload=raw, model=model)
    calls: List[ToolCall] = []
    for position, entry in enumerate(entries):
        function = entry.get("function") if isinstance(entry, Mapping) else None
        if not isinstance(function, Mapping):
            raise DecodeError(message="tool call has no function object", payload=raw, model=model)
        arguments = function.get("arguments")
        if isinstance(arguments, Mapping):
            arguments = dumps_compact(arguments)
        elif arguments is None or (isinstance(arguments, str) and not arguments.strip()):
            arguments = "{}"
        elif not isinstance(arguments, str):
            raise DecodeError(message="tool call arguments is not a string", payload=raw, model=model)
        call_id = entry.get("id") or f"call_{position}"
        calls.append(
            ToolCall(
                index=position,
                id=call_id,
                name=function.get("name") or "",
                arguments=arguments,
                error=validate_arguments(arguments, index=position, call_id=call_id),
            )
        )
    return calls


def _usage(usage: Mapping[str, Any]) -> dict:
    def _int(key: str) -> Optional[int]:
        value = usage.get(key)
        return value if isinstance(value, int) and not isinstance(value, bool) else None

    return build_token_usage(_int("prompt_tokens"), _int("completion_tokens"), _int("total_tokens"))


def _error_from_body(error: Any, model: Optional[str]) -> ProviderError:
    if not isinstance(error, Mapping):
        return ProviderError(code=ErrorCode.UNKNOWN, message=str(error), model=model)
    code = ErrorCode.UNKNOWN
    for key in ("code", "type"):
        mapped = _ERROR_TYPE_MAP.get(str(error.get(key)))
        if mapped is not None:
            code = mapped
            break
    message = error.get("message") or dumps_compact(dict(error))
    return ProviderError(code=code, message=str(message), model=model)


def log_chat_end(*, logger: logging.Logger, ctx: LogContext, response: AggregatedResponse, latency_ms: float) -> None:
    """Emit the normalized ``chat.end`` event for a decoded batch response."""
    normalized_log_event(
        logger,
        "chat.end",
        ctx,
        phase="finalize",
        attempt=None,
        emitted=None,
        tokens=response.usage,
        error_code=response.error.code.value if response.error is not None else None,
        latency_ms=latency_ms,
        finish_reason=response.finish_reason.value if response.finish_reason else None,
        tool_calls=len(response.tool_calls),
    )


def log_chat_error(*, logger: logging.Logger, ctx: LogContext, exc: ProviderError) -> None:
    """Emit the normalized ``chat.error`` event before ``exc`` propagates."""
    normalized_log_event(
        logger,
        "chat.error",
        ctx,
        phase="finalize",
        attempt=None,
        emitted=None,
        tokens=None,
        error_code=exc.code.value,
        level=logging.ERROR,
        error=exc.message,
        retryable=exc.retryable,
    )


__all__ = [
    "decode_batch_response",
    "log_chat_end",
    "log_chat_error",
]
