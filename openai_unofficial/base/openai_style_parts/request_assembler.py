"""
Request assembler for the Chat Completions endpoint.

Turns a :class:`ChatRequest` plus an :class:`EndpointConfig` into the exact
HTTP request to send: URL, headers and a compact JSON body. The header set is
closed: ``Authorization``, ``Content-Type`` and, for streaming requests only,
``Accept: text/event-stream``. Nothing else is ever added (no request ids,
initiator or integration headers, no user agent).

Failure modes:
    - ``ConfigError`` when the API key or base URL is missing or blank
      (checked before anything else) or when no model can be resolved.
    - ``ValidationError`` for an empty message list or an unsupported
      ``tool_choice``.
"""

from __future__ import annotations

from typing import Any, Dict, NamedTuple, Optional

from ..constants import PROVIDER_NAME
from ..errors import ConfigError, ValidationError
from ..logging import LogContext, get_logger, log_event
from ..models import ChatRequest, EndpointConfig
from .style_helpers import dumps_compact, normalize_tool_choice, serialize_message


SSE_CONTENT_TYPE = "text/event-stream"
JSON_CONTENT_TYPE = "application/json"

# Body keys owned by the assembler; sampling entries never override them.
_RESERVED_KEYS = frozenset({"model", "messages", "tools", "tool_choice", "stream"})

_logger = get_logger("request")


class PreparedRequest(NamedTuple):
    """An HTTP POST ready for the transport."""

    url: str
    headers: Dict[str, str]
    body: bytes


def build_headers(api_key: str, *, stream: bool) -> Dict[str, str]:
    """Return the complete header set for one request."""
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": JSON_CONTENT_TYPE,
    }
    if stream:
        headers["Accept"] = SSE_CONTENT_TYPE
    return headers


def build_payload(request: ChatRequest, model: str) -> Dict[str, Any]:
    """Assemble the JSON body mapping for ``chat/completions``.

    Optional fields are only present when set; ``stream`` only ever appears
    as ``true``.
    """
    if not request.messages:
        raise ValidationError(message="request has no messages", model=model)
    payload: Dict[str, Any] = {
        "model": model,
        "messages": [serialize_message(m) for m in request.messages],
    }
    if request.tools:
        payload["tools"] = [tool.to_wire() for tool in request.tools]
    if request.tool_choice is not None:
        payload["tool_choice"] = normalize_tool_choice(request.tool_choice)
    if request.stream:
        payload["stream"] = True
    for key, value in request.sampling.items():
        if value is None or key in _RESERVED_KEYS:
            continue
        payload[key] = value
    return payload


def resolve_model(request: ChatRequest, config: EndpointConfig) -> str:
    """Return the request's model, falling back to the endpoint default."""
    for candidate in (request.model, config.default_model):
        if candidate and candidate.strip():
            return candidate
    raise ConfigError(message="no model named by the request or the endpoint configuration")


def check_endpoint(config: EndpointConfig) -> None:
    """Raise ``ConfigError`` unless both the API key and base URL are usable."""
    if not config.api_key or not config.api_key.strip():
        raise ConfigError(message="API key is not configured")
    if not config.base_url or not config.base_url.strip():
        raise ConfigError(message="base URL is not configured")


def build(request: ChatRequest, config: EndpointConfig, *, ctx: Optional[LogContext] = None) -> PreparedRequest:
    """Build the HTTP request for ``request`` against ``config``.

    Parameters:
        request: The normalized chat request.
        config: Endpoint settings (API key, base URL, default model).
        ctx: Optional log context for the ``request.build`` event.

    Returns:
        PreparedRequest with URL, headers and UTF-8 encoded body.

    Raises:
        ConfigError: missing credentials, base URL or model.
        ValidationError: empty messages or unsupported ``tool_choice``.
    """
    check_endpoint(config)
    model = resolve_model(request, config)
    payload = build_payload(request, model)
    body = dumps_compact(payload).encode("utf-8")
    headers = build_headers(config.api_key or "", stream=request.stream)
    url = config.chat_completions_url()
    log_event(
        _logger,
        "request.build",
        ctx or LogContext(provider=PROVIDER_NAME, model=model, stream=request.stream),
        url=url,
        messages=len(request.messages),
        tools=len(request.tools),
        body_bytes=len(body),
    )
    return PreparedRequest(url=url, headers=headers, body=body)


__all__ = [
    "PreparedRequest",
    "SSE_CONTENT_TYPE",
    "JSON_CONTENT_TYPE",
    "build",
    "build_headers",
    "build_payload",
    "resolve_model",
    "check_endpoint",
]
