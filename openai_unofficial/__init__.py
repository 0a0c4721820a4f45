"""openai_unofficial package

OpenAI-compatible Chat Completions adapter.

Purpose:
    Translate a normalized chat request into an OpenAI ``/chat/completions``
    call with a minimal header set and reassemble the response, including
    incrementally streamed text and tool calls, into one consolidated result.
    Works with any endpoint speaking the Chat Completions protocol.

Public API (re-exported):
    - Version: ``__version__``
    - Facade: :class:`OpenAIUnofficialProvider`
    - Models: :class:`ChatRequest`, :class:`Message`, :class:`ToolSpec`,
      :class:`EndpointConfig`, :class:`AggregatedResponse`,
      :class:`StreamSnapshot`, :class:`ToolCall`, :class:`FinishReason`
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode` and the domain
      subclasses
    - Helpers: :func:`create`, :func:`chat_request_from_json`,
      :func:`get_endpoint_config`
"""

from typing import Any, Dict, Optional

from .base.errors import (
    ProviderError,
    ErrorCode,
    ConfigError,
    ValidationError,
    DecodeError,
    ToolArgumentsCorruptError,
    IncompleteStreamError,
)
from .base.models import (
    AggregatedResponse,
    ChatRequest,
    EndpointConfig,
    FinishReason,
    Message,
    StreamSnapshot,
    ToolCall,
    ToolSpec,
)
from .base.openai_style_parts import chat_request_from_json
from .base.http import Transport
from .config import get_endpoint_config
from .openai import OpenAIUnofficialProvider

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Facade
    "OpenAIUnofficialProvider",
    "create",
    # Models
    "AggregatedResponse",
    "ChatRequest",
    "EndpointConfig",
    "FinishReason",
    "Message",
    "StreamSnapshot",
    "ToolCall",
    "ToolSpec",
    # Exceptions
    "ProviderError",
    "ErrorCode",
    "ConfigError",
    "ValidationError",
    "DecodeError",
    "ToolArgumentsCorruptError",
    "IncompleteStreamError",
    # Helpers
    "chat_request_from_json",
    "get_endpoint_config",
    "Transport",
]


def create(
    *,
    config: Optional[EndpointConfig] = None,
    transport: Optional[Transport] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> OpenAIUnofficialProvider:
    """Instantiate the provider facade.

    Parameters
    ----------
    config:
        Explicit endpoint settings. When omitted they are loaded with
        :func:`get_endpoint_config`, applying ``overrides`` last.
    transport:
        Optional byte transport; the pooled ``httpx`` transport otherwise.
    overrides:
        In-code config values (``api_key``, ``base_url``, ``model``).

    Returns
    -------
    OpenAIUnofficialProvider
    """
    if config is None:
        config = get_endpoint_config(overrides)
    return OpenAIUnofficialProvider(config=config, transport=transport)
