"""
Provider-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``openai_unofficial.base.models_parts``.
"""

from .models_parts.message import Message, Role
from .models_parts.tool_spec import ToolSpec
from .models_parts.chat_request import ChatRequest
from .models_parts.endpoint_config import EndpointConfig
from .models_parts.finish_reason import FinishReason, parse_finish_reason
from .models_parts.tool_call import ToolCall
from .models_parts.aggregated_response import AggregatedResponse
from .models_parts.stream_snapshot import StreamSnapshot

__all__ = [
    "Message",
    "Role",
    "ToolSpec",
    "ChatRequest",
    "EndpointConfig",
    "FinishReason",
    "parse_finish_reason",
    "ToolCall",
    "AggregatedResponse",
    "StreamSnapshot",
]
