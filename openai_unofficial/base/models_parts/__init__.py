"""Models parts package public surface.

Re-exports individual DTOs so callers can import from
`openai_unofficial.base.models_parts` if needed, while
`openai_unofficial.base.models` remains the primary stable import path.
"""

from .message import Message, Role
from .tool_spec import ToolSpec
from .chat_request import ChatRequest
from .endpoint_config import EndpointConfig
from .finish_reason import FinishReason, parse_finish_reason
from .tool_call import ToolCall
from .aggregated_response import AggregatedResponse
from .stream_snapshot import StreamSnapshot

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
