"""Chat Completions wire-format modules.

- ``request_assembler``: ChatRequest + EndpointConfig -> PreparedRequest
- ``nonstream_helpers``: batch response decoding and chat.* logging
- ``host_json``: host JSON strings -> ChatRequest
- ``style_helpers``: message / tool_choice serialization

Re-exports provide a stable import surface for convenience.
"""

from .request_assembler import PreparedRequest, build
from .nonstream_helpers import decode_batch_response
from .host_json import chat_request_from_json
from .style_helpers import normalize_tool_choice, serialize_message

__all__ = [
    "PreparedRequest",
    "build",
    "decode_batch_response",
    "chat_request_from_json",
    "normalize_tool_choice",
    "serialize_message",
]
