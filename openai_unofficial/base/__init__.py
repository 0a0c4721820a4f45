"""
Adapter Base Package

Exports the provider-agnostic building blocks of the adapter:
- Models (DTOs): immutable request/response values
- Errors: the ``ProviderError`` taxonomy
- Streaming: SSE splitter, delta decoder, aggregation engine, emitter
- Timeouts: ``TimeoutConfig`` and ``get_timeout_config``
"""

from .models import (
    AggregatedResponse,
    ChatRequest,
    EndpointConfig,
    FinishReason,
    Message,
    Role,
    StreamSnapshot,
    ToolCall,
    ToolSpec,
)
from .timeouts import TimeoutConfig, get_timeout_config
from .streaming import (
    AggregationEngine,
    ResponseEmitter,
    SSEFrameSplitter,
    StreamMetrics,
    decode,
    finalize_stream,
)

__all__ = [
    # Models
    "Role",
    "Message",
    "ToolSpec",
    "ChatRequest",
    "EndpointConfig",
    "FinishReason",
    "ToolCall",
    "AggregatedResponse",
    "StreamSnapshot",
    # Timeouts
    "TimeoutConfig",
    "get_timeout_config",
    # Streaming
    "SSEFrameSplitter",
    "decode",
    "AggregationEngine",
    "ResponseEmitter",
    "StreamMetrics",
    "finalize_stream",
]
