"""Streaming package for the adapter.

Exposes the SSE frame splitter, delta decoder, aggregation engine, response
emitter and metrics helpers under a single namespace.
"""

from .deltas import (
    ContentDelta,
    ToolCallDelta,
    FinishDelta,
    UsageDelta,
    StreamEnd,
    STREAM_END,
    Delta,
)
from .wire_frame import WireFrame
from .sse_splitter import SSEFrameSplitter, DONE_MARKER
from .delta_decoder import decode
from .tool_call_accumulator import ToolCallAccumulator, validate_arguments
from .aggregation import AggregationEngine
from .response_emitter import ResponseEmitter
from .streaming_metrics import StreamMetrics, apply_token_usage, build_token_usage, validate_token_usage
from .streaming_finalize import finalize_stream

__all__ = [
    "ContentDelta",
    "ToolCallDelta",
    "FinishDelta",
    "UsageDelta",
    "StreamEnd",
    "STREAM_END",
    "Delta",
    "WireFrame",
    "SSEFrameSplitter",
    "DONE_MARKER",
    "decode",
    "ToolCallAccumulator",
    "validate_arguments",
    "AggregationEngine",
    "ResponseEmitter",
    "StreamMetrics",
    "apply_token_usage",
    "build_token_usage",
    "validate_token_usage",
    "finalize_stream",
]
