"""Finalize stream helper.

Emits the single consolidated ``stream.finalize`` log record once a streamed
response reaches its terminal snapshot.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..logging import LogContext, normalized_log_event
from ..models import AggregatedResponse
from .streaming_metrics import StreamMetrics, validate_token_usage


def finalize_stream(
    *,
    logger: logging.Logger,
    ctx: Optional[LogContext],
    metrics: StreamMetrics,
    response: AggregatedResponse,
) -> None:
    """Log metrics and outcome of a finished stream."""
    error = response.error
    error_code: Optional[str] = error.code.value if error is not None else None

    if metrics.tokens is not None:
        tokens_payload: Optional[Dict[str, Any]] = metrics.tokens
    else:
        tokens_payload = None
    usage_ok, usage_problem = validate_token_usage(metrics)

    normalized_log_event(
        logger,
        "stream.finalize",
        ctx,
        phase="finalize",
        attempt=None,
        emitted=metrics.emitted > 0,
        tokens=tokens_payload,
        error_code=error_code,
        level=logging.WARNING if error is not None else logging.INFO,
        emitted_count=metrics.emitted,
        frames=metrics.frames,
        time_to_first_token_ms=metrics.time_to_first_token_ms,
        total_duration_ms=metrics.total_duration_ms,
        finish_reason=response.finish_reason.value if response.finish_reason else None,
        tool_calls=len(response.tool_calls),
        pending_tool_calls=len(response.pending_tool_calls),
        errors=len(response.errors),
        error=error.message if error is not None else None,
        usage_problem=None if usage_ok else usage_problem,
    )


__all__ = ["finalize_stream"]
