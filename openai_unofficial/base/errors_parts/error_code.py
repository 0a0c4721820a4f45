"""
Normalized provider error codes (taxonomy).

Defines the `ErrorCode` enumeration used by the adapter, the stream decoder and
the transport layer. Values are lowercase snake_case and are considered a
stable public contract for logging and host-side handling.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    # Adapter-level failures raised before any request is sent.
    CONFIG = "config"
    VALIDATION = "validation"
    # Stream decoding failures.
    DECODE = "decode"
    TOOL_ARGUMENTS_CORRUPT = "tool_arguments_corrupt"
    INCOMPLETE_STREAM = "incomplete_stream"
    # Transport / endpoint failures (classified from HTTP status or exception).
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    TRANSIENT = "transient"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    UNSUPPORTED = "unsupported"
    INTERNAL = "internal"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
