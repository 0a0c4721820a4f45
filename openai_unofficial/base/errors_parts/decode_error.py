"""
Frame decode error.

Raised by the delta decoder when a single SSE payload (or a batch response
body) is not a JSON object of the expected shape. The aggregation engine
records it per frame and only promotes it to a fatal error when it happens on
the first frame of a stream.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class DecodeError(ProviderError):
    """A payload could not be decoded into deltas.

    Attributes:
        payload: The raw bytes that failed to decode.
    """

    code: ErrorCode = field(default=ErrorCode.DECODE, init=False)
    message: str = "malformed stream payload"
    payload: bytes = b""


__all__ = ["DecodeError"]
