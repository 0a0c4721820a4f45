"""Stream interruption error (transport closed before a terminal signal)."""
from __future__ import annotations

from dataclasses import dataclass, field

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class IncompleteStreamError(ProviderError):
    """The stream ended without a usable completion signal.

    Surfaced alongside the partial result; never treated as success.
    """

    code: ErrorCode = field(default=ErrorCode.INCOMPLETE_STREAM, init=False)
    message: str = "stream ended before a terminal signal"
    retryable: bool = True


__all__ = ["IncompleteStreamError"]
