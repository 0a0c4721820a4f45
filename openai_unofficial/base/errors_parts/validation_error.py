"""Caller input validation error (fatal, no request is sent)."""
from __future__ import annotations

from dataclasses import dataclass, field

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class ValidationError(ProviderError):
    """Malformed chat request supplied by the host (e.g. no messages)."""

    code: ErrorCode = field(default=ErrorCode.VALIDATION, init=False)
    message: str = "invalid chat request"


__all__ = ["ValidationError"]
