"""Endpoint configuration error (fatal, raised before any request is sent)."""
from __future__ import annotations

from dataclasses import dataclass, field

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class ConfigError(ProviderError):
    """Missing or invalid endpoint configuration (API key, base URL, model)."""

    code: ErrorCode = field(default=ErrorCode.CONFIG, init=False)
    message: str = "invalid endpoint configuration"


__all__ = ["ConfigError"]
