"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `openai_unofficial.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .config_error import ConfigError
from .validation_error import ValidationError
from .decode_error import DecodeError
from .tool_arguments_corrupt_error import ToolArgumentsCorruptError
from .incomplete_stream_error import IncompleteStreamError
from .classification import classify_exception

__all__ = [
    "ErrorCode",
    "ProviderError",
    "ConfigError",
    "ValidationError",
    "DecodeError",
    "ToolArgumentsCorruptError",
    "IncompleteStreamError",
    "classify_exception",
]
