"""Unified provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``openai_unofficial.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.config_error import ConfigError
from .errors_parts.validation_error import ValidationError
from .errors_parts.decode_error import DecodeError
from .errors_parts.tool_arguments_corrupt_error import ToolArgumentsCorruptError
from .errors_parts.incomplete_stream_error import IncompleteStreamError
from .errors_parts.classification import RETRYABLE_CODES, classify_exception, to_provider_error

__all__ = [
    "ErrorCode",
    "ProviderError",
    "ConfigError",
    "ValidationError",
    "DecodeError",
    "ToolArgumentsCorruptError",
    "IncompleteStreamError",
    "classify_exception",
    "to_provider_error",
    "RETRYABLE_CODES",
]
