"""Unified timeout configuration for the adapter.

This module centralizes the timeout values used by the default HTTP
transport. The core (assembler, splitter, decoder, engine) never blocks and
has no timeouts of its own; hosts that bring their own transport apply their
own limits.

Key Components
--------------
TimeoutConfig
    Dataclass capturing normalized timeout values. Fields are intentionally
    explicit and stable.

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use and again only when one of them changes. Supported environment
    variables (all optional):
        PT_TIMEOUT_START_SECONDS
        PROVIDERS_START_TIMEOUT_SECONDS (compat alias)
        PT_TIMEOUT_STREAM_SECONDS
        PT_TIMEOUT_HTTP_SECONDS

Design Constraints
------------------
1. No hard-coded ad-hoc timeouts outside this module.
2. Avoid per-call env parsing (cache after first read).
3. Side-effect free access (apart from first load) for deterministic tests.
"""
from __future__ import annotations

from dataclasses import dataclass
import os


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        start_timeout_seconds: Timeout for connecting and receiving the
            response headers.
        stream_timeout_seconds: Idle timeout while waiting for the next chunk
            of a streamed response.
        http_timeout_seconds: Read timeout for non-streaming requests.
    """

    start_timeout_seconds: float = 30.0
    stream_timeout_seconds: float = 60.0
    http_timeout_seconds: float = 30.0


_ENV_VARS = (
    "PT_TIMEOUT_START_SECONDS",
    "PROVIDERS_START_TIMEOUT_SECONDS",
    "PT_TIMEOUT_STREAM_SECONDS",
    "PT_TIMEOUT_HTTP_SECONDS",
)

_CACHED: TimeoutConfig | None = None
# Track the last seen env overrides to allow tests to adjust at runtime
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float | None) -> float | None:
    """Parse an environment variable as a float with a fallback default.

    Returns the default if the variable is unset, not a valid float, or not
    positive.
    """
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
        return val if val > 0 else default
    except ValueError:
        return default


def get_timeout_config() -> TimeoutConfig:
    """Return process-cached `TimeoutConfig` instance.

    Environment precedence for start timeout:
        1. PT_TIMEOUT_START_SECONDS
        2. PROVIDERS_START_TIMEOUT_SECONDS
    Other fields use their PT_* variable if present.
    """
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - intentional, documented module cache
    cur_guard = "/".join(os.getenv(name, "") for name in _ENV_VARS)
    if _CACHED is not None and _ENV_GUARD == cur_guard:
        return _CACHED

    start = _parse_env_float(
        "PT_TIMEOUT_START_SECONDS",
        _parse_env_float("PROVIDERS_START_TIMEOUT_SECONDS", 30.0),
    )
    stream = _parse_env_float("PT_TIMEOUT_STREAM_SECONDS", 60.0)
    http = _parse_env_float("PT_TIMEOUT_HTTP_SECONDS", 30.0)

    _CACHED = TimeoutConfig(
        start_timeout_seconds=float(start),
        stream_timeout_seconds=float(stream),
        http_timeout_seconds=float(http),
    )
    _ENV_GUARD = cur_guard
    return _CACHED


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
]
