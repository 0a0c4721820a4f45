"""openai_unofficial.config.env
=============================

Centralized environment variable mapping for endpoint settings.

Purpose
-------
- Provide a single source of truth mapping each configuration field to its
  environment variable names, in priority order.
- Offer small lookup helpers used by :func:`get_endpoint_config`.

Design Notes
------------
- Adapter-specific names (``OPENAI_UNOFFICIAL_*``) come first so a host can
  point this adapter at a different endpoint than its other OpenAI clients;
  the conventional ``OPENAI_*`` names are accepted as fallbacks.
- Placeholder values (``changeme``, ``your-key-placeholder``...) are treated
  as unset.

Failure Modes
-------------
- Helpers never raise on unset variables; callers decide how to proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

# Config field -> ordered tuple of env var names (highest priority first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "api_key": ("OPENAI_UNOFFICIAL_API_KEY", "OPENAI_API_KEY"),  # pragma: allowlist secret - env var names
    "base_url": ("OPENAI_UNOFFICIAL_BASE_URL", "OPENAI_BASE_URL"),
    "default_model": ("OPENAI_UNOFFICIAL_MODEL", "OPENAI_MODEL"),
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. The check is case-insensitive and resilient to surrounding spaces.

    Parameters
    ----------
    val: Optional[str]
        The value to evaluate.

    Returns
    -------
    bool
        True when the value is considered a placeholder or test token.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def get_env_var_candidates(field: str) -> Iterable[str]:
    """Yield acceptable environment variable names for a config field."""
    yield from ENV_ALIASES.get(field, ())


def resolve_env_value(field: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve a config field from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        (value, env_var_used) for the first non-empty, non-placeholder value;
        (None, None) when nothing usable is set.
    """
    for name in get_env_var_candidates(field):
        val = os.environ.get(name)
        if val and val.strip() and not (field == "api_key" and is_placeholder(val)):
            return val.strip(), name
    return None, None


__all__ = [
    "ENV_ALIASES",
    "is_placeholder",
    "get_env_var_candidates",
    "resolve_env_value",
]
