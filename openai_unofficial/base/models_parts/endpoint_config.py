"""
Endpoint configuration value consumed by the request assembler.

Values are loaded by :func:`openai_unofficial.config.get_endpoint_config` (or
supplied directly by the host) and treated as opaque here.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class EndpointConfig:
    """Connection settings for one OpenAI-compatible endpoint.

    Attributes:
        api_key: Bearer token sent in the ``Authorization`` header.
        base_url: API root, e.g. ``https://api.openai.com/v1``.
        default_model: Model used when a request does not name one.
    """

    api_key: Optional[str] = field(default=None, repr=False)
    base_url: Optional[str] = None
    default_model: Optional[str] = None

    def chat_completions_url(self) -> str:
        """Return ``{base_url}/chat/completions`` without doubled slashes."""
        return f"{(self.base_url or '').rstrip('/')}/chat/completions"


__all__ = ["EndpointConfig"]
