"""Structured logging context object for the adapter.

This module defines :class:`LogContext`, a dataclass carrying the common
fields of every adapter log event (provider name, model, whether the request
streams, and a host-supplied request id used only for log correlation; it is
never sent to the endpoint). ``to_dict`` merges the ``extra`` mapping and
prunes ``None`` values for clean structured output.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for adapter logging events."""

    provider: Optional[str] = None
    model: Optional[str] = None
    stream: Optional[bool] = None
    request_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
