"""Raw SSE frame produced by the frame splitter."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class WireFrame:
    """One complete server-sent event.

    Attributes:
        data: Joined ``data:`` payload bytes.
        event: Value of the ``event:`` field, when the server sent one.
    """

    data: bytes
    event: Optional[str] = None


__all__ = ["WireFrame"]
