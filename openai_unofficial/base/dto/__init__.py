"""DTO validation package for host-supplied payloads."""

from .chat import Role, MessageDTO, ToolSpecDTO, ChatRequestDTO

__all__ = [
    "Role",
    "MessageDTO",
    "ToolSpecDTO",
    "ChatRequestDTO",
]
