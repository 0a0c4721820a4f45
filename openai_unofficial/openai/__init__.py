"""
OpenAI-compatible provider package.

Exports:
- OpenAIUnofficialProvider: facade over the assembler, transport and decoders
"""

from .client import OpenAIUnofficialProvider

__all__ = ["OpenAIUnofficialProvider"]
