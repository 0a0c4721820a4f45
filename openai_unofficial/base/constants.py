"""Base shared constants for the adapter.

Central location to avoid scattering magic strings and default values.

Security
--------
This module contains only generic identifiers and defaults. There are no
credentials or tokens embedded.
"""
from __future__ import annotations

# Provider identity reported in metadata, errors and logs
PROVIDER_NAME = "openai-unofficial"
PROVIDER_VERSION = "0.1.0"
# Extension API version advertised to hosts
EXTENSION_API_VERSION = "0.3.0"
PROVIDER_DESCRIPTION = "OpenAI-compatible API provider - works with any OpenAI-compatible endpoint"

# Capabilities advertised to the host
PROVIDER_CAPABILITIES = ("provider",)

__all__ = [
    "PROVIDER_NAME",
    "PROVIDER_VERSION",
    "EXTENSION_API_VERSION",
    "PROVIDER_DESCRIPTION",
    "PROVIDER_CAPABILITIES",
]
