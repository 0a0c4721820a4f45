"""openai_unofficial.config.defaults
=================================

Central place for small, stable default values used by the configuration
layer. These defaults can be overridden via environment variables, an
external configuration file or in-code overrides, but provide sensible
fallbacks for local development and tests.

This module intentionally avoids importing from other packages to prevent
circular dependencies. Only plain constants should live here.
"""

from __future__ import annotations

# Section name looked up in the external config file.
CONFIG_SECTION = "openai_unofficial"

# Endpoint defaults (any OpenAI-compatible server works; these target OpenAI).
OPENAI_UNOFFICIAL_DEFAULT_MODEL = "gpt-4o-mini"
OPENAI_UNOFFICIAL_DEFAULT_BASE_URL = "https://api.openai.com/v1"

# Environment variable naming the optional JSON/YAML config file.
CONFIG_FILE_ENV = "PROVIDERS_CONFIG_FILE"
# Environment variable naming the dotenv file (defaults to ./.env).
DOTENV_FILE_ENV = "DOTENV_FILE"
