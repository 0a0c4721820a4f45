"""Unified configuration layer for the adapter.

Goals
-----
* Centralize defaults (model, base URL).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by PROVIDERS_CONFIG_FILE
    3. Environment variables (OPENAI_UNOFFICIAL_* first, then OPENAI_*)
    4. In-code overrides passed to the helper
* Provide a single call site: ``get_endpoint_config(overrides)``.
* Keep zero hard dependency on PyYAML (load YAML only if available).

Environment Variable Conventions
--------------------------------
OPENAI_UNOFFICIAL_API_KEY / OPENAI_API_KEY
OPENAI_UNOFFICIAL_BASE_URL / OPENAI_BASE_URL
OPENAI_UNOFFICIAL_MODEL / OPENAI_MODEL

External Config File (Optional)
-------------------------------
If PROVIDERS_CONFIG_FILE is set to a path, we attempt to load JSON first.
If that fails and PyYAML is installed, attempt YAML. ``${VAR}`` references in
string values are expanded from the environment. Structure example:

```
openai_unofficial:
  model: gpt-4o-mini
  base_url: http://localhost:8000/v1
  api_key: ${LOCAL_LLM_KEY}
```

Public API
----------
* get_config_dict(overrides: dict | None = None) -> dict
* get_endpoint_config(overrides: dict | None = None) -> EndpointConfig
* get_model() -> str | None
* reset_config_cache() -> None
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional
import json
import os

from ..base.models import EndpointConfig
from .env import is_placeholder, resolve_env_value
from .defaults import (
    CONFIG_FILE_ENV,
    CONFIG_SECTION,
    DOTENV_FILE_ENV,
    OPENAI_UNOFFICIAL_DEFAULT_BASE_URL,
    OPENAI_UNOFFICIAL_DEFAULT_MODEL,
)

try:  # Optional YAML support
    import yaml  # type: ignore
except ImportError:  # pragma: no cover
    yaml = None  # type: ignore


# -------------------- Defaults --------------------

DEFAULTS: Dict[str, Any] = {
    "default_model": OPENAI_UNOFFICIAL_DEFAULT_MODEL,
    "base_url": OPENAI_UNOFFICIAL_DEFAULT_BASE_URL,
}

# File keys accepted for each EndpointConfig field
FILE_FIELD_MAP = {
    "api_key": "api_key",  # pragma: allowlist secret - field name, not a secret
    "base_url": "base_url",
    "model": "default_model",
    "default_model": "default_model",
}


_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Lightweight .env loader (no external dependency).

    Parses KEY=VALUE lines, ignoring comments and blank lines. Safe to call
    multiple times. Overrides existing environment variables only if their
    current values appear to be placeholders (e.g., contain 'placeholder').
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv(DOTENV_FILE_ENV, ".env")
    if not os.path.isfile(path):  # no file present
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                if line.startswith("export "):
                    line = line[len("export "):]
                if "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def _parse_config_text(text: str) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        if yaml is None:
            return {}
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError:
            return {}
    return data if isinstance(data, dict) else {}


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv(CONFIG_FILE_ENV)
    if not path:
        _FILE_CACHE = {}
        return _FILE_CACHE
    p = Path(path)
    if not p.exists():
        _FILE_CACHE = {}
        return _FILE_CACHE
    _FILE_CACHE = _parse_config_text(p.read_text(encoding="utf-8"))
    return _FILE_CACHE


def _file_section() -> Dict[str, Any]:
    section = _load_external_config().get(CONFIG_SECTION)
    if not isinstance(section, dict):
        return {}
    out: Dict[str, Any] = {}
    for key, field in FILE_FIELD_MAP.items():
        val = section.get(key)
        if isinstance(val, str):
            val = os.path.expandvars(val)
        if val:
            out[field] = val
    return out


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field in ("api_key", "base_url", "default_model"):
        val, _ = resolve_env_value(field)
        if val is not None:
            out[field] = val
    return out


def get_config_dict(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged configuration mapping.

    Merge order (later wins): defaults -> external config -> env vars -> overrides
    """
    # Ensure .env is loaded before reading env vars
    _load_dotenv_once()
    cfg: Dict[str, Any] = dict(DEFAULTS)

    # 1. External config file section
    cfg |= _file_section()

    # 2. Env overrides
    cfg |= _env_overrides()

    # 3. Explicit overrides arg; ``model`` is accepted as an alias
    if overrides:
        for k, v in overrides.items():
            if v is None:
                continue
            cfg[FILE_FIELD_MAP.get(k, k)] = v

    return cfg


def get_endpoint_config(overrides: Optional[Dict[str, Any]] = None) -> EndpointConfig:
    """Return the immutable :class:`EndpointConfig` for the adapter.

    Missing values are left as ``None``; the request assembler reports them
    as ``ConfigError`` when a request is built.
    """
    cfg = get_config_dict(overrides)
    return EndpointConfig(
        api_key=cfg.get("api_key"),
        base_url=cfg.get("base_url"),
        default_model=cfg.get("default_model"),
    )


def get_model() -> Optional[str]:
    return get_config_dict().get("default_model")


def reset_config_cache() -> None:
    """Forget the cached config file and dotenv state (tests, reloads)."""
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


__all__ = [
    "get_config_dict",
    "get_endpoint_config",
    "get_model",
    "reset_config_cache",
    "DEFAULTS",
]
