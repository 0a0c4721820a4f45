"""Pytest configuration for the adapter test suite.

Isolates every test from the developer's environment (API keys, config files,
``.env``) and offers a capture of the structured log events emitted under the
shared ``openai_unofficial`` logger, which does not propagate to the root
logger.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

import pytest

from openai_unofficial.base.http import close_all_clients
from openai_unofficial.base.logging import BASE_LOGGER_NAME, get_logger
from openai_unofficial.base.models import EndpointConfig
from openai_unofficial.config import reset_config_cache
from openai_unofficial.config.env import ENV_ALIASES


class LogCapture:
    """Records emitted by adapter loggers during one test."""

    def __init__(self) -> None:
        self.records: List[logging.LogRecord] = []

    def entries(self, name: Optional[str] = None) -> List[Tuple[int, Dict[str, Any]]]:
        """Return ``(level, payload)`` for each structured event, optionally filtered by name."""
        out: List[Tuple[int, Dict[str, Any]]] = []
        for record in self.records:
            try:
                payload = json.loads(record.getMessage())
            except ValueError:
                continue
            if not isinstance(payload, dict):
                continue
            if name is None or payload.get("event") == name:
                out.append((record.levelno, payload))
        return out

    def events(self, name: Optional[str] = None) -> List[Dict[str, Any]]:
        return [payload for _, payload in self.entries(name)]


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Clear endpoint env vars and config file state around each test."""
    for names in ENV_ALIASES.values():
        for name in names:
            monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("PROVIDERS_CONFIG_FILE", raising=False)
    monkeypatch.delenv("OPENAI_UNOFFICIAL_LOG_LEVEL", raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture()
def log_capture() -> Iterator[LogCapture]:
    capture = LogCapture()
    handler = logging.Handler()
    handler.emit = capture.records.append  # type: ignore[method-assign]
    # Initialize the base logger first so its setup does not drop our handler.
    base = get_logger(BASE_LOGGER_NAME)
    base.addHandler(handler)
    try:
        yield capture
    finally:
        base.removeHandler(handler)


@pytest.fixture()
def endpoint() -> EndpointConfig:
    return EndpointConfig(api_key="sk-unit-key", base_url="https://llm.local/v1/", default_model="gpt-unit")


@pytest.fixture(scope="session", autouse=True)
def close_clients_after_session() -> Iterator[None]:
    """Close pooled httpx clients once the session ends."""
    yield
    close_all_clients()
