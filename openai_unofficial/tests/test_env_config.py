from __future__ import annotations

import json

import pytest

from openai_unofficial.config import (
    DEFAULTS,
    get_config_dict,
    get_endpoint_config,
    get_model,
    reset_config_cache,
)
from openai_unofficial.config.env import ENV_ALIASES, is_placeholder, resolve_env_value


def test_env_aliases_prefer_adapter_specific_names():
    assert ENV_ALIASES["api_key"][0] == "OPENAI_UNOFFICIAL_API_KEY"  # nosec B101 - asserts are appropriate in unit tests
    assert "OPENAI_API_KEY" in ENV_ALIASES["api_key"]  # nosec B101 - asserts are appropriate in unit tests


def test_is_placeholder_heuristics():
    assert is_placeholder("placeholder-value")  # nosec B101 - asserts are appropriate in unit tests
    assert is_placeholder("ChangeMe123")  # nosec B101 - asserts are appropriate in unit tests
    assert is_placeholder("example-key")  # nosec B101 - asserts are appropriate in unit tests
    assert is_placeholder("test_token")  # nosec B101 - asserts are appropriate in unit tests
    assert not is_placeholder("sk-real-value")  # nosec B101 - asserts are appropriate in unit tests
    assert not is_placeholder(None)  # nosec B101 - asserts are appropriate in unit tests


def test_resolve_env_value_prefers_specific_name(monkeypatch):
    monkeypatch.setenv("OPENAI_UNOFFICIAL_API_KEY", "sk-specific")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-generic")
    assert resolve_env_value("api_key") == ("sk-specific", "OPENAI_UNOFFICIAL_API_KEY")  # nosec B101 - asserts are appropriate in unit tests


def test_placeholder_key_falls_through_to_next_alias(monkeypatch):
    monkeypatch.setenv("OPENAI_UNOFFICIAL_API_KEY", "changeme")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-generic")
    assert resolve_env_value("api_key") == ("sk-generic", "OPENAI_API_KEY")  # nosec B101 - asserts are appropriate in unit tests


def test_base_url_is_never_treated_as_placeholder(monkeypatch):
    monkeypatch.setenv("OPENAI_BASE_URL", "https://llm.example.com/v1")
    assert get_endpoint_config().base_url == "https://llm.example.com/v1"  # nosec B101 - asserts are appropriate in unit tests


def test_defaults_without_any_source():
    cfg = get_endpoint_config()
    assert cfg.api_key is None  # nosec B101 - asserts are appropriate in unit tests
    assert cfg.base_url == DEFAULTS["base_url"]  # nosec B101 - asserts are appropriate in unit tests
    assert cfg.default_model == DEFAULTS["default_model"] == get_model()  # nosec B101 - asserts are appropriate in unit tests


def test_merge_order_file_env_overrides(monkeypatch, tmp_path):
    path = tmp_path / "providers.json"
    path.write_text(
        json.dumps({"openai_unofficial": {"model": "file-model", "base_url": "http://file/v1", "api_key": "sk-file"}}),
        encoding="utf-8",
    )
    monkeypatch.setenv("PROVIDERS_CONFIG_FILE", str(path))
    reset_config_cache()
    assert get_config_dict()["default_model"] == "file-model"  # nosec B101 - asserts are appropriate in unit tests

    monkeypatch.setenv("OPENAI_UNOFFICIAL_MODEL", "env-model")
    cfg = get_endpoint_config()
    assert (cfg.default_model, cfg.base_url, cfg.api_key) == ("env-model", "http://file/v1", "sk-file")  # nosec B101 - asserts are appropriate in unit tests

    cfg = get_endpoint_config({"model": "override-model", "base_url": None})
    assert cfg.default_model == "override-model" and cfg.base_url == "http://file/v1"  # nosec B101 - asserts are appropriate in unit tests


def test_yaml_config_file_with_env_expansion(monkeypatch, tmp_path):
    pytest.importorskip("yaml")
    path = tmp_path / "providers.yaml"
    path.write_text(
        "openai_unofficial:\n  base_url: http://localhost:8000/v1\n  api_key: ${LOCAL_LLM_KEY}\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("PROVIDERS_CONFIG_FILE", str(path))
    monkeypatch.setenv("LOCAL_LLM_KEY", "sk-local")
    reset_config_cache()
    cfg = get_endpoint_config()
    assert cfg.base_url == "http://localhost:8000/v1" and cfg.api_key == "sk-local"  # nosec B101 - asserts are appropriate in unit tests


def test_missing_config_file_is_ignored(monkeypatch, tmp_path):
    monkeypatch.setenv("PROVIDERS_CONFIG_FILE", str(tmp_path / "absent.json"))
    reset_config_cache()
    assert get_endpoint_config().base_url == DEFAULTS["base_url"]  # nosec B101 - asserts are appropriate in unit tests


def test_dotenv_file_supplies_values(monkeypatch, tmp_path):
    dotenv = tmp_path / ".env"
    dotenv.write_text("# local\nexport OPENAI_UNOFFICIAL_API_KEY='sk-dotenv'\n", encoding="utf-8")
    monkeypatch.setenv("DOTENV_FILE", str(dotenv))
    # Registered so monkeypatch removes the value the loader writes.
    monkeypatch.setenv("OPENAI_UNOFFICIAL_API_KEY", "placeholder")
    reset_config_cache()
    assert get_endpoint_config().api_key == "sk-dotenv"  # nosec B101 - asserts are appropriate in unit tests


def test_api_key_not_in_repr():
    cfg = get_endpoint_config({"api_key": "sk-secret"})
    assert "sk-secret" not in repr(cfg)  # nosec B101 - asserts are appropriate in unit tests
