"""Unit tests for the Chat Completions request assembler.

Covers:
- The closed header set (``Accept`` only when streaming).
- Compact, ordered JSON bodies and message serialization rules.
- ``tool_choice`` normalization.
- Configuration and validation failures raised before anything is built.
"""
from __future__ import annotations

import json

import pytest

from openai_unofficial.base.errors import ConfigError, ErrorCode, ValidationError
from openai_unofficial.base.models import ChatRequest, EndpointConfig, Message, ToolSpec
from openai_unofficial.base.openai_style_parts import build, normalize_tool_choice, serialize_message
from openai_unofficial.base.openai_style_parts.request_assembler import resolve_model


WEATHER = ToolSpec(
    name="get_weather",
    description="Current weather",
    parameters={"type": "object", "properties": {"city": {"type": "string"}}, "required": ["city"]},
)


def _request(**kwargs):
    kwargs.setdefault("messages", (Message(role="user", content="hi"),))
    return ChatRequest(**kwargs)


def test_non_streaming_headers_are_exactly_auth_and_content_type(endpoint):
    prepared = build(_request(), endpoint)
    assert prepared.headers == {  # nosec B101 - asserts are appropriate in unit tests
        "Authorization": "Bearer sk-unit-key",
        "Content-Type": "application/json",
    }


def test_streaming_adds_accept_and_stream_flag(endpoint):
    prepared = build(_request(stream=True), endpoint)
    assert prepared.headers == {  # nosec B101 - asserts are appropriate in unit tests
        "Authorization": "Bearer sk-unit-key",
        "Content-Type": "application/json",
        "Accept": "text/event-stream",
    }
    assert json.loads(prepared.body)["stream"] is True  # nosec B101 - asserts are appropriate in unit tests


def test_url_joins_base_without_double_slash(endpoint):
    assert build(_request(), endpoint).url == "https://llm.local/v1/chat/completions"  # nosec B101 - asserts are appropriate in unit tests


def test_minimal_body_is_compact_and_ordered(endpoint):
    prepared = build(_request(), endpoint)
    assert prepared.body == b'{"model":"gpt-unit","messages":[{"role":"user","content":"hi"}]}'  # nosec B101 - asserts are appropriate in unit tests


def test_body_with_tools_choice_and_sampling(endpoint):
    request = _request(
        model="gpt-4o",
        tools=(WEATHER,),
        tool_choice={"Specific": "get_weather"},
        sampling={"temperature": 0.2, "max_tokens": 50, "top_p": None, "model": "hijack", "stream": False},
    )
    body = json.loads(build(request, endpoint).body)
    assert list(body) == ["model", "messages", "tools", "tool_choice", "temperature", "max_tokens"]  # nosec B101 - asserts are appropriate in unit tests
    assert body["model"] == "gpt-4o"  # nosec B101 - asserts are appropriate in unit tests
    assert body["tools"] == [  # nosec B101 - asserts are appropriate in unit tests
        {
            "type": "function",
            "function": {
                "name": "get_weather",
                "description": "Current weather",
                "parameters": WEATHER.parameters,
            },
        }
    ]
    assert body["tool_choice"] == {"type": "function", "function": {"name": "get_weather"}}  # nosec B101 - asserts are appropriate in unit tests


def test_unicode_is_sent_as_utf8(endpoint):
    prepared = build(_request(messages=(Message(role="user", content="héllo ✓"),)), endpoint)
    assert "héllo ✓".encode("utf-8") in prepared.body  # nosec B101 - asserts are appropriate in unit tests


def test_message_serialization_rules():
    call = {"id": "call_1", "type": "function", "function": {"name": "f", "arguments": "{}"}}
    assert serialize_message(Message(role="system", content="be brief")) == {"role": "system", "content": "be brief"}  # nosec B101 - asserts are appropriate in unit tests
    assert serialize_message(Message(role="assistant", content="", tool_calls=(call,))) == {  # nosec B101 - asserts are appropriate in unit tests
        "role": "assistant",
        "content": None,
        "tool_calls": [call],
    }
    assert serialize_message(Message(role="tool", content="42", tool_call_id="call_1")) == {  # nosec B101 - asserts are appropriate in unit tests
        "role": "tool",
        "tool_call_id": "call_1",
        "content": "42",
    }
    assert serialize_message(Message(role="assistant", content=None)) == {"role": "assistant", "content": ""}  # nosec B101 - asserts are appropriate in unit tests


@pytest.mark.parametrize(
    "choice, expected",
    [
        ("auto", "auto"),
        ("Required", "required"),
        (" NONE ", "none"),
        ({"Specific": "f"}, {"type": "function", "function": {"name": "f"}}),
        ({"type": "function", "function": {"name": "g"}}, {"type": "function", "function": {"name": "g"}}),
    ],
)
def test_tool_choice_normalization(choice, expected):
    assert normalize_tool_choice(choice) == expected  # nosec B101 - asserts are appropriate in unit tests


@pytest.mark.parametrize("choice", ["sometimes", {"Specific": ""}, {"name": "f"}, 3])
def test_unsupported_tool_choice_raises_validation_error(choice):
    with pytest.raises(ValidationError):
        normalize_tool_choice(choice)


@pytest.mark.parametrize(
    "config",
    [
        EndpointConfig(api_key=None, base_url="https://llm.local/v1", default_model="m"),
        EndpointConfig(api_key="   ", base_url="https://llm.local/v1", default_model="m"),
        EndpointConfig(api_key="sk-x", base_url="", default_model="m"),
        EndpointConfig(api_key="sk-x", base_url="https://llm.local/v1", default_model=None),
    ],
)
def test_missing_configuration_raises_config_error(config, log_capture):
    with pytest.raises(ConfigError) as info:
        build(_request(), config)
    assert info.value.code is ErrorCode.CONFIG  # nosec B101 - asserts are appropriate in unit tests
    assert log_capture.events("request.build") == []  # nosec B101 - asserts are appropriate in unit tests


def test_config_error_precedes_validation_error():
    with pytest.raises(ConfigError):
        build(ChatRequest(messages=()), EndpointConfig())


def test_empty_messages_raise_validation_error(endpoint):
    with pytest.raises(ValidationError) as info:
        build(ChatRequest(messages=()), endpoint)
    assert info.value.code is ErrorCode.VALIDATION  # nosec B101 - asserts are appropriate in unit tests


def test_resolve_model_prefers_request_model(endpoint):
    assert resolve_model(_request(model="gpt-x"), endpoint) == "gpt-x"  # nosec B101 - asserts are appropriate in unit tests
    assert resolve_model(_request(model="  "), endpoint) == "gpt-unit"  # nosec B101 - asserts are appropriate in unit tests


def test_build_logs_request_event_without_secrets(endpoint, log_capture):
    build(_request(), endpoint)
    (event,) = log_capture.events("request.build")
    assert event["url"].endswith("/chat/completions") and event["messages"] == 1  # nosec B101 - asserts are appropriate in unit tests
    assert "sk-unit-key" not in json.dumps(event)  # nosec B101 - asserts are appropriate in unit tests


def test_request_is_not_mutated(endpoint):
    request = _request(sampling={"temperature": 1.0})
    before = (request.messages, dict(request.sampling))
    build(request, endpoint)
    build(request, endpoint)
    assert (request.messages, dict(request.sampling)) == before  # nosec B101 - asserts are appropriate in unit tests
