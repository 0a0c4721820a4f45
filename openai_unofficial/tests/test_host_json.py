"""Tests for the host JSON boundary (pydantic DTO validation -> ChatRequest)."""
from __future__ import annotations

import json

import pytest

from openai_unofficial import chat_request_from_json
from openai_unofficial.base.dto import ChatRequestDTO, MessageDTO
from openai_unofficial.base.errors import ValidationError
from openai_unofficial.base.openai_style_parts import build


def test_basic_conversation_maps_to_chat_request():
    messages = json.dumps(
        [
            {"role": "system", "content": "be brief"},
            {"role": "user", "content": "hi", "id": "host-1", "timestamp": 123},
        ]
    )
    request = chat_request_from_json(messages, model="gpt-4o", max_tokens=64, temperature=0.5, stream=True)
    assert [m.role for m in request.messages] == ["system", "user"]  # nosec B101 - asserts are appropriate in unit tests
    assert request.model == "gpt-4o" and request.stream is True  # nosec B101 - asserts are appropriate in unit tests
    assert dict(request.sampling) == {"temperature": 0.5, "max_tokens": 64}  # nosec B101 - asserts are appropriate in unit tests


def test_assistant_tool_calls_come_from_metadata():
    call = {"id": "call_1", "type": "function", "function": {"name": "f", "arguments": "{}"}}
    messages = json.dumps(
        [
            {"role": "user", "content": "run f"},
            {"role": "assistant", "content": "", "metadata": {"tool_calls": [call]}},
            {"role": "tool", "content": {"result": 42}, "tool_call_id": "call_1"},
        ]
    )
    request = chat_request_from_json(messages)
    assistant, tool = request.messages[1], request.messages[2]
    assert assistant.tool_calls == (call,) and assistant.content is None  # nosec B101 - asserts are appropriate in unit tests
    assert tool.content == '{"result":42}' and tool.tool_call_id == "call_1"  # nosec B101 - asserts are appropriate in unit tests


def test_direct_tool_calls_field_is_accepted():
    call = {"id": "call_9", "type": "function", "function": {"name": "g", "arguments": "{}"}}
    dto = MessageDTO(role="assistant", content=None, tool_calls=[call])
    assert dto.resolved_tool_calls() == [call]  # nosec B101 - asserts are appropriate in unit tests


def test_tools_and_tool_choice(endpoint):
    tools = json.dumps([{"name": "lookup", "description": "find", "parameters": {"type": "object"}}])
    request = chat_request_from_json(
        json.dumps([{"role": "user", "content": "x"}]),
        tools_json=tools,
        tool_choice_json='{"Specific": "lookup"}',
    )
    assert request.tools[0].name == "lookup"  # nosec B101 - asserts are appropriate in unit tests
    body = json.loads(build(request, endpoint).body)
    assert body["tool_choice"] == {"type": "function", "function": {"name": "lookup"}}  # nosec B101 - asserts are appropriate in unit tests
    assert "max_tokens" not in body and "temperature" not in body  # nosec B101 - asserts are appropriate in unit tests


@pytest.mark.parametrize("raw", ['"auto"', "auto", "REQUIRED"])
def test_tool_choice_modes_quoted_or_bare(raw):
    request = chat_request_from_json(json.dumps([{"role": "user", "content": "x"}]), tool_choice_json=raw)
    assert request.tool_choice in ("auto", "required")  # nosec B101 - asserts are appropriate in unit tests


@pytest.mark.parametrize(
    "messages_json, kwargs",
    [
        ("not json", {}),
        ("[]", {}),
        ('[{"role": "robot", "content": "x"}]', {}),
        ('[{"role": "tool", "content": "x"}]', {}),
        ('[{"role": "tool", "content": "x", "tool_call_id": " "}]', {}),
        ('[{"role": "assistant", "metadata": {"tool_calls": "nope"}}]', {}),
        ('[{"role": "user", "content": "x"}]', {"max_tokens": 0}),
        ('[{"role": "user", "content": "x"}]', {"temperature": 3.5}),
        ('[{"role": "user", "content": "x"}]', {"tool_choice_json": '"sometimes"'}),
        ('[{"role": "user", "content": "x"}]', {"tools_json": '[{"name": ""}]'}),
    ],
)
def test_invalid_input_raises_validation_error(messages_json, kwargs):
    with pytest.raises(ValidationError):
        chat_request_from_json(messages_json, **kwargs)


def test_dto_defaults():
    dto = ChatRequestDTO(messages=[{"role": "user", "content": "x"}])
    assert dto.model is None and dto.stream is False and dto.tools is None  # nosec B101 - asserts are appropriate in unit tests
