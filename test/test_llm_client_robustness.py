import httpx
import pytest

from llm.llm_client import AIParseError, LLMClient

def test_llm_extra_text_around_json(fake_provider_factory, now):
    provider = fake_provider_factory(
        'Sure! Here is the result: {"name":"Call mom","assignee":null,"dueDate":null,"priority":"P4"} Thanks.'
    )
    task = LLMClient(provider=provider).parse_task("Call mom", now)
    assert task.name == "Call mom"
    assert task.priority == "P4"

def test_llm_unknown_priority_defaults(fake_provider_factory, now):
    provider = fake_provider_factory('{"name":"Call mom","priority":"urgent"}')
    assert LLMClient(provider=provider).parse_task("Call mom", now).priority == "P3"

def test_llm_blank_name_gets_placeholder(fake_provider_factory, now):
    provider = fake_provider_factory('{"name":"  ","assignee":"  "}')
    task = LLMClient(provider=provider).parse_task("???", now)
    assert task.name == "Untitled Task"
    assert task.assignee is None

@pytest.mark.parametrize("output", [
    "INVALID OUTPUT",
    "{not json at all}",
    '{"assignee":"Bob"}',
    '{"name":"x","dueDate":"next tuesday-ish"}',
    '{"name":42}',
])
def test_llm_invalid_output_is_a_failure(fake_provider_factory, now, output):
    client = LLMClient(provider=fake_provider_factory(output))
    with pytest.raises(AIParseError):
        client.parse_task("Anything", now)

def test_llm_http_error_is_a_failure(failing_provider_factory, now):
    request = httpx.Request("POST", "https://example.invalid")
    exc = httpx.HTTPStatusError("401", request=request, response=httpx.Response(401, request=request))
    client = LLMClient(provider=failing_provider_factory(exc))
    with pytest.raises(AIParseError):
        client.parse_task("Anything", now)

def test_llm_missing_api_key_is_a_failure(monkeypatch, now):
    monkeypatch.setenv("LLM_PROVIDER", "gemini")
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    with pytest.raises(AIParseError):
        LLMClient().parse_task("Anything", now)

def test_llm_unexpected_response_shape_is_a_failure(failing_provider_factory, now):
    client = LLMClient(provider=failing_provider_factory(KeyError("candidates")))
    with pytest.raises(AIParseError):
        client.parse_task("Anything", now)
