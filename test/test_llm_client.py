from datetime import datetime

import pytest

from llm.llm_client import LLMClient, get_provider
from llm.providers.ollama_provider import OllamaProvider
from llm.providers.openai_provider import OpenAIProvider

def test_parse_task(fake_provider_factory, now):
    provider = fake_provider_factory(
        '{"name":"Send invoice","assignee":"Maya","dueDate":"2024-06-16T17:00:00","priority":"P2"}'
    )
    client = LLMClient(provider=provider)
    task = client.parse_task("Send invoice to Maya tomorrow 5pm P2", now)
    assert task.name == "Send invoice"
    assert task.assignee == "Maya"
    assert task.due_date == datetime(2024, 6, 16, 17, 0)
    assert task.priority == "P2"

def test_prompt_embeds_input_and_date(fake_provider_factory, now):
    provider = fake_provider_factory('{"name":"x","assignee":null,"dueDate":null,"priority":"P3"}')
    LLMClient(provider=provider).parse_task('Call "Bob" tomorrow', now)
    prompt = provider.calls[0]
    assert 'Call \\"Bob\\" tomorrow' in prompt
    assert "2024-06-15T10:00:00" in prompt
    assert '"dueDate"' in prompt

def test_null_fields_and_default_priority(fake_provider_factory, now):
    provider = fake_provider_factory('{"name":"Water plants","assignee":null,"dueDate":null}')
    task = LLMClient(provider=provider).parse_task("Water plants", now)
    assert task.assignee is None
    assert task.due_date is None
    assert task.priority == "P3"

def test_date_only_due_is_end_of_day(fake_provider_factory, now):
    provider = fake_provider_factory('{"name":"Review","dueDate":"2024-06-20","priority":"P1"}')
    task = LLMClient(provider=provider).parse_task("Review June 20 P1", now)
    assert task.due_date == datetime(2024, 6, 20, 23, 59, 59)

def test_get_provider_openai(monkeypatch):
    monkeypatch.setenv("LLM_PROVIDER", "openai")
    monkeypatch.setenv("OPENAI_MODEL", "gpt-test")
    provider = get_provider(api_key="sk-test")
    assert isinstance(provider, OpenAIProvider)
    assert provider.api_key == "sk-test"
    assert provider.model == "gpt-test"

def test_get_provider_openai_without_key(monkeypatch):
    monkeypatch.setenv("LLM_PROVIDER", "openai")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with pytest.raises(RuntimeError):
        get_provider()

def test_get_provider_ollama(monkeypatch):
    monkeypatch.setenv("LLM_PROVIDER", "ollama")
    monkeypatch.setenv("OLLAMA_BASE_URL", "http://ollama:11434")
    provider = get_provider()
    assert isinstance(provider, OllamaProvider)
    assert provider.base_url == "http://ollama:11434"
