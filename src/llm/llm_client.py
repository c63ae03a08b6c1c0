from __future__ import annotations

import json
import logging
import os
import re
from datetime import datetime
from typing import Optional

import httpx
from pydantic import ValidationError

from llm.prompts import SYSTEM_PROMPT, build_task_prompt
from llm.providers.base import LLMProvider
from llm.schemas import AITaskResponse
from quicktask.models import ParsedTask

logger = logging.getLogger(__name__)

_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


class AIParseError(Exception):
    """The AI parse failed: network, auth, or a malformed/invalid response."""


def get_provider(api_key: Optional[str] = None) -> LLMProvider:
    """Provider named by LLM_PROVIDER (gemini, openai, ollama, mock)."""
    name = os.getenv("LLM_PROVIDER", "gemini").strip().lower()
    if name == "openai":
        from llm.providers.openai_provider import OpenAIProvider
        return OpenAIProvider(api_key=api_key)
    if name == "ollama":
        from llm.providers.ollama_provider import OllamaProvider
        return OllamaProvider()
    if name == "mock":
        from llm.providers.mock_provider import MockProvider
        return MockProvider()
    if name == "gemini":
        from llm.providers.gemini_provider import GeminiProvider
        return GeminiProvider(api_key=api_key)
    raise RuntimeError(f"Unknown LLM_PROVIDER: {name}")


class LLMClient:
    """Asks a language model for the same ParsedTask the rule-based parser builds.

    Every failure surfaces as AIParseError; there is no retry here. Callers
    fall back to extraction.task_parser.parse_task.
    """

    def __init__(self, provider: Optional[LLMProvider] = None, api_key: Optional[str] = None):
        self._provider = provider
        self._api_key = api_key

    @property
    def provider(self) -> LLMProvider:
        # created lazily so a missing key becomes an AIParseError in parse_task
        if self._provider is None:
            self._provider = get_provider(self._api_key)
        return self._provider

    def complete(self, text: str, now: datetime) -> str:
        """Raw model output for the task-parse prompt."""
        prompt = build_task_prompt(text, now.replace(microsecond=0).isoformat())
        return self.provider.generate(system=SYSTEM_PROMPT, user=prompt)

    def parse_task(self, text: str, now: datetime) -> ParsedTask:
        try:
            raw = self.complete(text, now)
        except (httpx.HTTPError, RuntimeError, KeyError, IndexError, TypeError, ValueError) as e:
            raise AIParseError(f"AI request failed: {e}") from e

        if not isinstance(raw, str):
            raise AIParseError("AI response was not text")

        match = _JSON_OBJECT_RE.search(raw)
        if not match:
            raise AIParseError("No JSON object found in AI response")

        try:
            data = json.loads(match.group(0))
            parsed = AITaskResponse.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as e:
            raise AIParseError(f"Invalid AI response: {e}") from e

        logger.info(f"AI parsed task: {parsed.name!r} ({parsed.priority})")
        return parsed.to_parsed_task()
