from __future__ import annotations
import json
import re
from llm.providers.base import LLMProvider

_INPUT_RE = re.compile(r'^Input: "(.*)"$', re.MULTILINE)

class MockProvider(LLMProvider):
    def generate(self, *, system: str, user: str, model: str | None = None) -> str:
        """
        Returns dummy JSON responses based on the prompt content.
        """
        m = _INPUT_RE.search(user)
        if not m:
            return "{}"

        text = m.group(1).replace('\\"', '"').strip()
        lower_text = text.lower()

        # Simple keyword matching for demo purposes
        priority = "P3"
        if "urgent" in lower_text or "asap" in lower_text:
            priority = "P1"
        elif "important" in lower_text:
            priority = "P2"

        return json.dumps({
            "name": text or "Untitled Task",
            "assignee": None,
            "dueDate": None,
            "priority": priority,
        })
