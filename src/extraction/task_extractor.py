import logging
from datetime import datetime
from typing import Optional

from extraction.task_parser import parse_task
from llm.llm_client import AIParseError, LLMClient
from quicktask.models import ParseResult

logger = logging.getLogger(__name__)


class TaskExtractor:
    """AI-assisted parse with the rule-based parser as the fallback."""

    def __init__(self, llm_client: Optional[LLMClient] = None):
        self.llm_client = llm_client

    def extract(self, text: str, now: datetime, use_ai: bool = False) -> ParseResult:
        if use_ai:
            llm = self.llm_client or LLMClient()
            try:
                return ParseResult(task=llm.parse_task(text, now), source="ai")
            except AIParseError as e:
                logger.warning(f"AI parsing failed, falling back to basic parsing: {e}")

        return ParseResult(task=parse_task(text, now), source="rules")
