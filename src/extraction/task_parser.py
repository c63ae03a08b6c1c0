from __future__ import annotations

import logging
import re
from datetime import datetime

from extraction.assignee import CONNECTIVES, extract_assignee
from extraction.due_date import extract_due_date
from extraction.priority import extract_priority
from extraction.spans import blank_spans
from quicktask.models import DEFAULT_PRIORITY, UNTITLED_TASK, ParsedTask

logger = logging.getLogger(__name__)

_EDGE_PUNCT = " \t\r\n,.;:-|/"
_WS_RE = re.compile(r"\s+")


def _dangling(word: str) -> bool:
    bare = word.strip(_EDGE_PUNCT).lower()
    return not bare or bare in CONNECTIVES


def clean_title(text: str) -> str:
    """Collapse whitespace and drop punctuation/connectives left dangling at either end."""
    words = _WS_RE.sub(" ", text).split(" ")
    while words and _dangling(words[0]):
        words.pop(0)
    while words and _dangling(words[-1]):
        words.pop()
    return " ".join(words).strip(_EDGE_PUNCT)


def parse_task(text: str, now: datetime) -> ParsedTask:
    """
    Rule-based parse of free text into a ParsedTask. Never raises.

    Order matters: priority first so "P1" can't pass for a name, the due
    date before the assignee so month and weekday words are claimed
    before anything looks for people.
    """
    working = text or ""

    priority = extract_priority(working)
    if priority:
        working = blank_spans(working, priority.spans)

    due = extract_due_date(working, now)
    if due:
        working = blank_spans(working, due.spans)

    assignee = extract_assignee(working, claimed=due.spans if due else ())
    if assignee:
        working = blank_spans(working, assignee.spans)

    name = clean_title(working) or UNTITLED_TASK
    parsed = ParsedTask(
        name=name,
        assignee=assignee.value if assignee else None,
        due_date=due.value if due else None,
        priority=priority.value if priority else DEFAULT_PRIORITY,
    )
    logger.debug(f"Parsed {text!r} -> {parsed.model_dump()}")
    return parsed
