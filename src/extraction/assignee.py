from __future__ import annotations

import re
from typing import Iterable, Optional

from extraction.due_date import MONTHS, RELATIVE_DAYS, WEEKDAYS
from extraction.spans import Match, Span

CONNECTIVES = {"by", "for", "assign", "assignee", "to", "at", "on", "due", "before"}

# Words that can never be a person even when capitalized.
_NOT_A_NAME = set(WEEKDAYS) | set(MONTHS) | set(RELATIVE_DAYS) | CONNECTIVES | {
    "this", "next", "in", "the", "and", "or", "with", "me", "noon", "midday",
}

_NAME = r"[A-Za-z][A-Za-z'\-]*"

# A name is a whole token: "Q3" or "bob123" never yields "Q" or "bob".
AT_MENTION_RE = re.compile(rf"(?<![\w@])@({_NAME})(?![\w])")
ASSIGN_RE = re.compile(
    rf"\b(?:assign(?:ed)?\s+to|assign|assignee\s*:?)\s+({_NAME})(?![\w])", re.IGNORECASE
)
# "for" is common in titles, so only a capitalized word counts.
FOR_RE = re.compile(rf"\b[Ff]or\s+([A-Z][A-Za-z'\-]*)(?![\w])")
WORD_RE = re.compile(rf"(?<![\w@]){_NAME}(?![\w])")


def _is_name(word: str) -> bool:
    return word.lower() not in _NOT_A_NAME


def _explicit(text: str) -> Optional[Match[str]]:
    m = AT_MENTION_RE.search(text)
    if m:
        return Match(value=m.group(1), spans=(Span(m.start(), m.end()),))

    for pattern in (ASSIGN_RE, FOR_RE):
        for m in pattern.finditer(text):
            if _is_name(m.group(1)):
                return Match(value=m.group(1), spans=(Span(m.start(), m.end()),))
    return None


def _before_claimed(text: str, claimed: Iterable[Span]) -> Optional[Match[str]]:
    starts = sorted(span.start for span in claimed)
    if not starts:
        return None

    words = list(WORD_RE.finditer(text))
    for i, w in enumerate(words):
        # The leading word starts the title ("Call tomorrow"), never a name.
        if i == 0:
            continue
        word = w.group(0)
        if len(word) < 2 or not word[0].isupper() or not _is_name(word):
            continue
        # acronyms ("PR", "QA") are part of the title
        if word.isupper():
            continue
        following = [s for s in starts if s >= w.end()]
        if not following:
            break
        # claimed text is already blanked, so only whitespace or "by" may remain
        if text[w.end():following[0]].strip().lower() in ("", "by"):
            return Match(value=word, spans=(Span(w.start(), following[0]),))
    return None


def extract_assignee(text: str, claimed: Iterable[Span] = ()) -> Optional[Match[str]]:
    """
    Find the person a task is for.

    ``@name`` wins over "assign <name>" / "for <Name>", which wins over a
    bare capitalized word sitting right before a claimed date/time span
    ("Aman by 11pm", "Rajeev tomorrow"). ``text`` is expected to have the
    priority and date spans blanked already; ``claimed`` holds the date spans.
    """
    return _explicit(text) or _before_claimed(text, claimed)
