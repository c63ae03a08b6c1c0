from __future__ import annotations

import re
from typing import Optional

from extraction.spans import Match, Span
from quicktask.models import Priority

# Case-insensitive; "P12", "MP3" and "P1x" are not markers.
PRIORITY_RE = re.compile(r"(?<![\w])[pP]([1-4])(?![\w])")


def extract_priority(text: str) -> Optional[Match[Priority]]:
    """
    First marker by position decides the priority. Every marker is
    returned as a span so that none of them ends up in the title.
    """
    found = list(PRIORITY_RE.finditer(text))
    if not found:
        return None

    value: Priority = f"P{found[0].group(1)}"  # type: ignore[assignment]
    return Match(value=value, spans=tuple(Span(m.start(), m.end()) for m in found))
