from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta
from typing import Callable, Iterable, Optional, Union

from extraction.spans import Match, Span

RELATIVE_DAYS = {
    "today": 0,
    "tonight": 0,
    "tomorrow": 1,
    "tmrw": 1,
    "tmr": 1,
}

WEEKDAYS = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}

MONTHS = {
    "january": 1, "jan": 1,
    "february": 2, "feb": 2,
    "march": 3, "mar": 3,
    "april": 4, "apr": 4,
    "may": 5,
    "june": 6, "jun": 6,
    "july": 7, "jul": 7,
    "august": 8, "aug": 8,
    "september": 9, "sep": 9, "sept": 9,
    "october": 10, "oct": 10,
    "november": 11, "nov": 11,
    "december": 12, "dec": 12,
}

END_OF_DAY = time(23, 59, 59)

# Connective directly in front of a date/time phrase; claimed together with it.
_LEAD = r"(?:(?:due\s+(?:by|on)|due|by|on|at|before)\s+)?"
_MONTH = "|".join(sorted(MONTHS, key=len, reverse=True))
_WEEKDAY = "|".join(WEEKDAYS)
_MERIDIEM = r"am|pm|a\.m\.|p\.m\."
_YEAR = r"(?:,?\s+((?:19|20)\d{2})(?![\d:]))?"

RELATIVE_RE = re.compile(rf"\b{_LEAD}({'|'.join(RELATIVE_DAYS)})\b", re.IGNORECASE)
IN_N_RE = re.compile(rf"\b{_LEAD}in\s+(\d{{1,3}})\s+(days?|weeks?)\b", re.IGNORECASE)
WEEKDAY_RE = re.compile(rf"\b{_LEAD}(?:(this|next)\s+)?({_WEEKDAY})\b", re.IGNORECASE)
DAY_MONTH_RE = re.compile(
    rf"\b{_LEAD}(?:the\s+)?(\d{{1,2}})(?:st|nd|rd|th)?(?:\s+of)?\s+({_MONTH})\b\.?{_YEAR}",
    re.IGNORECASE,
)
MONTH_DAY_RE = re.compile(
    rf"\b{_LEAD}({_MONTH})\.?\s+(\d{{1,2}})(?:st|nd|rd|th)?\b(?!\s*(?:{_MERIDIEM}|:)){_YEAR}",
    re.IGNORECASE,
)
ISO_DATE_RE = re.compile(rf"\b{_LEAD}(\d{{4}})-(\d{{2}})-(\d{{2}})\b", re.IGNORECASE)

TIME_12H_RE = re.compile(
    rf"\b{_LEAD}(\d{{1,2}})(?::([0-5]\d))?\s*({_MERIDIEM})(?!\w)", re.IGNORECASE
)
TIME_24H_RE = re.compile(
    rf"\b{_LEAD}([01]?\d|2[0-3]):([0-5]\d)\b(?!\s*(?:{_MERIDIEM}))", re.IGNORECASE
)
NOON_RE = re.compile(rf"\b{_LEAD}(noon|midday)\b", re.IGNORECASE)


# (resolved date or time, claimed span)
Found = tuple[Union[date, time], Span]


def _earliest(candidates: Iterable[Found]) -> Optional[Found]:
    best = None
    for cand in candidates:
        if best is None or cand[1].start < best[1].start:
            best = cand
    return best


def _span(m: re.Match) -> Span:
    return Span(m.start(), m.end())


def _relative_date(text: str, now: datetime) -> Optional[Found]:
    def candidates():
        for m in RELATIVE_RE.finditer(text):
            offset = RELATIVE_DAYS[m.group(1).lower()]
            yield now.date() + timedelta(days=offset), _span(m)
        for m in IN_N_RE.finditer(text):
            n = int(m.group(1))
            days = n * 7 if m.group(2).lower().startswith("week") else n
            yield now.date() + timedelta(days=days), _span(m)

    return _earliest(candidates())


def _weekday_date(text: str, now: datetime) -> Optional[Found]:
    m = WEEKDAY_RE.search(text)
    if not m:
        return None

    target = WEEKDAYS[m.group(2).lower()]
    days_ahead = (target - now.weekday()) % 7
    # Always strictly in the future. A nearest occurrence of "today" is
    # pushed a full week, for "next X" as well as for a bare "X".
    if days_ahead == 0:
        days_ahead = 7
    return now.date() + timedelta(days=days_ahead), _span(m)


def _resolve_absolute(now: datetime, year: Optional[str], month: int, day: int) -> Optional[date]:
    if year is not None:
        try:
            return date(int(year), month, day)
        except ValueError:
            return None

    # Next occurrence on or after today; Feb 29 may be up to eight years out.
    for y in range(now.year, now.year + 9):
        try:
            resolved = date(y, month, day)
        except ValueError:
            continue
        if resolved >= now.date():
            return resolved
    return None


def _absolute_date(text: str, now: datetime) -> Optional[Found]:
    def candidates():
        for m in DAY_MONTH_RE.finditer(text):
            d = _resolve_absolute(now, m.group(3), MONTHS[m.group(2).lower()], int(m.group(1)))
            if d is not None:
                yield d, _span(m)
        for m in MONTH_DAY_RE.finditer(text):
            d = _resolve_absolute(now, m.group(3), MONTHS[m.group(1).lower()], int(m.group(2)))
            if d is not None:
                yield d, _span(m)
        for m in ISO_DATE_RE.finditer(text):
            d = _resolve_absolute(now, m.group(1), int(m.group(2)), int(m.group(3)))
            if d is not None:
                yield d, _span(m)

    return _earliest(candidates())


DATE_FINDERS: tuple[Callable[[str, datetime], Optional[Found]], ...] = (
    _relative_date,
    _weekday_date,
    _absolute_date,
)


def find_date(text: str, now: datetime) -> Optional[Found]:
    """First kind that matches wins: relative day, weekday, absolute date."""
    for finder in DATE_FINDERS:
        found = finder(text, now)
        if found is not None:
            return found
    return None


def find_time(text: str, exclude: Optional[Span] = None) -> Optional[Found]:
    def candidates():
        for m in TIME_12H_RE.finditer(text):
            hour = int(m.group(1))
            minute = int(m.group(2) or 0)
            if not 1 <= hour <= 12:
                continue
            is_pm = m.group(3).lower().startswith("p")
            if hour == 12:
                hour = 12 if is_pm else 0
            elif is_pm:
                hour += 12
            yield time(hour, minute), _span(m)
        for m in TIME_24H_RE.finditer(text):
            yield time(int(m.group(1)), int(m.group(2))), _span(m)
        for m in NOON_RE.finditer(text):
            yield time(12, 0), _span(m)

    return _earliest(
        c for c in candidates() if exclude is None or not c[1].overlaps(exclude)
    )


def extract_due_date(text: str, now: datetime) -> Optional[Match[datetime]]:
    """
    Resolve the date/time phrases in ``text`` against ``now``.

    A date without a time is due at 23:59:59 that day; a time without a
    date is due today. Returns None when the text carries neither.
    """
    found_date = find_date(text, now)
    found_time = find_time(text, exclude=found_date[1] if found_date else None)
    if found_date is None and found_time is None:
        return None

    day = found_date[0] if found_date else now.date()
    at = found_time[0] if found_time else END_OF_DAY
    spans = sorted(
        (f[1] for f in (found_date, found_time) if f is not None),
        key=lambda s: s.start,
    )
    return Match(value=datetime.combine(day, at), spans=tuple(spans))
