"""Due-date semantics shared by every consumer of a task.

All functions take the reference ``now`` explicitly and never read the
clock. ``due`` and ``now`` must both be naive (local) or both be aware.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Literal, Optional

DueStatus = Literal["overdue", "today", "tomorrow", "normal"]


def is_overdue(due: datetime, now: datetime) -> bool:
    return due < now


def is_due_today(due: datetime, now: datetime) -> bool:
    return due.date() == now.date()


def is_due_tomorrow(due: datetime, now: datetime) -> bool:
    return due.date() == now.date() + timedelta(days=1)


def format_due_date(due: datetime, now: datetime) -> str:
    """Return "Today", "Tomorrow", or "Jun 20" (plus ", 2025" when the year differs)."""
    if is_due_today(due, now):
        return "Today"
    if is_due_tomorrow(due, now):
        return "Tomorrow"

    label = f"{due:%b} {due.day}"
    if due.year != now.year:
        label += f", {due.year}"
    return label


def due_status(due: Optional[datetime], now: datetime, completed: bool = False) -> Optional[DueStatus]:
    """Badge for a task card. Completed tasks are never reported as overdue."""
    if due is None:
        return None
    if is_overdue(due, now) and not completed:
        return "overdue"
    if is_due_today(due, now):
        return "today"
    if is_due_tomorrow(due, now):
        return "tomorrow"
    return "normal"
