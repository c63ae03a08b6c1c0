from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from classification.due_status import is_due_today, is_due_tomorrow, is_overdue
from quicktask.models import Task, TaskStats

StatusFilter = Literal["all", "active", "completed", "overdue"]
SortKey = Literal["created", "due_date", "priority", "name"]

PRIORITY_ORDER = {"P1": 0, "P2": 1, "P3": 2, "P4": 3}


def _open_and(task: Task, now: datetime, check) -> bool:
    return task.due_date is not None and not task.completed and check(task.due_date, now)


def search_tasks(tasks: list[Task], query: Optional[str]) -> list[Task]:
    """Case-insensitive match on name, assignee or priority."""
    if not query or not query.strip():
        return list(tasks)
    q = query.strip().lower()
    return [
        t for t in tasks
        if q in t.name.lower()
        or (t.assignee is not None and q in t.assignee.lower())
        or q in t.priority.lower()
    ]


def filter_tasks(tasks: list[Task], status: StatusFilter, now: datetime) -> list[Task]:
    if status == "active":
        return [t for t in tasks if not t.completed]
    if status == "completed":
        return [t for t in tasks if t.completed]
    if status == "overdue":
        return [t for t in tasks if _open_and(t, now, is_overdue)]
    return list(tasks)


def sort_tasks(tasks: list[Task], sort_by: SortKey = "created") -> list[Task]:
    if sort_by == "due_date":
        # tasks without a due date go last
        return sorted(tasks, key=lambda t: (t.due_date is None, t.due_date or datetime.max))
    if sort_by == "priority":
        return sorted(tasks, key=lambda t: PRIORITY_ORDER[t.priority])
    if sort_by == "name":
        return sorted(tasks, key=lambda t: t.name.lower())
    return sorted(tasks, key=lambda t: t.created_at, reverse=True)


def task_stats(tasks: list[Task], now: datetime) -> TaskStats:
    return TaskStats(
        total=len(tasks),
        completed=sum(1 for t in tasks if t.completed),
        overdue=sum(1 for t in tasks if _open_and(t, now, is_overdue)),
        due_today=sum(1 for t in tasks if _open_and(t, now, is_due_today)),
        due_tomorrow=sum(1 for t in tasks if _open_and(t, now, is_due_tomorrow)),
    )
