from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, computed_field, field_validator


Priority = Literal["P1", "P2", "P3", "P4"]

PRIORITIES: tuple[str, ...] = ("P1", "P2", "P3", "P4")
DEFAULT_PRIORITY: Priority = "P3"
UNTITLED_TASK = "Untitled Task"


class ParsedTask(BaseModel):
    name: str = Field(..., min_length=1)
    assignee: Optional[str] = None
    # naive local time; no stated time means 23:59:59 of that day
    due_date: Optional[datetime] = None
    priority: Priority = DEFAULT_PRIORITY

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("name must not be blank")
        return v2


class Task(ParsedTask):
    id: str
    completed: bool = False
    created_at: datetime
    updated_at: datetime


class TaskUpdate(BaseModel):
    """Partial edit of a stored task. Only fields that were set are applied."""
    name: Optional[str] = None
    assignee: Optional[str] = None
    due_date: Optional[datetime] = None
    priority: Optional[Priority] = None
    completed: Optional[bool] = None


class TaskStats(BaseModel):
    total: int = 0
    completed: int = 0
    overdue: int = 0
    due_today: int = 0
    due_tomorrow: int = 0

    @computed_field  # type: ignore[misc]
    @property
    def completion_rate(self) -> int:
        if self.total == 0:
            return 0
        return round(self.completed / self.total * 100)


ParseSource = Literal["rules", "ai"]


class ParseResult(BaseModel):
    task: ParsedTask
    source: ParseSource = "rules"
