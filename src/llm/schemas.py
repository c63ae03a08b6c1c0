from __future__ import annotations
import re
from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from quicktask.models import DEFAULT_PRIORITY, PRIORITIES, UNTITLED_TASK, ParsedTask, Priority

_DATE_ONLY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class AITaskResponse(BaseModel):
    """Shape the model is asked to return. Anything else is a failed parse."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    assignee: Optional[str] = None
    due_date: Optional[datetime] = Field(default=None, alias="dueDate")
    priority: Priority = DEFAULT_PRIORITY

    @field_validator("name")
    @classmethod
    def name_or_placeholder(cls, v: str) -> str:
        return v.strip() or UNTITLED_TASK

    @field_validator("assignee")
    @classmethod
    def blank_assignee_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

    @field_validator("due_date", mode="before")
    @classmethod
    def date_only_is_end_of_day(cls, v: Any) -> Any:
        if isinstance(v, str) and _DATE_ONLY_RE.match(v.strip()):
            return f"{v.strip()}T23:59:59"
        return v

    @field_validator("due_date")
    @classmethod
    def to_naive_local(cls, v: Optional[datetime]) -> Optional[datetime]:
        if v is not None and v.tzinfo is not None:
            return v.astimezone().replace(tzinfo=None)
        return v

    @field_validator("priority", mode="before")
    @classmethod
    def unknown_priority_is_default(cls, v: Any) -> Any:
        if isinstance(v, str) and v.strip().upper() in PRIORITIES:
            return v.strip().upper()
        return DEFAULT_PRIORITY

    def to_parsed_task(self) -> ParsedTask:
        return ParsedTask(
            name=self.name,
            assignee=self.assignee,
            due_date=self.due_date,
            priority=self.priority,
        )
