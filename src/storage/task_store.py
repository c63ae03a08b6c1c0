from __future__ import annotations

import json
import logging
import os
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

from quicktask.models import ParsedTask, Task, TaskUpdate

logger = logging.getLogger(__name__)


def default_data_path() -> str:
    return os.getenv("QUICKTASK_DATA_PATH", "data/tasks.json")


class TaskStore:
    """Tasks in a single JSON file, newest first."""

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path or default_data_path())

    def _read(self) -> list[Task]:
        if not self.path.exists():
            return []
        data = json.loads(self.path.read_text(encoding="utf-8"))
        return [Task.model_validate(item) for item in data.get("tasks", [])]

    def load(self) -> list[Task]:
        """
        Load tasks from disk. Returns an empty list if the file is missing or invalid.
        """
        try:
            return self._read()
        except Exception as e:
            logger.warning(f"Could not load tasks from {self.path}: {e}")
            return []

    def _load_for_write(self) -> list[Task]:
        """Like load(), but an unreadable file is moved to <name>.bak before it gets overwritten."""
        try:
            return self._read()
        except Exception as e:
            backup = self.path.with_name(self.path.name + ".bak")
            self.path.replace(backup)
            logger.warning(f"Could not load tasks from {self.path}: {e}; moved it to {backup}")
            return []

    def save(self, tasks: list[Task]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {"tasks": [t.model_dump(mode="json") for t in tasks]}
        self.path.write_text(
            json.dumps(data, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )

    def get(self, task_id: str) -> Optional[Task]:
        return next((t for t in self.load() if t.id == task_id), None)

    def create(self, parsed: ParsedTask, now: datetime) -> Task:
        task = Task(
            **parsed.model_dump(),
            id=uuid.uuid4().hex,
            completed=False,
            created_at=now,
            updated_at=now,
        )
        self.save([task, *self._load_for_write()])
        logger.info(f"Created task {task.id}: {task.name!r}")
        return task

    def update(self, task_id: str, patch: TaskUpdate, now: datetime) -> Optional[Task]:
        changes = patch.model_dump(exclude_unset=True)
        # assignee and due_date may be cleared; the rest can't be null
        for field in ("name", "priority", "completed"):
            if changes.get(field) is None:
                changes.pop(field, None)
        if "name" in changes and not changes["name"].strip():
            changes.pop("name")
        return self._replace(task_id, lambda t: {**changes, "updated_at": now})

    def toggle_complete(self, task_id: str, now: datetime) -> Optional[Task]:
        return self._replace(
            task_id, lambda t: {"completed": not t.completed, "updated_at": now}
        )

    def delete(self, task_id: str) -> bool:
        tasks = self._load_for_write()
        remaining = [t for t in tasks if t.id != task_id]
        if len(remaining) == len(tasks):
            return False
        self.save(remaining)
        logger.info(f"Deleted task {task_id}")
        return True

    def clear(self) -> None:
        self.save([])

    def _replace(self, task_id: str, changes_for) -> Optional[Task]:
        tasks = self._load_for_write()
        for i, t in enumerate(tasks):
            if t.id == task_id:
                # the merged record is validated again
                updated = Task.model_validate({**t.model_dump(), **changes_for(t)})
                tasks[i] = updated
                self.save(tasks)
                return updated
        return None
