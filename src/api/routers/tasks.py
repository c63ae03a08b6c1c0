import logging
import time
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from api.dependencies import get_now, get_task_extractor, get_task_store
from api.metrics import REQUESTS_TOTAL, REQUEST_LATENCY_SECONDS, TASKS_STORED
from api.routers.parse import run_parse
from classification.due_status import due_status, format_due_date
from classification.task_views import (
    SortKey,
    StatusFilter,
    filter_tasks,
    search_tasks,
    sort_tasks,
    task_stats,
)
from extraction.task_extractor import TaskExtractor
from quicktask.models import Task, TaskUpdate
from storage.task_store import TaskStore

router = APIRouter()
logger = logging.getLogger(__name__)


class CreateTaskIn(BaseModel):
    text: str
    use_ai: bool = False


def serialize_task(task: Task, now: datetime) -> dict:
    due = task.due_date
    return {
        **task.model_dump(mode="json"),
        "due_label": format_due_date(due, now) if due else None,
        "due_status": due_status(due, now, completed=task.completed),
    }


def _not_found(task_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Task {task_id} not found")


def _count(endpoint: str, status: str, start: float, store: Optional[TaskStore] = None) -> None:
    # Prometheus counters (best-effort)
    try:
        REQUESTS_TOTAL.labels(endpoint=endpoint, status=status).inc()
        REQUEST_LATENCY_SECONDS.labels(endpoint=endpoint).observe(time.time() - start)
        if store is not None:
            TASKS_STORED.set(len(store.load()))
    except Exception:
        pass


@router.get("/tasks")
async def list_tasks(
    status: StatusFilter = "all",
    sort: SortKey = "created",
    q: str = "",
    store: TaskStore = Depends(get_task_store),
    now: datetime = Depends(get_now),
) -> dict:
    tasks = store.load()
    shown = sort_tasks(filter_tasks(search_tasks(tasks, q), status, now), sort)
    return {
        "tasks": [serialize_task(t, now) for t in shown],
        "total": len(tasks),
    }


@router.post("/tasks")
async def create_task(
    payload: CreateTaskIn,
    store: TaskStore = Depends(get_task_store),
    extractor: TaskExtractor = Depends(get_task_extractor),
    now: datetime = Depends(get_now),
) -> dict:
    start = time.time()
    result = await run_parse(extractor, payload.text, now, payload.use_ai)
    task = store.create(result.task, now)
    _count("/tasks", "created", start, store)
    return {"task": serialize_task(task, now), "source": result.source}


@router.patch("/tasks/{task_id}")
async def update_task(
    task_id: str,
    patch: TaskUpdate,
    store: TaskStore = Depends(get_task_store),
    now: datetime = Depends(get_now),
) -> dict:
    task = store.update(task_id, patch, now)
    if task is None:
        raise _not_found(task_id)
    return serialize_task(task, now)


@router.post("/tasks/{task_id}/toggle")
async def toggle_task(
    task_id: str,
    store: TaskStore = Depends(get_task_store),
    now: datetime = Depends(get_now),
) -> dict:
    task = store.toggle_complete(task_id, now)
    if task is None:
        raise _not_found(task_id)
    return serialize_task(task, now)


@router.delete("/tasks/{task_id}")
async def delete_task(task_id: str, store: TaskStore = Depends(get_task_store)) -> dict:
    start = time.time()
    if not store.delete(task_id):
        raise _not_found(task_id)
    _count("/tasks/{task_id}", "deleted", start, store)
    return {"status": "deleted"}


@router.delete("/tasks")
async def clear_tasks(store: TaskStore = Depends(get_task_store)) -> dict:
    """Remove every task."""
    store.clear()
    logger.info("Cleared all tasks")
    try:
        TASKS_STORED.set(0)
    except Exception:
        pass
    return {"status": "cleared"}


@router.get("/stats")
async def get_stats(
    store: TaskStore = Depends(get_task_store),
    now: datetime = Depends(get_now),
) -> dict:
    return task_stats(store.load(), now).model_dump()
