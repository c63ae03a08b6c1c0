import os
import logging
from fastapi import APIRouter, Depends, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from api.metrics import TASKS_STORED

from api.dependencies import get_task_store
from storage.task_store import TaskStore

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check(store: TaskStore = Depends(get_task_store)) -> dict:
    """Health check endpoint for container orchestration."""
    health = {
        "status": "healthy",
        "profile": os.getenv("DEPLOYMENT_PROFILE", "unknown"),
        "llm_provider": os.getenv("LLM_PROVIDER", "gemini"),
        "data_path": str(store.path),
    }

    try:
        health["tasks"] = len(store.load())
    except Exception as e:
        health["status"] = "degraded"
        health["store"] = {"status": "error", "error": str(e)}
        health["tasks"] = 0

    return health


@router.get("/metrics")
async def metrics(store: TaskStore = Depends(get_task_store)) -> Response:
    """
    Prometheus scrape endpoint.
    """
    try:
        TASKS_STORED.set(len(store.load()))
    except Exception:
        pass

    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)
