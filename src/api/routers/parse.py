import asyncio
import logging
import time
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.dependencies import get_now, get_task_extractor
from api.metrics import (
    AI_FALLBACK_TOTAL,
    REQUESTS_TOTAL,
    REQUEST_LATENCY_SECONDS,
    TASKS_PARSED_TOTAL,
)
from classification.due_status import format_due_date
from extraction.task_extractor import TaskExtractor
from quicktask.models import ParseResult

router = APIRouter()
logger = logging.getLogger(__name__)


class ParseIn(BaseModel):
    text: str
    use_ai: bool = False


async def run_parse(extractor: TaskExtractor, text: str, now: datetime, use_ai: bool) -> ParseResult:
    """Parse off the event loop; the AI path blocks on HTTP."""
    if use_ai:
        result = await asyncio.to_thread(extractor.extract, text, now, use_ai=True)
    else:
        result = extractor.extract(text, now)

    # Prometheus counters (best-effort)
    try:
        TASKS_PARSED_TOTAL.labels(source=result.source).inc()
        if use_ai and result.source == "rules":
            AI_FALLBACK_TOTAL.inc()
    except Exception:
        pass
    return result


@router.post("/parse")
async def parse(
    payload: ParseIn,
    extractor: TaskExtractor = Depends(get_task_extractor),
    now: datetime = Depends(get_now),
) -> dict:
    start = time.time()
    logger.info(f"Parse request (ai={payload.use_ai}): {payload.text[:50]}...")

    result = await run_parse(extractor, payload.text, now, payload.use_ai)
    due = result.task.due_date

    try:
        REQUESTS_TOTAL.labels(endpoint="/parse", status=result.source).inc()
        REQUEST_LATENCY_SECONDS.labels(endpoint="/parse").observe(time.time() - start)
    except Exception:
        pass

    return {
        **result.model_dump(mode="json"),
        "due_label": format_due_date(due, now) if due else None,
    }
