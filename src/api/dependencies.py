from datetime import datetime

from extraction.task_extractor import TaskExtractor
from storage.task_store import TaskStore


def get_task_store() -> TaskStore:
    # resolved per request so QUICKTASK_DATA_PATH changes take effect
    return TaskStore()


def get_task_extractor() -> TaskExtractor:
    return TaskExtractor()


def get_now() -> datetime:
    """The only place the real clock is read."""
    return datetime.now().replace(microsecond=0)
