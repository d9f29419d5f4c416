import uuid
from datetime import datetime, timedelta, timezone
from typing import List

from flask import current_app

from taskboard.models import Column, Task

SEED_TASKS = (
    (
        Column.DONE,
        "Setup Teams integration",
        "Configure the Microsoft Teams SDK and test the app loading",
    ),
    (
        Column.IN_PROGRESS,
        "Build Kanban UI",
        "Create the drag-and-drop Kanban board interface",
    ),
    (
        Column.TODO,
        "Add backend API",
        "Implement the task API server for persistence",
    ),
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def generate_task_id() -> str:
    return str(uuid.uuid4())


def next_timestamp(previous: datetime) -> datetime:
    """Current time, nudged forward so it is strictly later than ``previous``"""
    now = utc_now()
    if now <= previous:
        now = previous + timedelta(microseconds=1)
    return now


def create_seed_tasks(channel_id: str) -> List[Task]:
    """Create the demo tasks shown on a channel's board the first time it is seen"""
    now = utc_now()
    return [
        Task(
            id=generate_task_id(),
            title=title,
            description=description,
            column=column,
            channelId=channel_id,
            createdAt=now,
            updatedAt=now,
        )
        for column, title, description in SEED_TASKS
    ]


def get_task_store():
    """Task store owned by the running Flask application"""
    return current_app.extensions["task_store"]
