import logging
import threading
from typing import Any, Dict, List, Mapping, Optional, Tuple

from taskboard.models import COLUMN_VALUES, Column, Task, TaskCreate, UPDATABLE_FIELDS
from taskboard.utils import (
    create_seed_tasks,
    generate_task_id,
    next_timestamp,
    utc_now,
)

logger = logging.getLogger(__name__)


class TaskStore:
    """In-memory task storage, partitioned by channel.

    Each channel maps to an ordered list of tasks. Task ids are global, so
    lookups by id scan every channel. Nothing survives a process restart.
    """

    def __init__(self):
        self._boards: Dict[str, List[Task]] = {}
        self._lock = threading.RLock()

    def _channel_tasks(self, channel_id: str) -> List[Task]:
        tasks = self._boards.get(channel_id)
        if tasks is None:
            tasks = create_seed_tasks(channel_id)
            self._boards[channel_id] = tasks
            logger.info(f"Seeded {len(tasks)} demo tasks for channel {channel_id}")
        return tasks

    def _locate(self, task_id: str) -> Optional[Tuple[List[Task], int]]:
        for tasks in self._boards.values():
            for index, task in enumerate(tasks):
                if task.id == task_id:
                    return tasks, index
        return None

    def list(self, channel_id: str) -> List[Task]:
        with self._lock:
            return list(self._channel_tasks(channel_id))

    def create(
        self,
        channel_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        column: Optional[str] = None,
    ) -> Task:
        # raises pydantic.ValidationError on a missing title or bad column
        data = TaskCreate(title=title, description=description, column=column)
        now = utc_now()
        task = Task(
            id=generate_task_id(),
            title=data.title,
            description=data.description or "",
            column=data.column,
            channelId=channel_id,
            createdAt=now,
            updatedAt=now,
        )
        with self._lock:
            self._channel_tasks(channel_id).append(task)
        logger.info(f"Created task {task.id} in channel {channel_id}")
        return task

    def get_by_id(self, task_id: str) -> Optional[Task]:
        with self._lock:
            found = self._locate(task_id)
            if not found:
                return None
            tasks, index = found
            return tasks[index]

    def update(self, task_id: str, fields: Mapping[str, Any]) -> Optional[Task]:
        with self._lock:
            found = self._locate(task_id)
            if not found:
                return None
            tasks, index = found
            current = tasks[index]

            changes = {key: fields[key] for key in UPDATABLE_FIELDS if key in fields}
            # unknown column values are stored as-is; clients skip records they cannot read
            if changes.get("column") in COLUMN_VALUES:
                changes["column"] = Column(changes["column"])
            changes["updatedAt"] = next_timestamp(current.updatedAt)

            updated = current.model_copy(update=changes)
            tasks[index] = updated
        logger.info(f"Updated task {task_id}: {sorted(changes)}")
        return updated

    def delete(self, task_id: str) -> Optional[Task]:
        with self._lock:
            found = self._locate(task_id)
            if not found:
                return None
            tasks, index = found
            removed = tasks.pop(index)
        logger.info(f"Deleted task {task_id} from channel {removed.channelId}")
        return removed
