"""Client-side board state with optimistic moves and deletes.

The controller keeps one channel's tasks in memory. Moves and deletes are
applied locally first and rolled back to the snapshot taken just before
the change if the API call fails. Creates wait for the server, since the
task id only exists once the server has assigned it.

Mutations in flight are not coordinated with each other: a rollback
restores its own snapshot even if another mutation has landed since.
"""

import logging
from enum import Enum
from typing import Dict, List, Optional, Tuple

from taskboard.client import ApiError, TaskApiClient
from taskboard.models import COLUMN_TITLES, COLUMN_VALUES, Column, Task

logger = logging.getLogger(__name__)

LOAD_ERROR = "Failed to load tasks. Please try again."
MOVE_ERROR = "Failed to move task. Please try again."
CREATE_ERROR = "Failed to create task. Please try again."
DELETE_ERROR = "Failed to delete task. Please try again."


class BoardStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class MutationOutcome(str, Enum):
    APPLIED = "applied"
    ROLLED_BACK = "rolled-back"
    REJECTED = "rejected"
    IGNORED = "ignored"


class BoardController:
    def __init__(self, api: TaskApiClient):
        self.api = api
        self.channel_id: Optional[str] = None
        self.status = BoardStatus.LOADING
        self.tasks: List[Task] = []
        self.error: Optional[str] = None

    def find_task(self, task_id: str) -> Optional[Task]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def columns(self) -> Dict[Column, List[Task]]:
        """Tasks grouped by column, in board display order"""
        grouped: Dict[Column, List[Task]] = {column: [] for column in Column}
        for task in self.tasks:
            if task.column in grouped:
                grouped[task.column].append(task)
        return grouped

    def column_headers(self) -> List[Tuple[str, int]]:
        """Display title and card count for each column"""
        return [
            (COLUMN_TITLES[column], len(tasks))
            for column, tasks in self.columns().items()
        ]

    def dismiss_error(self) -> None:
        self.error = None

    def fail(self, message: str) -> None:
        self.status = BoardStatus.ERROR
        self.tasks = []
        self.error = message

    async def load(self, channel_id: str) -> BoardStatus:
        self.channel_id = channel_id
        self.status = BoardStatus.LOADING
        self.error = None
        try:
            tasks = await self.api.get_tasks(channel_id)
        except ApiError as e:
            logger.error(f"Failed to load tasks for channel {channel_id}: {str(e)}")
            self.fail(LOAD_ERROR)
            return self.status

        self.tasks = list(tasks)
        self.status = BoardStatus.READY
        return self.status

    def resolve_drop_target(self, target_id: str) -> Optional[Column]:
        """Column a card lands in when dropped on ``target_id``.

        The target is either a column or another card, in which case the
        card joins that card's column.
        """
        if target_id in COLUMN_VALUES:
            return Column(target_id)
        target = self.find_task(target_id)
        if target is not None:
            return target.column
        return None

    async def drop(self, task_id: str, target_id: str) -> MutationOutcome:
        column = self.resolve_drop_target(target_id)
        if column is None:
            return MutationOutcome.IGNORED
        return await self.move(task_id, column)

    async def move(self, task_id: str, target_column: str) -> MutationOutcome:
        if target_column not in COLUMN_VALUES:
            return MutationOutcome.IGNORED
        column = Column(target_column)
        task = self.find_task(task_id)
        if task is None or task.column == column:
            return MutationOutcome.IGNORED

        snapshot = list(self.tasks)
        self.tasks = [
            t.model_copy(update={"column": column}) if t.id == task_id else t
            for t in self.tasks
        ]

        try:
            await self.api.update_task(task_id, column=column.value)
        except ApiError as e:
            logger.error(f"Failed to move task {task_id}: {str(e)}")
            self.tasks = snapshot
            self.error = MOVE_ERROR
            return MutationOutcome.ROLLED_BACK

        return MutationOutcome.APPLIED

    async def create_task(
        self, title: str, description: str = "", column: str = Column.TODO.value
    ) -> MutationOutcome:
        if not title or not title.strip():
            return MutationOutcome.IGNORED
        if self.channel_id is None:
            logger.warning("Cannot create a task before a board is loaded")
            return MutationOutcome.IGNORED

        try:
            created = await self.api.create_task(
                self.channel_id, title, description, Column(column).value
            )
        except (ApiError, ValueError) as e:
            logger.error(f"Failed to create task: {str(e)}")
            self.error = CREATE_ERROR
            return MutationOutcome.REJECTED

        self.tasks = [*self.tasks, created]
        return MutationOutcome.APPLIED

    async def delete_task(self, task_id: str) -> MutationOutcome:
        if self.find_task(task_id) is None:
            return MutationOutcome.IGNORED

        snapshot = list(self.tasks)
        self.tasks = [t for t in self.tasks if t.id != task_id]

        try:
            await self.api.delete_task(task_id)
        except ApiError as e:
            logger.error(f"Failed to delete task {task_id}: {str(e)}")
            self.tasks = snapshot
            self.error = DELETE_ERROR
            return MutationOutcome.ROLLED_BACK

        return MutationOutcome.APPLIED
