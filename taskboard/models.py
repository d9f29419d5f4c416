from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Column(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"


COLUMN_TITLES = {
    Column.TODO: "To Do",
    Column.IN_PROGRESS: "In Progress",
    Column.DONE: "Done",
}

COLUMN_VALUES = tuple(column.value for column in Column)

# fields a partial update may touch
UPDATABLE_FIELDS = ("title", "description", "column")


class TaskCreate(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    column: Column


# timestamps are timezone-aware UTC and serialize as ISO-8601 strings
class Task(BaseModel):
    id: str
    title: str
    description: str = ""
    column: Column
    channelId: str
    createdAt: datetime
    updatedAt: datetime

    def to_json(self) -> dict:
        return self.model_dump(mode="json")
