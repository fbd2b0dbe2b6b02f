"""Task data models"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import List
from uuid import uuid4

from pydantic import BaseModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TaskStatus(str, Enum):
    CREATED = "CREATED"
    INPROGRESS = "INPROGRESS"
    COMPLETED = "COMPLETED"


class Task(BaseModel):
    """A personal task. ``user_id`` is the owner and never changes."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.CREATED
    user_id: str
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class TasksByStatus(BaseModel):
    """A user's tasks partitioned by status, newest update first in each bucket."""

    created: List[Task] = Field(default_factory=list)
    inprogress: List[Task] = Field(default_factory=list)
    completed: List[Task] = Field(default_factory=list)

    def bucket(self, status: TaskStatus) -> List[Task]:
        return getattr(self, status.value.lower())
