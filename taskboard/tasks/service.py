"""
Task service: owner-checked CRUD plus the grouped/search listing used by
the board view.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from ..utils.exceptions import BadInputError, NotFoundError
from ..utils.logger import get_logger
from .models import Task, TasksByStatus, TaskStatus, utcnow
from .store import TaskStore

logger = get_logger(__name__)

NOT_FOUND_MESSAGE = "Task not found or unauthorized"


def matches_search(task: Task, term: str) -> bool:
    """Case-insensitive substring match on title OR description."""
    needle = term.casefold()
    return needle in (task.title or "").casefold() or needle in (task.description or "").casefold()


def group_by_status(tasks: Iterable[Task]) -> TasksByStatus:
    """
    Partition tasks into the three status buckets.

    Each bucket is ordered by updated_at, newest first. sorted() is stable
    (also with reverse=True), so ties keep their input order.
    """
    grouped = TasksByStatus()
    for task in tasks:
        grouped.bucket(task.status).append(task)
    for status in TaskStatus:
        bucket = grouped.bucket(status)
        bucket[:] = sorted(bucket, key=lambda t: t.updated_at, reverse=True)
    return grouped


class TaskService:
    def __init__(self, store: TaskStore):
        self.store = store

    def create_task(self, title: str, description: str, user_id: str) -> Task:
        task = self.store.insert(Task(title=title, description=description, user_id=user_id))
        logger.info("Task created", task_id=task.id, user_id=user_id)
        return task

    def edit_task(self, task_id: str, title: str, description: str, user_id: str) -> Task:
        task = self.store.update_owned(
            task_id,
            user_id,
            {"title": title, "description": description, "updated_at": utcnow().isoformat()},
        )
        if task is None:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        logger.info("Task edited", task_id=task_id, user_id=user_id)
        return task

    def update_status(self, task_id: str, status: TaskStatus, user_id: str) -> Task:
        try:
            status = TaskStatus(status)
        except ValueError:
            raise BadInputError(f"Invalid status: {status}")
        task = self.store.update_owned(
            task_id,
            user_id,
            {"status": status.value, "updated_at": utcnow().isoformat()},
        )
        if task is None:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        logger.info("Task status updated", task_id=task_id, user_id=user_id, status=status.value)
        return task

    def get_all_tasks(self, user_id: str) -> List[Task]:
        """All of the user's tasks, newest first."""
        return sorted(self.store.list_for_user(user_id), key=lambda t: t.created_at, reverse=True)

    def delete_task(self, task_id: str, user_id: str) -> None:
        if self.store.delete_owned(task_id, user_id) == 0:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        logger.info("Task deleted", task_id=task_id, user_id=user_id)

    def tasks_by_status(self, user_id: str, search_term: Optional[str] = None) -> TasksByStatus:
        tasks = self.store.list_for_user(user_id)
        if search_term:
            tasks = [t for t in tasks if matches_search(t, search_term)]
        return group_by_status(tasks)
