"""
Task store (tasks collection). Every mutation is keyed by (task id, owner)
so a caller can only ever touch their own records.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

from ..stores.documents import JsonCollection
from .models import Task


class TaskStore:
    def __init__(self, data_dir: Path):
        self.collection = JsonCollection(data_dir, "tasks")

    def insert(self, task: Task) -> Task:
        self.collection.insert_one(task.model_dump(mode="json"))
        return task

    def list_for_user(self, user_id: str) -> List[Task]:
        return [Task(**doc) for doc in self.collection.find({"user_id": user_id})]

    def update_owned(self, task_id: str, user_id: str, changes: Dict[str, Any]) -> Optional[Task]:
        """Apply ``changes`` if the task exists and belongs to ``user_id``."""
        doc = self.collection.update_one({"id": task_id, "user_id": user_id}, changes)
        return Task(**doc) if doc else None

    def delete_owned(self, task_id: str, user_id: str) -> int:
        return self.collection.delete_one({"id": task_id, "user_id": user_id})
