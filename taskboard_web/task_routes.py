"""
FastAPI routes for tasks.

Prefix: /task. All routes require an authenticated session; records that
are missing or owned by someone else both answer 404.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from taskboard.tasks.service import TaskService
from .auth_middleware import get_task_service, require_user
from .schemas import (
    CreateTaskRequest,
    EditTaskRequest,
    TaskResponse,
    TasksByStatusResponse,
    UpdateStatusRequest,
)

router = APIRouter(prefix="/task", tags=["tasks"])


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: CreateTaskRequest,
    user_id: str = Depends(require_user),
    tasks: TaskService = Depends(get_task_service),
) -> TaskResponse:
    task = tasks.create_task(payload.title, payload.description, user_id)
    return TaskResponse.from_task(task)


@router.get("", response_model=List[TaskResponse])
def get_all_tasks(
    user_id: str = Depends(require_user),
    tasks: TaskService = Depends(get_task_service),
) -> List[TaskResponse]:
    """All of the caller's tasks, newest first."""
    return [TaskResponse.from_task(t) for t in tasks.get_all_tasks(user_id)]


@router.get("/search", response_model=TasksByStatusResponse)
def search_tasks(
    search_string: Optional[str] = Query(default=None, alias="searchString", max_length=200),
    user_id: str = Depends(require_user),
    tasks: TaskService = Depends(get_task_service),
) -> TasksByStatusResponse:
    """
    Tasks grouped by status.

    With searchString, only tasks whose title or description contains it
    (case-insensitive) are returned.
    """
    grouped = tasks.tasks_by_status(user_id, search_string)
    return TasksByStatusResponse.from_grouped(grouped)


@router.put("/{task_id}", response_model=TaskResponse)
def edit_task(
    task_id: str,
    payload: EditTaskRequest,
    user_id: str = Depends(require_user),
    tasks: TaskService = Depends(get_task_service),
) -> TaskResponse:
    task = tasks.edit_task(task_id, payload.title, payload.description, user_id)
    return TaskResponse.from_task(task)


@router.patch("/{task_id}/status", response_model=TaskResponse)
def update_status(
    task_id: str,
    payload: UpdateStatusRequest,
    user_id: str = Depends(require_user),
    tasks: TaskService = Depends(get_task_service),
) -> TaskResponse:
    task = tasks.update_status(task_id, payload.status, user_id)
    return TaskResponse.from_task(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: str,
    user_id: str = Depends(require_user),
    tasks: TaskService = Depends(get_task_service),
) -> Response:
    tasks.delete_task(task_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
