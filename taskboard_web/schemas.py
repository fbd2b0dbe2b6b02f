"""API request/response models"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from taskboard.tasks.models import Task, TasksByStatus, TaskStatus


class SignupRequest(BaseModel):
    """Request model for POST /auth/signup"""
    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr
    password: Optional[str] = Field(default=None, min_length=6, max_length=72)
    firstname: str = Field(..., min_length=1, max_length=100)
    lastname: str = Field(..., min_length=1, max_length=100)
    external_id: Optional[str] = Field(default=None, alias="externalId", min_length=1)


class LoginRequest(BaseModel):
    """Request model for POST /auth/login"""
    email: EmailStr
    password: Optional[str] = None


class GoogleAuthRequest(BaseModel):
    """Request model for POST /auth/google"""
    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(..., alias="accessToken", min_length=1)


class CreateTaskRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., max_length=5000)


class EditTaskRequest(CreateTaskRequest):
    pass


class UpdateStatusRequest(BaseModel):
    status: TaskStatus


class AuthData(BaseModel):
    id: str
    token: str


class ApiResponse(BaseModel):
    """Envelope used by the auth endpoints"""
    status: int
    message: str
    data: Optional[AuthData] = None


class TaskResponse(BaseModel):
    """Task as returned to clients (camelCase keys)"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    description: str
    status: TaskStatus
    user_id: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(**task.model_dump())


class TasksByStatusResponse(BaseModel):
    created: List[TaskResponse]
    inprogress: List[TaskResponse]
    completed: List[TaskResponse]

    @classmethod
    def from_grouped(cls, grouped: TasksByStatus) -> "TasksByStatusResponse":
        return cls(
            created=[TaskResponse.from_task(t) for t in grouped.created],
            inprogress=[TaskResponse.from_task(t) for t in grouped.inprogress],
            completed=[TaskResponse.from_task(t) for t in grouped.completed],
        )


class ValidationErrorDetail(BaseModel):
    field: str
    message: str


def validation_error_body(errors: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Shape FastAPI validation errors as {statusCode, message, error, details}."""
    details = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        details.append(
            ValidationErrorDetail(field=".".join(loc) or "body", message=err.get("msg", "Invalid value")).model_dump()
        )
    return {
        "statusCode": 400,
        "message": "Validation failed",
        "error": "Bad Request",
        "details": details,
    }
