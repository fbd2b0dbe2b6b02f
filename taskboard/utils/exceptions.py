"""Custom exceptions for Taskboard"""

from typing import Optional


class TaskboardError(Exception):
    """Base exception for Taskboard.

    ``message`` is safe to show to API callers; ``status_code`` is the HTTP
    status the web layer answers with.
    """

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_payload(self) -> dict:
        return {"status": self.status_code, "message": self.message}


class BadInputError(TaskboardError):
    """Malformed or missing required field"""
    status_code = 400
    default_message = "Bad request"


class UnauthorizedError(TaskboardError):
    """Bad credentials, missing/invalid token or unverified external identity"""
    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(TaskboardError):
    """Record absent or not owned by the caller"""
    status_code = 404
    default_message = "Not found"


class ConflictError(TaskboardError):
    """Duplicate unique value (e.g. email)"""
    status_code = 409
    default_message = "Conflict"


class InternalError(TaskboardError):
    """Unexpected failure, e.g. identity provider unreachable"""
    status_code = 500


class ConfigError(TaskboardError):
    """Configuration error"""
    pass


class StorageError(TaskboardError):
    """Persistence layer failure"""
    pass
