"""
Auth "middleware" helpers.

We expose FastAPI dependencies that:
- read the session token from the Authorization header or the session cookie
- validate it via the auth service and return the caller's user id
- hand route handlers an explicit SessionContext, applied to the response
  afterwards with apply_session()
"""

from __future__ import annotations

from typing import Optional

from fastapi import Request, Response

from taskboard.auth.service import AuthService
from taskboard.core.config import Settings
from taskboard.core.session import SessionContext
from taskboard.tasks.service import TaskService
from taskboard.utils.exceptions import UnauthorizedError


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_task_service(request: Request) -> TaskService:
    return request.app.state.task_service


def extract_token(request: Request) -> Optional[str]:
    # Authorization: Bearer <token> wins over the cookie
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.lower().startswith("bearer "):
        token = auth_header[7:].strip()
        if token:
            return token
    settings = get_settings(request)
    return request.cookies.get(settings.session_cookie_name) or None


def get_session(request: Request) -> SessionContext:
    """Dependency: the request's session state."""
    return SessionContext(token=extract_token(request))


async def require_user(request: Request) -> str:
    """
    Dependency for protected routes.

    Returns the authenticated user id; raises UnauthorizedError (401) if the
    token is missing, tampered with or expired.
    """
    token = extract_token(request)
    if not token:
        raise UnauthorizedError("Not authenticated")
    return get_auth_service(request).resolve_token(token)


def apply_session(response: Response, session: SessionContext, settings: Settings) -> None:
    """Write SessionContext changes to the response cookie."""
    if not session.changed:
        return
    if session.token:
        response.set_cookie(
            key=settings.session_cookie_name,
            value=session.token,
            max_age=settings.session_max_age_seconds,
            httponly=True,
            secure=settings.is_production,
            samesite="lax",
        )
    else:
        response.delete_cookie(settings.session_cookie_name)
