"""FastAPI application factory for the Taskboard API"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskboard import __version__
from taskboard.auth.google import GoogleIdentityClient
from taskboard.auth.service import AuthService
from taskboard.auth.tokens import SessionSigner
from taskboard.auth.users import UserStore
from taskboard.core.config import Settings, load_settings
from taskboard.tasks.service import TaskService
from taskboard.tasks.store import TaskStore
from taskboard.utils.exceptions import InternalError, TaskboardError, UnauthorizedError
from taskboard.utils.logger import get_logger
from .auth_routes import router as auth_router
from .schemas import validation_error_body
from .security_headers import SecurityHeadersMiddleware
from .task_routes import router as task_router

logger = get_logger(__name__)


def _install_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(TaskboardError)
    async def taskboard_error_handler(request: Request, exc: TaskboardError) -> JSONResponse:
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
        payload = exc.to_payload()
        if exc.status_code >= 500:
            logger.error("Request failed", path=request.url.path, error=exc.message)
            if not isinstance(exc, InternalError):
                # storage/config details stay in the logs
                payload = {"status": exc.status_code, "message": "Internal server error"}
        return JSONResponse(status_code=exc.status_code, content=payload, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=validation_error_body(list(exc.errors())),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error", path=request.url.path, method=request.method)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"status": 500, "message": "Internal server error"},
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the API app.

    Stores and services are created here and kept on app.state, so each
    app instance (and each test) gets its own data directory.
    """
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Starting Taskboard API", environment=settings.environment, data_dir=str(settings.data_dir))
        yield
        logger.info("Shutting down Taskboard API")

    app = FastAPI(
        title="Taskboard API",
        description="Personal task management backend",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    signer = SessionSigner(settings.session_secret, settings.session_max_age_seconds)
    app.state.auth_service = AuthService(UserStore(settings.data_dir), signer, settings.bcrypt_rounds)
    app.state.task_service = TaskService(TaskStore(settings.data_dir))
    app.state.google_client = GoogleIdentityClient(
        settings.google_userinfo_url, timeout_seconds=settings.google_timeout_seconds
    )

    # Credentials (cookies) cannot be combined with a wildcard origin, so
    # cross-origin cookie sessions need an explicit CORS_ORIGINS list
    wildcard = settings.cors_origins == ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=not wildcard,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_middleware(SecurityHeadersMiddleware, hsts=settings.is_production)

    _install_exception_handlers(app)
    app.include_router(auth_router)
    app.include_router(task_router)

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
