from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from taskboard.auth.service import AuthService
from taskboard.auth.tokens import SessionSigner
from taskboard.auth.users import UserStore
from taskboard.core.config import Settings
from taskboard.tasks.service import TaskService
from taskboard.tasks.store import TaskStore
from taskboard_web.app import create_app

from helpers import FakeGoogleClient


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    # Lowest bcrypt cost keeps the suite fast
    return Settings(data_dir=tmp_path, session_secret="test-secret", bcrypt_rounds=4)


@pytest.fixture()
def user_store(settings: Settings) -> UserStore:
    return UserStore(settings.data_dir)


@pytest.fixture()
def auth_service(settings: Settings, user_store: UserStore) -> AuthService:
    signer = SessionSigner(settings.session_secret, settings.session_max_age_seconds)
    return AuthService(user_store, signer, bcrypt_rounds=settings.bcrypt_rounds)


@pytest.fixture()
def task_store(settings: Settings) -> TaskStore:
    return TaskStore(settings.data_dir)


@pytest.fixture()
def task_service(task_store: TaskStore) -> TaskService:
    return TaskService(task_store)


@pytest.fixture()
def google() -> FakeGoogleClient:
    return FakeGoogleClient()


@pytest.fixture()
def app(settings: Settings, google: FakeGoogleClient):
    app = create_app(settings)
    app.state.google_client = google
    return app


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)
