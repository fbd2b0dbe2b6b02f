from pathlib import Path

import pytest

from taskboard.core.config import DEV_SESSION_SECRET, SESSION_MAX_AGE_SECONDS, load_settings
from taskboard.utils.exceptions import ConfigError

ENV_VARS = [
    "TASKBOARD_DATA_DIR", "SESSION_SECRET", "SESSION_MAX_AGE_SECONDS", "SESSION_COOKIE_NAME",
    "BCRYPT_ROUNDS", "GOOGLE_USERINFO_URL", "GOOGLE_TIMEOUT_SECONDS", "ENVIRONMENT",
    "CORS_ORIGINS", "LOG_LEVEL", "LOG_FORMAT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = load_settings()

    assert settings.data_dir == Path("data")
    assert settings.session_secret == DEV_SESSION_SECRET
    assert settings.session_max_age_seconds == SESSION_MAX_AGE_SECONDS
    assert settings.session_cookie_name == "session"
    assert settings.cors_origins == ["*"]
    assert not settings.is_production


def test_reads_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("TASKBOARD_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("SESSION_SECRET", "s3cret")
    monkeypatch.setenv("SESSION_MAX_AGE_SECONDS", "60")
    monkeypatch.setenv("BCRYPT_ROUNDS", "10")
    monkeypatch.setenv("GOOGLE_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example,")

    settings = load_settings()

    assert settings.data_dir == tmp_path
    assert settings.session_secret == "s3cret"
    assert settings.session_max_age_seconds == 60
    assert settings.bcrypt_rounds == 10
    assert settings.google_timeout_seconds == 2.5
    assert settings.cors_origins == ["https://a.example", "https://b.example"]


def test_production_requires_secret(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "Production")

    with pytest.raises(ConfigError):
        load_settings()

    monkeypatch.setenv("SESSION_SECRET", "s3cret")
    assert load_settings().is_production


def test_bad_numbers_raise(monkeypatch):
    monkeypatch.setenv("BCRYPT_ROUNDS", "twelve")

    with pytest.raises(ConfigError, match="BCRYPT_ROUNDS"):
        load_settings()
