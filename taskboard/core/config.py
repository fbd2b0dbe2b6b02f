"""
Taskboard configuration.

All values are loaded from environment variables (typically via .env):

- TASKBOARD_DATA_DIR       directory holding users.json / tasks.json
- SESSION_SECRET           HMAC secret for session tokens (required in production)
- SESSION_MAX_AGE_SECONDS  token lifetime; also the cookie max-age
- SESSION_COOKIE_NAME
- BCRYPT_ROUNDS
- GOOGLE_USERINFO_URL
- GOOGLE_TIMEOUT_SECONDS
- ENVIRONMENT              "production" enables secure cookies
- CORS_ORIGINS             comma separated; "*" (default) disables credentialed
                           CORS, so a browser client on another origin needs an
                           explicit list for cookie sessions
- LOG_LEVEL / LOG_FORMAT
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from ..utils.exceptions import ConfigError

DEV_SESSION_SECRET = "taskboard-dev-secret-change-me"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v3/userinfo"
SESSION_MAX_AGE_SECONDS = 7 * 24 * 60 * 60


@dataclass(frozen=True)
class Settings:
    data_dir: Path = Path("data")
    session_secret: str = DEV_SESSION_SECRET
    session_max_age_seconds: int = SESSION_MAX_AGE_SECONDS
    session_cookie_name: str = "session"
    bcrypt_rounds: int = 12
    google_userinfo_url: str = GOOGLE_USERINFO_URL
    google_timeout_seconds: float = 10.0
    environment: str = "development"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


def _int_env(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


def _float_env(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}")


def load_settings() -> Settings:
    """Build Settings from the current environment."""
    environment = (os.getenv("ENVIRONMENT") or "development").strip().lower()
    secret = os.getenv("SESSION_SECRET") or ""
    if not secret:
        if environment == "production":
            raise ConfigError("SESSION_SECRET must be set in production.")
        secret = DEV_SESSION_SECRET

    origins_raw = os.getenv("CORS_ORIGINS") or "*"
    origins = [o.strip() for o in origins_raw.split(",") if o.strip()] or ["*"]

    return Settings(
        data_dir=Path(os.getenv("TASKBOARD_DATA_DIR", "data")),
        session_secret=secret,
        session_max_age_seconds=_int_env("SESSION_MAX_AGE_SECONDS", SESSION_MAX_AGE_SECONDS),
        session_cookie_name=os.getenv("SESSION_COOKIE_NAME") or "session",
        bcrypt_rounds=_int_env("BCRYPT_ROUNDS", 12),
        google_userinfo_url=os.getenv("GOOGLE_USERINFO_URL") or GOOGLE_USERINFO_URL,
        google_timeout_seconds=_float_env("GOOGLE_TIMEOUT_SECONDS", 10.0),
        environment=environment,
        cors_origins=origins,
        log_level=os.getenv("LOG_LEVEL") or "INFO",
        log_format=os.getenv("LOG_FORMAT") or "json",
    )
