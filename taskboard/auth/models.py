"""
Auth models.

User is the persisted account record. ExternalProfile is the validated
shape of a Google userinfo payload; raw provider JSON never reaches the
auth service.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, EmailStr, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(BaseModel):
    """User record (email-based, local password and/or Google identity)."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    email: EmailStr
    password_hash: Optional[str] = None
    google_id: Optional[str] = None
    firstname: str = ""
    lastname: str = ""
    created_at: datetime = Field(default_factory=_utcnow)

    @property
    def has_password(self) -> bool:
        return bool(self.password_hash)


class ExternalProfile(BaseModel):
    """Verified profile returned by the external identity provider."""

    model_config = ConfigDict(extra="ignore")

    sub: str = Field(..., min_length=1)
    email: EmailStr
    email_verified: bool = False
    given_name: str = ""
    family_name: str = ""


class AuthResult(BaseModel):
    """Outcome of a successful signup/login."""

    user_id: str
    token: str
    created: bool = False
