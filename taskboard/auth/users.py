"""
User storage backed by the users JSON collection.
Emails are unique and matched case-insensitively.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..stores.documents import JsonCollection
from ..utils.exceptions import ConflictError
from ..utils.logger import get_logger
from .models import User

logger = get_logger(__name__)


def _normalize_email(value) -> str:
    return str(value or "").strip().lower()


class UserStore:
    """User CRUD over a JsonCollection."""

    def __init__(self, data_dir: Path):
        self.collection = JsonCollection(data_dir, "users")

    def find_by_email(self, email: str) -> Optional[User]:
        wanted = _normalize_email(email)
        for doc in self.collection.find():
            if _normalize_email(doc.get("email")) == wanted:
                return User(**doc)
        return None

    def find_by_id(self, user_id: str) -> Optional[User]:
        doc = self.collection.find_one({"id": user_id})
        return User(**doc) if doc else None

    def create_user(self, user: User) -> User:
        """Persist a new user; ConflictError if the email is taken."""
        inserted = self.collection.insert_unique(
            user.model_dump(mode="json"), key="email", normalize=_normalize_email
        )
        if not inserted:
            raise ConflictError("Email already registered")
        logger.info("User created", user_id=user.id)
        return user

    def link_google_id(self, user_id: str, google_id: str) -> Optional[User]:
        """Attach a Google id to a user that has none; other fields are kept."""
        doc = self.collection.update_one({"id": user_id, "google_id": None}, {"google_id": google_id})
        if doc is None:
            return self.find_by_id(user_id)
        logger.info("Google identity linked", user_id=user_id)
        return User(**doc)
