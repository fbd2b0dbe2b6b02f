"""
Authentication service layer.

- Email/password users with bcrypt hashes
- Google sign-in (verified profile -> create or link user)
- Signed session tokens; the issued token is written into the caller's
  SessionContext, which the web layer turns into a cookie.

Every failure is a typed TaskboardError; nothing here formats HTTP
responses.
"""

from __future__ import annotations

from typing import Optional

import bcrypt

from ..core.session import SessionContext
from ..utils.exceptions import BadInputError, ConflictError, UnauthorizedError
from ..utils.logger import get_logger
from .models import AuthResult, ExternalProfile, User
from .tokens import SessionSigner
from .users import UserStore

logger = get_logger(__name__)

# bcrypt input limit
BCRYPT_MAX_BYTES = 72


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password with bcrypt."""
    raw = password.encode("utf-8")
    if len(raw) > BCRYPT_MAX_BYTES:
        raise BadInputError("Password is too long")
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(raw, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


class AuthService:
    def __init__(self, users: UserStore, signer: SessionSigner, bcrypt_rounds: int = 12):
        self.users = users
        self.signer = signer
        self.bcrypt_rounds = bcrypt_rounds

    def _start_session(self, user: User, session: SessionContext, created: bool = False) -> AuthResult:
        token = self.signer.issue(user.id)
        session.set_token(token)
        return AuthResult(user_id=user.id, token=token, created=created)

    def signup(
        self,
        email: str,
        password: Optional[str],
        firstname: str,
        lastname: str,
        session: SessionContext,
        external_id: Optional[str] = None,
    ) -> AuthResult:
        """
        Register a new user.

        - Email must be unique (case-insensitive) -> ConflictError.
        - Password is mandatory unless an external id is supplied.
        """
        if self.users.find_by_email(email):
            raise ConflictError("Email already registered")
        if not external_id and not password:
            raise BadInputError("Password is required for signup")

        user = User(
            email=email,
            password_hash=hash_password(password, self.bcrypt_rounds) if password else None,
            google_id=external_id or None,
            firstname=firstname,
            lastname=lastname,
        )
        # create_user re-checks uniqueness under the collection lock
        self.users.create_user(user)
        logger.info("User signed up", user_id=user.id, external=bool(external_id))
        return self._start_session(user, session, created=True)

    def login(self, email: str, password: Optional[str], session: SessionContext) -> AuthResult:
        """Return a fresh session for valid credentials, else UnauthorizedError."""
        user = self.users.find_by_email(email)
        if not user or not user.has_password:
            logger.info("Login rejected", reason="unknown_or_external_only")
            raise UnauthorizedError("Invalid credentials")
        if not password:
            raise UnauthorizedError("Password is required")
        if not verify_password(password, user.password_hash or ""):
            logger.info("Login rejected", reason="bad_password", user_id=user.id)
            raise UnauthorizedError("Invalid credentials")
        logger.info("User logged in", user_id=user.id)
        return self._start_session(user, session)

    def external_identity_auth(self, profile: Optional[ExternalProfile], session: SessionContext) -> AuthResult:
        """
        Sign in with a verified external profile.

        Creates the user when the email is new; links the external id to an
        existing account that has none, leaving its other fields untouched.
        """
        if profile is None:
            raise UnauthorizedError("External identity missing")
        if not profile.email_verified:
            raise UnauthorizedError("Google email not verified")

        user = self.users.find_by_email(profile.email)
        created = False
        if user is None:
            user = self.users.create_user(
                User(
                    email=profile.email,
                    google_id=profile.sub,
                    firstname=profile.given_name,
                    lastname=profile.family_name,
                )
            )
            created = True
        elif not user.google_id:
            user = self.users.link_google_id(user.id, profile.sub) or user

        logger.info("External identity login", user_id=user.id, created=created)
        return self._start_session(user, session, created=created)

    def logout(self, session: SessionContext) -> None:
        """Clear the session (idempotent)."""
        session.clear()

    def resolve_token(self, token: Optional[str]) -> str:
        """Return the user id for a valid session token."""
        return self.signer.verify(token or "")
