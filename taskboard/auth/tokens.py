"""
Signed session tokens.

We sign {"id": user_id} with itsdangerous (HMAC + timestamp) so:
- tokens can't be forged/tampered
- tokens expire after max_age_seconds

There is no server-side session table; validity depends only on the
signature and the token age.
"""

from __future__ import annotations

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from ..utils.exceptions import UnauthorizedError

TOKEN_SALT = "taskboard-session"


class SessionSigner:
    def __init__(self, secret: str, max_age_seconds: int):
        if not secret:
            raise ValueError("Session secret must not be empty.")
        self.max_age_seconds = max_age_seconds
        self._serializer = URLSafeTimedSerializer(secret_key=secret, salt=TOKEN_SALT)

    def issue(self, user_id: str) -> str:
        return self._serializer.dumps({"id": user_id})

    def verify(self, token: str) -> str:
        """Return the user id carried by ``token`` or raise UnauthorizedError."""
        if not token:
            raise UnauthorizedError("Not authenticated")
        try:
            data = self._serializer.loads(token, max_age=self.max_age_seconds)
        except SignatureExpired:
            raise UnauthorizedError("Session expired")
        except BadSignature:
            raise UnauthorizedError("Invalid session token")
        if not isinstance(data, dict) or not data.get("id"):
            raise UnauthorizedError("Invalid session token")
        return str(data["id"])
