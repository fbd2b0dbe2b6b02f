"""
Google identity verification.

Exchanges a Google OAuth access token for the user's profile via the
userinfo endpoint and validates it into an ExternalProfile.

- Non-2xx from Google        -> UnauthorizedError (token rejected)
- Network error / bad payload -> InternalError
"""

from __future__ import annotations

from typing import Any, Dict

import requests
from pydantic import ValidationError

from ..utils.exceptions import InternalError, UnauthorizedError
from ..utils.logger import get_logger
from .models import ExternalProfile

logger = get_logger(__name__)


class GoogleIdentityClient:
    def __init__(self, userinfo_url: str, timeout_seconds: float = 10.0, session: requests.Session | None = None):
        self.userinfo_url = userinfo_url
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    def fetch_profile(self, access_token: str) -> ExternalProfile:
        if not access_token:
            raise UnauthorizedError("Invalid Google access token")
        try:
            r = self.session.get(
                self.userinfo_url,
                headers={"Authorization": f"Bearer {access_token}"},
                timeout=self.timeout_seconds,
            )
        except requests.exceptions.Timeout as e:
            logger.error("Google userinfo timed out", error=str(e))
            raise InternalError("Google login failed")
        except requests.exceptions.RequestException as e:
            logger.error("Google userinfo request failed", error=str(e))
            raise InternalError("Google login failed")

        if not r.ok:
            logger.warning("Google rejected access token", status_code=r.status_code)
            raise UnauthorizedError("Invalid Google access token")

        try:
            data: Dict[str, Any] = r.json()
            return ExternalProfile.model_validate(data)
        except (ValueError, ValidationError) as e:
            logger.error("Google userinfo payload invalid", error=str(e))
            raise InternalError("Google login failed")
