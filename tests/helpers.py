"""Shared test helpers."""

from __future__ import annotations

from typing import Dict, List

from fastapi.testclient import TestClient

from taskboard.auth.models import ExternalProfile
from taskboard.utils.exceptions import UnauthorizedError


class FakeGoogleClient:
    """Stands in for GoogleIdentityClient; maps access tokens to profiles."""

    def __init__(self) -> None:
        self.profiles: Dict[str, ExternalProfile] = {}
        self.calls: List[str] = []

    def add(self, access_token: str, **profile) -> None:
        self.profiles[access_token] = ExternalProfile(**profile)

    def fetch_profile(self, access_token: str) -> ExternalProfile:
        self.calls.append(access_token)
        profile = self.profiles.get(access_token)
        if profile is None:
            raise UnauthorizedError("Invalid Google access token")
        return profile


def signup(client: TestClient, email: str = "user1@example.com", password: str = "password123") -> Dict:
    res = client.post(
        "/auth/signup",
        json={"email": email, "password": password, "firstname": "Test", "lastname": "User"},
    )
    assert res.status_code == 201, res.text
    return res.json()["data"]


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
