"""
Per-request session context.

Auth operations never touch cookies or globals. They receive a
SessionContext, record the token they issued (or that the session was
cleared), and the web layer applies the result to the outgoing response.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class SessionContext:
    """Session state for a single request."""

    token: Optional[str] = None
    changed: bool = False

    def set_token(self, token: str) -> None:
        self.token = token
        self.changed = True

    def clear(self) -> None:
        self.token = None
        self.changed = True
