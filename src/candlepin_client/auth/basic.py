"""HTTP Basic authentication support."""

from __future__ import annotations

from dataclasses import dataclass, field

from requests import Session
from requests.auth import HTTPBasicAuth

from .base import AuthStrategy


@dataclass(frozen=True, slots=True)
class BasicAuth(AuthStrategy):
    """Attach HTTP Basic credentials to every request.

    ``requests`` sends the header up front rather than waiting for a
    challenge, so the server sees credentials on each call.
    """

    username: str
    password: str = field(repr=False)

    def apply(self, session: Session) -> None:
        session.auth = HTTPBasicAuth(self.username, self.password)
