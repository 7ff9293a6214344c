"""Base abstractions for auth strategies."""
from __future__ import annotations

from abc import ABC, abstractmethod

from requests import Session


class AuthStrategy(ABC):
    """Interface each authentication mechanism must implement."""

    @abstractmethod
    def apply(self, session: Session) -> None:
        """Configure a freshly built session with the necessary credentials."""

    def close(self) -> None:
        """Optional hook for releasing resources held by the strategy."""


class NoAuth(AuthStrategy):
    """Send requests without credentials."""

    def apply(self, session: Session) -> None:
        session.auth = None

    def __repr__(self) -> str:
        return "NoAuth()"
