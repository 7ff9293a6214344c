"""Server status."""

from __future__ import annotations

from ..http import HttpResponse
from .base import ResourceBase


class StatusResource(ResourceBase):
    """Query the unauthenticated status endpoint."""

    def get(self) -> HttpResponse:
        return self._get("/status")
