"""Consumer type definitions."""

from __future__ import annotations

from typing import Any

from ..http import HttpResponse
from ..options import merge_options, validate_required
from ..shaping import shape_body
from .base import ResourceBase


class ConsumerTypesResource(ResourceBase):
    """Manage the consumer types (``system``, ``hypervisor``...) a server accepts."""

    def list(self) -> HttpResponse:
        return self._get("/consumertypes")

    def get(self, **opts: Any) -> HttpResponse:
        return self._get_by_id("/consumertypes", "type_id", opts)

    def create(self, **opts: Any) -> HttpResponse:
        defaults = {
            "label": None,
            "manifest": False,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "label")

        return self._post("/consumertypes", shape_body(opts, ("label", "manifest")))

    def delete(self, **opts: Any) -> HttpResponse:
        return self._delete_by_id("/consumertypes", "type_id", opts)
