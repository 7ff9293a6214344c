"""Content delivery network definitions."""

from __future__ import annotations

from typing import Any

from ..http import HttpResponse
from ..options import merge_options, validate_required
from ..shaping import shape_body
from .base import ResourceBase


def cdn_defaults() -> dict[str, Any]:
    return {
        "label": None,
        "name": None,
        "url": None,
        "certificate": None,
    }


class CdnResource(ResourceBase):
    """Manage CDNs that serve content to consumers."""

    def list(self) -> HttpResponse:
        return self._get("/cdn")

    def create(self, **opts: Any) -> HttpResponse:
        opts = merge_options(opts, cdn_defaults())
        validate_required(opts, "label", "name", "url")

        return self._post("/cdn", shape_body(opts, ("label", "name", "url", "certificate")))

    def update(self, **opts: Any) -> HttpResponse:
        opts = merge_options(opts, cdn_defaults())
        validate_required(opts, "label")

        body = shape_body(opts, ("name", "url", "certificate"))
        return self._put(f"/cdn/{opts['label']}", body)

    def delete(self, **opts: Any) -> HttpResponse:
        return self._delete_by_id("/cdn", "label", opts)
