"""Content sets."""

from __future__ import annotations

from typing import Any

from ..fields import map_fields
from ..http import HttpResponse
from ..options import merge_options, validate_required
from ..shaping import compact
from .base import ResourceBase

CONTENT_FIELDS = (
    "name",
    "label",
    "type",
    "vendor",
    "content_url",
    "gpg_url",
    "modified_product_ids",
    "arches",
    "required_tags",
    "metadata_expire",
)


class ContentResource(ResourceBase):
    """Manage content, owner scoped for writes and global for reads."""

    def list(self) -> HttpResponse:
        return self._get("/content")

    def get(self, **opts: Any) -> HttpResponse:
        return self._get_by_id("/content", "content_id", opts)

    def create(self, **opts: Any) -> HttpResponse:
        defaults = {
            "content_id": None,
            "name": None,
            "label": None,
            "type": "yum",
            "vendor": "Red Hat",
            "content_url": "",
            "gpg_url": "",
            "modified_product_ids": [],
            "arches": None,
            "required_tags": None,
            "metadata_expire": None,
            "key": None,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "key")

        content = map_fields(opts, CONTENT_FIELDS)
        content["id"] = opts["content_id"]
        return self._post(f"/owners/{opts['key']}/content", compact(content))

    def update(self, **opts: Any) -> HttpResponse:
        """Update owner content; only the options that are set are sent."""

        defaults = {"content_id": None, "key": None, **{name: None for name in CONTENT_FIELDS}}
        opts = merge_options(opts, defaults)
        validate_required(opts, "key", "content_id")

        content = map_fields(opts, CONTENT_FIELDS)
        content["id"] = opts["content_id"]
        path = f"/owners/{opts['key']}/content/{opts['content_id']}"
        return self._put(path, compact(content))

    def delete(self, **opts: Any) -> HttpResponse:
        defaults = {
            "content_id": None,
            "key": None,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts)

        return self._delete(f"/owners/{opts['key']}/content/{opts['content_id']}")
