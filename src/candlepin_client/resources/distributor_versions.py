"""Distributor version capabilities."""

from __future__ import annotations

from typing import Any

from ..http import HttpResponse
from ..options import merge_options, validate_required
from ..shaping import query_params, shape_body
from .base import ResourceBase


class DistributorVersionsResource(ResourceBase):
    """Manage the capability sets advertised for distributor versions."""

    def search(self, **opts: Any) -> HttpResponse:
        """Search distributor versions by ``name`` and/or ``capability``."""

        defaults = {
            "name": None,
            "capability": None,
        }
        opts = merge_options(opts, defaults)

        query = {"capability": opts["capability"], "name_search": opts["name"]}
        return self._get("/distributor_versions", query_params(query))

    def create(self, **opts: Any) -> HttpResponse:
        defaults = {
            "name": None,
            "display_name": None,
            "capabilities": [],
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "name")

        body = shape_body(
            opts,
            ("name", "display_name", "capabilities"),
            named_lists={"capabilities": "name"},
        )
        return self._post("/distributor_versions", body)

    def update(self, **opts: Any) -> HttpResponse:
        defaults = {
            "id": None,
            "name": None,
            "display_name": None,
            "capabilities": [],
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "id")

        body = shape_body(
            opts,
            ("id", "name", "display_name", "capabilities"),
            named_lists={"capabilities": "name"},
        )
        return self._put(f"/distributor_versions/{opts['id']}", body)

    def delete(self, **opts: Any) -> HttpResponse:
        return self._delete_by_id("/distributor_versions", "id", opts)
