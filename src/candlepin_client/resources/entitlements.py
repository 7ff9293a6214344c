"""Entitlement operations."""

from __future__ import annotations

from typing import Any

from ..fields import select_subset
from ..http import HttpResponse
from ..options import merge_options, validate_required
from ..shaping import query_params
from .base import ResourceBase


class EntitlementsResource(ResourceBase):
    """Inspect and adjust entitlements granted to consumers."""

    def get(self, **opts: Any) -> HttpResponse:
        return self._get_by_id("/entitlements", "entitlement_id", opts)

    def upstream_certificate(self, **opts: Any) -> HttpResponse:
        opts = merge_options(opts, {"id": None})
        validate_required(opts)
        return self._get_text(f"/entitlements/{opts['id']}/upstream_cert")

    def update(self, **opts: Any) -> HttpResponse:
        defaults = {
            "id": None,
            "quantity": 1,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts)

        return self._put(f"/entitlements/{opts['id']}", select_subset(opts, ["id", "quantity"]))

    def migrate(self, **opts: Any) -> HttpResponse:
        """Move ``quantity`` of an entitlement to the consumer ``to_consumer``."""

        defaults = {
            "id": None,
            "to_consumer": None,
            "quantity": 1,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "id", "to_consumer")

        params = query_params(opts, ["to_consumer", "quantity"])
        return self._put(f"/entitlements/{opts['id']}/migrate", params=params)
