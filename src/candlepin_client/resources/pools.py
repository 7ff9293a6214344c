"""Pool helpers."""

from __future__ import annotations

from typing import Any

from ..http import HttpResponse
from ..options import merge_options, validate_required
from ..shaping import query_params
from .base import ResourceBase


class PoolsResource(ResourceBase):
    """Work with entitlement pools."""

    def list(self, **opts: Any) -> HttpResponse:
        """List pools.

        Options:
            consumer: Only pools available to this consumer uuid.
            owner: Only pools of this owner id.
            product: Only pools providing this product id.
            listall: Include pools the consumer cannot attach.
        """

        defaults = {
            "consumer": None,
            "owner": None,
            "product": None,
            "listall": None,
        }
        opts = merge_options(opts, defaults)
        return self._get("/pools", query_params(opts))

    def get(self, **opts: Any) -> HttpResponse:
        return self._get_by_id("/pools", "pool_id", opts)

    def entitlements(self, **opts: Any) -> HttpResponse:
        opts = merge_options(opts, {"pool_id": None})
        validate_required(opts)
        return self._get(f"/pools/{opts['pool_id']}/entitlements")

    def statistics(self, **opts: Any) -> HttpResponse:
        defaults = {
            "pool_id": None,
            "val_type": None,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "pool_id")

        path = f"/pools/{opts['pool_id']}/statistics"
        if opts["val_type"]:
            path = f"{path}/{opts['val_type']}"
        return self._get(path)

    def delete(self, **opts: Any) -> HttpResponse:
        return self._delete_by_id("/pools", "pool_id", opts)
