"""Product definitions, owner scoped and global."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..fields import map_fields
from ..http import HttpResponse
from ..options import merge_options, validate_required
from ..shaping import attribute_objects, compact, query_params
from .base import ResourceBase


class ProductsResource(ResourceBase):
    """Manage products.

    Products live under an owner (``key``); the ``*_global`` helpers query
    the server-wide product views.
    """

    def list(self, **opts: Any) -> HttpResponse:
        opts = merge_options(opts, {"key": None})
        validate_required(opts)
        return self._get(f"/owners/{opts['key']}/products")

    def get(self, **opts: Any) -> HttpResponse:
        opts = self._product_opts(opts)
        return self._get(f"/owners/{opts['key']}/products/{opts['product_id']}")

    def create(self, **opts: Any) -> HttpResponse:
        """Create a product under owner ``key``.

        Options:
            product_id: Product id.
            name: Product name.
            type: Stored as the ``type`` product attribute.
            multiplier: Entitlement multiplier.
            attributes: Mapping of additional product attributes.
            dependent_product_ids: Ids of products this one depends on.
            product_content: Content entries to attach.
            relies_on: Ids of products this one relies on.
            key: Owner key (required).
        """

        defaults = {
            "product_id": None,
            "type": "SVC",
            "name": None,
            "multiplier": 1,
            "attributes": {},
            "dependent_product_ids": [],
            "product_content": [],
            "relies_on": [],
            "key": None,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "key")
        validate_required(opts, "attributes", predicate=lambda value: isinstance(value, Mapping))

        attributes = {**opts["attributes"], "type": opts["type"]}
        product = map_fields(
            opts,
            ["name", "multiplier", "dependent_product_ids", "relies_on", "product_content"],
        )
        product["id"] = opts["product_id"]
        product["attributes"] = attribute_objects(attributes)

        return self._post(f"/owners/{opts['key']}/products", compact(product))

    def update(self, **opts: Any) -> HttpResponse:
        defaults = {
            "product_id": None,
            "name": None,
            "multiplier": None,
            "attributes": {},
            "dependent_product_ids": [],
            "relies_on": [],
            "key": None,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "key", "product_id")

        product = map_fields(opts, ["name", "multiplier", "dependent_product_ids", "relies_on"])
        product["id"] = opts["product_id"]
        product["attributes"] = attribute_objects(opts["attributes"])

        path = f"/owners/{opts['key']}/products/{opts['product_id']}"
        return self._put(path, compact(product))

    def delete(self, **opts: Any) -> HttpResponse:
        opts = self._product_opts(opts)
        return self._delete(f"/owners/{opts['key']}/products/{opts['product_id']}")

    def certificate(self, **opts: Any) -> HttpResponse:
        opts = self._product_opts(opts)
        return self._get(f"/owners/{opts['key']}/products/{opts['product_id']}/certificate")

    def add_content(self, **opts: Any) -> HttpResponse:
        defaults = {
            "product_id": None,
            "content_id": None,
            "enabled": True,
            "key": None,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts)

        path = f"/owners/{opts['key']}/products/{opts['product_id']}/content/{opts['content_id']}"
        return self._post(path, params=query_params(opts, ["enabled"]))

    def remove_content(self, **opts: Any) -> HttpResponse:
        defaults = {
            "product_id": None,
            "content_id": None,
            "key": None,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts)

        path = f"/owners/{opts['key']}/products/{opts['product_id']}/content/{opts['content_id']}"
        return self._delete(path)

    def get_global(self, **opts: Any) -> HttpResponse:
        return self._get_by_id("/products", "product_id", opts)

    def owners_with(self, **opts: Any) -> HttpResponse:
        """List the owners that have pools for any of ``product_ids``."""

        opts = merge_options(opts, {"product_ids": []})
        validate_required(opts, "product_ids", predicate=bool)

        return self._get("/products/owners", query_params({"product": list(opts["product_ids"])}))

    def global_certificate(self, **opts: Any) -> HttpResponse:
        opts = merge_options(opts, {"product_id": None})
        validate_required(opts)
        return self._get(f"/products/{opts['product_id']}/certificate")

    def statistics(self, **opts: Any) -> HttpResponse:
        defaults = {
            "product_id": None,
            "val_type": None,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "product_id")

        path = f"/products/{opts['product_id']}/statistics"
        if opts["val_type"]:
            path = f"{path}/{opts['val_type']}"
        return self._get(path)

    def _product_opts(self, opts: Mapping[str, Any]) -> dict[str, Any]:
        opts = merge_options(opts, {"key": None, "product_id": None})
        validate_required(opts)
        return opts
