"""Owner (organization) operations."""

from __future__ import annotations

from typing import Any

from ..http import HttpResponse
from ..options import merge_options, validate_required
from ..shaping import query_params, shape_body
from .base import ResourceBase

PAGE_OPTIONS = ("page", "per_page", "order", "sort_by")


def page_defaults() -> dict[str, Any]:
    return {key: None for key in PAGE_OPTIONS}


class OwnersResource(ResourceBase):
    """Manage owners and the resources scoped below them."""

    def list(self) -> HttpResponse:
        return self._get("/owners")

    def get(self, **opts: Any) -> HttpResponse:
        return self._get_by_id("/owners", "key", opts)

    def create(self, **opts: Any) -> HttpResponse:
        """Create an owner.

        Options:
            key: The owner key (required).
            display_name: Human readable name.
            parent_owner: Parent owner id, or an owner mapping carrying ``id``.
        """

        defaults = {
            "key": None,
            "display_name": None,
            "parent_owner": None,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "key")

        body = shape_body(
            opts,
            ("key", "display_name", "parent_owner"),
            references={"parent_owner": "id"},
        )
        return self._post("/owners", body)

    def update(self, **opts: Any) -> HttpResponse:
        """Update an owner; only the options that are set are sent."""

        defaults = {
            "key": None,
            "display_name": None,
            "parent_owner": None,
            "default_service_level": None,
            "content_prefix": None,
            "log_level": None,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "key")

        fields = [key for key in defaults if key != "key"]
        body = shape_body(opts, fields, references={"parent_owner": "id"})
        return self._put(f"/owners/{opts['key']}", body)

    def delete(self, **opts: Any) -> HttpResponse:
        defaults = {
            "key": None,
            "revoke": False,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "key")

        return self._delete(f"/owners/{opts['key']}", query_params(opts, ["revoke"]))

    def _subresource(self, subresource: str, opts: dict[str, Any]) -> HttpResponse:
        opts = merge_options(opts, {"key": None})
        validate_required(opts, "key")
        return self._get(f"/owners/{opts['key']}/{subresource}")

    def info(self, **opts: Any) -> HttpResponse:
        return self._subresource("info", opts)

    def events(self, **opts: Any) -> HttpResponse:
        return self._subresource("events", opts)

    def imports(self, **opts: Any) -> HttpResponse:
        return self._subresource("imports", opts)

    def subscriptions(self, **opts: Any) -> HttpResponse:
        return self._subresource("subscriptions", opts)

    def activation_keys(self, **opts: Any) -> HttpResponse:
        return self._subresource("activation_keys", opts)

    def service_levels(self, **opts: Any) -> HttpResponse:
        defaults = {
            "key": None,
            "exempt": False,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "key")

        return self._get(f"/owners/{opts['key']}/servicelevels", query_params(opts, ["exempt"]))

    def environments(self, **opts: Any) -> HttpResponse:
        defaults = {
            "key": None,
            "name": None,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "key")

        return self._get(f"/owners/{opts['key']}/environments", query_params(opts, ["name"]))

    def create_environment(self, **opts: Any) -> HttpResponse:
        defaults = {
            "key": None,
            "id": None,
            "name": None,
            "description": None,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "key", "id", "name")

        body = shape_body(opts, ("id", "name", "description"))
        return self._post(f"/owners/{opts['key']}/environments", body)

    def hypervisors(self, **opts: Any) -> HttpResponse:
        """List the hypervisor consumers of an owner.

        Options:
            key: The owner key.
            hypervisor_ids: Optional hypervisor ids to filter on; each is sent
                as a separate ``hypervisor_id`` query parameter.
        """

        defaults = {
            "key": None,
            "hypervisor_ids": [],
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "key")

        params = query_params({"hypervisor_id": list(opts["hypervisor_ids"])})
        return self._get(f"/owners/{opts['key']}/hypervisors", params)

    def pools(self, **opts: Any) -> HttpResponse:
        """List the pools of an owner.

        Options:
            key: The owner key (required).
            consumer: Only pools the consumer uuid can use.
            product: Only pools providing this product id.
            listall: Include pools the consumer cannot use.
            attributes: Mapping of pool attributes to filter on, sent as
                ``attribute=<name>:<value>``.
            page, per_page, order, sort_by: Paging controls.
        """

        defaults = {
            "key": None,
            "consumer": None,
            "product": None,
            "listall": None,
            "attributes": {},
            **page_defaults(),
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "key")

        params = query_params(opts, ["consumer", "product", "listall", *PAGE_OPTIONS])
        params.extend(
            ("attribute", f"{name}:{value}") for name, value in (opts["attributes"] or {}).items()
        )
        return self._get(f"/owners/{opts['key']}/pools", params)

    def autoheal(self, **opts: Any) -> HttpResponse:
        opts = merge_options(opts, {"key": None})
        validate_required(opts, "key")
        return self._post(f"/owners/{opts['key']}/entitlements")

    def create_ueber_cert(self, **opts: Any) -> HttpResponse:
        opts = merge_options(opts, {"key": None})
        validate_required(opts, "key")
        return self._post(f"/owners/{opts['key']}/uebercert")

    def refresh_pools(self, **opts: Any) -> HttpResponse:
        defaults = {
            "key": None,
            "auto_create_owner": False,
            "lazy_regen": False,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "key")

        params = query_params(opts, ["auto_create_owner", "lazy_regen"])
        return self._put(f"/owners/{opts['key']}/subscriptions", params=params)

    def set_log_level(self, **opts: Any) -> HttpResponse:
        defaults = {
            "key": None,
            "level": None,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts)

        return self._put(f"/owners/{opts['key']}/log", params=query_params(opts, ["level"]))

    def delete_log_level(self, **opts: Any) -> HttpResponse:
        opts = merge_options(opts, {"key": None})
        validate_required(opts, "key")
        return self._delete(f"/owners/{opts['key']}/log")

