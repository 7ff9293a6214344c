"""Consumer registration and per-consumer operations.

Most operations act on the client's sticky uuid unless a ``uuid`` option is
given explicitly.
"""

from __future__ import annotations

import datetime
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..fields import map_fields, select_subset
from ..http import HttpResponse
from ..options import merge_options, validate_required
from ..shaping import as_list, compact, named_objects, query_params, shape_body
from .base import ResourceBase

if TYPE_CHECKING:  # pragma: no cover - import-time guard
    from ..client import ClientCertificateClient


def installed_products(products: Any) -> list[dict[str, Any]]:
    """Normalise installed products into ``[{"productId": ...}]``.

    Accepts a single product or a list, each given as an id or as a product
    mapping carrying ``product_id`` or ``id``.
    """

    shaped: list[dict[str, Any]] = []
    for product in as_list(products):
        if isinstance(product, Mapping):
            product = product.get("product_id") or product.get("id")
        shaped.append({"productId": product})
    return shaped


def hypervisor_reference(hypervisor_id: Any) -> dict[str, Any] | None:
    if not hypervisor_id:
        return None
    return {"hypervisorId": hypervisor_id}


class ConsumersResource(ResourceBase):
    """Register consumers and manage their entitlements and guests."""

    def register(self, **opts: Any) -> HttpResponse:
        """Register a consumer.

        Options:
            name: Consumer name (required).
            type: Consumer type label.
            uuid: Requested uuid; defaults to the sticky uuid.
            facts: Mapping of system facts.
            username: Register on behalf of this user.
            owner: Owner key to register under.
            activation_keys: Activation key names.
            installed_products: Product id(s) or product mapping(s).
            environment: Register into this environment id.
            capabilities: Capability names such as ``"cores"``.
            hypervisor_id: Hypervisor id reported by virt-who style agents.
        """

        defaults = {
            "name": None,
            "type": "system",
            "uuid": self.uuid,
            "facts": {},
            "username": None,
            "owner": None,
            "activation_keys": [],
            "installed_products": [],
            "environment": None,
            "capabilities": [],
            "hypervisor_id": None,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "name")

        body: dict[str, Any] = {"type": {"label": opts["type"]}}
        body.update(select_subset(opts, ["name", "facts", "uuid"]))
        body["hypervisorId"] = hypervisor_reference(opts["hypervisor_id"])
        if opts["capabilities"]:
            body["capabilities"] = named_objects(opts["capabilities"])
        body["installedProducts"] = installed_products(opts["installed_products"])
        body = compact(body)

        if opts["environment"] is None:
            path = "/consumers"
        else:
            path = f"/environments/{opts['environment']}/consumers"

        params = query_params(opts, ["username", "owner"])
        keys = ",".join(as_list(opts["activation_keys"]))
        if keys:
            params.append(("activation_keys", keys))

        return self._post(path, body, params)

    def register_and_get_client(self, **opts: Any) -> ClientCertificateClient:
        """Register a consumer and return a client authenticated as that consumer.

        The new client shares this client's connection settings.

        Raises:
            RequestError: if the registration is refused.
        """

        from ..client import ClientCertificateClient

        consumer = self.register(**opts).ok_content()
        return ClientCertificateClient.from_registration_identity(
            consumer, **self._client.connection_options()
        )

    def bind(self, **opts: Any) -> HttpResponse:
        """Bind the consumer to a pool, a product, or whatever auto-attach picks.

        Entitle dates are not allowed when binding to a pool and quantities
        are not allowed when binding by product, so those defaults only
        apply otherwise.  ``asynchronous`` is sent as the ``async`` flag.
        """

        defaults = {
            "uuid": self.uuid,
            "product": None,
            "quantity": None if "product" in opts else 1,
            "asynchronous": False,
            "entitle_date": None if "pool" in opts else datetime.date.today(),
            "pool": None,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "uuid")

        query = {
            "product": opts["product"],
            "quantity": opts["quantity"],
            "async": opts["asynchronous"],
            "entitle_date": opts["entitle_date"],
            "pool": opts["pool"],
        }
        return self._post(f"/consumers/{opts['uuid']}/entitlements", params=query_params(query))

    def get(self, **opts: Any) -> HttpResponse:
        # Not _get_by_id: the uuid defaults to the sticky one.
        opts = self._consumer_opts(opts)
        return self._get(f"/consumers/{opts['uuid']}")

    def update(self, **opts: Any) -> HttpResponse:
        defaults = {
            "uuid": self.uuid,
            "facts": {},
            "installed_products": [],
            "hypervisor_id": None,
            "guest_ids": [],
            "autoheal": True,
            "service_level": None,
            "capabilities": [],
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "uuid")

        body = shape_body(
            opts,
            ("uuid", "facts", "guest_ids", "autoheal", "service_level", "capabilities"),
            named_lists={"guest_ids": "guestId", "capabilities": "name"},
        )
        body["installedProducts"] = installed_products(opts["installed_products"])
        body = compact({**body, "hypervisorId": hypervisor_reference(opts["hypervisor_id"])})
        return self._put(f"/consumers/{opts['uuid']}", body)

    def delete(self, **opts: Any) -> HttpResponse:
        opts = self._consumer_opts(opts)
        return self._delete(f"/consumers/{opts['uuid']}")

    def events(self, **opts: Any) -> HttpResponse:
        opts = self._consumer_opts(opts)
        return self._get(f"/consumers/{opts['uuid']}/events")

    def events_atom(self, **opts: Any) -> HttpResponse:
        opts = self._consumer_opts(opts)
        return self._get_text(f"/consumers/{opts['uuid']}/atom")

    def host(self, **opts: Any) -> HttpResponse:
        opts = self._consumer_opts(opts)
        return self._get(f"/consumers/{opts['uuid']}/host")

    def guests(self, **opts: Any) -> HttpResponse:
        opts = self._consumer_opts(opts)
        return self._get(f"/consumers/{opts['uuid']}/guests")

    def cert_serials(self, **opts: Any) -> HttpResponse:
        opts = self._consumer_opts(opts)
        return self._get(f"/consumers/{opts['uuid']}/certificates/serials")

    def delete_all_entitlements(self, **opts: Any) -> HttpResponse:
        opts = self._consumer_opts(opts)
        return self._delete(f"/consumers/{opts['uuid']}/entitlements")

    def delete_entitlement(self, **opts: Any) -> HttpResponse:
        defaults = {
            "uuid": self.uuid,
            "entitlement_id": None,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts)

        return self._delete(f"/consumers/{opts['uuid']}/entitlements/{opts['entitlement_id']}")

    def delete_deletion_record(self, **opts: Any) -> HttpResponse:
        opts = merge_options(opts, {"deleted_uuid": None})
        validate_required(opts)
        return self._delete(f"/consumers/{opts['deleted_uuid']}/deletionrecord")

    def get_deleted(self, **opts: Any) -> HttpResponse:
        """List deleted consumers, optionally only those deleted since ``date``."""

        opts = merge_options(opts, {"date": None})
        return self._get("/deleted_consumers", query_params(opts, ["date"]))

    def update_all_guest_ids(self, **opts: Any) -> HttpResponse:
        defaults = {
            "uuid": self.uuid,
            "guest_ids": [],
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "uuid")

        body = named_objects(opts["guest_ids"], "guestId")
        return self._put(f"/consumers/{opts['uuid']}/guestids", body)

    def update_guest_id(self, **opts: Any) -> HttpResponse:
        defaults = {
            "uuid": self.uuid,
            "guest_id": None,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts)

        path = f"/consumers/{opts['uuid']}/guestids/{opts['guest_id']}"
        return self._put(path, map_fields(opts, ["guest_id"]))

    def get_all_guest_ids(self, **opts: Any) -> HttpResponse:
        opts = self._consumer_opts(opts)
        return self._get(f"/consumers/{opts['uuid']}/guestids")

    def get_guest_id(self, **opts: Any) -> HttpResponse:
        defaults = {
            "uuid": self.uuid,
            "guest_id": None,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts)

        return self._get(f"/consumers/{opts['uuid']}/guestids/{opts['guest_id']}")

    def delete_guest_id(self, **opts: Any) -> HttpResponse:
        defaults = {
            "uuid": self.uuid,
            "guest_id": None,
            "unregister": False,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "uuid", "guest_id")

        path = f"/consumers/{opts['uuid']}/guestids/{opts['guest_id']}"
        return self._delete(path, query_params(opts, ["unregister"]))

    def hypervisor_check_in(self, **opts: Any) -> HttpResponse:
        """Report a host to guest mapping.

        Options:
            owner: Owner key (required).
            host_guest_mapping: Mapping of hypervisor id to a list of guest ids.
            create_missing: Create consumers for unknown hypervisors.
        """

        defaults = {
            "owner": None,
            "host_guest_mapping": {},
            "create_missing": None,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "owner")

        params = query_params(opts, ["owner", "create_missing"])
        return self._post("/hypervisors", opts["host_guest_mapping"], params)

    def _consumer_opts(self, opts: Mapping[str, Any]) -> dict[str, Any]:
        opts = merge_options(opts, {"uuid": self.uuid})
        validate_required(opts, "uuid")
        return opts
