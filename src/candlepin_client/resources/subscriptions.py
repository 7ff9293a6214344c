"""Subscription operations."""

from __future__ import annotations

import datetime
from typing import Any

from ..fields import to_wire_case
from ..http import HttpResponse
from ..options import merge_options, validate_required
from ..shaping import reference, reference_list, shape_body
from .base import ResourceBase

PRODUCT_LISTS = ("provided_products", "derived_products", "derived_provided_products")


class SubscriptionsResource(ResourceBase):
    """Create and inspect subscriptions backing an owner's pools."""

    def create(self, **opts: Any) -> HttpResponse:
        """Create a subscription for owner ``key``.

        Options:
            key: Owner key (required).
            product_id: Marketing product id (required).
            start_date, end_date: Validity window; one year from today by default.
            quantity: Number of entitlements.
            account_number, order_number, contract_number: Order metadata.
            provided_products, derived_products, derived_provided_products:
                Product id(s) or product mapping(s).
        """

        today = datetime.date.today()
        defaults = {
            "key": None,
            "start_date": today,
            "end_date": today + datetime.timedelta(days=365),
            "quantity": 1,
            "account_number": "",
            "order_number": "",
            "contract_number": "",
            "product_id": None,
            "provided_products": [],
            "derived_products": [],
            "derived_provided_products": [],
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "key", "product_id")

        body = shape_body(
            opts,
            (
                "start_date",
                "end_date",
                "quantity",
                "account_number",
                "order_number",
                "contract_number",
            ),
        )
        body["product"] = reference(opts["product_id"])
        for name in PRODUCT_LISTS:
            products = reference_list(opts[name])
            if products:
                body[to_wire_case(name)] = products

        return self._post(f"/owners/{opts['key']}/subscriptions", body)

    def get(self, **opts: Any) -> HttpResponse:
        return self._get_by_id("/subscriptions", "subscription_id", opts)

    def certificate(self, **opts: Any) -> HttpResponse:
        opts = merge_options(opts, {"subscription_id": None})
        validate_required(opts)
        return self._get_text(f"/subscriptions/{opts['subscription_id']}/cert")

    def delete(self, **opts: Any) -> HttpResponse:
        return self._delete_by_id("/subscriptions", "subscription_id", opts)
