"""User management."""

from __future__ import annotations

from typing import Any

from ..http import HttpResponse
from ..options import merge_options, validate_required
from ..shaping import shape_body
from .base import ResourceBase
from .roles import ALL, READ_ONLY, owner_permission

USER_FIELDS = ("username", "password", "super_admin")


class UsersResource(ResourceBase):
    """Create users and inspect their roles and owners."""

    def list(self) -> HttpResponse:
        return self._get("/users")

    def get(self, **opts: Any) -> HttpResponse:
        return self._get_by_id("/users", "username", opts)

    def create(self, **opts: Any) -> HttpResponse:
        defaults = {
            "username": None,
            "password": None,
            "super_admin": False,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts)

        return self._post("/users", shape_body(opts, USER_FIELDS))

    def create_under_owner(self, **opts: Any) -> dict[str, Any]:
        """Create a user holding the ``<key>-ALL`` role of owner ``key``.

        The role is created when missing, with full access for super admins
        and read-only access otherwise.  The returned user mapping carries
        the password so it can be handed to ``BasicAuthClient.switch_auth``.

        Raises:
            RequestError: if any of the underlying calls fails.
        """

        defaults = {
            "username": None,
            "password": None,
            "super_admin": False,
            "key": None,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts)

        roles = self._client.roles
        role_name = f"{opts['key']}-ALL"
        existing = roles.list().ok_content() or []
        role = next((r for r in existing if r.get("name") == role_name), None)
        if role is None:
            access = ALL if opts["super_admin"] else READ_ONLY
            role = roles.create(
                name=role_name, permissions=owner_permission(opts["key"], access)
            ).ok_content()

        user = self.create(
            username=opts["username"],
            password=opts["password"],
            super_admin=opts["super_admin"],
        ).ok_content()
        roles.add_user(role_id=role["id"], username=opts["username"]).ok_content()

        user["password"] = opts["password"]
        return user

    def update(self, **opts: Any) -> HttpResponse:
        defaults = {
            "username": None,
            "password": None,
            "super_admin": False,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "username")

        return self._put(f"/users/{opts['username']}", shape_body(opts, USER_FIELDS))

    def roles(self, **opts: Any) -> HttpResponse:
        opts = merge_options(opts, {"username": None})
        validate_required(opts)
        return self._get(f"/users/{opts['username']}/roles")

    def owners(self, **opts: Any) -> HttpResponse:
        opts = merge_options(opts, {"username": None})
        validate_required(opts)
        return self._get(f"/users/{opts['username']}/owners")

    def delete(self, **opts: Any) -> HttpResponse:
        return self._delete_by_id("/users", "username", opts)
