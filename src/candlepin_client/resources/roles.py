"""Role and permission management."""

from __future__ import annotations

from typing import Any

from ..http import HttpResponse
from ..options import merge_options, validate_required
from ..shaping import as_list, reference, shape_body
from .base import ResourceBase

ALL = "ALL"
READ_ONLY = "READ_ONLY"


def owner_permission(key: str, access: str = ALL) -> dict[str, Any]:
    """Permission granting ``access`` to the owner ``key``."""

    return {"type": "OWNER", "owner": reference(key, "key"), "access": access}


class RolesResource(ResourceBase):
    """Manage roles, their users and their permissions."""

    owner_permission = staticmethod(owner_permission)

    def list(self) -> HttpResponse:
        return self._get("/roles")

    def get(self, **opts: Any) -> HttpResponse:
        return self._get_by_id("/roles", "role_id", opts)

    def create(self, **opts: Any) -> HttpResponse:
        """Create a role.

        Options:
            name: Role name (required).
            permissions: A permission mapping or a list of them, see
                `owner_permission`.
        """

        defaults = {
            "name": None,
            "permissions": [],
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "name")

        body = {"name": opts["name"], "permissions": as_list(opts["permissions"])}
        return self._post("/roles", body)

    def update(self, **opts: Any) -> HttpResponse:
        defaults = {
            "role_id": None,
            "users": [],
            "permissions": [],
            "name": None,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "role_id")

        body = {"id": opts["role_id"], **shape_body(opts, ("name", "users", "permissions"))}
        return self._put(f"/roles/{opts['role_id']}", body)

    def delete(self, **opts: Any) -> HttpResponse:
        return self._delete_by_id("/roles", "role_id", opts)

    def add_user(self, **opts: Any) -> HttpResponse:
        opts = self._role_user_opts(opts)
        return self._post(f"/roles/{opts['role_id']}/users/{opts['username']}")

    def remove_user(self, **opts: Any) -> HttpResponse:
        opts = self._role_user_opts(opts)
        return self._delete(f"/roles/{opts['role_id']}/users/{opts['username']}")

    def add_permission(self, **opts: Any) -> HttpResponse:
        """Add a permission to a role.

        Options:
            role_id: Role id (required).
            type: Permission type, such as ``OWNER``.
            owner: Owner key, or an owner mapping carrying ``key``.
            access: ``READ_ONLY`` (default) or ``ALL``.
        """

        defaults = {
            "role_id": None,
            "type": None,
            "owner": None,
            "access": READ_ONLY,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "role_id")

        permission = shape_body(opts, ("owner", "access", "type"), references={"owner": "key"})
        return self._post(f"/roles/{opts['role_id']}/permissions/", permission)

    def remove_permission(self, **opts: Any) -> HttpResponse:
        defaults = {
            "role_id": None,
            "permission_id": None,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts)

        return self._delete(f"/roles/{opts['role_id']}/permissions/{opts['permission_id']}")

    @staticmethod
    def _role_user_opts(opts: dict[str, Any]) -> dict[str, Any]:
        opts = merge_options(opts, {"role_id": None, "username": None})
        validate_required(opts)
        return opts
