"""Activation key operations."""

from __future__ import annotations

from typing import Any

from ..http import HttpResponse
from ..options import merge_options, validate_required
from .base import ResourceBase


class ActivationKeysResource(ResourceBase):
    """Read and delete activation keys.  Keys are created under an owner."""

    def list(self) -> HttpResponse:
        return self._get("/activation_keys")

    def get(self, **opts: Any) -> HttpResponse:
        return self._get_by_id("/activation_keys", "id", opts)

    def pools(self, **opts: Any) -> HttpResponse:
        opts = merge_options(opts, {"id": None})
        validate_required(opts, "id")
        return self._get(f"/activation_keys/{opts['id']}/pools")

    def delete(self, **opts: Any) -> HttpResponse:
        return self._delete_by_id("/activation_keys", "id", opts)
