"""Environment operations."""

from __future__ import annotations

from typing import Any

from ..http import HttpResponse
from ..options import merge_options, validate_required
from ..shaping import as_list
from .base import ResourceBase


class EnvironmentsResource(ResourceBase):
    """Inspect environments and promote content into them."""

    def list(self) -> HttpResponse:
        return self._get("/environments")

    def get(self, **opts: Any) -> HttpResponse:
        return self._get_by_id("/environments", "id", opts)

    def delete(self, **opts: Any) -> HttpResponse:
        return self._delete_by_id("/environments", "id", opts)

    def promote_content(self, **opts: Any) -> HttpResponse:
        """Promote content into environment ``env_id``.

        ``content`` is one promotion mapping (for example
        ``{"contentId": "1234", "enabled": True}``) or a list of them.
        """

        defaults = {
            "env_id": None,
            "content": None,
        }
        opts = merge_options(opts, defaults)
        validate_required(opts, "env_id")

        return self._post(f"/environments/{opts['env_id']}/content", as_list(opts["content"]))
