"""Common helpers for resource wrappers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..http import HttpResponse
from ..options import merge_options, validate_required
from ..shaping import QueryPairs

if TYPE_CHECKING:  # pragma: no cover - import-time guard
    from ..client import CandlepinClient

Params = QueryPairs | Mapping[str, Any] | None


class ResourceBase:
    """Provide shared helpers for resource modules."""

    def __init__(self, client: CandlepinClient) -> None:
        self._client = client

    @property
    def uuid(self) -> str | None:
        """Sticky consumer uuid of the owning client."""

        return self._client.uuid

    def _get(self, path: str, params: Params = None) -> HttpResponse:
        return self._client.request("GET", path, params=params)

    def _post(self, path: str, body: Any = None, params: Params = None) -> HttpResponse:
        return self._client.request("POST", path, params=params, body=body)

    def _put(self, path: str, body: Any = None, params: Params = None) -> HttpResponse:
        return self._client.request("PUT", path, params=params, body=body)

    def _delete(self, path: str, params: Params = None) -> HttpResponse:
        return self._client.request("DELETE", path, params=params)

    def _get_text(self, path: str, params: Params = None) -> HttpResponse:
        return self._client.get_text(path, params)

    def _get_file(self, path: str, params: Params = None) -> HttpResponse:
        return self._client.get_file(path, params)

    def _get_by_id(self, resource: str, key: str, opts: Mapping[str, Any]) -> HttpResponse:
        """GET ``<resource>/<id>`` where the id is passed as the option ``key``.

        Different resources name their identifier differently (``key``,
        ``pool_id``, ``username``...), hence the explicit ``key``.
        """

        opts = merge_options(opts, {key: None})
        validate_required(opts)
        return self._get(f"{resource}/{opts[key]}")

    def _delete_by_id(self, resource: str, key: str, opts: Mapping[str, Any]) -> HttpResponse:
        opts = merge_options(opts, {key: None})
        validate_required(opts)
        return self._delete(f"{resource}/{opts[key]}")
