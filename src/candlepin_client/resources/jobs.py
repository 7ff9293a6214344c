"""Asynchronous job inspection and the job scheduler."""

from __future__ import annotations

from typing import Any

from ..http import HttpResponse
from ..options import merge_options, validate_required
from ..shaping import query_params
from .base import ResourceBase


class JobsResource(ResourceBase):
    """Track background jobs."""

    def get(self, **opts: Any) -> HttpResponse:
        return self._get_by_id("/jobs", "job_id", opts)

    def list_for_owner(self, **opts: Any) -> HttpResponse:
        opts = merge_options(opts, {"owner": None})
        return self._get("/jobs", query_params(opts, ["owner"]))

    def scheduler_status(self) -> HttpResponse:
        return self._get("/jobs/scheduler")

    def set_scheduler_status(self, **opts: Any) -> HttpResponse:
        """Pause (``status=False``) or resume (``status=True``) the scheduler."""

        opts = merge_options(opts, {"status": False})
        validate_required(opts, "status", predicate=lambda value: isinstance(value, bool))
        return self._post("/jobs/scheduler", opts["status"])

    def delete(self, **opts: Any) -> HttpResponse:
        return self._delete_by_id("/jobs", "job_id", opts)
