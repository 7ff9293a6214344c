"""Server-wide administrative endpoints."""

from __future__ import annotations

from typing import Any

from cryptography import x509

from ..http import HttpResponse
from .base import ResourceBase


class AdminResource(ResourceBase):
    """Certificate revocation, rules, statistics, serials and events."""

    def get_crl(self) -> x509.CertificateRevocationList:
        """Fetch and parse the certificate revocation list.

        Raises:
            RequestError: if the server does not answer with a 2xx status.
        """

        pem = self._get_text("/crl").ok_content()
        if isinstance(pem, str):
            pem = pem.encode("ascii")
        return x509.load_pem_x509_crl(pem)

    def generate_statistics(self) -> HttpResponse:
        return self._put("/statistics/generate")

    def get_events(self) -> HttpResponse:
        return self._get("/events")

    def get_serial(self, **opts: Any) -> HttpResponse:
        return self._get_by_id("/serials", "serial_id", opts)

    def get_rules(self) -> HttpResponse:
        return self._get_text("/rules")

    def delete_rules(self) -> HttpResponse:
        return self._delete("/rules")
