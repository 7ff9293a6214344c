"""High-level Candlepin REST clients.

Three client types share one implementation and differ only in the
authentication strategy they install:

* `NoAuthClient` sends anonymous requests.
* `BasicAuthClient` attaches HTTP Basic credentials to every call.
* `ClientCertificateClient` authenticates with an X.509 identity certificate.

A client owns a single `requests.Session`.  Changing the configuration or the
credentials builds a complete new session before the old one is released,
so a call never sees half-updated state.  Reconfiguring a client while
another thread is using it still requires external synchronisation.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping, MutableMapping
from typing import Any
from urllib.parse import urljoin, urlparse

import requests
import urllib3
from urllib3.exceptions import InsecureRequestWarning

from .auth.base import AuthStrategy, NoAuth
from .auth.basic import BasicAuth
from .auth.x509 import X509Auth
from .config import ClientConfig
from .exceptions import ArgumentError
from .http import HttpResponse
from .http import request as http_request
from .options import merge_options
from .resources import (
    ActivationKeysResource,
    AdminResource,
    CdnResource,
    ConsumersResource,
    ConsumerTypesResource,
    ContentResource,
    DistributorVersionsResource,
    EntitlementsResource,
    EnvironmentsResource,
    JobsResource,
    OwnersResource,
    PoolsResource,
    ProductsResource,
    RolesResource,
    StatusResource,
    SubscriptionsResource,
    UsersResource,
)
from .shaping import QueryPairs, query_params

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], requests.Session]

_CERT_OPTIONS = ("client_cert", "client_key")


class CandlepinClient:
    """Wrap Candlepin REST endpoints with helper methods."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        auth_strategy: AuthStrategy | None = None,
        *,
        session_factory: SessionFactory = requests.Session,
    ) -> None:
        self.config = config or ClientConfig()
        self._auth = auth_strategy or NoAuth()
        self._session_factory = session_factory
        self._session: requests.Session | None = None
        self.uuid: str | None = None
        self.reload()

        self.status = StatusResource(self)
        self.admin = AdminResource(self)
        self.owners = OwnersResource(self)
        self.consumers = ConsumersResource(self)
        self.consumer_types = ConsumerTypesResource(self)
        self.pools = PoolsResource(self)
        self.entitlements = EntitlementsResource(self)
        self.products = ProductsResource(self)
        self.content = ContentResource(self)
        self.subscriptions = SubscriptionsResource(self)
        self.users = UsersResource(self)
        self.roles = RolesResource(self)
        self.jobs = JobsResource(self)
        self.environments = EnvironmentsResource(self)
        self.activation_keys = ActivationKeysResource(self)
        self.distributor_versions = DistributorVersionsResource(self)
        self.cdn = CdnResource(self)

    # Context manager helpers -------------------------------------------------
    def __enter__(self) -> CandlepinClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # pragma: no cover - passthrough
        self.close()

    # Configuration -----------------------------------------------------------
    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def auth(self) -> AuthStrategy:
        return self._auth

    @property
    def session(self) -> requests.Session:
        """The session currently used to talk to the server."""

        return self._session

    def connection_options(self) -> dict[str, Any]:
        """Keyword options that build another client against the same server."""

        return {**self.config.as_options(), "session_factory": self._session_factory}

    def configure(self, **changes: Any) -> None:
        """Replace connection settings and rebuild the session.

        Accepts the fields of `ClientConfig`; anything else raises
        `UnknownParameterError`.
        """

        options = merge_options(changes, self.config.as_options())
        self.config = ClientConfig(**options)
        self.reload()

    def reload(self) -> None:
        """Build a new session from the current configuration and credentials."""

        session = self._build_session()
        previous, self._session = self._session, session
        if previous is not None:
            previous.close()

    def _replace_auth(self, auth_strategy: AuthStrategy) -> None:
        previous = self._auth
        self._auth = auth_strategy
        self.reload()
        if previous is not auth_strategy:
            previous.close()

    # Public API --------------------------------------------------------------
    def request(
        self,
        method: str,
        path: str,
        *,
        params: QueryPairs | Mapping[str, Any] | None = None,
        body: Any = None,
        accept: str | None = None,
    ) -> HttpResponse:
        url = self._resolve_url(path)
        headers = self._prepare_headers(accept)
        self._log_request(method, url)
        response = http_request(
            self.session,
            method.upper(),
            url,
            params=self._prepare_params(params),
            headers=headers,
            body=body,
            timeout=(self.config.timeout, None),
            verify=self.config.verify_target(),
        )
        logger.debug("Candlepin response %s for %s %s", response.status_code, method.upper(), url)
        return response

    def get(self, path: str, params: QueryPairs | Mapping[str, Any] | None = None) -> HttpResponse:
        return self.request("GET", path, params=params)

    def post(
        self,
        path: str,
        body: Any = None,
        params: QueryPairs | Mapping[str, Any] | None = None,
    ) -> HttpResponse:
        return self.request("POST", path, params=params, body=body)

    def put(
        self,
        path: str,
        body: Any = None,
        params: QueryPairs | Mapping[str, Any] | None = None,
    ) -> HttpResponse:
        return self.request("PUT", path, params=params, body=body)

    def delete(
        self, path: str, params: QueryPairs | Mapping[str, Any] | None = None
    ) -> HttpResponse:
        return self.request("DELETE", path, params=params)

    def get_type(
        self,
        mime_type: str,
        path: str,
        params: QueryPairs | Mapping[str, Any] | None = None,
    ) -> HttpResponse:
        """GET ``path`` asking for ``mime_type`` instead of JSON."""

        return self.request("GET", path, params=params, accept=mime_type)

    def get_text(
        self, path: str, params: QueryPairs | Mapping[str, Any] | None = None
    ) -> HttpResponse:
        return self.get_type("text/plain", path, params)

    def get_file(
        self, path: str, params: QueryPairs | Mapping[str, Any] | None = None
    ) -> HttpResponse:
        return self.get_type("application/zip", path, params)

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
        self._auth.close()

    # Internal helpers -------------------------------------------------------
    def _build_session(self) -> requests.Session:
        session = self._session_factory()
        session.verify = self.config.verify_target()
        self._auth.apply(session)
        self._suppress_insecure_warning_if_needed()
        return session

    def _resolve_url(self, path: str) -> str:
        parsed = urlparse(path)
        if parsed.scheme and parsed.netloc:
            return path
        return urljoin(f"{self.base_url.rstrip('/')}/", path.lstrip("/"))

    def _prepare_headers(self, accept: str | None) -> MutableMapping[str, str]:
        headers = self.config.resolved_headers()
        if accept:
            headers["Accept"] = accept
        return headers

    @staticmethod
    def _prepare_params(
        params: QueryPairs | Mapping[str, Any] | None,
    ) -> QueryPairs | None:
        if not params:
            return None
        if isinstance(params, Mapping):
            return query_params(params)
        return list(params)

    def _log_request(self, method: str, url: str) -> None:
        logger.info(
            "Candlepin request %s %s (consumer=%s)",
            method.upper(),
            url,
            self.uuid or "unspecified",
        )

    def _suppress_insecure_warning_if_needed(self) -> None:
        if self.config.use_ssl and self.config.insecure:
            urllib3.disable_warnings(InsecureRequestWarning)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.base_url!r}, auth={self._auth!r})"


class NoAuthClient(CandlepinClient):
    """Build a connection without any authentication.

    Args:
        host: The host to connect to.
        port: The port to connect to.
        base_path: Servlet context of the service; a leading slash is added
            when missing.
        use_ssl: Whether to connect over TLS.
        insecure: Skip certificate verification.  Defaults to ``True`` since
            test deployments mostly use self-signed certificates.
        ca_path: CA bundle used when ``insecure`` is ``False``.
        timeout: Seconds to wait for the connection to be established.
    """

    def __init__(
        self,
        *,
        host: str = "localhost",
        port: int = 8443,
        base_path: str = "/candlepin",
        use_ssl: bool = True,
        insecure: bool = True,
        ca_path: str | None = None,
        timeout: float = 3.0,
        session_factory: SessionFactory = requests.Session,
        auth_strategy: AuthStrategy | None = None,
    ) -> None:
        config = ClientConfig(
            host=host,
            port=port,
            base_path=base_path,
            use_ssl=use_ssl,
            insecure=insecure,
            ca_path=ca_path,
            timeout=timeout,
        )
        super().__init__(config, auth_strategy or NoAuth(), session_factory=session_factory)


class BasicAuthClient(NoAuthClient):
    """Build a connection using HTTP basic authentication.

    Accepts the same options as `NoAuthClient` plus ``username`` and
    ``password`` (both default to ``"admin"``).
    """

    def __init__(self, *, username: str = "admin", password: str = "admin", **kwargs: Any) -> None:
        super().__init__(auth_strategy=BasicAuth(username, password), **kwargs)

    @property
    def username(self) -> str:
        return self._auth.username

    def switch_auth(self, username: str | Mapping[str, Any], password: str | None = None) -> None:
        """Switch to other credentials; the session is rebuilt before the next call.

        ``username`` may also be a user mapping carrying ``username`` and
        ``password`` keys, such as the result of ``users.create_under_owner``.
        """

        if isinstance(username, Mapping):
            password = username.get("password")
            username = username.get("username")
        self._replace_auth(BasicAuth(username, password))


class ClientCertificateClient(NoAuthClient):
    """Build a connection that authenticates with an X.509 client certificate.

    Accepts the same options as `NoAuthClient` plus ``client_cert`` and
    ``client_key``: `cryptography` objects or PEM encoded text.  Both must be
    present once the connection is built.
    """

    def __init__(self, *, client_cert: Any = None, client_key: Any = None, **kwargs: Any) -> None:
        super().__init__(auth_strategy=X509Auth(client_cert, client_key), **kwargs)

    @classmethod
    def from_registration_identity(
        cls, identity: Mapping[str, Any], **opts: Any
    ) -> ClientCertificateClient:
        """Build a client from the payload returned when registering a consumer.

        The identity certificate and key become the client credentials and
        the consumer uuid becomes the sticky uuid.
        """

        cls._reject_explicit_credentials(opts)
        auth = X509Auth.from_identity(identity)
        client = cls(client_cert=auth.client_cert, client_key=auth.client_key, **opts)
        client.uuid = identity.get("uuid")
        return client

    from_consumer = from_registration_identity

    @classmethod
    def from_files(
        cls,
        cert_path: str | os.PathLike[str],
        key_path: str | os.PathLike[str],
        **opts: Any,
    ) -> ClientCertificateClient:
        cls._reject_explicit_credentials(opts)
        auth = X509Auth.from_files(cert_path, key_path)
        return cls(client_cert=auth.client_cert, client_key=auth.client_key, **opts)

    @staticmethod
    def _reject_explicit_credentials(opts: Mapping[str, Any]) -> None:
        conflicting = [key for key in _CERT_OPTIONS if key in opts]
        if conflicting:
            raise ArgumentError(
                f"Cannot specify {', '.join(conflicting)} when deriving the certificate "
                "from another source"
            )


__all__ = [
    "BasicAuthClient",
    "CandlepinClient",
    "ClientCertificateClient",
    "NoAuthClient",
]
