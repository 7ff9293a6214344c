"""High-level Candlepin client entrypoints."""
from .client import BasicAuthClient, CandlepinClient, ClientCertificateClient, NoAuthClient
from .config import ClientConfig
from .exceptions import CandlepinError
from .http import HttpResponse

__all__ = [
    "BasicAuthClient",
    "CandlepinClient",
    "CandlepinError",
    "ClientCertificateClient",
    "ClientConfig",
    "HttpResponse",
    "NoAuthClient",
]
