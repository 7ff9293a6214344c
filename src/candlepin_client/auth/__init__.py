"""Authentication strategies for Candlepin."""
from .base import AuthStrategy, NoAuth
from .basic import BasicAuth
from .x509 import X509Auth

__all__ = ["AuthStrategy", "NoAuth", "BasicAuth", "X509Auth"]
