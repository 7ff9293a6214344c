"""Configuration helpers for the Candlepin client."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

DEFAULT_ACCEPT = "application/json"


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Connection settings shared by every client type.

    Instances are immutable; the client swaps in a new one (and rebuilds its
    session) whenever a setting changes.
    """

    host: str = "localhost"
    port: int = 8443
    base_path: str = "/candlepin"
    use_ssl: bool = True
    # Test servers mostly run with self-signed certificates.
    insecure: bool = True
    ca_path: str | None = None
    timeout: float = 3.0

    def __post_init__(self) -> None:
        if not self.base_path.startswith("/"):
            object.__setattr__(self, "base_path", f"/{self.base_path}")

    @property
    def scheme(self) -> str:
        return "https" if self.use_ssl else "http"

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}{self.base_path}"

    def verify_target(self) -> bool | str:
        if self.insecure:
            return False
        return self.ca_path or True

    def resolved_headers(self) -> dict[str, str]:
        return {"Accept": DEFAULT_ACCEPT}

    def as_options(self) -> dict[str, Any]:
        return asdict(self)
