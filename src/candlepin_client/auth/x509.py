"""Client certificate (mutual TLS) authentication."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
import weakref
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from requests import Session

from ..exceptions import ConfigurationError, UnexpectedResponseError
from ..fields import snakify
from .base import AuthStrategy

logger = logging.getLogger(__name__)

PemSource = str | bytes


def load_certificate(material: x509.Certificate | PemSource) -> x509.Certificate:
    if isinstance(material, x509.Certificate):
        return material
    if isinstance(material, str):
        material = material.encode("ascii")
    return x509.load_pem_x509_certificate(material)


def load_private_key(material: Any) -> Any:
    if not isinstance(material, (str, bytes)):
        return material
    if isinstance(material, str):
        material = material.encode("ascii")
    return serialization.load_pem_private_key(material, password=None)


class X509Auth(AuthStrategy):
    """Present a client certificate during the TLS handshake.

    ``requests`` only accepts certificate material as file paths, so the
    certificate and key are written once to a private temporary directory
    which lives as long as the strategy does.
    """

    def __init__(self, client_cert: Any = None, client_key: Any = None) -> None:
        self.client_cert = load_certificate(client_cert) if client_cert is not None else None
        self.client_key = load_private_key(client_key) if client_key is not None else None
        self._material_dir: Path | None = None
        self._finalizer: weakref.finalize | None = None

    @classmethod
    def from_files(
        cls, cert_path: str | os.PathLike[str], key_path: str | os.PathLike[str]
    ) -> X509Auth:
        return cls(Path(cert_path).read_bytes(), Path(key_path).read_bytes())

    @classmethod
    def from_identity(cls, identity: Mapping[str, Any]) -> X509Auth:
        """Build the strategy from a consumer registration payload.

        Both the wire form (``idCert``) and the decoded form (``id_cert``)
        are accepted.
        """

        id_cert = snakify(dict(identity)).get("id_cert") or {}
        cert = id_cert.get("cert")
        key = id_cert.get("key")
        if not cert or not key:
            raise UnexpectedResponseError(
                "Registration identity does not carry an identity certificate and key"
            )
        return cls(cert, key)

    def certificate_pem(self) -> bytes:
        return self.client_cert.public_bytes(serialization.Encoding.PEM)

    def private_key_pem(self) -> bytes:
        return self.client_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )

    def material_paths(self) -> tuple[str, str]:
        """Return ``(cert_path, key_path)``, writing the files on first use."""

        if self.client_cert is None or self.client_key is None:
            pairs = (("client_cert", self.client_cert), ("client_key", self.client_key))
            missing = [name for name, value in pairs if value is None]
            raise ConfigurationError(
                f"Client certificate authentication requires {' and '.join(missing)}"
            )

        if self._material_dir is None:
            directory = Path(tempfile.mkdtemp(prefix="candlepin-x509-"))
            self._write_private(directory / "cert.pem", self.certificate_pem())
            self._write_private(directory / "key.pem", self.private_key_pem())
            self._material_dir = directory
            self._finalizer = weakref.finalize(self, shutil.rmtree, str(directory), True)
            logger.debug("Wrote client certificate material to %s", directory)

        return (
            str(self._material_dir / "cert.pem"),
            str(self._material_dir / "key.pem"),
        )

    def apply(self, session: Session) -> None:
        session.cert = self.material_paths()

    def close(self) -> None:
        if self._finalizer is not None:
            self._finalizer()
        self._material_dir = None
        self._finalizer = None

    @staticmethod
    def _write_private(path: Path, payload: bytes) -> None:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        with os.fdopen(fd, "wb") as handle:
            handle.write(payload)

    def __repr__(self) -> str:
        subject = self.client_cert.subject.rfc4514_string() if self.client_cert else None
        return f"X509Auth(subject={subject!r})"
