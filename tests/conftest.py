from datetime import datetime, timedelta, timezone

import pytest
import requests_mock as rm
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID

from candlepin_client import BasicAuthClient, NoAuthClient

BASE_URL = "https://localhost:8443/candlepin"
CONSUMER_UUID = "7d3b2ac1-3f9e-4a51-9c55-0a1f2c1b5e11"


def _self_signed(common_name: str):
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    subject = issuer = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    now = datetime.now(timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(subject)
        .issuer_name(issuer)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now)
        .not_valid_after(now + timedelta(days=365))
        .sign(key, hashes.SHA256())
    )
    return cert, key


@pytest.fixture(scope="session")
def cert_and_key():
    return _self_signed(CONSUMER_UUID)


@pytest.fixture(scope="session")
def cert_pem(cert_and_key) -> str:
    cert, _ = cert_and_key
    return cert.public_bytes(serialization.Encoding.PEM).decode("ascii")


@pytest.fixture(scope="session")
def key_pem(cert_and_key) -> str:
    _, key = cert_and_key
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture
def cert_files(tmp_path, cert_pem, key_pem):
    cert_path = tmp_path / "consumer.pem"
    key_path = tmp_path / "consumer-key.pem"
    cert_path.write_text(cert_pem)
    key_path.write_text(key_pem)
    return cert_path, key_path


@pytest.fixture
def identity(cert_pem, key_pem):
    """Consumer payload as returned by a successful registration."""

    return {
        "uuid": CONSUMER_UUID,
        "name": "box01",
        "id_cert": {"cert": cert_pem, "key": key_pem, "serial": {"id": 42}},
    }


@pytest.fixture
def crl_pem(cert_and_key) -> bytes:
    cert, key = cert_and_key
    now = datetime.now(timezone.utc)
    revoked = (
        x509.RevokedCertificateBuilder()
        .serial_number(1234)
        .revocation_date(now)
        .build()
    )
    crl = (
        x509.CertificateRevocationListBuilder()
        .issuer_name(cert.subject)
        .last_update(now)
        .next_update(now + timedelta(days=1))
        .add_revoked_certificate(revoked)
        .sign(key, hashes.SHA256())
    )
    return crl.public_bytes(serialization.Encoding.PEM)


@pytest.fixture
def admin_client():
    client = BasicAuthClient(username="admin", password="admin")
    yield client
    client.close()


@pytest.fixture
def anonymous_client():
    client = NoAuthClient()
    yield client
    client.close()


class JsonMocker(rm.Mocker):
    """Mocker whose ``json=`` responses carry the content type Candlepin sends."""

    def register_uri(self, *args, **kwargs):
        if "json" in kwargs:
            kwargs.setdefault("headers", {"Content-Type": "application/json"})
        return super().register_uri(*args, **kwargs)


@pytest.fixture
def requests_mock():
    with JsonMocker() as mocker:
        yield mocker
