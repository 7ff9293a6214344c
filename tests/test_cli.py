import json

import pytest
import requests
import typer
from typer.testing import CliRunner

from candlepin_client import BasicAuthClient, ClientCertificateClient, NoAuthClient
from candlepin_client.cli import ConnectionOptions, _build_client, app

runner = CliRunner()

BASE_URL = "https://localhost:8443/candlepin"
AUTH = ["--username", "admin", "--password", "admin"]


def _build(**overrides):
    return _build_client(ConnectionOptions(**overrides))


def test_owners_list_cli_renders_table(requests_mock):
    requests_mock.get(
        f"{BASE_URL}/owners",
        json=[{"key": "acme", "displayName": "Acme", "id": "o1"}],
    )

    result = runner.invoke(app, [*AUTH, "owners", "list"])

    assert result.exit_code == 0
    assert "Owners" in result.stdout
    assert "acme" in result.stdout


def test_owners_list_cli_json_output(requests_mock):
    requests_mock.get(f"{BASE_URL}/owners", json=[{"key": "acme", "displayName": "Acme"}])

    result = runner.invoke(app, [*AUTH, "owners", "list", "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload == [{"key": "acme", "display_name": "Acme"}]


def test_owners_create_cli(requests_mock):
    matcher = requests_mock.post(f"{BASE_URL}/owners", json={"key": "acme", "id": "o1"})

    result = runner.invoke(app, [*AUTH, "owners", "create", "--key", "acme"])

    assert result.exit_code == 0
    assert matcher.last_request.json() == {"key": "acme", "displayName": "acme"}
    assert json.loads(result.stdout)["id"] == "o1"


def test_owner_pools_cli(requests_mock):
    matcher = requests_mock.get(
        f"{BASE_URL}/owners/acme/pools",
        json=[{"id": "p1", "productId": "69", "productName": "Server", "quantity": 5}],
    )

    result = runner.invoke(app, [*AUTH, "owners", "pools", "--key", "acme", "--listall"])

    assert result.exit_code == 0
    assert "Server" in result.stdout
    assert "listall=true" in matcher.last_request.url


def test_status_cli_uses_custom_host(requests_mock):
    requests_mock.get("http://cp.example.com:8080/candlepin/status", json={"result": True})

    result = runner.invoke(
        app, ["--host", "cp.example.com", "--port", "8080", "--no-ssl", "status"]
    )

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"result": True}


def test_status_cli_reads_environment(requests_mock):
    requests_mock.get("https://cp.internal:8443/candlepin/status", json={"result": True})

    result = runner.invoke(app, ["status"], env={"CANDLEPIN_HOST": "cp.internal"})

    assert result.exit_code == 0


def test_consumers_register_cli(requests_mock):
    matcher = requests_mock.post(f"{BASE_URL}/consumers", json={"uuid": "u1", "name": "box01"})

    result = runner.invoke(
        app,
        [
            "consumers",
            "register",
            "--name",
            "box01",
            "--owner",
            "acme",
            "--activation-key",
            "k1",
            "--activation-key",
            "k2",
        ],
    )

    assert result.exit_code == 0
    assert "activation_keys=k1%2Ck2" in matcher.last_request.url
    assert json.loads(result.stdout)["uuid"] == "u1"


def test_http_error_exits_non_zero(requests_mock):
    requests_mock.get(
        f"{BASE_URL}/users",
        status_code=401,
        json={"displayMessage": "Invalid credentials"},
    )

    result = runner.invoke(app, [*AUTH, "users", "list"])

    assert result.exit_code == 1
    assert "status 401" in result.output


def test_transport_error_exits_non_zero(requests_mock):
    requests_mock.get(f"{BASE_URL}/roles", exc=requests.exceptions.ConnectionError("refused"))

    result = runner.invoke(app, [*AUTH, "roles", "list"])

    assert result.exit_code == 1
    assert "Failed to communicate with Candlepin" in result.output


def test_build_client_picks_auth():
    assert isinstance(_build(), NoAuthClient)
    assert isinstance(_build(username="admin", password="admin"), BasicAuthClient)


def test_build_client_with_certificate(cert_files):
    cert_path, key_path = cert_files

    client = _build(cert_path=cert_path, key_path=key_path)

    assert isinstance(client, ClientCertificateClient)
    client.close()


@pytest.mark.parametrize(
    "overrides",
    [
        {"cert_path": "cert.pem"},
        {"username": "admin"},
    ],
)
def test_build_client_rejects_incomplete_credentials(overrides):
    with pytest.raises(typer.BadParameter):
        _build(**overrides)


def test_build_client_rejects_mixed_credentials(cert_files):
    cert_path, key_path = cert_files

    with pytest.raises(typer.BadParameter):
        _build(cert_path=cert_path, key_path=key_path, username="admin", password="x")


def test_ca_path_requires_verification(tmp_path):
    ca_file = tmp_path / "ca.pem"
    ca_file.write_text("dummy")

    with pytest.raises(typer.BadParameter):
        _build(ca_path=ca_file)

    client = _build(ca_path=ca_file, verify_ssl=True)
    assert client.session.verify == str(ca_file)


def test_missing_ca_file_is_rejected(tmp_path):
    with pytest.raises(typer.BadParameter):
        _build(ca_path=tmp_path / "missing.pem", verify_ssl=True)


def test_unreadable_certificate_exits_non_zero(tmp_path):
    missing = tmp_path / "missing.pem"

    result = runner.invoke(app, ["--cert", str(missing), "--key", str(missing), "status"])

    assert result.exit_code == 1
    assert "Could not load client credentials" in result.output


def test_non_json_body_is_printed_as_text(requests_mock):
    requests_mock.get(
        f"{BASE_URL}/consumers/u1",
        content=b'{"uuid": "u1"}',
        headers={"Content-Type": "application/octet-stream"},
    )

    result = runner.invoke(app, ["consumers", "get", "--uuid", "u1"])

    assert result.exit_code == 0
    assert result.stdout.strip() == '{"uuid": "u1"}'
