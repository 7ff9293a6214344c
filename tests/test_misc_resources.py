from urllib.parse import parse_qsl, urlsplit

import pytest
from cryptography import x509

from candlepin_client.exceptions import MissingRequiredParameterError, RequestError

BASE_URL = "https://localhost:8443/candlepin"


def _query(request):
    return parse_qsl(urlsplit(request.url).query)


def test_pools_list_filters(requests_mock, admin_client):
    matcher = requests_mock.get(f"{BASE_URL}/pools", json=[{"id": "p1", "productId": "69"}])

    response = admin_client.pools.list(owner="o1", listall=True)

    assert _query(matcher.last_request) == [("owner", "o1"), ("listall", "true")]
    assert response.content == [{"id": "p1", "product_id": "69"}]


def test_pool_by_id(requests_mock, admin_client):
    pool = requests_mock.get(f"{BASE_URL}/pools/p1", json={"id": "p1"})
    ents = requests_mock.get(f"{BASE_URL}/pools/p1/entitlements", json=[])
    stats = requests_mock.get(f"{BASE_URL}/pools/p1/statistics", json=[])

    admin_client.pools.get(pool_id="p1")
    admin_client.pools.entitlements(pool_id="p1")
    admin_client.pools.statistics(pool_id="p1")

    assert pool.called and ents.called and stats.called


def test_pool_get_requires_id(admin_client):
    with pytest.raises(MissingRequiredParameterError):
        admin_client.pools.get()


def test_entitlement_update_and_migrate(requests_mock, admin_client):
    update = requests_mock.put(f"{BASE_URL}/entitlements/e1", json={})
    migrate = requests_mock.put(f"{BASE_URL}/entitlements/e1/migrate", json=[])

    admin_client.entitlements.update(id="e1", quantity=3)
    admin_client.entitlements.migrate(id="e1", to_consumer="u2", quantity=2)

    assert update.last_request.json() == {"id": "e1", "quantity": 3}
    assert _query(migrate.last_request) == [("to_consumer", "u2"), ("quantity", "2")]


def test_entitlement_upstream_cert(requests_mock, admin_client):
    requests_mock.get(
        f"{BASE_URL}/entitlements/e1/upstream_cert",
        text="CERT",
        headers={"Content-Type": "text/plain"},
    )

    assert admin_client.entitlements.upstream_certificate(id="e1").content == "CERT"


def test_scheduler_status_posts_bool(requests_mock, admin_client):
    matcher = requests_mock.post(f"{BASE_URL}/jobs/scheduler", json={"running": False})

    admin_client.jobs.set_scheduler_status()
    assert matcher.last_request.json() is False

    admin_client.jobs.set_scheduler_status(status=True)
    assert matcher.last_request.json() is True


def test_scheduler_status_must_be_bool(admin_client):
    with pytest.raises(MissingRequiredParameterError):
        admin_client.jobs.set_scheduler_status(status="on")


def test_jobs_for_owner(requests_mock, admin_client):
    matcher = requests_mock.get(f"{BASE_URL}/jobs", json=[])

    admin_client.jobs.list_for_owner(owner="acme")

    assert _query(matcher.last_request) == [("owner", "acme")]


def test_get_crl_parses_revocation_list(requests_mock, admin_client, crl_pem):
    matcher = requests_mock.get(
        f"{BASE_URL}/crl", content=crl_pem, headers={"Content-Type": "text/plain"}
    )

    crl = admin_client.admin.get_crl()

    assert isinstance(crl, x509.CertificateRevocationList)
    assert crl.get_revoked_certificate_by_serial_number(1234) is not None
    assert matcher.last_request.headers["Accept"] == "text/plain"


def test_get_crl_raises_on_error(requests_mock, admin_client):
    requests_mock.get(f"{BASE_URL}/crl", status_code=500, text="boom")

    with pytest.raises(RequestError):
        admin_client.admin.get_crl()


def test_admin_endpoints(requests_mock, admin_client):
    stats = requests_mock.put(f"{BASE_URL}/statistics/generate", json={})
    serial = requests_mock.get(f"{BASE_URL}/serials/17", json={"id": 17})
    rules = requests_mock.delete(f"{BASE_URL}/rules", status_code=204)

    admin_client.admin.generate_statistics()
    admin_client.admin.get_serial(serial_id=17)
    admin_client.admin.delete_rules()

    assert stats.called and serial.called and rules.called


def test_promote_content(requests_mock, admin_client):
    matcher = requests_mock.post(f"{BASE_URL}/environments/env1/content", json={"id": "job"})

    admin_client.environments.promote_content(
        env_id="env1", content={"contentId": "c1", "enabled": True}
    )

    assert matcher.last_request.json() == [{"contentId": "c1", "enabled": True}]


def test_activation_key_pools(requests_mock, admin_client):
    matcher = requests_mock.get(f"{BASE_URL}/activation_keys/k1/pools", json=[])

    admin_client.activation_keys.pools(id="k1")

    assert matcher.called


def test_distributor_versions(requests_mock, admin_client):
    search = requests_mock.get(f"{BASE_URL}/distributor_versions", json=[])
    create = requests_mock.post(f"{BASE_URL}/distributor_versions", json={})

    admin_client.distributor_versions.search(name="sat-6", capability="cores")
    admin_client.distributor_versions.create(
        name="sat-6", display_name="Satellite 6", capabilities=["cores", "ram"]
    )

    assert _query(search.last_request) == [("capability", "cores"), ("name_search", "sat-6")]
    assert create.last_request.json() == {
        "name": "sat-6",
        "displayName": "Satellite 6",
        "capabilities": [{"name": "cores"}, {"name": "ram"}],
    }


def test_cdn_create_and_update(requests_mock, admin_client):
    create = requests_mock.post(f"{BASE_URL}/cdn", json={})
    update = requests_mock.put(f"{BASE_URL}/cdn/cdn1", json={})

    admin_client.cdn.create(label="cdn1", name="Main CDN", url="https://cdn.example.com")
    admin_client.cdn.update(label="cdn1", url="https://cdn2.example.com")

    assert create.last_request.json() == {
        "label": "cdn1",
        "name": "Main CDN",
        "url": "https://cdn.example.com",
    }
    assert update.last_request.json() == {"url": "https://cdn2.example.com"}


def test_cdn_create_requires_fields(admin_client):
    with pytest.raises(MissingRequiredParameterError) as excinfo:
        admin_client.cdn.create(label="cdn1")

    assert excinfo.value.keys == ("name", "url")


def test_consumer_types(requests_mock, admin_client):
    matcher = requests_mock.post(f"{BASE_URL}/consumertypes", json={})

    admin_client.consumer_types.create(label="candlepin", manifest=True)

    assert matcher.last_request.json() == {"label": "candlepin", "manifest": True}
