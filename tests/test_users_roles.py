import pytest

from candlepin_client.exceptions import RequestError
from candlepin_client.resources.roles import ALL, READ_ONLY, owner_permission

BASE_URL = "https://localhost:8443/candlepin"


def test_owner_permission():
    assert owner_permission("acme") == {"type": "OWNER", "owner": {"key": "acme"}, "access": ALL}
    assert owner_permission("acme", READ_ONLY)["access"] == "READ_ONLY"


def test_create_user(requests_mock, admin_client):
    matcher = requests_mock.post(f"{BASE_URL}/users", json={"username": "alice"})

    admin_client.users.create(username="alice", password="secret", super_admin=True)

    assert matcher.last_request.json() == {
        "username": "alice",
        "password": "secret",
        "superAdmin": True,
    }


def test_user_lookups(requests_mock, admin_client):
    roles = requests_mock.get(f"{BASE_URL}/users/alice/roles", json=[])
    owners = requests_mock.get(f"{BASE_URL}/users/alice/owners", json=[])
    delete = requests_mock.delete(f"{BASE_URL}/users/alice", status_code=204)

    admin_client.users.roles(username="alice")
    admin_client.users.owners(username="alice")
    admin_client.users.delete(username="alice")

    assert roles.called and owners.called and delete.called


def test_create_under_owner_creates_missing_role(requests_mock, admin_client):
    requests_mock.get(f"{BASE_URL}/roles", json=[{"id": "r0", "name": "other-ALL"}])
    create_role = requests_mock.post(f"{BASE_URL}/roles", json={"id": "r1", "name": "acme-ALL"})
    create_user = requests_mock.post(
        f"{BASE_URL}/users", json={"username": "alice", "superAdmin": False}
    )
    add_user = requests_mock.post(f"{BASE_URL}/roles/r1/users/alice", json={"id": "r1"})

    user = admin_client.users.create_under_owner(username="alice", password="pw", key="acme")

    assert create_role.last_request.json() == {
        "name": "acme-ALL",
        "permissions": [owner_permission("acme", READ_ONLY)],
    }
    assert create_user.called and add_user.called
    assert user == {"username": "alice", "super_admin": False, "password": "pw"}


def test_create_under_owner_reuses_role(requests_mock, admin_client):
    requests_mock.get(f"{BASE_URL}/roles", json=[{"id": "r9", "name": "acme-ALL"}])
    create_role = requests_mock.post(f"{BASE_URL}/roles", json={})
    requests_mock.post(f"{BASE_URL}/users", json={"username": "root"})
    add_user = requests_mock.post(f"{BASE_URL}/roles/r9/users/root", json={})

    admin_client.users.create_under_owner(
        username="root", password="pw", super_admin=True, key="acme"
    )

    assert not create_role.called
    assert add_user.called


def test_create_under_owner_surfaces_failures(requests_mock, admin_client):
    requests_mock.get(f"{BASE_URL}/roles", status_code=403, json={"displayMessage": "denied"})

    with pytest.raises(RequestError) as excinfo:
        admin_client.users.create_under_owner(username="a", password="b", key="acme")

    assert excinfo.value.status_code == 403


def test_user_from_owner_can_be_switched_to(requests_mock, admin_client):
    requests_mock.get(f"{BASE_URL}/roles", json=[{"id": "r9", "name": "acme-ALL"}])
    requests_mock.post(f"{BASE_URL}/users", json={"username": "alice"})
    requests_mock.post(f"{BASE_URL}/roles/r9/users/alice", json={})

    user = admin_client.users.create_under_owner(username="alice", password="pw", key="acme")
    admin_client.switch_auth(user)

    assert admin_client.username == "alice"


def test_update_role(requests_mock, admin_client):
    matcher = requests_mock.put(f"{BASE_URL}/roles/r1", json={})

    admin_client.roles.update(role_id="r1", users=[{"username": "alice"}])

    assert matcher.last_request.json() == {
        "id": "r1",
        "users": [{"username": "alice"}],
        "permissions": [],
    }


def test_role_permissions(requests_mock, admin_client):
    add = requests_mock.post(f"{BASE_URL}/roles/r1/permissions/", json={})
    remove = requests_mock.delete(f"{BASE_URL}/roles/r1/permissions/p1", status_code=204)

    admin_client.roles.add_permission(role_id="r1", type="OWNER", owner="acme")
    admin_client.roles.remove_permission(role_id="r1", permission_id="p1")

    assert add.last_request.json() == {
        "owner": {"key": "acme"},
        "access": "READ_ONLY",
        "type": "OWNER",
    }
    assert remove.called


def test_role_users(requests_mock, admin_client):
    add = requests_mock.post(f"{BASE_URL}/roles/r1/users/alice", json={})
    remove = requests_mock.delete(f"{BASE_URL}/roles/r1/users/alice", status_code=204)

    admin_client.roles.add_user(role_id="r1", username="alice")
    admin_client.roles.remove_user(role_id="r1", username="alice")

    assert add.called and remove.called
