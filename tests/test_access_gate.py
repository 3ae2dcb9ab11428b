import pytest

from account_service.middleware.access_gate import is_public_path, parse_basic_credentials


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/api/users", True),
        ("/api/users/7", True),
        ("/api/usersx", False),
        ("/api/auth/me", False),
        ("/", False),
    ],
)
def test_public_prefix_matching(path, expected):
    assert is_public_path(path, ["/api/users/"]) is expected


def test_parse_basic_credentials(auth_header):
    header = auth_header("alice", "p:1")["Authorization"]
    assert parse_basic_credentials(header) == ("alice", "p:1")


@pytest.mark.parametrize("header", [None, "", "Bearer abc", "Basic", "Basic !!!", "Basic YWxpY2U="])
def test_parse_basic_credentials_rejects_malformed(header):
    assert parse_basic_credentials(header) is None


async def test_public_path_needs_no_credentials(client):
    response = await client.get("/api/users")
    assert response.status_code == 200
    assert response.json() == []


async def test_protected_path_challenges_without_credentials(client):
    response = await client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.headers["www-authenticate"].startswith("Basic")


async def test_protected_path_rejects_bad_credentials(client, auth_header):
    await client.post("/api/users", json={"email": "a@x.com", "username": "alice", "password": "p1"})

    response = await client.get("/api/auth/me", headers=auth_header("alice", "wrong"))
    assert response.status_code == 401


async def test_protected_path_accepts_valid_credentials(client, auth_header):
    await client.post("/api/users", json={"email": "a@x.com", "username": "alice", "password": "p1"})

    response = await client.get("/api/auth/me", headers=auth_header("alice", "p1"))
    assert response.status_code == 200
    assert response.json()["username"] == "alice"


async def test_removing_public_prefix_protects_users(client, settings, monkeypatch, auth_header):
    monkeypatch.setattr(settings, "public_prefixes", [])

    assert (await client.get("/api/users")).status_code == 401


async def test_csrf_disabled_by_default(client):
    response = await client.post(
        "/api/users", json={"email": "a@x.com", "username": "alice", "password": "p1"}
    )
    assert response.status_code == 200


async def test_csrf_enforced_on_unsafe_methods(client, settings, monkeypatch, auth_header):
    await client.post("/api/users", json={"email": "a@x.com", "username": "alice", "password": "p1"})
    monkeypatch.setattr(settings, "csrf_protection", True)
    body = {"email": "b@x.com", "username": "bob", "password": "p2"}

    assert (await client.post("/api/users", json=body)).status_code == 403

    issued = await client.get("/api/auth/csrf", headers=auth_header("alice", "p1"))
    assert issued.status_code == 200
    token = issued.json()["csrf_token"]

    client.cookies.clear()
    response = await client.post(
        "/api/users", json=body, headers={"X-CSRF-Token": token, "Cookie": f"csrf_token={token}"}
    )
    assert response.status_code == 200

    response = await client.post(
        "/api/users",
        json={"email": "c@x.com", "username": "carol", "password": "p3"},
        headers={"X-CSRF-Token": "forged", "Cookie": "csrf_token=forged"},
    )
    assert response.status_code == 403
