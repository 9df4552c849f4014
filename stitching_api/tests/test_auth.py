import pytest


def _login(client, username="admin", password="admin"):
    return client.post("/api/v1/auth/login", data={"username": username, "password": password})


def _bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client):
    resp = _login(client)
    assert resp.status_code == 200, resp.text
    return _bearer(resp.json()["access_token"])


def test_login_and_me(client, admin_headers):
    me = client.get("/api/v1/auth/me", headers=admin_headers)
    assert me.status_code == 200
    assert me.json()["username"] == "admin"
    assert me.json()["role"] == "admin"
    assert "hashed_password" not in me.json()


def test_wrong_password(client):
    resp = _login(client, password="nope")
    assert resp.status_code == 401
    assert resp.json()["error"]["message"] == "Invalid credentials"


def test_me_requires_token(client):
    resp = client.get("/api/v1/auth/me")
    assert resp.status_code == 401
    assert resp.headers["WWW-Authenticate"] == "Bearer"


def test_refresh(client):
    tokens = _login(client).json()
    resp = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert resp.status_code == 200
    assert client.get("/api/v1/auth/me", headers=_bearer(resp.json()["access_token"])).status_code == 200

    # an access token is not a refresh token
    resp = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["access_token"]})
    assert resp.status_code == 401


def test_refresh_token_cannot_authenticate(client):
    tokens = _login(client).json()
    assert client.get("/api/v1/auth/me", headers=_bearer(tokens["refresh_token"])).status_code == 401


def test_business_routes_open_by_default(client):
    assert client.get("/api/v1/production-units").status_code == 200


def test_business_routes_guarded_when_auth_required(client, admin_headers, monkeypatch):
    monkeypatch.setenv("AUTH_REQUIRED", "true")
    assert client.get("/api/v1/production-units").status_code == 401
    assert client.get("/api/v1/production-units", headers=_bearer("garbage")).status_code == 401
    assert client.get("/api/v1/production-units", headers=admin_headers).status_code == 200


def test_user_administration(client, admin_headers):
    resp = client.post(
        "/api/v1/users",
        json={"username": "tailor", "name": "Head Tailor", "password": "stitch"},
        headers=admin_headers,
    )
    assert resp.status_code == 201, resp.text
    user = resp.json()
    assert user["role"] == "user"

    dup = client.post(
        "/api/v1/users", json={"username": "tailor", "name": "X", "password": "abcd"}, headers=admin_headers
    )
    assert dup.status_code == 409

    tailor_headers = _bearer(_login(client, "tailor", "stitch").json()["access_token"])
    forbidden = client.get("/api/v1/users", headers=tailor_headers)
    assert forbidden.status_code == 403

    resp = client.put(f"/api/v1/users/{user['id']}", json={"password": "newpass"}, headers=admin_headers)
    assert resp.status_code == 200
    assert _login(client, "tailor", "stitch").status_code == 401
    assert _login(client, "tailor", "newpass").status_code == 200

    assert client.delete(f"/api/v1/users/{user['id']}", headers=admin_headers).status_code == 204
    assert client.get(f"/api/v1/users/{user['id']}", headers=admin_headers).status_code == 404


def test_admin_cannot_delete_self(client, admin_headers):
    me = client.get("/api/v1/auth/me", headers=admin_headers).json()
    assert client.delete(f"/api/v1/users/{me['id']}", headers=admin_headers).status_code == 409


def test_users_require_login(client):
    assert client.get("/api/v1/users").status_code == 401
