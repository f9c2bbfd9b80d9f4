"""
End-to-end checks of the HTTP boundary through FastAPI's TestClient.
"""
from __future__ import annotations

import time

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from social_api.app import create_app
from social_api.core import config as core_config
from social_api.core.errors import ConfigurationError
from social_api.repositories.sql_repository import SQLRepository
from social_api.routers import accounts as accounts_router


def _signup(client, name="Ava", email="ava@x.com", password="secret1", **extra):
    return client.post("/api/auth/signup", json={"name": name, "email": email, "password": password, **extra})


def _auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def test_health(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "running" in resp.json()["message"]


def test_signup_login_follow_scenario(client):
    resp = _signup(client, name="Ava", email="ava@x.com", password="secret1")
    assert resp.status_code == 201
    body = resp.json()
    assert body["token"]
    assert "password" not in body["account"]
    assert "passwordHash" not in body["account"]
    assert "password_hash" not in body["account"]
    ava_id = body["account"]["id"]
    ava_token = body["token"]

    resp = client.post("/api/auth/login", json={"email": "ava@x.com", "password": "wrong"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "invalid_credentials"

    resp = client.post("/api/accounts/" + "0" * 32 + "/follow", headers=_auth(ava_token))
    assert resp.status_code == 404

    bob = _signup(client, name="Bob", email="bob@x.com").json()["account"]

    resp = client.post(f"/api/accounts/{bob['id']}/follow", headers=_auth(ava_token))
    assert resp.status_code == 200
    assert resp.json()["followingCount"] == 1
    assert bob["id"] in client.get(f"/api/accounts/{ava_id}").json()["following"]
    assert ava_id in client.get(f"/api/accounts/{bob['id']}").json()["followers"]

    resp = client.post(f"/api/accounts/{bob['id']}/unfollow", headers=_auth(ava_token))
    assert resp.status_code == 200
    assert resp.json()["followingCount"] == 0
    assert bob["id"] not in client.get(f"/api/accounts/{ava_id}").json()["following"]
    assert ava_id not in client.get(f"/api/accounts/{bob['id']}").json()["followers"]


def test_login_returns_token_and_account(client):
    _signup(client, email="ava@x.com")
    resp = client.post("/api/auth/login", json={"email": "AVA@x.com", "password": "secret1"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["account"]["email"] == "ava@x.com"
    assert body["token"]

    resp = client.post("/api/auth/login", json={"email": "nobody@x.com", "password": "secret1"})
    assert resp.status_code == 400


def test_signup_validation_and_duplicates(client):
    resp = client.post("/api/auth/signup", json={"name": "Ava", "email": "ava@x.com"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "validation_error"

    resp = _signup(client, password="12345")
    assert resp.status_code == 400

    assert _signup(client, email="ava@x.com").status_code == 201
    resp = _signup(client, name="Other", email="AVA@X.COM")
    assert resp.status_code == 400
    assert resp.json()["error"] == "duplicate_email"


def test_signup_with_wrong_types_is_a_400(client):
    resp = client.post("/api/auth/signup", json={"name": ["Ava"], "email": "ava@x.com", "password": "secret1"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "validation_error"


def test_list_accounts_newest_first(client):
    _signup(client, name="Ava", email="ava@x.com")
    _signup(client, name="Bob", email="bob@x.com")

    resp = client.get("/api/accounts")
    assert resp.status_code == 200
    names = [a["name"] for a in resp.json()]
    assert names == ["Bob", "Ava"]
    assert all("password" not in a for a in resp.json())


def test_profile_requires_token(client):
    token = _signup(client).json()["token"]

    assert client.get("/api/accounts/profile").status_code == 401
    assert client.get("/api/accounts/profile", headers=_auth("junk")).status_code == 401

    resp = client.get("/api/accounts/profile", headers=_auth(token))
    assert resp.status_code == 200
    assert resp.json()["email"] == "ava@x.com"

    resp = client.get("/api/accounts/profile", params={"token": token})
    assert resp.status_code == 200


def test_show_missing_account_is_404(client):
    resp = client.get("/api/accounts/doesnotexist")
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"


def test_owner_can_update_profile(client):
    ava = _signup(client).json()
    resp = client.put(
        f"/api/accounts/{ava['account']['id']}",
        headers=_auth(ava["token"]),
        json={"bio": "hello", "isPrivate": True, "email": "new@x.com"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["bio"] == "hello"
    assert body["isPrivate"] is True
    assert body["email"] == "ava@x.com"


def test_update_validation_error(client):
    ava = _signup(client).json()
    resp = client.put(
        f"/api/accounts/{ava['account']['id']}",
        headers=_auth(ava["token"]),
        json={"bio": "b" * 501},
    )
    assert resp.status_code == 400

    resp = client.put(f"/api/accounts/{ava['account']['id']}", headers=_auth(ava["token"]), json=["bio"])
    assert resp.status_code == 400


def test_non_owner_cannot_update_or_delete(client):
    ava = _signup(client, name="Ava", email="ava@x.com").json()
    bob = _signup(client, name="Bob", email="bob@x.com").json()
    bob_id = bob["account"]["id"]

    resp = client.put(f"/api/accounts/{bob_id}", headers=_auth(ava["token"]), json={"name": "Hacked"})
    assert resp.status_code == 403
    resp = client.delete(f"/api/accounts/{bob_id}", headers=_auth(ava["token"]))
    assert resp.status_code == 403

    assert client.get(f"/api/accounts/{bob_id}").json()["name"] == "Bob"
    assert client.put(f"/api/accounts/{bob_id}", json={"name": "Hacked"}).status_code == 401


def test_delete_own_account_invalidates_its_token(client):
    ava = _signup(client).json()
    ava_id = ava["account"]["id"]

    resp = client.delete(f"/api/accounts/{ava_id}", headers=_auth(ava["token"]))
    assert resp.status_code == 204
    assert client.get(f"/api/accounts/{ava_id}").status_code == 404
    assert client.get("/api/accounts/profile", headers=_auth(ava["token"])).status_code == 401


def test_self_follow_and_repeat_follow(client):
    ava = _signup(client, name="Ava", email="ava@x.com").json()
    bob = _signup(client, name="Bob", email="bob@x.com").json()
    ava_id = ava["account"]["id"]
    bob_id = bob["account"]["id"]

    resp = client.post(f"/api/accounts/{ava_id}/follow", headers=_auth(ava["token"]))
    assert resp.status_code == 400
    assert resp.json()["error"] == "self_follow"
    resp = client.post(f"/api/accounts/{ava_id}/unfollow", headers=_auth(ava["token"]))
    assert resp.status_code == 400
    assert resp.json()["error"] == "self_unfollow"

    first = client.post(f"/api/accounts/{bob_id}/follow", headers=_auth(ava["token"]))
    second = client.post(f"/api/accounts/{bob_id}/follow", headers=_auth(ava["token"]))
    assert first.status_code == second.status_code == 200
    assert first.json()["followingCount"] == second.json()["followingCount"] == 1
    assert client.get(f"/api/accounts/{bob_id}").json()["followers"] == [ava_id]

    assert client.post(f"/api/accounts/{bob_id}/follow").status_code == 401


def test_expired_token_is_a_401(client):
    account_id = _signup(client).json()["account"]["id"]
    past = int(time.time()) - 3600
    token = jwt.encode({"sub": account_id, "iat": past - 60, "exp": past}, "test-secret", algorithm="HS256")

    resp = client.get("/api/accounts/profile", headers=_auth(token))
    assert resp.status_code == 401
    assert resp.json() == {"message": "Token has expired", "error": "unauthorized"}


def test_login_with_corrupt_stored_hash_is_a_500(client):
    account_id = _signup(client).json()["account"]["id"]
    SQLRepository().update_account(account_id, {"password_hash": "not-a-hash"})

    resp = client.post("/api/auth/login", json={"email": "ava@x.com", "password": "secret1"})
    assert resp.status_code == 500
    assert resp.json()["error"] == "internal_error"


def test_signup_without_signing_key_in_prod_is_a_json_500(client, monkeypatch):
    monkeypatch.setenv("APP_ENV", "prod")
    monkeypatch.delenv("JWT_SECRET")
    core_config.get_settings.cache_clear()

    resp = _signup(client)
    assert resp.status_code == 500
    assert resp.json()["error"] == "internal_error"
    assert client.get("/api/accounts").json() == []


def test_startup_fails_in_prod_without_signing_key(db_env, monkeypatch):
    monkeypatch.setenv("APP_ENV", "prod")
    monkeypatch.delenv("JWT_SECRET")
    core_config.get_settings.cache_clear()

    with pytest.raises(ConfigurationError):
        with TestClient(create_app()):
            pass


def test_unexpected_errors_return_json(db_env, monkeypatch):
    def boom():
        raise ValueError("unexpected")

    monkeypatch.setattr(accounts_router.account_service, "list_all", boom)
    client = TestClient(create_app(), raise_server_exceptions=False)

    resp = client.get("/api/accounts")
    assert resp.status_code == 500
    assert resp.json() == {"message": "Internal server error", "error": "internal_error"}
