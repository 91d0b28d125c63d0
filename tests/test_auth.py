"""Тесты авторизации."""
from datetime import timedelta

from app.services.auth import create_access_token

API = "/api/v1"


def register(client, username="admin", password="secret123"):
    return client.post(f"{API}/auth/register", json={"username": username, "password": password})


def login(client, username="admin", password="secret123"):
    return client.post(f"{API}/auth/login", json={"username": username, "password": password})


def test_register_and_login(anonymous_client):
    assert register(anonymous_client).status_code == 201
    response = login(anonymous_client)
    assert response.status_code == 200
    token = response.json()["access_token"]

    me = anonymous_client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["username"] == "admin"

    houses = anonymous_client.get(f"{API}/houses", headers={"Authorization": f"Bearer {token}"})
    assert houses.status_code == 200


def test_register_duplicate_username(anonymous_client):
    register(anonymous_client)
    assert register(anonymous_client).status_code == 400


def test_login_with_wrong_password(anonymous_client):
    register(anonymous_client)
    assert login(anonymous_client, password="wrong-password").status_code == 401


def test_expired_token_rejected(anonymous_client):
    register(anonymous_client)
    token = create_access_token("admin", expires_delta=timedelta(minutes=-1))
    response = anonymous_client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_logout(anonymous_client):
    register(anonymous_client)
    token = login(anonymous_client).json()["access_token"]
    response = anonymous_client.post(f"{API}/auth/logout", headers={"Authorization": f"Bearer {token}"})
    assert response.json() == {"success": True}
