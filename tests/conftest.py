from __future__ import annotations

import os

# settings are read at import time; point them at a throwaway database first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ADMIN_EMAIL"] = "admin@example.com"
os.environ["ADMIN_PASSWORD"] = "AdminPass123!"
os.environ["SEED_ADMIN"] = "true"
# tests start from an empty directory; the catalogue has its own tests
os.environ["SEED_MINES"] = "false"

import pytest
from fastapi.testclient import TestClient

from app.db.base import Base
from app.db.session import engine
from app.main import app

ADMIN_CREDENTIALS = {"email": "admin@example.com", "password": "AdminPass123!"}


@pytest.fixture()
def client():
    Base.metadata.drop_all(bind=engine)
    # entering the context runs startup: tables, roles and the admin account
    with TestClient(app) as c:
        yield c


def _login(client: TestClient, email: str, password: str) -> dict[str, str]:
    res = client.post("/v1/auth/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.text
    return {"Authorization": f"Bearer {res.json()['access_token']}"}


def register_and_login(client: TestClient, email: str, password: str = "Password123") -> dict[str, str]:
    res = client.post("/v1/auth/register", json={"email": email, "password": password, "name": "Prospector"})
    assert res.status_code == 201, res.text
    return _login(client, email, password)


@pytest.fixture()
def auth_headers(client: TestClient) -> dict[str, str]:
    return register_and_login(client, "miner@example.com")


@pytest.fixture()
def other_headers(client: TestClient) -> dict[str, str]:
    return register_and_login(client, "other@example.com")


@pytest.fixture()
def admin_headers(client: TestClient) -> dict[str, str]:
    return _login(client, ADMIN_CREDENTIALS["email"], ADMIN_CREDENTIALS["password"])


@pytest.fixture()
def make_user(client: TestClient):
    """Register and log in an extra account; returns its auth headers."""
    def _make(email: str, password: str = "Password123") -> dict[str, str]:
        return register_and_login(client, email, password)
    return _make
