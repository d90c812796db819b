"""Shared fixtures: a fresh SQLite-backed app per test."""

import pytest
from fastapi.testclient import TestClient

from glam_store.api.server import create_app
from glam_store.config import Config
from glam_store.store.sql import SqlProductStore, SqlUserStore


def make_config(tmp_path, **overrides) -> Config:
    values = dict(
        APP_ENV="development",
        STORE_BACKEND="sql",
        DB_DSN=str(tmp_path / "glam_test.sqlite"),
        SESSION_COOKIE_NAME="glam_sid",
        SESSION_TTL_HOURS=24,
        CORS_ALLOW_ORIGINS=("http://localhost:3000",),
        FRONTEND_URL="https://shop.example.com",
        TEST_MODE=True,
        TWILIO_ACCOUNT_SID=None,
        TWILIO_AUTH_TOKEN=None,
        TWILIO_PHONE_NUMBER=None,
        BOOTSTRAP_ADMIN_EMAIL=None,
        BOOTSTRAP_ADMIN_PASSWORD=None,
    )
    values.update(overrides)
    return Config(**values)


@pytest.fixture
def cfg(tmp_path):
    return make_config(tmp_path)


@pytest.fixture
def user_store(cfg):
    store = SqlUserStore(cfg.DB_DSN)
    store.init_schema()
    return store


@pytest.fixture
def product_store(cfg):
    store = SqlProductStore(cfg.DB_DSN)
    store.init_schema()
    return store


@pytest.fixture
def app(cfg):
    return create_app(cfg)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def register(client, name="A", email="a@a.com", password="abcd"):
    return client.post("/api/register", json={"name": name, "email": email, "password": password})


def login(client, email="a@a.com", password="abcd"):
    return client.post("/api/login", json={"email": email, "password": password})


@pytest.fixture
def logged_in(client):
    """Client holding a session for a regular user a@a.com."""
    assert register(client).status_code == 200
    assert login(client).status_code == 200
    return client
