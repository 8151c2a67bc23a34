"""Shared pytest fixtures for the API tests."""

import os
import shutil
import tempfile
from pathlib import Path

TEST_DIR = Path(tempfile.mkdtemp(prefix="autoparts-tests-"))
DB_PATH = TEST_DIR / "test.db"
MEDIA_DIR = TEST_DIR / "media"

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{DB_PATH}"
os.environ["STORAGE_DIR"] = str(MEDIA_DIR)
os.environ["SEED_CATEGORIES"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

import autoparts.models  # noqa: E402,F401
from autoparts.auth import hash_password  # noqa: E402
from autoparts.database import Base  # noqa: E402
from autoparts.main import app  # noqa: E402
from autoparts.models.user import User, UserRole  # noqa: E402

API = "/api/v1"
PASSWORD = "Secret123"

sync_engine = create_engine(f"sqlite:///{DB_PATH}")


def pytest_sessionfinish(session, exitstatus):
    sync_engine.dispose()
    shutil.rmtree(TEST_DIR, ignore_errors=True)


@pytest.fixture
def db_session():
    """Synchronous session on the test database, for arranging data."""
    with Session(sync_engine) as session:
        yield session


@pytest.fixture
def client():
    """A TestClient over a freshly created schema and empty media dir."""
    Base.metadata.drop_all(sync_engine)
    Base.metadata.create_all(sync_engine)
    shutil.rmtree(MEDIA_DIR, ignore_errors=True)
    MEDIA_DIR.mkdir(parents=True, exist_ok=True)

    with TestClient(app) as test_client:
        yield test_client


def register(client, username="owner", email=None, password=PASSWORD, **extra):
    """Register an account and return its auth headers."""
    payload = {
        "username": username,
        "email": email or f"{username}@example.com",
        "password": password,
        "full_name": extra.pop("full_name", username.title()),
        **extra,
    }
    response = client.post(f"{API}/auth/register", json=payload)
    assert response.status_code == 201, response.text
    return login(client, username, password)


def login(client, username, password=PASSWORD):
    response = client.post(f"{API}/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def owner_headers(client):
    return register(client, "owner")


@pytest.fixture
def admin_headers(client, db_session):
    db_session.add(User(
        username="admin",
        email="admin@example.com",
        full_name="System Administrator",
        hashed_password=hash_password(PASSWORD),
        role=UserRole.ADMIN,
    ))
    db_session.commit()
    return login(client, "admin")


@pytest.fixture
def make_part(client, admin_headers):
    """Factory creating catalog parts through the admin API."""

    def _make_part(**fields):
        payload = {
            "name": "Oil Filter",
            "description": "",
            "price": 10.0,
            "stock_quantity": 5,
            "brand": "Bosch",
            "compatible_models": "",
            **fields,
        }
        response = client.post(f"{API}/parts/", json=payload, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _make_part
