"""
Shared fixtures: a fresh store per test, the app bound to it, and a factory
for logged-in clients (each client keeps its own session cookie).
"""

import pytest
from fastapi.testclient import TestClient

from jobnexus.app import create_app
from jobnexus.database import init_db, make_engine, make_session_factory
from jobnexus.services.auth import hash_password
from jobnexus.services.storage import MemStorage, SqlStorage


def make_sql_storage() -> SqlStorage:
    """SqlStorage over a private in-memory SQLite database."""
    engine = make_engine("sqlite://")
    init_db(engine)
    return SqlStorage(make_session_factory(engine))


@pytest.fixture()
def storage():
    return MemStorage()


@pytest.fixture(params=["memory", "sql"])
def any_storage(request):
    """Runs a storage test once per backend."""
    if request.param == "memory":
        return MemStorage()
    return make_sql_storage()


@pytest.fixture()
def app(storage):
    return create_app(storage=storage)


@pytest.fixture()
def client(app):
    """Anonymous client."""
    return TestClient(app)


@pytest.fixture()
def make_client(app):
    """Register a user of the given type and return a client logged in as them."""

    def _make(username: str, user_type: str = "seeker", name: str = None) -> TestClient:
        c = TestClient(app)
        resp = c.post(
            "/api/register",
            json={
                "username": username,
                "password": "secret-pass",
                "email": f"{username}@example.com",
                "name": name or username.title(),
                "user_type": user_type,
            },
        )
        assert resp.status_code == 201, resp.text
        return c

    return _make


@pytest.fixture()
def admin_client(app, storage):
    """Admins cannot self-register, so the account is created directly in storage."""
    storage.create_user(
        {
            "username": "root",
            "password": hash_password("admin-pass"),
            "email": "root@example.com",
            "name": "Root",
            "user_type": "admin",
        }
    )
    c = TestClient(app)
    resp = c.post("/api/login", json={"username": "root", "password": "admin-pass"})
    assert resp.status_code == 200, resp.text
    return c


@pytest.fixture()
def job_payload():
    return {
        "title": "QA Engineer",
        "description": "Own the regression suite and release sign-off.",
        "location": "Pune",
        "job_type": "full-time",
        "salary_min": 800000,
        "salary_max": 1200000,
        "skills": ["Selenium", "Python"],
    }
