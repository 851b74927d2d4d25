# roshdman/conftest.py
import pytest
from fastapi.testclient import TestClient

from roshdman.core.config import settings
from roshdman.core.store import JsonRecordStore, get_store


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch):
    """Lowest bcrypt cost so registration-heavy tests stay quick."""
    monkeypatch.setattr(settings, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "data.json"


@pytest.fixture
def store(data_file):
    """Isolated record store backed by a file under tmp_path."""
    return JsonRecordStore(str(data_file))


@pytest.fixture
def client(store):
    """
    TestClient whose record store points at the per-test file.

    The dependency override is removed again after the test.
    """
    from roshdman.main import app

    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_store, None)


@pytest.fixture
def register(client):
    """Register a user over HTTP and return its public fields."""

    def _register(name="Ali", email="a@x.com", password="secret123"):
        resp = client.post("/register", json={"name": name, "email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return resp.json()["user"]

    return _register
