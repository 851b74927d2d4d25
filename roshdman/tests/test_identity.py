import json

import pytest

from roshdman.core.errors import AuthError, ConflictError, ValidationError
from roshdman.features.users.service import UserService, hash_password, verify_password


def test_register_returns_public_fields_and_stores_hash(store, data_file):
    service = UserService(store)

    user = service.register(name="Ali", email="a@x.com", password="secret123")

    assert user.name == "Ali"
    assert user.email == "a@x.com"
    assert user.id
    assert "password" not in user.to_json_dict()

    stored = json.loads(data_file.read_text(encoding="utf-8"))["users"][0]
    assert stored["password"] != "secret123"
    assert verify_password("secret123", stored["password"])


def test_register_duplicate_email_conflicts_regardless_of_other_fields(store):
    service = UserService(store)
    service.register(name="Ali", email="a@x.com", password="secret123")

    with pytest.raises(ConflictError):
        service.register(name="Someone else", email="a@x.com", password="different")

    assert len(store.load().users) == 1


def test_email_match_is_case_sensitive(store):
    service = UserService(store)
    service.register(name="Ali", email="a@x.com", password="secret123")

    service.register(name="Ali", email="A@x.com", password="secret123")

    assert len(store.load().users) == 2


@pytest.mark.parametrize("missing", ["name", "email", "password"])
def test_register_requires_every_field(store, missing):
    fields = {"name": "Ali", "email": "a@x.com", "password": "secret123"}
    fields[missing] = ""

    with pytest.raises(ValidationError):
        UserService(store).register(**fields)


def test_login_success_returns_public_fields(store):
    service = UserService(store)
    registered = service.register(name="Ali", email="a@x.com", password="secret123")

    user = service.login(email="a@x.com", password="secret123")

    assert user == registered


def test_login_failures_share_one_message(store):
    service = UserService(store)
    service.register(name="Ali", email="a@x.com", password="secret123")

    with pytest.raises(AuthError) as unknown:
        service.login(email="nobody@x.com", password="secret123")
    with pytest.raises(AuthError) as wrong:
        service.login(email="a@x.com", password="wrong")

    assert unknown.value.message == wrong.value.message


def test_login_requires_email_and_password(store):
    with pytest.raises(ValidationError):
        UserService(store).login(email="a@x.com", password=None)


def test_verify_password_rejects_non_bcrypt_value():
    assert verify_password("secret", "plain-text") is False
    assert verify_password("secret", hash_password("secret", rounds=4)) is True


def test_register_and_login_over_http(client):
    resp = client.post("/register", json={"name": "Ali", "email": "a@x.com", "password": "secret123"})
    assert resp.status_code == 200
    body = resp.json()
    assert set(body["user"]) == {"id", "name", "email"}
    assert body["message"]

    dup = client.post("/register", json={"name": "Other", "email": "a@x.com", "password": "x"})
    assert dup.status_code == 400
    assert set(dup.json()) == {"message"}

    ok = client.post("/login", json={"email": "a@x.com", "password": "secret123"})
    assert ok.status_code == 200
    assert ok.json()["user"] == body["user"]

    bad_user = client.post("/login", json={"email": "b@x.com", "password": "secret123"})
    bad_pass = client.post("/login", json={"email": "a@x.com", "password": "nope"})
    assert bad_user.status_code == bad_pass.status_code == 401
    assert bad_user.json() == bad_pass.json()


def test_missing_fields_over_http_are_400(client):
    assert client.post("/register", json={"name": "Ali"}).status_code == 400
    assert client.post("/login", json={}).status_code == 400
    assert client.post("/login").status_code == 400


def test_register_rejects_password_longer_than_bcrypt_limit(store):
    with pytest.raises(ValidationError):
        UserService(store).register(name="Ali", email="a@x.com", password="x" * 73)

    assert store.load().users == []
