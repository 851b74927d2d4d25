import json

from fastapi.testclient import TestClient

from roshdman.core.store import JsonRecordStore, get_store
from roshdman.main import app


def test_charities_seeded_on_empty_store(client, data_file):
    assert not data_file.exists()

    resp = client.get("/charities")

    assert resp.status_code == 200
    assert resp.json() == [
        {"id": "charity1", "name": "محک", "link": "https://mahak-charity.org/online-payment/"},
        {"id": "charity2", "name": "کهریزک", "link": "https://kahrizakcharity.com/"},
    ]
    # Reads never create the file
    assert not data_file.exists()


def test_charities_returned_verbatim_from_store(client, data_file):
    doc = {
        "users": [],
        "challenges": [],
        "invitations": [],
        "penalties": [],
        "charities": [{"id": "c9", "name": "Local shelter", "link": "https://example.org"}],
    }
    data_file.write_text(json.dumps(doc), encoding="utf-8")

    assert client.get("/charities").json() == doc["charities"]


def test_healthz_always_ok(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json().get("status") == "ok"


def test_readyz_ok_when_data_dir_writable(client):
    resp = client.get("/readyz")
    assert resp.status_code == 200
    assert resp.json().get("status") == "ok"


def test_readyz_reports_missing_data_dir(tmp_path):
    missing = JsonRecordStore(str(tmp_path / "nope" / "data.json"))
    app.dependency_overrides[get_store] = lambda: missing
    try:
        resp = TestClient(app).get("/readyz")
    finally:
        app.dependency_overrides.pop(get_store, None)

    body = resp.json()
    assert resp.status_code == 503
    assert body.get("status") == "error"
    assert "data directory" in body.get("detail", "")


def test_cors_allows_any_origin(client):
    resp = client.options(
        "/charities",
        headers={"Origin": "http://example.com", "Access-Control-Request-Method": "GET"},
    )
    assert resp.status_code == 200
    assert resp.headers.get("access-control-allow-origin") in ("*", "http://example.com")
