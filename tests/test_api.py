"""Tests for the Flask HTTP API."""

import logging

from wauth.core.errors import StoreError

from .conftest import RFC_SECRET


def test_index(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.get_json()["service"] == "wauth"


def test_list_sites_empty(client):
    response = client.get("/api/sites")
    assert response.status_code == 200
    assert response.get_json() == {"sites": []}


def test_add_site(client, application):
    response = client.post("/api/sites", json={"siteName": "acme", "secret": RFC_SECRET})
    assert response.status_code == 201
    assert response.get_json() == {"name": "acme"}
    assert application.list_sites() == ["acme"]


def test_list_sites(client, application):
    application.add_secret("github", RFC_SECRET)
    application.add_secret("aws", RFC_SECRET)
    response = client.get("/api/sites")
    assert response.get_json() == {"sites": [{"name": "aws"}, {"name": "github"}]}


def test_add_duplicate_site(client, application):
    application.add_secret("acme", RFC_SECRET)
    response = client.post("/api/sites", json={"siteName": "acme", "secret": "JBSWY3DPEHPK3PXP"})
    assert response.status_code == 409
    assert response.get_json()["error"] == {
        "kind": "duplicate_site_name",
        "message": "Site name 'acme' already exists",
        "site_name": "acme",
    }


def test_add_invalid_site_name(client):
    response = client.post("/api/sites", json={"siteName": "bad name!", "secret": RFC_SECRET})
    assert response.status_code == 400
    error = response.get_json()["error"]
    assert error["kind"] == "validation_error"
    assert error["field"] == "site_name"


def test_add_invalid_secret(client):
    response = client.post("/api/sites", json={"siteName": "acme", "secret": "ABCDEFGH"})
    assert response.status_code == 400
    error = response.get_json()["error"]
    assert error["field"] == "secret"
    assert error["message"] == "Secret should be at least 16 characters long for security"


def test_add_requires_json_body(client):
    response = client.post("/api/sites", data="not json", content_type="text/plain")
    assert response.status_code == 400
    assert response.get_json()["error"]["kind"] == "bad_request"


def test_add_requires_fields(client):
    response = client.post("/api/sites", json={"siteName": "acme"})
    assert response.status_code == 400
    assert response.get_json()["error"]["kind"] == "bad_request"


def test_get_totp_code(client, application, frozen_time):
    application.add_secret("rfc", RFC_SECRET)
    frozen_time(1111111109)
    response = client.get("/api/sites/rfc/code")
    assert response.status_code == 200
    assert response.get_json() == {
        "site_name": "rfc",
        "code": "081804",
        "remaining_seconds": 1,
    }


def test_get_totp_code_not_found(client):
    response = client.get("/api/sites/ghost/code")
    assert response.status_code == 404
    assert response.get_json()["error"]["kind"] == "not_found"


def test_get_totp_code_invalid_secret(client, store):
    store.put("broken", "!!!!!!!!")
    response = client.get("/api/sites/broken/code")
    assert response.status_code == 400
    assert response.get_json()["error"]["kind"] == "invalid_secret"


def test_delete_site(client, application):
    application.add_secret("acme", RFC_SECRET)
    response = client.delete("/api/sites/acme")
    assert response.status_code == 200
    assert response.get_json() == {"name": "acme"}
    assert application.list_sites() == []


def test_delete_missing_site(client):
    response = client.delete("/api/sites/ghost")
    assert response.status_code == 200


def test_store_error_is_500(client, application, monkeypatch):
    def broken():
        raise StoreError("Failed to list sites: disk I/O error")

    monkeypatch.setattr(application.store, "list_site_names", broken)
    response = client.get("/api/sites")
    assert response.status_code == 500
    assert response.get_json()["error"] == {
        "kind": "store_error",
        "message": "Failed to list sites: disk I/O error",
    }


def test_cors_header(client):
    response = client.get("/api/sites", headers={"Origin": "http://example.com"})
    assert response.headers.get("Access-Control-Allow-Origin") in ("*", "http://example.com")


def test_get_totp_code_clock_before_epoch(client, application, frozen_time):
    application.add_secret("rfc", RFC_SECRET)
    frozen_time(-5)
    response = client.get("/api/sites/rfc/code")
    assert response.status_code == 400
    assert response.get_json()["error"]["kind"] == "invalid_timestamp"


def test_mutations_logged_once(client, caplog):
    caplog.set_level(logging.INFO, logger="wauth")
    client.post("/api/sites", json={"siteName": "acme", "secret": RFC_SECRET})
    client.delete("/api/sites/acme")
    messages = [r.getMessage() for r in caplog.records if r.name == "wauth"]
    assert messages.count("Added secret for site 'acme'") == 1
    assert messages.count("Deleted secret for site 'acme'") == 1
    assert len([m for m in messages if "acme" in m]) == 2
