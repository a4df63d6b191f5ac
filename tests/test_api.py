"""HTTP endpoint tests: Flask test client over an in-memory repository.

No database, no network, no running server required.
"""
from __future__ import annotations

import io
import sys
import types
from datetime import datetime, timedelta, timezone

import pytest

from src.employee_directory.employee_directory.core.constants import DEFAULT_PORT
from src.employee_directory.employee_directory.main import create_app
from src.employee_directory.employee_directory.security.tokens import TokenManager


def _signup(client, registration):
    r = client.post("/signin", json=registration)
    assert r.status_code == 201
    return r.get_json()["token"]


def _auth(token):
    return {"Authorization": f"Bearer {token}"}


# ---------------------------------------------------------------------------
# Registration / login
# ---------------------------------------------------------------------------


def test_index(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.get_json()["status"] == "ok"


def test_register_returns_201_and_token(client, registration, container):
    r = client.post("/signin", json=registration)

    assert r.status_code == 201
    body = r.get_json()
    assert body["status"] == "ok"
    assert body["data"] == "User created successfully!"
    assert container.tokens.verify(body["token"]) == "P1001"
    assert "password" not in body and "passwordHash" not in body


def test_register_accepts_legacy_keys(client, employees_repo):
    r = client.post(
        "/signin",
        json={
            "prno": "L-7",
            "name": "Legacy Client",
            "mobileNo": "123",
            "dob": "1980-12-31",
            "password": "pw",
            "department": "Ops",
        },
    )

    assert r.status_code == 201
    assert employees_repo.get_by_identifier("L-7").mobile_number == "123"


def test_duplicate_register_is_400(client, registration):
    _signup(client, registration)

    r = client.post("/signin", json=registration)

    assert r.status_code == 400
    assert r.get_json() == {"status": "error", "data": "User already exists!"}


def test_register_missing_field_is_400(client, registration):
    del registration["department"]

    r = client.post("/signin", json=registration)

    assert r.status_code == 400
    assert r.get_json()["status"] == "error"


def test_login_success(client, registration, container):
    _signup(client, registration)

    r = client.post("/signup", json={"identifier": "P1001", "password": "s3cret-pass"})

    assert r.status_code == 200
    assert r.get_json()["data"] == "Sign in successful!"
    assert container.tokens.verify(r.get_json()["token"]) == "P1001"


@pytest.mark.parametrize(
    "creds",
    [
        {"prno": "P1001", "password": "wrong"},
        {"prno": "UNKNOWN", "password": "s3cret-pass"},
        {},
    ],
)
def test_login_failures_are_400(client, registration, creds):
    _signup(client, registration)

    r = client.post("/signup", json=creds)

    assert r.status_code == 400
    assert r.get_json()["status"] == "error"


def test_unexpected_store_failure_is_generic_500(client, employees_repo, registration, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("connection refused to db:3306")

    monkeypatch.setattr(employees_repo, "get_by_identifier", boom)

    r = client.post("/signin", json=registration)

    assert r.status_code == 500
    assert r.get_json() == {"status": "error", "data": "An error occurred. Please try again."}


# ---------------------------------------------------------------------------
# Profile update
# ---------------------------------------------------------------------------


def test_update_without_token_is_401(client):
    r = client.put("/update-id-card", json={"name": "x"})
    assert r.status_code == 401


def test_update_with_bad_token_is_403(client):
    r = client.put("/update-id-card", json={"name": "x"}, headers=_auth("garbage"))
    assert r.status_code == 403


def test_update_with_expired_token_is_403(client, registration):
    _signup(client, registration)
    stale = datetime.now(timezone.utc) - timedelta(hours=2)
    token = TokenManager("test-jwt-secret", clock=lambda: stale).issue("P1001")

    r = client.put("/update-id-card", json={"name": "x"}, headers=_auth(token))

    assert r.status_code == 403


def test_update_json_partial(client, registration, employees_repo):
    token = _signup(client, registration)

    r = client.put("/update-id-card", json={"department": "Ops", "name": ""}, headers=_auth(token))

    assert r.status_code == 200
    assert r.get_json() == {"status": "ok", "data": "User updated successfully!"}
    stored = employees_repo.get_by_identifier("P1001")
    assert stored.department == "Ops"
    assert stored.name == "Anna Smith"


def test_update_uses_token_identity_not_body(client, registration, employees_repo):
    token = _signup(client, registration)
    other = dict(registration, identifier="P2002", name="Other Person")
    _signup(client, other)

    r = client.put(
        "/update-id-card",
        json={"identifier": "P2002", "prno": "P2002", "name": "Hijacked"},
        headers=_auth(token),
    )

    assert r.status_code == 200
    assert employees_repo.get_by_identifier("P2002").name == "Other Person"
    assert employees_repo.get_by_identifier("P1001").name == "Hijacked"


@pytest.mark.parametrize("dob", ["2024-02-30", "02-30-2024"])
def test_update_bad_dob_is_400(client, registration, dob):
    token = _signup(client, registration)

    r = client.put("/update-id-card", json={"dob": dob}, headers=_auth(token))

    assert r.status_code == 400


def test_update_for_vanished_record_is_404(client, container):
    token = container.tokens.issue("GHOST")

    r = client.put("/update-id-card", json={"name": "x"}, headers=_auth(token))

    assert r.status_code == 404


def test_multipart_photo_upload(client, registration, employees_repo, container, png_bytes):
    token = _signup(client, registration)

    r = client.put(
        "/update-id-card",
        data={"photo": (io.BytesIO(png_bytes), "face.png"), "phone": "555-0199"},
        headers=_auth(token),
        content_type="multipart/form-data",
    )

    assert r.status_code == 200
    stored = employees_repo.get_by_identifier("P1001")
    assert stored.phone == "555-0199"
    assert stored.photo_reference.startswith("/uploads/")
    assert stored.photo_reference.endswith("-face.png")

    served = client.get(stored.photo_reference)
    assert served.status_code == 200
    assert served.data == png_bytes


def test_oversized_photo_is_400(client, registration):
    token = _signup(client, registration)
    big = b"\x89PNG" + b"0" * (5 * 1024 * 1024)

    r = client.put(
        "/update-id-card",
        data={"photo": (io.BytesIO(big), "big.png")},
        headers=_auth(token),
        content_type="multipart/form-data",
    )

    assert r.status_code == 400


_TOO_LARGE = {"status": "error", "data": "Upload exceeds the maximum allowed size!"}
_OVER_LIMIT = 7 * 1024 * 1024


@pytest.mark.parametrize("route", ["/signin", "/signup"])
def test_oversized_json_body_is_400(client, route):
    r = client.post(route, json={"identifier": "P1001", "password": "x" * _OVER_LIMIT})

    assert r.status_code == 400
    assert r.get_json() == _TOO_LARGE


@pytest.mark.parametrize("route", ["/signin", "/signup"])
def test_oversized_multipart_body_is_400(client, route):
    r = client.post(
        route,
        data={"identifier": "P1001", "blob": (io.BytesIO(b"0" * _OVER_LIMIT), "blob.bin")},
        content_type="multipart/form-data",
    )

    assert r.status_code == 400
    assert r.get_json() == _TOO_LARGE

# ---------------------------------------------------------------------------
# Lookup / search
# ---------------------------------------------------------------------------


def test_profile_projection(client, registration):
    _signup(client, registration)

    r = client.get("/profile/P1001")

    assert r.status_code == 200
    data = r.get_json()["data"]
    assert data["identifier"] == "P1001"
    assert data["dateOfBirth"] == "1990-05-17"
    assert "mobileNumber" not in data
    assert "passwordHash" not in data


def test_profile_not_found(client):
    r = client.get("/profile/NOPE")
    assert r.status_code == 404
    assert r.get_json() == {"status": "error", "data": "User not found!"}


def test_user_full_record(client, registration):
    _signup(client, registration)

    r = client.get("/user/P1001")

    assert r.status_code == 200
    data = r.get_json()["data"]
    assert data["email"] == "anna@example.com"
    assert "photoReference" in data
    assert "passwordHash" not in data


def test_user_not_found(client):
    assert client.get("/user/NOPE").status_code == 404


def test_search_filters(client, registration):
    _signup(client, registration)
    _signup(client, dict(registration, identifier="P2", name="Brian Long", department="Eng"))
    _signup(client, dict(registration, identifier="P3", name="Hannah Lee", department="Sales"))

    everyone = client.get("/search").get_json()["data"]
    both = client.get("/search?name=AN&department=Eng").get_json()["data"]
    by_prno = client.get("/search?prno=P3").get_json()["data"]
    none = client.get("/search?department=Legal")

    assert len(everyone) == 3
    assert set(everyone[0]) == {"name", "department", "identifier", "mobileNumber"}
    assert sorted(e["identifier"] for e in both) == ["P1001", "P2"]
    assert [e["identifier"] for e in by_prno] == ["P3"]
    assert none.status_code == 200
    assert none.get_json()["data"] == []


def test_list_users_has_no_password_hash(client, registration, employees_repo):
    _signup(client, registration)
    stored_hash = employees_repo.get_by_identifier("P1001").password_hash

    r = client.get("/api/users")

    assert r.status_code == 200
    assert stored_hash not in r.get_data(as_text=True)
    assert r.get_json()["data"][0]["identifier"] == "P1001"


def test_port_defaults_when_settings_omit_it(container, monkeypatch):
    settings = types.ModuleType("bare_settings")
    settings.SECRET_KEY = "bare"
    monkeypatch.setitem(sys.modules, "bare_settings", settings)

    app = create_app(container=container, settings_module="bare_settings")

    assert app.config["PORT"] == DEFAULT_PORT
