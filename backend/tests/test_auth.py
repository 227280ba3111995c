# File: tests/test_auth.py

import sqlite3

import pytest

from lawvault.security import verify_password
from lawvault.services.account_service import AccountService
from lawvault.services.upload_service import UploadService

SIGNUP = {"name": "A", "email": "a@x.com", "password": "pw123456"}


def _stored_user(db_path, email):
    with sqlite3.connect(db_path) as conn:
        conn.row_factory = sqlite3.Row
        return conn.execute("SELECT * FROM users WHERE email = ?", (email,)).fetchone()


def test_signup_creates_user(client, db_path):
    resp = client.post("/signup", json=SIGNUP)
    assert resp.status_code == 201
    body = resp.json()
    assert body["id"] > 0
    assert body["name"] == "A"
    assert body["email"] == "a@x.com"
    assert body["role"] == "client"
    assert body["photo"] is None
    assert "password" not in body
    assert "password_hash" not in body

    row = _stored_user(db_path, "a@x.com")
    assert row["password_hash"] != "pw123456"
    assert verify_password("pw123456", row["password_hash"])


def test_signup_accepts_username_role_and_gender(client):
    resp = client.post(
        "/signup",
        json={"username": "bob", "email": "bob@x.com", "password": "secret1", "role": "lawyer", "gender": "male"},
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["name"] == "bob"
    assert body["role"] == "lawyer"
    assert body["gender"] == "male"


def test_signup_normalizes_email(client, db_path):
    resp = client.post("/signup", json={**SIGNUP, "email": "  A@X.Com "})
    assert resp.status_code == 201
    assert resp.json()["email"] == "a@x.com"
    assert _stored_user(db_path, "a@x.com") is not None


@pytest.mark.parametrize("missing", ["name", "email", "password"])
def test_signup_missing_field(client, missing):
    payload = {k: v for k, v in SIGNUP.items() if k != missing}
    resp = client.post("/signup", json=payload)
    assert resp.status_code == 400
    assert "message" in resp.json()


def test_signup_blank_field_counts_as_missing(client):
    resp = client.post("/signup", json={**SIGNUP, "name": "   "})
    assert resp.status_code == 400


def test_signup_rejects_non_object_body(client):
    resp = client.post("/signup", content=b"not json", headers={"content-type": "application/json"})
    assert resp.status_code == 400
    resp = client.post("/signup", json=["a", "b"])
    assert resp.status_code == 400


def test_duplicate_signup_always_conflicts(client):
    assert client.post("/signup", json=SIGNUP).status_code == 201
    for email in ["a@x.com", "A@X.COM", " a@x.com"]:
        resp = client.post("/signup", json={**SIGNUP, "email": email, "password": "other-pw"})
        assert resp.status_code == 409
        assert resp.json() == {"message": "User already exists with this email"}


def test_signup_with_photo(client):
    resp = client.post(
        "/signup",
        data=SIGNUP,
        files={"photo": ("me.PNG", b"\x89PNG fake image", "image/png")},
    )
    assert resp.status_code == 201
    photo = resp.json()["photo"]
    assert photo.startswith("/uploads/")
    assert photo.endswith(".png")
    assert "me" not in photo

    served = client.get(photo)
    assert served.status_code == 200
    assert served.content == b"\x89PNG fake image"


def test_signup_form_without_file_skips_photo(client):
    resp = client.post("/signup", data={**SIGNUP, "photo": "not-a-file"})
    assert resp.status_code == 201
    assert resp.json()["photo"] is None


def test_signup_photo_write_failure_is_server_error(make_client, monkeypatch):
    client = make_client(raise_server_exceptions=False)

    async def broken_save(self, file):
        raise OSError("disk full")

    monkeypatch.setattr(UploadService, "save", broken_save)
    resp = client.post("/signup", data=SIGNUP, files={"photo": ("me.png", b"x", "image/png")})
    assert resp.status_code == 500
    assert resp.json() == {"message": "Something went wrong"}
    assert "disk full" not in resp.text

    monkeypatch.undo()
    assert client.post("/signup", json=SIGNUP).status_code == 201


def test_login_flow(client):
    assert client.post("/signup", json=SIGNUP).status_code == 201

    wrong = client.post("/login", json={"email": "a@x.com", "password": "wrong"})
    assert wrong.status_code == 401

    ok = client.post("/login", json={"email": "a@x.com", "password": "pw123456"})
    assert ok.status_code == 200
    body = ok.json()
    assert set(body) == {"id", "name", "email", "role", "photo"}
    assert body["email"] == "a@x.com"


def test_login_normalizes_email(client):
    client.post("/signup", json=SIGNUP)
    resp = client.post("/login", json={"email": " A@x.COM", "password": "pw123456"})
    assert resp.status_code == 200


def test_login_failures_are_indistinguishable(client):
    client.post("/signup", json=SIGNUP)
    wrong_password = client.post("/login", json={"email": "a@x.com", "password": "nope"})
    unknown_email = client.post("/login", json={"email": "ghost@x.com", "password": "nope"})
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()


@pytest.mark.parametrize("payload", [{}, {"email": "a@x.com"}, {"password": "pw123456"}, {"email": "", "password": "x"}])
def test_login_missing_fields(client, payload):
    resp = client.post("/login", json=payload)
    assert resp.status_code == 400


def test_root_banner(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Lawfirm server is running"}


def test_signup_strips_role_and_gender(client):
    resp = client.post("/signup", json={**SIGNUP, "role": " lawyer ", "gender": " female\n"})
    assert resp.status_code == 201
    assert resp.json()["role"] == "lawyer"
    assert resp.json()["gender"] == "female"


def test_signup_empty_photo_part_is_skipped(client, tmp_path):
    resp = client.post("/signup", data=SIGNUP, files={"photo": ("me.png", b"", "image/png")})
    assert resp.status_code == 201
    assert resp.json()["photo"] is None
    assert list((tmp_path / "uploads").iterdir()) == []


def test_signup_broken_multipart_body(client):
    resp = client.post(
        "/signup",
        content=b"garbage",
        headers={"content-type": "multipart/form-data; boundary=xyz"},
    )
    assert resp.status_code == 400
    assert "message" in resp.json()
    assert "detail" not in resp.json()


def test_routing_errors_use_message_body(client):
    missing = client.get("/no-such-route")
    assert missing.status_code == 404
    assert set(missing.json()) == {"message"}

    wrong_method = client.put("/login", json={})
    assert wrong_method.status_code == 405
    assert set(wrong_method.json()) == {"message"}


def test_unique_index_catches_concurrent_signup(client, tmp_path, monkeypatch):
    assert client.post("/signup", json=SIGNUP).status_code == 201

    # Simulate a second request that ran its lookup before the first insert
    async def not_found(self, email, db):
        return None

    monkeypatch.setattr(AccountService, "find_by_email", not_found)
    resp = client.post(
        "/signup",
        data={**SIGNUP, "password": "other-pw"},
        files={"photo": ("me.png", b"\x89PNG fake image", "image/png")},
    )
    assert resp.status_code == 409
    assert resp.json() == {"message": "User already exists with this email"}
    assert list((tmp_path / "uploads").iterdir()) == []

    monkeypatch.undo()
    login = client.post("/login", json={"email": "a@x.com", "password": "pw123456"})
    assert login.status_code == 200
