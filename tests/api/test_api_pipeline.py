from __future__ import annotations

import pytest
from werkzeug.security import generate_password_hash

from payroll_api.core.enums import Role, UserStatus

ADMIN = {"username": "admin", "password": "Admin@123"}
EMPLOYEE = {"firstname": "Ann", "lastname": "Lee", "contact_number": "555", "email": "ann@example.com"}


def login(client, credentials=ADMIN):
    resp = client.post("/api/auth/login", json=credentials)
    assert resp.status_code == 200, resp.get_json()
    return resp.get_json()["data"]


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_token(app):
    return login(app.test_client())["token"]


def test_protected_route_without_credentials_never_reaches_view(app, client):
    calls = []

    @app.route("/api/guarded", methods=["GET"])
    def guarded():
        calls.append(True)
        return "ok"

    resp = client.get("/api/guarded")

    assert resp.status_code == 401
    assert resp.get_json() == {"status_code": 401, "success": False, "message": "Authentication required"}
    assert calls == []


def test_login_returns_token_csrf_and_public_user(client, container):
    data = login(client)

    assert container.codec.verify(data["token"])["role"] == "admin"
    assert len(data["csrf_token"]) == 64
    assert data["user"]["username"] == "admin"
    assert "password" not in data["user"] and "password_hash" not in data["user"]


def test_login_failures(client):
    resp = client.post("/api/auth/login", json={"username": "admin", "password": "wrong"})
    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Invalid username or password"

    resp = client.post("/api/auth/login", json={"username": ""})
    body = resp.get_json()
    assert resp.status_code == 400
    assert set(body["errors"]) == {"username", "password"}


def test_inactive_user_cannot_login(client, users_repo):
    users_repo.create_user(
        firstname="Old",
        lastname="Timer",
        username="old",
        password_hash=generate_password_hash("secret1"),
        email=None,
        role=Role.USER,
        status=UserStatus.INACTIVE,
    )
    resp = client.post("/api/auth/login", json={"username": "old", "password": "secret1"})
    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Your account is not active"


def test_session_requests_need_csrf_for_writes(client):
    csrf_token = login(client)["csrf_token"]

    assert client.get("/api/employees").status_code == 200

    resp = client.post("/api/employees", json=EMPLOYEE)
    assert resp.status_code == 403
    assert resp.get_json()["message"] == "CSRF token validation failed"

    resp = client.post("/api/employees", json=EMPLOYEE, headers={"X-CSRF-Token": csrf_token})
    assert resp.status_code == 201
    assert resp.get_json()["data"]["firstname"] == "Ann"

    resp = client.post("/api/employees", json={**EMPLOYEE, "csrf_token": csrf_token})
    assert resp.status_code == 201


def test_bearer_requests_skip_csrf(app, admin_token):
    client = app.test_client()
    resp = client.post("/api/employees", json=EMPLOYEE, headers=bearer(admin_token))
    assert resp.status_code == 201


def test_invalid_bearer_token_is_401(client):
    resp = client.get("/api/employees", headers=bearer("a.b.c"))
    assert resp.status_code == 401


def test_idle_session_expires(client, clock):
    login(client)
    clock.advance(1801)

    resp = client.get("/api/employees")
    assert resp.status_code == 401


def test_logout_clears_session(client):
    login(client)
    assert client.post("/api/auth/logout").status_code == 200
    assert client.get("/api/employees").status_code == 401


def test_copied_session_cookie_is_dead_after_logout(app, client):
    csrf_token = login(client)["csrf_token"]
    cookie = client.get_cookie("session").value
    assert client.post("/api/auth/logout").status_code == 200

    replay = app.test_client()
    replay.set_cookie("session", cookie)
    assert replay.get("/api/employees").status_code == 401

    replay = app.test_client()
    replay.set_cookie("session", cookie)
    resp = replay.post("/api/employees", json=EMPLOYEE, headers={"X-CSRF-Token": csrf_token})
    assert resp.status_code == 403
    assert resp.get_json()["message"] == "CSRF token validation failed"


def test_relogin_invalidates_previous_cookie(app, client):
    login(client)
    old_cookie = client.get_cookie("session").value
    login(client)

    replay = app.test_client()
    replay.set_cookie("session", old_cookie)
    assert replay.get("/api/employees").status_code == 401
    assert client.get("/api/employees").status_code == 200


def test_check_and_refresh(client, container):
    assert client.get("/api/auth/check").status_code == 401
    assert client.post("/api/auth/refresh").status_code == 401

    login(client)
    check = client.get("/api/auth/check").get_json()
    assert check["data"]["username"] == "admin"

    refreshed = client.post("/api/auth/refresh").get_json()["data"]
    assert refreshed["expires_in"] == 3600
    assert container.codec.verify(refreshed["token"])["username"] == "admin"


def test_check_with_bearer_returns_identity(app, admin_token):
    resp = app.test_client().get("/api/auth/check", headers=bearer(admin_token))
    assert resp.get_json()["data"] == {"id": 1, "username": "admin", "role": "admin"}


def test_non_admin_cannot_manage_users(app, client, users_repo, admin_token):
    users_repo.create_user(
        firstname="Reg",
        lastname="User",
        username="reg",
        password_hash=generate_password_hash("secret1"),
        email=None,
        role=Role.USER,
        status=UserStatus.ACTIVE,
    )
    token = login(client, {"username": "reg", "password": "secret1"})["token"]
    other = app.test_client()

    payload = {"firstname": "New", "lastname": "One", "username": "newbie", "password": "secret1"}
    resp = other.post("/api/users", json=payload, headers=bearer(token))
    assert resp.status_code == 403
    assert resp.get_json()["message"] == "You do not have permission to access this resource"

    resp = other.post("/api/users", json=payload, headers=bearer(admin_token))
    assert resp.status_code == 201


def test_public_registration_needs_csrf_but_not_auth(client):
    payload = {"firstname": "Self", "lastname": "Made", "username": "selfie", "password": "secret1", "role": "admin"}

    assert client.post("/api/users/create", json=payload).status_code == 403

    csrf_token = client.get("/api/auth/csrf").get_json()["data"]["csrf_token"]
    resp = client.post("/api/users/create", json=payload, headers={"X-CSRF-Token": csrf_token})

    assert resp.status_code == 201
    assert resp.get_json()["data"]["role"] == "user"


def test_last_admin_cannot_be_deleted(app, admin_token):
    resp = app.test_client().delete("/api/users/1", headers=bearer(admin_token))
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Cannot delete the only admin user"


def test_pagination_envelope_and_clamping(app, admin_token, employees_repo):
    for i in range(7):
        employees_repo.create_employee(
            employee_id=f"20260000{i}", firstname=f"E{i}", lastname="X", contact_number="1", email="e@example.com"
        )
    client = app.test_client()

    body = client.get("/api/employees?page=2&per_page=3", headers=bearer(admin_token)).get_json()
    assert body["success"] is True
    assert body["message"] == "Data retrieved successfully"
    assert [e["firstname"] for e in body["data"]] == ["E3", "E4", "E5"]
    assert body["pagination"] == {"current_page": 2, "per_page": 3, "total_records": 7, "total_pages": 3}

    body = client.get("/api/employees?page=0&per_page=500", headers=bearer(admin_token)).get_json()
    assert body["pagination"]["current_page"] == 1
    assert body["pagination"]["per_page"] == 5

    body = client.get("/api/employees?per_page=abc", headers=bearer(admin_token)).get_json()
    assert body["pagination"]["per_page"] == 2


def test_payslip_lifecycle(app, admin_token, seed_employee, payslip_payload, renderer):
    client = app.test_client()
    headers = bearer(admin_token)

    resp = client.post("/api/payslips", json=payslip_payload, headers=headers)
    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["payslip_no"] == "000000001"
    assert data["total_salary"] == 1200.5
    assert data["employee_name"] == "Jane Doe"
    assert data["bank_details"]["bank_account_number"] == "111222333"

    assert client.get("/api/payslips/000000001", headers=headers).get_json()["data"]["id"] == data["id"]
    assert client.get(f"/api/payslips/{seed_employee}/employee", headers=headers).status_code == 200
    assert client.get("/api/payslips/meta/statuses", headers=headers).get_json()["data"] == [
        "Paid",
        "Pending",
        "Cancelled",
    ]

    resp = client.post(f"/api/payslips/{data['id']}/generate-pdf", headers=headers)
    assert resp.status_code == 200

    resp = client.delete(f"/api/payslips/{data['id']}", headers=headers)
    assert resp.status_code == 200
    assert data["agent_pdf_path"] in renderer.removed


@pytest.mark.parametrize("value", ["inf", "1e400", "nan"])
def test_payslip_with_non_integer_bank_account_is_400(app, admin_token, payslip_payload, value):
    resp = app.test_client().post(
        "/api/payslips", json={**payslip_payload, "bank_account_id": value}, headers=bearer(admin_token)
    )
    assert resp.status_code == 400
    assert resp.get_json()["errors"]["bank_account_id"] == "Bank_account_id must be a whole number"


def test_unknown_route_and_method(app, admin_token):
    client = app.test_client()
    resp = client.get("/api/nothing-here", headers=bearer(admin_token))
    assert resp.status_code == 404
    assert resp.get_json()["message"] == "Endpoint not found"

    resp = client.patch("/api/employees", headers=bearer(admin_token))
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Method not supported"


def test_malformed_json_body(app, admin_token):
    resp = app.test_client().post(
        "/api/employees",
        data="{not json",
        content_type="application/json",
        headers=bearer(admin_token),
    )
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Invalid JSON data"


def test_unexpected_errors_are_hidden(app, client):
    @app.route("/api/boom", methods=["GET"])
    def boom():
        raise RuntimeError("database password is hunter2")

    token = login(client)["token"]
    resp = app.test_client().get("/api/boom", headers=bearer(token))
    assert resp.status_code == 500
    assert resp.get_json()["message"] == "An unexpected error occurred. Please try again later."


def test_cors_headers(client):
    resp = client.options("/api/employees", headers={"Origin": "http://localhost:3000"})
    assert resp.status_code == 200
    assert resp.headers["Access-Control-Allow-Origin"] == "http://localhost:3000"
    assert resp.headers["Access-Control-Allow-Credentials"] == "true"
    assert resp.headers["Access-Control-Max-Age"] == "86400"

    resp = client.get("/api/employees", headers={"Origin": "http://evil.test"})
    assert resp.headers["Access-Control-Allow-Origin"] == "http://frontend.test"
