from __future__ import annotations

import pytest

from payroll_api.core.exceptions import AuthorizationError
from payroll_api.security.auth_gate import AuthGate, GateRequest
from payroll_api.security.csrf import CSRFGate, find_csrf_candidate


@pytest.fixture
def gate(codec):
    return CSRFGate(codec)


def make_request(method="POST", headers=None, form=None, json_body=None, session=None):
    return GateRequest(
        method=method,
        headers=headers or {},
        session=session if session is not None else {},
        form=form or {},
        json_body=json_body,
    )


@pytest.mark.parametrize("method", ["GET", "OPTIONS", "get"])
def test_safe_methods_pass_without_token(gate, method):
    gate.verify(make_request(method=method))


def test_any_bearer_header_is_exempt(gate):
    gate.verify(make_request(headers={"Authorization": "Bearer garbage"}))


def test_post_without_token_is_rejected(gate):
    with pytest.raises(AuthorizationError) as exc:
        gate.verify(make_request())
    assert str(exc.value) == "CSRF token validation failed"


def test_valid_token_via_header(gate, codec):
    session = {}
    token = codec.issue_csrf(session)
    gate.verify(make_request(method="DELETE", headers={"X-CSRF-Token": token}, session=session))


def test_valid_token_via_form(gate, codec):
    session = {}
    token = codec.issue_csrf(session)
    gate.verify(make_request(method="PUT", form={"csrf_token": token}, session=session))


def test_valid_token_via_json_body(gate, codec):
    session = {}
    token = codec.issue_csrf(session)
    gate.verify(make_request(json_body={"csrf_token": token}, session=session))


def test_wrong_token_is_rejected(gate, codec):
    session = {}
    codec.issue_csrf(session)
    with pytest.raises(AuthorizationError):
        gate.verify(make_request(headers={"X-CSRF-Token": "nope"}, session=session))


def test_candidate_order_form_then_header_then_json():
    req = make_request(form={"csrf_token": "f"}, headers={"X-CSRF-Token": "h"}, json_body={"csrf_token": "j"})
    assert find_csrf_candidate(req) == "f"

    req = make_request(headers={"X-CSRF-Token": "h"}, json_body={"csrf_token": "j"})
    assert find_csrf_candidate(req) == "h"

    req = make_request(json_body={"csrf_token": "j"})
    assert find_csrf_candidate(req) == "j"

    assert find_csrf_candidate(make_request(json_body=["csrf_token"])) is None


def test_disabled_gate_passes_everything(codec):
    CSRFGate(codec, enabled=False).verify(make_request())


def test_token_from_revoked_session_is_rejected(codec, sessions_repo, clock):
    auth = AuthGate(codec, sessions_repo, session_timeout=1800, clock=clock)
    gate = CSRFGate(codec, sessions=sessions_repo)
    session = {}
    auth.login(session, {"id": 1, "username": "admin", "role": "admin"})
    token = codec.issue_csrf(session)
    copied = dict(session)

    gate.verify(make_request(headers={"X-CSRF-Token": token}, session=copied))

    auth.clear_session(session)
    with pytest.raises(AuthorizationError):
        gate.verify(make_request(headers={"X-CSRF-Token": token}, session=copied))


def test_token_without_session_id_is_rejected_when_sessions_tracked(codec, sessions_repo):
    gate = CSRFGate(codec, sessions=sessions_repo)
    session = {}
    token = codec.issue_csrf(session)
    with pytest.raises(AuthorizationError):
        gate.verify(make_request(headers={"X-CSRF-Token": token}, session=session))
