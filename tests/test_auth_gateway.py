from __future__ import annotations

import json

import pytest
import requests
import responses

from admin_console_sdk.auth_store import MemoryKeyValueStore
from admin_console_sdk.clients.auth import LOGIN_FALLBACK, AuthGateway
from admin_console_sdk.clients.users import UsersClient
from admin_console_sdk.exceptions import (
    FeatureNotImplementedError,
    MalformedResponseError,
    NetworkUnavailableError,
    ServerError,
    UnauthorizedError,
    ValidationFailedError,
)
from admin_console_sdk.http_client import HttpClient
from admin_console_sdk.models import Session, User
from admin_console_sdk.session_store import SessionStore

from conftest import BASE_URL

LOGIN_URL = f"{BASE_URL}/auth/login"


@pytest.fixture()
def gateway(http: HttpClient, session_store: SessionStore) -> AuthGateway:
    return AuthGateway(http=http, session_store=session_store)


def _signed_in(session_store: SessionStore) -> Session:
    previous = Session(token="OLD", user=User(id="0", name="Old"))
    session_store.save(previous)
    return previous


@responses.activate
def test_login_success_stores_session(gateway: AuthGateway, kv_store: MemoryKeyValueStore) -> None:
    responses.add(
        responses.POST,
        LOGIN_URL,
        json={"id": "1", "name": "A", "email": "a@b.com", "auth": {"token": "T"}},
        status=200,
    )

    result = gateway.login("a@b.com", "x")

    assert result.ok
    assert result.value is not None and result.value.name == "A"
    assert gateway.is_authenticated() is True
    assert gateway.current_user() == result.value
    assert gateway.store.current().token == "T"
    assert json.loads(responses.calls[0].request.body) == {"email": "a@b.com", "password": "x"}
    assert kv_store.values["token"] == "T"
    assert "auth" not in json.loads(kv_store.values["user"])


@responses.activate
def test_login_accepts_enveloped_profile(gateway: AuthGateway) -> None:
    responses.add(
        responses.POST,
        LOGIN_URL,
        json={
            "statusCodes": 200,
            "response": {"data": {"id": "2", "fullName": "Tee Admin", "role": "Admin", "auth": {"token": "T2"}}},
        },
        status=200,
    )

    result = gateway.login("t@b.com", "x")

    assert result.ok
    assert result.unwrap().full_name == "Tee Admin"
    assert result.unwrap().display_name == "Tee Admin"
    assert gateway.store.current().token == "T2"


@responses.activate
def test_login_rejected_keeps_prior_session(gateway: AuthGateway, session_store: SessionStore) -> None:
    previous = _signed_in(session_store)
    responses.add(responses.POST, LOGIN_URL, json={"message": "bad credentials"}, status=401)

    result = gateway.login("a@b.com", "wrong")

    assert not result.ok
    assert isinstance(result.error, UnauthorizedError)
    assert "bad credentials" in result.error.message
    assert session_store.current() == previous


@responses.activate
def test_login_response_without_token_is_malformed(gateway: AuthGateway, session_store: SessionStore) -> None:
    previous = _signed_in(session_store)
    responses.add(responses.POST, LOGIN_URL, json={"id": "1", "name": "A"}, status=200)

    result = gateway.login("a@b.com", "x")

    assert isinstance(result.error, MalformedResponseError)
    assert result.error.message == LOGIN_FALLBACK
    assert session_store.current() == previous


@responses.activate
def test_login_envelope_error_inside_success_status(gateway: AuthGateway, session_store: SessionStore) -> None:
    responses.add(
        responses.POST,
        LOGIN_URL,
        json={"statusCodes": 400, "response": {"message": "Email or password is incorrect"}},
        status=200,
    )

    result = gateway.login("a@b.com", "x")

    assert isinstance(result.error, ValidationFailedError)
    assert result.error.message == "Email or password is incorrect"
    assert session_store.current().is_authenticated is False


@responses.activate
def test_login_server_error_uses_fallback_message(gateway: AuthGateway) -> None:
    responses.add(responses.POST, LOGIN_URL, body="", status=500)

    result = gateway.login("a@b.com", "x")

    assert isinstance(result.error, ServerError)
    assert result.error.message == LOGIN_FALLBACK


@responses.activate
def test_login_network_failure(gateway: AuthGateway) -> None:
    responses.add(responses.POST, LOGIN_URL, body=requests.exceptions.ConnectTimeout("timed out"))

    result = gateway.login("a@b.com", "x")

    assert isinstance(result.error, NetworkUnavailableError)
    assert gateway.is_authenticated() is False


@responses.activate
def test_login_persist_failure_is_reported(http: HttpClient) -> None:
    class ReadOnlyStore(MemoryKeyValueStore):
        def set_many(self, values) -> None:  # type: ignore[override]
            raise OSError("disk full")

    gateway = AuthGateway(http=http, session_store=SessionStore(ReadOnlyStore()))
    responses.add(responses.POST, LOGIN_URL, json={"id": "1", "auth": {"token": "T"}}, status=200)

    result = gateway.login("a@b.com", "x")

    assert result.error is not None
    assert result.error.code == "SESSION_PERSIST_FAILED"
    assert gateway.is_authenticated() is False


@responses.activate
def test_logout_clears_without_contacting_server(gateway: AuthGateway, session_store: SessionStore) -> None:
    _signed_in(session_store)

    result = gateway.logout()

    assert result.ok
    assert gateway.is_authenticated() is False
    assert gateway.current_user() is None
    assert len(responses.calls) == 0


@responses.activate
def test_logout_when_signed_out_is_ok(gateway: AuthGateway) -> None:
    assert gateway.logout().ok
    assert gateway.is_authenticated() is False


@responses.activate
def test_logout_notify_failure_still_clears(http: HttpClient, session_store: SessionStore) -> None:
    _signed_in(session_store)
    gateway = AuthGateway(http=http, session_store=session_store, notify_server_on_logout=True)
    responses.add(responses.POST, f"{BASE_URL}/auth/logout", json={"message": "down"}, status=503)

    result = gateway.logout()

    assert result.ok
    assert gateway.is_authenticated() is False
    assert responses.calls[0].request.headers["Authorization"] == "Bearer OLD"


def test_logout_storage_failure_reports_error_but_signs_out(http: HttpClient) -> None:
    class StickyStore(MemoryKeyValueStore):
        def delete_many(self, keys) -> None:  # type: ignore[override]
            raise OSError("read-only storage")

    session_store = SessionStore(StickyStore())
    session_store.save(Session(token="T", user=User(id="1")))
    gateway = AuthGateway(http=http, session_store=session_store)

    result = gateway.logout()

    assert result.error is not None
    assert result.error.code == "SESSION_CLEAR_FAILED"
    assert gateway.is_authenticated() is False


def test_restore_trusts_cached_session_without_network(http: HttpClient, kv_store: MemoryKeyValueStore) -> None:
    SessionStore(kv_store).save(Session(token="T", user=User(id="1", name="A")))
    gateway = AuthGateway(http=http, session_store=SessionStore(kv_store))

    assert gateway.is_authenticated() is False
    assert gateway.restore() is True
    assert gateway.current_user() is not None
    assert gateway.current_user().name == "A"


@responses.activate
def test_requests_after_login_carry_bearer_token(gateway: AuthGateway, http: HttpClient) -> None:
    responses.add(responses.POST, LOGIN_URL, json={"id": "1", "auth": {"token": "T"}}, status=200)
    responses.add(responses.GET, f"{BASE_URL}/admin/users", json={"message": "token revoked"}, status=401)
    gateway.login("a@b.com", "x")

    result = UsersClient(http=http, session_store=gateway.store).list()

    assert responses.calls[1].request.headers["Authorization"] == "Bearer T"
    assert isinstance(result.error, UnauthorizedError)
    # a rejected token does not sign the user out on its own
    assert gateway.is_authenticated() is True


@pytest.mark.parametrize(
    ("call", "message"),
    [
        (lambda g: g.sign_up("a@b.com", "x", "A", "B"), "Sign up not implemented"),
        (lambda g: g.sign_in_with_oauth("google"), "Social authentication not implemented"),
        (lambda g: g.reset_password("a@b.com"), "Password reset not implemented"),
        (lambda g: g.update_password("a@b.com"), "Update password not implemented"),
    ],
)
def test_unsupported_flows_report_not_implemented(gateway: AuthGateway, call, message: str) -> None:
    result = call(gateway)

    assert isinstance(result.error, FeatureNotImplementedError)
    assert not isinstance(result.error, (UnauthorizedError, NetworkUnavailableError))
    assert result.error.code == "NOT_IMPLEMENTED"
    assert result.error.message == message
