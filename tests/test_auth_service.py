"""
Tests for sign-in, sign-up, sign-out and auth-state listeners.
"""

from dataclasses import replace

import pytest

from schedule_app.domain import AuthenticationError, BackendNotConfiguredError, SessionMissingError, UserAccount
from schedule_app.config.settings import SupabaseSettings
from schedule_app.services import AuthService, ServiceContext


def test_sign_in_starts_a_session(auth_service, context):
    user = auth_service.sign_in(" alice@example.com ", "alice-secret")
    assert user == UserAccount(id="user-1", email="alice@example.com")
    assert auth_service.current_user() == user
    assert context.gateway.current_user_id() == "user-1"


def test_wrong_password_is_rejected(auth_service):
    with pytest.raises(AuthenticationError, match="Invalid login credentials"):
        auth_service.sign_in("alice@example.com", "nope")
    assert auth_service.current_user() is None


@pytest.mark.parametrize("email,password", [("", "secret"), ("alice@example.com", ""), ("   ", "x")])
def test_credentials_are_required(auth_service, fake_client, email, password):
    with pytest.raises(AuthenticationError, match="Provide both email and password."):
        auth_service.sign_in(email, password)
    with pytest.raises(AuthenticationError):
        auth_service.sign_up(email, password)
    assert "carol@example.com" not in fake_client.auth.accounts


def test_sign_up_signs_in_immediately(auth_service):
    user = auth_service.sign_up("carol@example.com", "carol-secret")
    assert user is not None
    assert user.email == "carol@example.com"
    assert auth_service.current_user() == user


def test_sign_up_waiting_for_confirmation(auth_service, fake_client):
    fake_client.auth.confirm_email = True
    assert auth_service.sign_up("carol@example.com", "carol-secret") is None
    assert auth_service.current_user() is None


def test_sign_up_surfaces_backend_messages(auth_service):
    with pytest.raises(AuthenticationError, match="already registered"):
        auth_service.sign_up("alice@example.com", "whatever")
    with pytest.raises(AuthenticationError, match="at least 6 characters"):
        auth_service.sign_up("carol@example.com", "abc")


def test_sign_out_clears_the_session(auth_service, fake_client, alice):
    auth_service.sign_out()
    assert fake_client.auth.sign_out_calls == 1
    assert auth_service.current_user() is None
    with pytest.raises(SessionMissingError):
        auth_service.context.gateway.current_user_id()


def test_sign_out_without_session_is_a_noop(auth_service, fake_client):
    auth_service.sign_out()
    assert fake_client.auth.sign_out_calls == 0


def test_sign_out_failure_still_clears_local_session(auth_service, fake_client, alice):
    def broken():
        raise RuntimeError("network down")

    fake_client.auth.sign_out = broken
    seen = []
    auth_service.on_auth_state_change(seen.append)

    with pytest.raises(AuthenticationError, match="network down"):
        auth_service.sign_out()
    assert auth_service.current_user() is None
    assert seen == [alice, None]


def test_listener_receives_current_user_then_changes(auth_service):
    seen = []
    unsubscribe = auth_service.on_auth_state_change(seen.append)
    user = auth_service.sign_in("alice@example.com", "alice-secret")
    auth_service.sign_out()
    unsubscribe()
    unsubscribe()
    auth_service.sign_in("bob@example.com", "bob-secret")
    assert seen == [None, user, None]


def test_unconfigured_backend(settings):
    context = ServiceContext(settings=replace(settings, supabase=SupabaseSettings(url=None, anon_key="")))
    service = AuthService(context)
    with pytest.raises(BackendNotConfiguredError, match="SUPABASE_URL, SUPABASE_ANON_KEY"):
        service.sign_in("alice@example.com", "alice-secret")
