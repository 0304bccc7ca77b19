import pytest
from pydantic import SecretStr

from common import AuthConfig
from common.api_error import AuthenticationError, PermissionDeniedError
from hospital.auth import IdentityProvider, IdentitySession

from .conftest import JWT_SECRET, make_token


@pytest.fixture
def provider():
    provider = IdentityProvider(AuthConfig(jwt_secret=SecretStr(JWT_SECRET)))
    provider.start()
    yield provider
    provider.close()


def test_session_starts_loading(provider):
    session = IdentitySession(provider)
    assert session.snapshot().model_dump() == {
        "current_user": None,
        "is_loading": True,
        "is_admin": False,
    }


def test_admin_claim_grants_admin(provider):
    session = IdentitySession(provider)
    session.sign_in_with_token(make_token("a1", admin=True))

    assert session.is_loading is False
    assert session.is_admin is True
    assert session.require_admin().uid == "a1"


def test_signed_in_user_without_claim_is_not_admin(provider):
    session = IdentitySession(provider)
    session.sign_in_with_token(make_token("u1", admin="yes"))

    assert session.current_user.uid == "u1"
    assert session.is_admin is False
    with pytest.raises(PermissionDeniedError):
        session.require_admin()


def test_token_signed_with_another_secret_is_ignored(provider):
    from jose import jwt

    session = IdentitySession(provider)
    session.sign_in_with_token(jwt.encode({"sub": "x", "admin": True}, "other", algorithm="HS256"))

    assert session.current_user is None
    with pytest.raises(AuthenticationError):
        session.require_user()


def test_listeners_are_notified_until_unsubscribed(provider):
    session = IdentitySession(provider)
    seen = []
    unsubscribe = session.subscribe(lambda s: seen.append(s.current_user))

    session.sign_in_with_token(make_token("u1"))
    unsubscribe()
    session.sign_out()

    assert [user.uid for user in seen] == ["u1"]
    assert session.current_user is None
    assert session.is_loading is False


def test_closed_provider_refuses_to_resolve():
    provider = IdentityProvider(AuthConfig(jwt_secret=SecretStr(JWT_SECRET)))
    with pytest.raises(RuntimeError):
        provider.resolve(make_token())
