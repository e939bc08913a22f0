"""Tests for registration, login and token verification."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from marketplace_api.db.repositories import UserRepository
from marketplace_api.errors import (
    DuplicateEmail,
    InvalidCredentials,
    InvalidInput,
    Unauthenticated,
)
from marketplace_api.services.auth_service import AuthService
from marketplace_api.services.security import TokenSigner, hash_password, verify_password

SECRET = "unit-test-secret-that-is-long-enough-for-hs256"


def _service(session, signer: TokenSigner | None = None) -> AuthService:
    return AuthService(UserRepository(session), signer or TokenSigner(secret=SECRET))


@pytest.mark.asyncio
async def test_register_then_login_returns_token_for_same_user(session):
    service = _service(session)

    registered = await service.register(name="Ada", email="ada@example.com", password="pw")
    logged_in = await service.login(email="ada@example.com", password="pw")

    assert registered.user.favorites == []
    assert logged_in.user.id == registered.user.id
    assert service.verify(logged_in.token) == registered.user.id
    assert service.verify(registered.token) == registered.user.id


@pytest.mark.asyncio
async def test_register_stores_hash_not_plaintext(session):
    service = _service(session)
    await service.register(name="Ada", email="ada@example.com", password="s3cret")

    user = await UserRepository(session).get_by_email("ada@example.com")

    assert user is not None
    assert user.password_hash != "s3cret"
    assert verify_password("s3cret", user.password_hash)


@pytest.mark.asyncio
async def test_duplicate_email_is_case_insensitive(session):
    service = _service(session)
    await service.register(name="A", email="A@x.com", password="pw")

    with pytest.raises(DuplicateEmail) as excinfo:
        await service.register(name="B", email="  a@x.com ", password="pw")

    assert excinfo.value.message == "User already exists"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("name", "email", "password"),
    [("", "a@x.com", "pw"), ("A", "   ", "pw"), ("A", "a@x.com", "")],
)
async def test_register_requires_every_field(session, name, email, password):
    with pytest.raises(InvalidInput):
        await _service(session).register(name=name, email=email, password=password)


@pytest.mark.asyncio
async def test_login_failures_share_one_message(session):
    service = _service(session)
    await service.register(name="Ada", email="ada@example.com", password="pw")

    with pytest.raises(InvalidCredentials) as wrong_password:
        await service.login(email="ada@example.com", password="nope")
    with pytest.raises(InvalidCredentials) as unknown_user:
        await service.login(email="ghost@example.com", password="pw")

    assert wrong_password.value.message == unknown_user.value.message == "Invalid credentials"


@pytest.mark.asyncio
async def test_login_normalizes_email(session):
    service = _service(session)
    registered = await service.register(name="Ada", email="ada@example.com", password="pw")

    result = await service.login(email=" ADA@Example.com ", password="pw")

    assert result.user.id == registered.user.id


def test_verify_rejects_missing_and_tampered_tokens():
    signer = TokenSigner(secret=SECRET)
    token = signer.issue("user-1")

    with pytest.raises(Unauthenticated):
        signer.verify(None)
    with pytest.raises(Unauthenticated):
        signer.verify("not-a-jwt")
    with pytest.raises(Unauthenticated):
        TokenSigner(secret=SECRET + "-other").verify(token)


def test_verify_rejects_expired_token():
    past = datetime.now(UTC) - timedelta(days=8)
    stale = TokenSigner(secret=SECRET, clock=lambda: past).issue("user-1")

    with pytest.raises(Unauthenticated) as excinfo:
        TokenSigner(secret=SECRET).verify(stale)

    assert "expired" in excinfo.value.message


def test_token_expires_after_ttl():
    issued = datetime(2024, 1, 1, tzinfo=UTC)
    signer = TokenSigner(secret=SECRET, clock=lambda: issued)
    token = signer.issue("user-1")

    import jwt

    claims = jwt.decode(
        token,
        SECRET,
        algorithms=["HS256"],
        options={"verify_exp": False},
    )
    assert claims["sub"] == "user-1"
    assert claims["exp"] - claims["iat"] == int(timedelta(days=7).total_seconds())


def test_password_hashes_are_salted():
    first = hash_password("pw")
    second = hash_password("pw")

    assert first != second
    assert verify_password("pw", first)
    assert not verify_password("other", first)
    assert not verify_password("pw", "")
