"""
Unit tests for CredentialResolver
"""

from datetime import timedelta
from uuid import uuid4

import pytest

from src.app.services.bearer_token_codec import TokenClaims
from src.app.services.credential_resolver import (
    CredentialKind,
    CredentialResolver,
    PresentedCredential,
)
from src.app.services.session_store import SessionStore
from src.domain.base import utcnow
from src.domain.entities import Session, User, UserRole


@pytest.fixture
def user():
    return User(id=uuid4(), email="a@x.com", name="A", role=UserRole.organizer, verified=True)


@pytest.fixture
def resolver(mock_uow, codec):
    return CredentialResolver(mock_uow, codec, SessionStore(mock_uow))


def test_jwt_is_classified_as_bearer(codec, user):
    token = codec.encode(TokenClaims(user_id=str(user.id), email=user.email, role="organizer"))

    assert PresentedCredential.from_token(token).kind == CredentialKind.bearer


def test_hex_token_is_classified_as_session():
    assert PresentedCredential.from_token("ab" * 32).kind == CredentialKind.session


@pytest.mark.asyncio
async def test_resolves_bearer_token(mock_uow, codec, resolver, user):
    mock_uow.users.get_by_id.return_value = user
    token = codec.encode(TokenClaims(user_id=str(user.id), email=user.email, role="organizer"))

    identity = await resolver.resolve(token)

    assert identity.user is user
    assert identity.credential.kind == CredentialKind.bearer
    assert identity.claims.email == "a@x.com"
    mock_uow.users.get_by_id.assert_awaited_once_with(user.id)
    mock_uow.sessions.get_by_token.assert_not_called()


@pytest.mark.asyncio
async def test_resolves_session_token(mock_uow, resolver, user):
    session = Session(user_id=user.id, token="ab" * 32, expires_at=utcnow() + timedelta(days=1))
    mock_uow.sessions.get_by_token.return_value = session
    mock_uow.users.get_by_id.return_value = user

    identity = await resolver.resolve("ab" * 32)

    assert identity.user is user
    assert identity.session is session
    assert identity.credential.kind == CredentialKind.session


@pytest.mark.asyncio
async def test_expired_bearer_is_anonymous(mock_uow, codec, resolver, user):
    mock_uow.users.get_by_id.return_value = user
    token = codec.encode(
        TokenClaims(user_id=str(user.id), email=user.email, role="organizer"),
        now=utcnow() - timedelta(days=8),
    )

    assert await resolver.resolve(token) is None
    mock_uow.users.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_deleted_user_is_anonymous(mock_uow, codec, resolver, user):
    mock_uow.users.get_by_id.return_value = None
    token = codec.encode(TokenClaims(user_id=str(user.id), email=user.email, role="organizer"))

    assert await resolver.resolve(token) is None


@pytest.mark.asyncio
async def test_bearer_with_non_uuid_subject_is_anonymous(codec, resolver):
    token = codec.encode(TokenClaims(user_id="not-a-uuid", email="a@x.com", role="admin"))

    assert await resolver.resolve(token) is None


@pytest.mark.asyncio
async def test_expired_session_is_anonymous(mock_uow, resolver, user):
    mock_uow.sessions.get_by_token.return_value = Session(
        user_id=user.id, token="ab" * 32, expires_at=utcnow() - timedelta(minutes=1)
    )

    assert await resolver.resolve("ab" * 32) is None
    mock_uow.users.get_by_id.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("token", [None, ""])
async def test_missing_token_is_anonymous(resolver, token):
    assert await resolver.resolve(token) is None
