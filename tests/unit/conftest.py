import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.bearer_token_codec import BearerTokenCodec
from src.app.services.credential_hasher import CredentialHasher
from src.domain.lockout import LockoutPolicy


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Mock repositories; writes echo back what they were given
    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.get_by_verification_token = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)
    uow.users.record_failed_login = AsyncMock()

    uow.sessions = MagicMock()
    uow.sessions.create = AsyncMock(side_effect=lambda session: session)
    uow.sessions.get_by_token = AsyncMock(return_value=None)
    uow.sessions.get_by_user_id = AsyncMock(return_value=[])
    uow.sessions.delete_by_token = AsyncMock(return_value=0)
    uow.sessions.delete_by_user_id = AsyncMock(return_value=0)
    uow.sessions.delete_expired = AsyncMock(return_value=0)

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock(side_effect=lambda event: event)
    uow.audit_events.get_paginated = AsyncMock(return_value=([], None))
    return uow


@pytest.fixture
def hasher():
    # Minimum bcrypt cost keeps the suite fast
    return CredentialHasher(rounds=4)


@pytest.fixture
def codec():
    return BearerTokenCodec("unit-test-secret")


@pytest.fixture
def lockout():
    return LockoutPolicy()
