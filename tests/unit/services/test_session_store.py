"""
Unit tests for SessionStore
"""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from src.app.services.session_store import SessionStore
from src.domain.entities import Session

NOW = datetime(2026, 3, 1, 12, 0, 0)


@pytest.mark.asyncio
async def test_create_issues_random_hex_token(mock_uow):
    store = SessionStore(mock_uow)
    user_id = uuid4()

    first = await store.create(user_id, ip_address="10.0.0.1", user_agent="pytest", now=NOW)
    second = await store.create(user_id, now=NOW)

    assert len(first.token) == 64
    int(first.token, 16)  # hex encoded
    assert first.token != second.token
    assert first.user_id == user_id
    assert first.ip_address == "10.0.0.1"
    assert first.user_agent == "pytest"
    assert first.expires_at == NOW + timedelta(days=7)
    assert mock_uow.sessions.create.await_count == 2


@pytest.mark.asyncio
async def test_validate_returns_live_session(mock_uow):
    session = Session(user_id=uuid4(), token="t" * 64, expires_at=NOW + timedelta(days=1))
    mock_uow.sessions.get_by_token.return_value = session

    result = await SessionStore(mock_uow).validate("t" * 64, now=NOW)

    assert result is session


@pytest.mark.asyncio
async def test_validate_unknown_token_returns_none(mock_uow):
    assert await SessionStore(mock_uow).validate("missing", now=NOW) is None


@pytest.mark.asyncio
async def test_validate_expired_session_returns_none_without_deleting(mock_uow):
    session = Session(user_id=uuid4(), token="t" * 64, expires_at=NOW - timedelta(seconds=1))
    mock_uow.sessions.get_by_token.return_value = session

    result = await SessionStore(mock_uow).validate("t" * 64, now=NOW)

    assert result is None
    mock_uow.sessions.delete_by_token.assert_not_called()


@pytest.mark.asyncio
async def test_validate_empty_token_skips_lookup(mock_uow):
    assert await SessionStore(mock_uow).validate("", now=NOW) is None
    mock_uow.sessions.get_by_token.assert_not_called()


@pytest.mark.asyncio
async def test_revoke_is_idempotent(mock_uow):
    mock_uow.sessions.delete_by_token.side_effect = [1, 0]
    store = SessionStore(mock_uow)

    assert await store.revoke("token") == 1
    assert await store.revoke("token") == 0


@pytest.mark.asyncio
async def test_revoke_all_deletes_by_user(mock_uow):
    user_id = uuid4()
    mock_uow.sessions.delete_by_user_id.return_value = 3

    assert await SessionStore(mock_uow).revoke_all(user_id) == 3
    mock_uow.sessions.delete_by_user_id.assert_awaited_once_with(user_id)


@pytest.mark.asyncio
async def test_purge_expired_passes_cutoff(mock_uow):
    mock_uow.sessions.delete_expired.return_value = 4

    assert await SessionStore(mock_uow).purge_expired(now=NOW) == 4
    mock_uow.sessions.delete_expired.assert_awaited_once_with(NOW)
