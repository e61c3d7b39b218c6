"""
Unit tests for RevokeSessionsUseCase
"""

from uuid import uuid4

import pytest

from src.app.services.session_store import SessionStore
from src.app.use_cases.users.revoke_sessions_use_case import RevokeSessionsUseCase
from src.domain.entities import User, UserRole


def make_user(role=UserRole.attendee):
    return User(id=uuid4(), email=f"{uuid4().hex[:8]}@x.com", name="U", role=role)


@pytest.fixture
def use_case(mock_uow):
    return RevokeSessionsUseCase(mock_uow, SessionStore(mock_uow))


@pytest.mark.asyncio
async def test_revoke_own_sessions(mock_uow, use_case):
    user = make_user()
    mock_uow.users.get_by_id.return_value = user
    mock_uow.sessions.delete_by_user_id.return_value = 3

    result = await use_case.execute(user.id, user)

    assert result.is_ok()
    assert result.value["revoked_count"] == 3
    assert result.value["target_user_id"] == str(user.id)
    mock_uow.sessions.delete_by_user_id.assert_awaited_once_with(user.id)
    mock_uow.commit.assert_awaited()

    event = mock_uow.audit_events.create.call_args[0][0]
    assert event.action == "REVOKE_SESSIONS"
    assert event.resource_type == "SESSION"
    assert event.user_id == user.id


@pytest.mark.asyncio
async def test_admin_revokes_other_user(mock_uow, use_case):
    admin = make_user(UserRole.admin)
    target = make_user()
    mock_uow.users.get_by_id.return_value = target
    mock_uow.sessions.delete_by_user_id.return_value = 2

    result = await use_case.execute(target.id, admin)

    assert result.is_ok()
    assert result.value["revoked_count"] == 2
    mock_uow.sessions.delete_by_user_id.assert_awaited_once_with(target.id)


@pytest.mark.asyncio
async def test_non_admin_cannot_revoke_other_user(mock_uow, use_case):
    result = await use_case.execute(uuid4(), make_user(UserRole.organizer))

    assert result.is_err()
    assert result.error.code == "FORBIDDEN"
    mock_uow.sessions.delete_by_user_id.assert_not_called()


@pytest.mark.asyncio
async def test_revoke_unknown_user(mock_uow, use_case):
    result = await use_case.execute(uuid4(), make_user(UserRole.admin))

    assert result.is_err()
    assert result.error.code == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_revoke_with_no_sessions(mock_uow, use_case):
    user = make_user()
    mock_uow.users.get_by_id.return_value = user

    result = await use_case.execute(user.id, user)

    assert result.is_ok()
    assert result.value["revoked_count"] == 0
