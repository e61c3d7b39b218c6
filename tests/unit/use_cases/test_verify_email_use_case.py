"""
Unit tests for VerifyEmailUseCase

Tests all business logic with mocked dependencies.
"""

from datetime import timedelta
from uuid import uuid4

import pytest

from src.app.use_cases.auth.verify_email_use_case import VerifyEmailUseCase
from src.domain.base import utcnow
from src.domain.entities import User


def make_user(token, expires):
    return User(
        id=uuid4(),
        email="user@example.com",
        name="User",
        password_hash="hashed_password",
        verified=False,
        verification_token=token,
        verification_expires=expires,
    )


@pytest.mark.asyncio
async def test_successful_email_verification(mock_uow):
    """Valid token verifies the user and is consumed"""
    # Arrange
    token = "valid_verification_token"
    mock_user = make_user(token, utcnow() + timedelta(hours=23))
    mock_uow.users.get_by_verification_token.return_value = mock_user

    use_case = VerifyEmailUseCase(mock_uow)

    # Act
    result = await use_case.execute(token, "10.0.0.1", "pytest")

    # Assert
    assert result.is_ok()
    data = result.value
    assert data.status == "verified"
    assert "successfully" in data.message.lower()

    mock_uow.users.update.assert_called_once()
    updated_user = mock_uow.users.update.call_args[0][0]
    assert updated_user.verified is True
    assert updated_user.verification_token is None
    assert updated_user.verification_expires is None

    audit_call = mock_uow.audit_events.create.call_args[0][0]
    assert audit_call.action == "VERIFY"
    assert audit_call.user_id == mock_user.id
    assert audit_call.ip_address == "10.0.0.1"


@pytest.mark.asyncio
async def test_invalid_verification_token(mock_uow):
    """Unknown token fails"""
    mock_uow.users.get_by_verification_token.return_value = None

    result = await VerifyEmailUseCase(mock_uow).execute("invalid_token")

    assert result.is_err()
    assert result.error.code == "INVALID_OR_EXPIRED_TOKEN"

    mock_uow.users.update.assert_not_called()
    mock_uow.audit_events.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_expired_verification_token(mock_uow):
    """Expired token fails with the same error and leaves the user unverified"""
    mock_user = make_user("expired_token", utcnow() - timedelta(hours=1))
    mock_uow.users.get_by_verification_token.return_value = mock_user

    result = await VerifyEmailUseCase(mock_uow).execute("expired_token")

    assert result.is_err()
    assert result.error.code == "INVALID_OR_EXPIRED_TOKEN"
    assert mock_user.verified is False
    assert mock_user.verification_token == "expired_token"
    mock_uow.users.update.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_token_without_expiry_is_rejected(mock_uow):
    mock_uow.users.get_by_verification_token.return_value = make_user("token", None)

    result = await VerifyEmailUseCase(mock_uow).execute("token")

    assert result.error.code == "INVALID_OR_EXPIRED_TOKEN"
