"""
Unit tests for ResendVerificationUseCase
"""

from datetime import timedelta
from uuid import uuid4

import pytest

from src.app.use_cases.auth.resend_verification_use_case import (
    GENERIC_MESSAGE,
    ResendVerificationUseCase,
)
from src.domain.base import utcnow
from src.domain.entities import User


@pytest.mark.asyncio
async def test_resend_replaces_token(mock_uow):
    user = User(
        id=uuid4(),
        email="user@example.com",
        name="User",
        verified=False,
        verification_token="old_token",
        verification_expires=utcnow() + timedelta(minutes=5),
    )
    mock_uow.users.get_by_email.return_value = user

    result = await ResendVerificationUseCase(
        mock_uow, expose_verification_token=True
    ).execute("user@example.com")

    assert result.is_ok()
    assert result.value.message == GENERIC_MESSAGE
    updated = mock_uow.users.update.call_args[0][0]
    assert updated.verification_token != "old_token"
    assert result.value.verification_token == updated.verification_token
    assert updated.verification_expires - utcnow() > timedelta(hours=23)
    assert mock_uow.audit_events.create.call_args[0][0].action == "RESEND_VERIFICATION"


@pytest.mark.asyncio
async def test_resend_unknown_email_looks_like_success(mock_uow):
    mock_uow.users.get_by_email.return_value = None

    result = await ResendVerificationUseCase(mock_uow).execute("nobody@example.com")

    assert result.is_ok()
    assert result.value.status == "sent"
    assert result.value.message == GENERIC_MESSAGE
    assert result.value.verification_token is None
    mock_uow.users.update.assert_not_called()


@pytest.mark.asyncio
async def test_resend_already_verified_looks_like_success(mock_uow):
    mock_uow.users.get_by_email.return_value = User(
        email="user@example.com", name="User", verified=True
    )

    result = await ResendVerificationUseCase(mock_uow).execute("user@example.com")

    assert result.is_ok()
    assert result.value.message == GENERIC_MESSAGE
    mock_uow.users.update.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_resend_hides_token_in_production(mock_uow):
    mock_uow.users.get_by_email.return_value = User(
        email="user@example.com", name="User", verified=False
    )

    result = await ResendVerificationUseCase(mock_uow).execute("user@example.com")

    assert result.value.verification_token is None
