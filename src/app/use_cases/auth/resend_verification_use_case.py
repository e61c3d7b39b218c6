"""
Resend Verification Email Use Case

Handles resending email verification tokens to users.
"""

import logging
import secrets
from datetime import timedelta

from libs.result import Result, Return
from src.app.services.audit_log import AuditLog
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditAction, AuditResource
from .dtos import ResendVerificationResponse

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "If the email exists, a verification link has been sent"


class ResendVerificationUseCase:
    """
    Use case for resending email verification.

    Business Rules:
    - If email is not verified, generate new token and reset expiry
    - New token replaces old token (invalidates previous)
    - Unknown and already verified emails get the same response as a
      successful resend (no enumeration)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        verification_ttl: timedelta = timedelta(hours=24),
        expose_verification_token: bool = False,
    ):
        self.uow = uow
        self.verification_ttl = verification_ttl
        self.expose_verification_token = expose_verification_token

    async def execute(self, email: str) -> Result[ResendVerificationResponse]:
        """
        Execute resend verification email use case.

        Args:
            email: User's email address

        Returns:
            Result with resend status. Never an error for unknown emails.
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None or user.verified:
                return Return.ok(ResendVerificationResponse(
                    status="sent",
                    message=GENERIC_MESSAGE,
                ))

            new_verification_token = secrets.token_hex(32)

            user.verification_token = new_verification_token
            user.verification_expires = utcnow() + self.verification_ttl

            await self.uow.users.update(user)

            await self.uow.commit()
            logger.info("Verification token reissued for user %s", user.id)

            response = ResendVerificationResponse(
                status="sent",
                message=GENERIC_MESSAGE,
                verification_token=(
                    new_verification_token if self.expose_verification_token else None
                ),
            )

            await AuditLog(self.uow).record(
                AuditAction.resend_verification,
                AuditResource.user,
                user_id=user.id,
                details="Verification token reissued",
            )

            return Return.ok(response)
