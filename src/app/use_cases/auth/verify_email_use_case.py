"""
Verify Email Use Case

Handles email verification via secure token.
"""

from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.audit_log import AuditLog
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditAction, AuditResource
from .dtos import VerifyEmailResponse


class VerifyEmailUseCase:
    """
    Use case for email verification.

    Business Rules:
    - Token must match user's verification_token
    - Token must not be expired (24 hours from registration)
    - Unknown and expired tokens give the same error
    - Sets verified = True
    - Clears verification token and expiry (single-use)
    - Records audit event
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        token: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[VerifyEmailResponse]:
        """
        Execute email verification use case.

        Args:
            token: Verification token from email link

        Returns:
            Result with verification status, or Error(INVALID_OR_EXPIRED_TOKEN)
        """
        async with self.uow:
            user = await self.uow.users.get_by_verification_token(token)

            if (
                user is None
                or user.verification_expires is None
                or user.verification_expires <= utcnow()
            ):
                return Return.err(
                    Error(
                        "INVALID_OR_EXPIRED_TOKEN",
                        "Invalid or expired verification token",
                    )
                )

            # Verify email - set verified flag and clear token
            user.verified = True
            user.verification_token = None
            user.verification_expires = None

            await self.uow.users.update(user)

            await self.uow.commit()

            await AuditLog(self.uow).record(
                AuditAction.verify,
                AuditResource.user,
                user_id=user.id,
                details="Email verification successful",
                ip_address=ip_address,
                user_agent=user_agent,
            )

            return Return.ok(VerifyEmailResponse(
                status="verified",
                message="Email verified successfully"
            ))
