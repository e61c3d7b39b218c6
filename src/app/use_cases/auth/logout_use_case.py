"""
Logout Use Case

Revokes the session behind the presented credential.
"""

from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.audit_log import AuditLog
from src.app.services.credential_resolver import CredentialResolver
from src.app.services.session_store import SessionStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction, AuditResource
from .dtos import LogoutResponse


class LogoutUseCase:
    """
    Use case for logging out.

    Business Rules:
    - Caller must present a credential that resolves to a user
    - Sessions whose token matches the presented token, or the companion
      session token, are deleted
    - Deleting zero sessions is not an error (idempotent)
    - Records a LOGOUT audit event
    """

    def __init__(self, uow: UnitOfWork, resolver: CredentialResolver, session_store: SessionStore):
        self.uow = uow
        self.resolver = resolver
        self.session_store = session_store

    async def execute(
        self,
        token: Optional[str],
        session_token: Optional[str] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[LogoutResponse]:
        """
        Execute logout use case.

        Args:
            token: Presented credential (bearer or session token)
            session_token: Session token sent alongside a bearer token, if any

        Returns:
            Result with count of revoked sessions, or Error(UNAUTHENTICATED)
        """
        async with self.uow:
            identity = await self.resolver.resolve(token or session_token)
            if identity is None:
                return Return.err(Error("UNAUTHENTICATED", "Not authenticated"))

            revoked = 0
            for presented in {t for t in (token, session_token) if t}:
                revoked += await self.session_store.revoke(presented)

            await self.uow.commit()

            await AuditLog(self.uow).record(
                AuditAction.logout,
                AuditResource.user,
                user_id=identity.user.id,
                details="User logged out",
                ip_address=ip_address,
                user_agent=user_agent,
            )

            return Return.ok(
                LogoutResponse(message="Logged out successfully", revoked_sessions=revoked)
            )
