"""
Revoke Sessions Use Case

Logout everywhere: deletes every session of a user.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.audit_log import AuditLog
from src.app.services.session_store import SessionStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction, AuditResource, User, UserRole


class RevokeSessionsUseCase:
    """
    Use case for revoking all sessions of a user.

    Business Rules:
    - Users can revoke their own sessions
    - Admins can revoke any user's sessions
    - Revoking when no sessions exist is not an error
    - Revocation is audit-logged for security compliance
    - Bearer tokens already issued stay valid until they expire
    """

    def __init__(self, uow: UnitOfWork, session_store: SessionStore):
        self.uow = uow
        self.session_store = session_store

    async def execute(self, target_user_id: UUID, requesting_user: User) -> Result[dict]:
        """
        Revoke all sessions for a user.

        Args:
            target_user_id: User whose sessions will be revoked
            requesting_user: Authenticated caller

        Returns:
            Result with count of revoked sessions, or Error
            (FORBIDDEN, USER_NOT_FOUND)
        """
        async with self.uow:
            is_self = target_user_id == requesting_user.id
            is_admin = UserRole(requesting_user.role) == UserRole.admin

            if not is_self and not is_admin:
                return Return.err(
                    Error("FORBIDDEN", "Only admins can revoke other users' sessions")
                )

            target_user = await self.uow.users.get_by_id(target_user_id)
            if not target_user:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            count = await self.session_store.revoke_all(target_user_id)

            await self.uow.commit()

            await AuditLog(self.uow).record(
                AuditAction.revoke_sessions,
                AuditResource.session,
                user_id=requesting_user.id,
                details=f"Revoked {count} session(s) of user {target_user_id}",
            )

            return Return.ok({"revoked_count": count, "target_user_id": str(target_user_id)})
