"""
Use Case: Purge Expired Sessions

Reaper for session rows past their expiry. Lookups already ignore expired
sessions, so this only reclaims storage.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from libs.result import Result, Return
from src.app.services.audit_log import AuditLog
from src.app.services.session_store import SessionStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditAction, AuditResource


class PurgeExpiredSessionsResponse(BaseModel):
    """Response DTO for PurgeExpiredSessionsUseCase"""

    status: str
    sessions_purged: int
    purged_before: datetime


class PurgeExpiredSessionsUseCase:
    """
    Delete every session whose expires_at has passed.

    Business Logic:
    1. Delete sessions with expires_at < now
    2. Commit
    3. Record a PURGE_SESSIONS audit event with the count
    """

    def __init__(self, uow: UnitOfWork, session_store: SessionStore):
        self.uow = uow
        self.session_store = session_store

    async def execute(
        self, now: Optional[datetime] = None
    ) -> Result[PurgeExpiredSessionsResponse]:
        now = now or utcnow()
        async with self.uow:
            purged = await self.session_store.purge_expired(now)
            await self.uow.commit()

            await AuditLog(self.uow).record(
                AuditAction.purge_sessions,
                AuditResource.session,
                details=f"Purged {purged} expired session(s)",
            )

            return Return.ok(
                PurgeExpiredSessionsResponse(
                    status="purged", sessions_purged=purged, purged_before=now
                )
            )
