"""
Session Store

Stateful login sessions keyed by a random opaque token.
"""

import secrets
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import Session

# 32 bytes = 256 bits of entropy, 64 hex chars
SESSION_TOKEN_BYTES = 32


class SessionStore:
    """
    Issues, validates and revokes opaque session tokens.

    Works inside the caller's unit of work; committing is the caller's job.
    Repository failures surface as StorageError from the adapter layer.
    """

    def __init__(self, uow: UnitOfWork, ttl: timedelta = timedelta(days=7)):
        self.uow = uow
        self.ttl = ttl

    async def create(
        self,
        user_id: UUID,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Session:
        now = now or utcnow()
        session = Session(
            user_id=user_id,
            token=secrets.token_hex(SESSION_TOKEN_BYTES),
            ip_address=ip_address,
            user_agent=user_agent,
            created_at=now,
            expires_at=now + self.ttl,
        )
        return await self.uow.sessions.create(session)

    async def validate(self, token: str, now: Optional[datetime] = None) -> Optional[Session]:
        """Return the live session for token, None if unknown or expired."""
        if not token:
            return None
        session = await self.uow.sessions.get_by_token(token)
        if session is None:
            return None
        # Expired rows are left for the reaper
        if session.expires_at < (now or utcnow()):
            return None
        return session

    async def revoke(self, token: str) -> int:
        return await self.uow.sessions.delete_by_token(token)

    async def revoke_all(self, user_id: UUID) -> int:
        return await self.uow.sessions.delete_by_user_id(user_id)

    async def purge_expired(self, now: Optional[datetime] = None) -> int:
        return await self.uow.sessions.delete_expired(now or utcnow())
