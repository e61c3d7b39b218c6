from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.base import storage_errors
from src.app.repositories.session_repository import ISessionRepository
from src.domain.entities import Session


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, session_obj: Session) -> Session:
        """Create a new session"""
        async with storage_errors():
            self.session.add(session_obj)
            await self.session.flush()
            await self.session.refresh(session_obj)
        return session_obj

    async def get_by_token(self, token: str) -> Optional[Session]:
        """Find session by its opaque token"""
        stmt = select(Session).where(Session.token == token)
        async with storage_errors():
            result = await self.session.execute(stmt)
            return result.scalar_one_or_none()

    async def get_by_user_id(self, user_id: UUID) -> List[Session]:
        """Get all sessions for a user"""
        stmt = select(Session).where(Session.user_id == user_id)
        async with storage_errors():
            result = await self.session.execute(stmt)
            return list(result.scalars().all())

    async def delete_by_token(self, token: str) -> int:
        """Delete sessions matching token"""
        stmt = delete(Session).where(Session.token == token)
        return await self._delete(stmt)

    async def delete_by_user_id(self, user_id: UUID) -> int:
        """Delete all sessions for a user"""
        stmt = delete(Session).where(Session.user_id == user_id)
        return await self._delete(stmt)

    async def delete_expired(self, now: datetime) -> int:
        """Delete sessions that expired before now"""
        stmt = delete(Session).where(Session.expires_at < now)
        return await self._delete(stmt)

    async def _delete(self, stmt) -> int:
        async with storage_errors():
            result = await self.session.execute(
                stmt.execution_options(synchronize_session=False)
            )
            await self.session.flush()
        return result.rowcount
