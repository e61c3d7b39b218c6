from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import and_, case, or_, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.base import storage_errors
from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User
from src.domain.lockout import LockoutPolicy


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = select(User).where(User.email == email)
        async with storage_errors():
            result = await self.session.exec(stmt)
            return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        async with storage_errors():
            result = await self.session.exec(stmt)
            return result.one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        async with storage_errors():
            self.session.add(user)
            await self.session.flush()
            await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        async with storage_errors():
            self.session.add(user)
            await self.session.flush()
            await self.session.refresh(user)
        return user

    async def get_by_verification_token(self, token: str) -> Optional[User]:
        """Get user by email verification token"""
        stmt = select(User).where(User.verification_token == token)
        async with storage_errors():
            result = await self.session.exec(stmt)
            return result.one_or_none()

    async def record_failed_login(
        self, user_id: UUID, now: datetime, policy: LockoutPolicy
    ) -> Optional[User]:
        """
        Single UPDATE mirroring LockoutPolicy.on_failure.

        The right-hand side sees the pre-update row, so concurrent failures
        each add one and only the first to cross the threshold sets the lock.
        """
        not_locked = or_(User.lock_until.is_(None), User.lock_until <= now)
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(
                failed_login_count=User.failed_login_count + 1,
                lock_until=case(
                    (
                        and_(User.failed_login_count + 1 >= policy.threshold, not_locked),
                        now + policy.lock_duration,
                    ),
                    else_=User.lock_until,
                ),
            )
            .execution_options(synchronize_session=False)
        )
        async with storage_errors():
            await self.session.execute(stmt)
            await self.session.flush()
            refreshed = select(User).where(User.id == user_id).execution_options(
                populate_existing=True
            )
            result = await self.session.exec(refreshed)
            return result.one_or_none()
