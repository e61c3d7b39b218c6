from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import User
from src.domain.lockout import LockoutPolicy


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def get_by_verification_token(self, token: str) -> Optional[User]:
        """Get user by email verification token"""
        pass

    @abstractmethod
    async def record_failed_login(
        self, user_id: UUID, now: datetime, policy: LockoutPolicy
    ) -> Optional[User]:
        """
        Atomically apply policy.on_failure to the stored counters.

        Must be a single increment in the store, not read-modify-write,
        so concurrent failures are all counted. Returns the updated user.
        """
        pass
