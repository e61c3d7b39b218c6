"""
User Entity

Represents a person who can sign in to the platform.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow
from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity - a person with local credentials.

    Business Rules:
    - Email must be unique across all users
    - Email verification required before login succeeds
    - Password stored as bcrypt hash; NULL for credential-less accounts
    - verification_token and verification_expires are set and cleared together
    - lock_until is only set once failed_login_count reached the lock threshold
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: Optional[str] = Field(default=None, max_length=60)
    name: str = Field(max_length=255)
    phone: Optional[str] = Field(default=None, max_length=32)

    role: UserRole = Field(default=UserRole.attendee)

    # Email verification
    verified: bool = Field(default=False)
    verification_token: Optional[str] = Field(
        default=None, unique=True, index=True, max_length=64
    )
    verification_expires: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Brute-force lockout
    failed_login_count: int = Field(default=0)
    lock_until: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    last_login: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_verified", "verified"),)
