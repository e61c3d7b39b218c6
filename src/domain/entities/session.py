"""
Session Entity

Opaque server-side login sessions.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class Session(SQLModel, table=True):
    """
    Session entity - maps a random opaque token to a user.

    Business Rules:
    - Token is 32 random bytes, hex encoded, unique
    - Expires 7 days after creation
    - Expired rows are ignored on lookup, removed by the reaper
    - Logout deletes the row; there is no revoked flag
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    token: str = Field(unique=True, index=True, max_length=64)

    # Client metadata, informational only
    ip_address: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    __table_args__ = (Index("idx_session_expires_at", "expires_at"),)
