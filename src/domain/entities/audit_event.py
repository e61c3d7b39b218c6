"""
AuditEvent Entity

Immutable log of all authentication events.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - immutable log of identity events.

    Business Rules:
    - Immutable (never updated or deleted)
    - user_id is a plain column, not a foreign key, so entries outlive users
    - Never consulted for access-control decisions
    """

    __tablename__ = "audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: Optional[UUID] = Field(default=None, index=True)

    action: str = Field(max_length=100)  # AuditAction value, e.g. "LOGIN"
    resource_type: str = Field(max_length=50)  # AuditResource value
    details: Optional[str] = Field(default=None, max_length=1000)

    ip_address: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_action", "action"),
    )
