import base64
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import and_, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.base import storage_errors
from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.domain.entities import AuditEvent


class AuditEventRepository(IAuditEventRepository):
    """AuditEvent repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        """Create a new audit event (immutable)"""
        async with storage_errors():
            self.session.add(audit_event)
            await self.session.flush()
            await self.session.refresh(audit_event)
        return audit_event

    async def get_paginated(
        self,
        limit: int = 50,
        cursor: Optional[str] = None,
        user_id: Optional[UUID] = None,
    ) -> Tuple[List[AuditEvent], Optional[str]]:
        """
        Get audit events with cursor-based pagination.

        Cursor format: base64-encoded "<ISO created_at>|<id>" of the last row
        returned. The id breaks ties between events sharing a timestamp.
        """
        stmt = select(AuditEvent)
        if user_id is not None:
            stmt = stmt.where(AuditEvent.user_id == user_id)

        if cursor:
            try:
                cursor_timestamp, cursor_id = _decode_cursor(cursor)
                stmt = stmt.where(
                    or_(
                        AuditEvent.created_at < cursor_timestamp,
                        and_(
                            AuditEvent.created_at == cursor_timestamp,
                            AuditEvent.id < cursor_id,
                        ),
                    )
                )
            except (ValueError, TypeError):
                # Invalid cursor, ignore and return from beginning
                pass

        # Newest first; fetch one extra row to know whether there is a next page
        stmt = stmt.order_by(AuditEvent.created_at.desc(), AuditEvent.id.desc()).limit(
            limit + 1
        )

        async with storage_errors():
            result = await self.session.exec(stmt)
            events = list(result.all())

        has_more = len(events) > limit
        if has_more:
            events = events[:limit]

        next_cursor = None
        if has_more and events:
            next_cursor = _encode_cursor(events[-1])

        return events, next_cursor


def _encode_cursor(event: AuditEvent) -> str:
    raw = f"{event.created_at.isoformat()}|{event.id}"
    return base64.b64encode(raw.encode("utf-8")).decode("utf-8")


def _decode_cursor(cursor: str) -> Tuple[datetime, UUID]:
    raw = base64.b64decode(cursor).decode("utf-8")
    timestamp, event_id = raw.split("|", 1)
    return datetime.fromisoformat(timestamp), UUID(event_id)
