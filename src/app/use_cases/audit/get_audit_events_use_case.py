"""
Get Audit Events Use Case

Retrieves identity audit events with pagination.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User, UserRole


class GetAuditEventsUseCase:
    """
    Use case for reading the audit trail.

    Business Rules:
    - Caller must have role=admin
    - Optional filter on the user an event is about
    - Results ordered by newest first
    - Supports cursor-based pagination
    - Events whose user was deleted still appear, with user_email=None
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        requesting_user: User,
        limit: int = 50,
        cursor: Optional[str] = None,
        user_id: Optional[UUID] = None,
    ) -> Result[Dict[str, Any]]:
        """
        Execute get audit events use case.

        Args:
            requesting_user: Authenticated caller (must be admin)
            limit: Maximum number of events to return
            cursor: Pagination cursor (optional)
            user_id: Only events about this user (optional)

        Returns:
            Result with events list and next_cursor, or Error(FORBIDDEN)
        """
        async with self.uow:
            if UserRole(requesting_user.role) != UserRole.admin:
                return Return.err(
                    Error("FORBIDDEN", "You do not have permission to view audit events")
                )

            events, next_cursor = await self.uow.audit_events.get_paginated(
                limit=limit, cursor=cursor, user_id=user_id
            )

            emails: Dict[UUID, Optional[str]] = {}
            events_list = []
            for event in events:
                user_email = None
                if event.user_id:
                    if event.user_id not in emails:
                        user = await self.uow.users.get_by_id(event.user_id)
                        emails[event.user_id] = user.email if user else None
                    user_email = emails[event.user_id]

                events_list.append(
                    {
                        "action": event.action,
                        "resource_type": event.resource_type,
                        "user_id": str(event.user_id) if event.user_id else None,
                        "user_email": user_email,
                        "details": event.details,
                        "ip_address": event.ip_address,
                        "user_agent": event.user_agent,
                        "timestamp": event.created_at.isoformat() + "Z",
                    }
                )

            return Return.ok({"events": events_list, "next_cursor": next_cursor})
