"""
Audit API Routes

Handles audit event retrieval endpoints.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from src.api.error import ClientError, ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit import GetAuditEventsUseCase
from src.depends import get_unit_of_work, require_role
from src.domain.entities import User, UserRole

router = APIRouter(prefix="/audit", tags=["Audit"])


class AuditEventResponse(BaseModel):
    """Single audit event in response"""

    action: str
    resource_type: str
    user_id: Optional[str]
    user_email: Optional[str]
    details: Optional[str]
    ip_address: Optional[str]
    user_agent: Optional[str]
    timestamp: str


class AuditEventsResponse(BaseModel):
    """GET /audit/events response payload"""

    events: List[AuditEventResponse]
    next_cursor: Optional[str]


@router.get(
    "/events",
    status_code=status.HTTP_200_OK,
    response_model=AuditEventsResponse,
)
async def get_audit_events(
    current_user: User = Depends(require_role(UserRole.admin)),
    uow: UnitOfWork = Depends(get_unit_of_work),
    limit: int = Query(50, ge=1, le=100, description="Maximum number of events to return"),
    cursor: Optional[str] = Query(None, description="Pagination cursor"),
    user_id: Optional[UUID] = Query(None, description="Only events about this user"),
):
    """
    Get Identity Audit Events

    Returns the audit trail, newest first. Admin role only.

    Query Parameters:
        - limit: Maximum number of events to return (1-100, default 50)
        - cursor: Pagination cursor for fetching next page
        - user_id: Filter on the user an event is about

    Raises:
        - 401 Unauthorized: Not authenticated
        - 403 Forbidden: Caller is not an admin
        - 500 Internal Server Error: Server error
    """
    use_case = GetAuditEventsUseCase(uow)
    result = await use_case.execute(
        requesting_user=current_user,
        limit=limit,
        cursor=cursor,
        user_id=user_id,
    )

    if result.is_err():
        error = result.error
        if error.code == "FORBIDDEN":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value
