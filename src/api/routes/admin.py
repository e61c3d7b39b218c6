"""
Admin API Routes - System Administration Endpoints

These endpoints are for internal jobs such as the session reaper.
Authentication is via Admin API Key, not user credentials.
"""

from fastapi import APIRouter, Depends, status

from src.api.error import ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.session_store import SessionStore
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import (
    PurgeExpiredSessionsResponse,
    PurgeExpiredSessionsUseCase,
)
from src.depends import get_unit_of_work

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post(
    "/sessions/purge-expired",
    status_code=status.HTTP_200_OK,
    response_model=PurgeExpiredSessionsResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def purge_expired_sessions(uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Purge Expired Sessions

    Reaper endpoint, meant to be called by a scheduler. Deletes session rows
    whose expiry has passed; lookups already ignore them.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 500 Internal Server Error: Server error
    """
    use_case = PurgeExpiredSessionsUseCase(uow, SessionStore(uow))
    result = await use_case.execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value
