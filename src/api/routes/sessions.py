from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.app.services.auth_service import AuthService
from src.depends import get_auth_service, get_current_user
from src.domain.entities import User

router = APIRouter(prefix="/sessions", tags=["Sessions"])


class RevokeAllSessionsRequest(BaseModel):
    """Request to revoke all sessions for a user"""

    user_id: Optional[UUID] = Field(
        None, description="User whose sessions will be revoked (defaults to caller)"
    )


class RevokeSessionResponse(BaseModel):
    """Response for session revocation operations"""

    message: str
    revoked_count: int


@router.post(
    "/revoke-all",
    status_code=status.HTTP_200_OK,
    response_model=RevokeSessionResponse,
)
async def revoke_all_sessions(
    request: RevokeAllSessionsRequest,
    current_user: User = Depends(get_current_user),
    auth: AuthService = Depends(get_auth_service),
):
    """
    Revoke All Sessions

    Deletes every session of a user ("log out everywhere"). Useful for:
    - Security incidents (account compromise)
    - Password changes
    - Admin-initiated logout

    Authorization:
    - Users can revoke their own sessions
    - Admins can revoke any user's sessions

    Raises:
        - 401 Unauthorized: Not authenticated
        - 403 Forbidden: Insufficient permissions
        - 404 Not Found: User not found
        - 500 Internal Server Error: Server error
    """
    target_user_id = request.user_id or current_user.id

    result = await auth.revoke_all_sessions(target_user_id, current_user)

    if result.is_err():
        error = result.error
        if error.code == "FORBIDDEN":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return RevokeSessionResponse(
        message="All sessions revoked successfully",
        revoked_count=result.value["revoked_count"],
    )
