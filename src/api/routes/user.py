from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from src.app.use_cases.auth import UserInfo
from src.depends import get_current_user
from src.domain.entities import User

router = APIRouter(tags=["User"])


class MeResponse(BaseModel):
    """GET /me response payload"""
    user: UserInfo


@router.get("/me", status_code=status.HTTP_200_OK, response_model=MeResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """
    Load Current User

    Returns the user behind the presented bearer or session token.

    Raises:
        - 401 Unauthorized: Missing, invalid or expired credential,
          or the user no longer exists
    """
    return MeResponse(user=UserInfo.from_user(current_user))
