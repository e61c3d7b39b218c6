"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import User, UserRole


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Created by API layer after request validation passes.
    Contains only business-relevant data (no HTTP concerns).
    """

    email: str
    password: str
    name: str
    phone: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(BaseModel):
    """Public view of a user"""

    id: str
    email: str
    name: str
    phone: Optional[str] = None
    role: str
    verified: bool
    last_login: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            email=user.email,
            name=user.name,
            phone=user.phone,
            role=UserRole(user.role).value,
            verified=user.verified,
            last_login=user.last_login,
        )


class RegisterResponse(BaseModel):
    """
    Register response

    verification_token is only populated outside production; in production
    the token leaves the service through the delivery channel only.
    """

    user: UserInfo
    message: str
    verification_token: Optional[str] = None


class LoginResponse(BaseModel):
    """Response for user login use case"""

    user: UserInfo
    access_token: str
    session_token: str
    session_id: str
    expires_at: datetime


class LogoutResponse(BaseModel):
    """Response for logout use case"""

    message: str
    revoked_sessions: int


class VerifyEmailResponse(BaseModel):
    """Response for email verification use case"""

    status: str
    message: str


class ResendVerificationResponse(BaseModel):
    """Response for resend verification email use case"""

    status: str
    message: str
    verification_token: Optional[str] = None
