from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel, EmailStr, Field, field_validator

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.app.services.auth_service import AuthService
from src.app.services.credential_hasher import BCRYPT_MAX_PASSWORD_BYTES
from src.app.use_cases.auth import (
    LoginResponse,
    LogoutResponse,
    RegisterCommand,
    RegisterResponse,
    ResendVerificationResponse,
    VerifyEmailResponse,
)
from src.depends import (
    SESSION_COOKIE,
    TOKEN_COOKIE,
    ClientInfo,
    get_auth_service,
    get_client_info,
    get_presented_token,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _set_auth_cookie(response: Response, key: str, value: str, max_age: int) -> None:
    response.set_cookie(
        key,
        value,
        httponly=True,
        secure=ApplicationConfig.is_production(),
        samesite="lax",
        max_age=max_age,
    )


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    API layer responsibility: HTTP validation and serialization.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(
        ..., min_length=8, max_length=72, description="User password (at least 8 chars, at most 72 bytes)"
    )
    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    phone: Optional[str] = Field(None, max_length=32, description="Phone number")

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        # max_length counts characters, bcrypt counts bytes
        if len(v.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError("Password must be at most 72 bytes")
        return v


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse
)
async def register(
    request: RegisterRequest,
    auth: AuthService = Depends(get_auth_service),
    client: ClientInfo = Depends(get_client_info),
):
    """
    User Registration

    Creates an unverified account and issues an email verification token.
    Outside production the token is echoed in the response for testing.

    Raises:
        - 409 Conflict: Email already registered
        - 400 Bad Request: Password longer than 72 bytes
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
        - 500 Internal Server Error: Server error
    """
    command = RegisterCommand(
        email=request.email,
        password=request.password,
        name=request.name,
        phone=request.phone,
        ip_address=client.ip_address,
        user_agent=client.user_agent,
    )

    result = await auth.register(command)

    if result.is_err():
        error = result.error
        if error.code == "DUPLICATE_USER":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == "INVALID_PASSWORD":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Validates incoming login request.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
    client: ClientInfo = Depends(get_client_info),
):
    """
    User Login

    Authenticates the user, creates a session and signs a bearer token.
    Both are returned in the body and set as httpOnly cookies.

    Raises:
        - 401 Unauthorized: Invalid credentials (unknown email or wrong password)
        - 403 Forbidden: Email not verified
        - 423 Locked: Too many failed attempts
        - 500 Internal Server Error: Server error
    """
    result = await auth.login(
        request.email, request.password, client.ip_address, client.user_agent
    )

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "LOCKED_OUT":
            raise ClientError(error, status_code=status.HTTP_423_LOCKED)
        elif error.code == "UNVERIFIED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    data = result.value
    _set_auth_cookie(
        response,
        TOKEN_COOKIE,
        data.access_token,
        int(auth.codec.ttl.total_seconds()),
    )
    _set_auth_cookie(
        response,
        SESSION_COOKIE,
        data.session_token,
        int(auth.session_ttl.total_seconds()),
    )
    return data


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    request: Request,
    response: Response,
    token: Optional[str] = Depends(get_presented_token),
    auth: AuthService = Depends(get_auth_service),
    client: ClientInfo = Depends(get_client_info),
):
    """
    Logout

    Deletes the caller's session and clears the auth cookies.

    Raises:
        - 401 Unauthorized: No valid credential presented
        - 500 Internal Server Error: Server error
    """
    result = await auth.logout(
        token,
        session_token=request.cookies.get(SESSION_COOKIE),
        ip_address=client.ip_address,
        user_agent=client.user_agent,
    )

    if result.is_err():
        error = result.error
        if error.code == "UNAUTHENTICATED":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    _set_auth_cookie(response, TOKEN_COOKIE, "", 0)
    _set_auth_cookie(response, SESSION_COOKIE, "", 0)
    return result.value


class VerifyEmailRequest(BaseModel):
    """
    Verify email HTTP request payload

    Validates incoming email verification request.
    """

    token: str = Field(..., description="Email verification token")


@router.post("/verify-email", status_code=status.HTTP_200_OK, response_model=VerifyEmailResponse)
async def verify_email(
    request: VerifyEmailRequest,
    auth: AuthService = Depends(get_auth_service),
    client: ClientInfo = Depends(get_client_info),
):
    """
    Email Verification

    Verifies user email address via secure token.
    Sets verified flag and clears verification token.

    Raises:
        - 400 Bad Request: Invalid or expired token
        - 500 Internal Server Error: Server error
    """
    result = await auth.verify_email(request.token, client.ip_address, client.user_agent)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_OR_EXPIRED_TOKEN":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class ResendVerificationRequest(BaseModel):
    """
    Resend verification email HTTP request payload

    Validates incoming resend verification request.
    """

    email: EmailStr = Field(..., description="User email address")


@router.post("/resend-verification", status_code=status.HTTP_200_OK, response_model=ResendVerificationResponse)
async def resend_verification(
    request: ResendVerificationRequest, auth: AuthService = Depends(get_auth_service)
):
    """
    Resend Verification Email

    Issues a new verification token, invalidating the previous one.

    Security:
        - No email enumeration (same response for valid/invalid emails)

    Returns:
        - 200 OK: Always returns success (no enumeration)
        - 500 Internal Server Error: Server error
    """
    result = await auth.resend_verification(request.email)

    if result.is_err():
        raise ServerError(result.error)

    return result.value
