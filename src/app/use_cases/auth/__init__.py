"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .logout_use_case import LogoutUseCase
from .verify_email_use_case import VerifyEmailUseCase
from .resend_verification_use_case import ResendVerificationUseCase
from .dtos import (
    RegisterCommand,
    RegisterResponse,
    UserInfo,
    LoginResponse,
    LogoutResponse,
    VerifyEmailResponse,
    ResendVerificationResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "VerifyEmailUseCase",
    "ResendVerificationUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "RegisterResponse",
    "LoginResponse",
    "LogoutResponse",
    "VerifyEmailResponse",
    "ResendVerificationResponse",
    # DTOs - Nested Models
    "UserInfo",
]
