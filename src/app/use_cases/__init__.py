"""
Use Cases

Organized into domain folders:
- auth/: Registration, login, logout and email verification
- users/: Identity resolution and session revocation
- audit/: Audit trail reads
- admin/: Maintenance operations

Import from subdirectories for better organization.
"""

from .auth import (
    RegisterUseCase,
    RegisterCommand,
    RegisterResponse,
    LoginUseCase,
    LogoutUseCase,
    VerifyEmailUseCase,
    ResendVerificationUseCase,
)
from .users import (
    ResolveCurrentUserUseCase,
    RevokeSessionsUseCase,
)
from .audit import (
    GetAuditEventsUseCase,
)
from .admin import (
    PurgeExpiredSessionsUseCase,
)

__all__ = [
    # Auth
    "RegisterUseCase",
    "RegisterCommand",
    "RegisterResponse",
    "LoginUseCase",
    "LogoutUseCase",
    "VerifyEmailUseCase",
    "ResendVerificationUseCase",
    # Users
    "ResolveCurrentUserUseCase",
    "RevokeSessionsUseCase",
    # Audit
    "GetAuditEventsUseCase",
    # Admin
    "PurgeExpiredSessionsUseCase",
]
