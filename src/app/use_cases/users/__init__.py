"""
User Session Use Cases

Identity resolution and session management.
"""

from .resolve_current_user_use_case import ResolveCurrentUserUseCase
from .revoke_sessions_use_case import RevokeSessionsUseCase

__all__ = [
    "ResolveCurrentUserUseCase",
    "RevokeSessionsUseCase",
]
