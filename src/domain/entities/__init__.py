"""
Identity Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import AuditAction, AuditResource, UserRole

# Export all entities
from .user import User
from .session import Session
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "UserRole",
    "AuditAction",
    "AuditResource",
    # Entities
    "User",
    "Session",
    "AuditEvent",
]
