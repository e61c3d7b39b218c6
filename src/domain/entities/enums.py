"""
Identity Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Platform-wide role of a user"""

    organizer = "organizer"
    attendee = "attendee"
    admin = "admin"
    scanner = "scanner"


class AuditAction(str, Enum):
    """Security-relevant events recorded in the audit trail"""

    login = "LOGIN"
    login_failed = "LOGIN_FAILED"
    logout = "LOGOUT"
    register = "REGISTER"
    verify = "VERIFY"
    lock = "LOCK"
    resend_verification = "RESEND_VERIFICATION"
    revoke_sessions = "REVOKE_SESSIONS"
    purge_sessions = "PURGE_SESSIONS"


class AuditResource(str, Enum):
    """Kind of resource an audit event is about"""

    user = "USER"
    session = "SESSION"
