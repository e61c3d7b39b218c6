"""
Login Use Case

Handles user authentication, lockout, and issues a session plus bearer token.
"""

import asyncio
import logging
from datetime import timedelta
from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.audit_log import AuditLog
from src.app.services.bearer_token_codec import BearerTokenCodec, TokenClaims
from src.app.services.credential_hasher import CredentialHasher
from src.app.services.session_store import SessionStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditAction, AuditResource, UserRole
from src.domain.lockout import LockoutPolicy, LockoutState
from .dtos import LoginResponse, UserInfo

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = Error("INVALID_CREDENTIALS", "Invalid email or password")


class LoginUseCase:
    """
    Use case for user login.

    Business Rules:
    - Unknown email and wrong password give the same error (no enumeration)
    - A locked account is rejected before the password is checked
    - Failed attempts are counted atomically in the repository
    - Correct password on an unverified account returns UNVERIFIED and
      leaves the failure counters untouched
    - Success resets counters, updates last_login, creates a Session and
      signs a bearer token
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: CredentialHasher,
        codec: BearerTokenCodec,
        lockout: LockoutPolicy,
        session_ttl: timedelta = timedelta(days=7),
    ):
        self.uow = uow
        self.hasher = hasher
        self.codec = codec
        self.lockout = lockout
        self.session_ttl = session_ttl

    async def execute(
        self,
        email: str,
        password: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password
            ip_address: Client IP, stored on the session and audit entry
            user_agent: Client user agent, stored likewise

        Returns:
            Result with LoginResponse, or Error
            (INVALID_CREDENTIALS, LOCKED_OUT, UNVERIFIED)
        """
        async with self.uow:
            now = utcnow()
            audit = AuditLog(self.uow)

            user = await self.uow.users.get_by_email(email)

            if user is None:
                # Spend the same bcrypt time as a wrong password
                await asyncio.to_thread(self.hasher.dummy_verify, password)
                return Return.err(INVALID_CREDENTIALS)

            if self.lockout.is_locked(LockoutState.of(user), now):
                return Return.err(
                    Error(
                        "LOCKED_OUT",
                        "Account is temporarily locked due to too many failed attempts",
                    )
                )

            if not user.password_hash:
                await asyncio.to_thread(self.hasher.dummy_verify, password)
                return Return.err(INVALID_CREDENTIALS)

            password_valid = await asyncio.to_thread(
                self.hasher.verify, password, user.password_hash
            )

            if not password_valid:
                before = LockoutState.of(user)
                updated = await self.uow.users.record_failed_login(
                    user.id, now, self.lockout
                )
                await self.uow.commit()

                newly_locked = (
                    updated is not None
                    and self.lockout.is_locked(LockoutState.of(updated), now)
                    and not self.lockout.is_locked(before, now)
                )
                lock_details = None
                if newly_locked:
                    lock_details = f"Locked until {updated.lock_until.isoformat()}"
                    logger.warning(
                        "Locking user %s after %s failed logins",
                        user.id,
                        updated.failed_login_count,
                    )

                user_id = user.id
                await audit.record(
                    AuditAction.login_failed,
                    AuditResource.user,
                    user_id=user_id,
                    details="Invalid password",
                    ip_address=ip_address,
                    user_agent=user_agent,
                )
                if lock_details:
                    await audit.record(
                        AuditAction.lock,
                        AuditResource.user,
                        user_id=user_id,
                        details=lock_details,
                        ip_address=ip_address,
                        user_agent=user_agent,
                    )
                return Return.err(INVALID_CREDENTIALS)

            if not user.verified:
                return Return.err(
                    Error("UNVERIFIED", "Please verify your email before logging in")
                )

            state = self.lockout.on_success(LockoutState.of(user))
            user.failed_login_count = state.failed_login_count
            user.lock_until = state.lock_until
            user.last_login = now
            user = await self.uow.users.update(user)

            session = await SessionStore(self.uow, ttl=self.session_ttl).create(
                user.id, ip_address=ip_address, user_agent=user_agent, now=now
            )

            await self.uow.commit()

            access_token = self.codec.encode(
                TokenClaims(
                    user_id=str(user.id),
                    email=user.email,
                    role=UserRole(user.role).value,
                ),
                now=now,
            )

            response = LoginResponse(
                user=UserInfo.from_user(user),
                access_token=access_token,
                session_token=session.token,
                session_id=str(session.id),
                expires_at=session.expires_at,
            )

            await audit.record(
                AuditAction.login,
                AuditResource.user,
                user_id=user.id,
                details="Login successful",
                ip_address=ip_address,
                user_agent=user_agent,
            )

            return Return.ok(response)
