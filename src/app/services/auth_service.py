"""
Auth Service

Facade over the authentication use cases. Holds the process-wide
collaborators (hasher, codec, lockout policy) and hands each use case the
request's unit of work.
"""

from datetime import timedelta
from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.bearer_token_codec import BearerTokenCodec
from src.app.services.credential_hasher import CredentialHasher
from src.app.services.credential_resolver import CredentialResolver
from src.app.services.session_store import SessionStore
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    LoginResponse,
    LoginUseCase,
    LogoutResponse,
    LogoutUseCase,
    RegisterCommand,
    RegisterResponse,
    RegisterUseCase,
    ResendVerificationResponse,
    ResendVerificationUseCase,
    VerifyEmailResponse,
    VerifyEmailUseCase,
)
from src.app.use_cases.users import ResolveCurrentUserUseCase, RevokeSessionsUseCase
from src.domain.entities import User, UserRole
from src.domain.lockout import LockoutPolicy


class AuthService:
    def __init__(
        self,
        uow: UnitOfWork,
        codec: BearerTokenCodec,
        hasher: Optional[CredentialHasher] = None,
        lockout: Optional[LockoutPolicy] = None,
        session_ttl: timedelta = timedelta(days=7),
        verification_ttl: timedelta = timedelta(hours=24),
        expose_verification_token: bool = False,
    ):
        self.uow = uow
        self.codec = codec
        self.hasher = hasher or CredentialHasher()
        self.lockout = lockout or LockoutPolicy()
        self.session_ttl = session_ttl
        self.verification_ttl = verification_ttl
        self.expose_verification_token = expose_verification_token

        self.session_store = SessionStore(uow, ttl=session_ttl)
        self.resolver = CredentialResolver(uow, codec, self.session_store)

    async def register(self, command: RegisterCommand) -> Result[RegisterResponse]:
        use_case = RegisterUseCase(
            self.uow,
            self.hasher,
            verification_ttl=self.verification_ttl,
            expose_verification_token=self.expose_verification_token,
        )
        return await use_case.execute(command)

    async def login(
        self,
        email: str,
        password: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[LoginResponse]:
        use_case = LoginUseCase(
            self.uow, self.hasher, self.codec, self.lockout, session_ttl=self.session_ttl
        )
        return await use_case.execute(email, password, ip_address, user_agent)

    async def logout(
        self,
        token: Optional[str],
        session_token: Optional[str] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[LogoutResponse]:
        use_case = LogoutUseCase(self.uow, self.resolver, self.session_store)
        return await use_case.execute(token, session_token, ip_address, user_agent)

    async def verify_email(
        self,
        token: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[VerifyEmailResponse]:
        return await VerifyEmailUseCase(self.uow).execute(token, ip_address, user_agent)

    async def resend_verification(self, email: str) -> Result[ResendVerificationResponse]:
        use_case = ResendVerificationUseCase(
            self.uow,
            verification_ttl=self.verification_ttl,
            expose_verification_token=self.expose_verification_token,
        )
        return await use_case.execute(email)

    async def resolve_current_user(self, token: Optional[str]) -> Optional[User]:
        """The user behind token, or None for anonymous callers."""
        result = await ResolveCurrentUserUseCase(self.uow, self.resolver).execute(token)
        return result.value.user if result.value else None

    async def require_auth(self, token: Optional[str]) -> Result[User]:
        user = await self.resolve_current_user(token)
        if user is None:
            return Return.err(Error("UNAUTHENTICATED", "Not authenticated"))
        return Return.ok(user)

    @staticmethod
    def require_role(user: User, role: UserRole) -> Result[User]:
        if UserRole(user.role) != UserRole(role):
            return Return.err(
                Error("FORBIDDEN", f"Forbidden: {UserRole(role).value} access required")
            )
        return Return.ok(user)

    async def revoke_all_sessions(self, target_user_id, requesting_user: User) -> Result[dict]:
        return await RevokeSessionsUseCase(self.uow, self.session_store).execute(
            target_user_id, requesting_user
        )
