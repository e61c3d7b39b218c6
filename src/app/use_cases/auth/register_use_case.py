import asyncio
import logging
import secrets
from datetime import timedelta

from libs.result import Error, Result, Return

from src.app.services.audit_log import AuditLog
from src.app.services.credential_hasher import BCRYPT_MAX_PASSWORD_BYTES, CredentialHasher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditAction, AuditResource, User, UserRole
from .dtos import RegisterCommand, RegisterResponse, UserInfo

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand (validated business intent)
    - Output: Result[RegisterResponse] (structured response)

    Business Logic:
    1. Check if email already exists
    2. Hash password with bcrypt
    3. Generate email verification token (32 random bytes, hex) valid 24 hours
    4. Create User with verified=False and role=attendee
    5. Commit, then record REGISTER audit event
    6. Hand the token to delivery; echo it back only outside production
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: CredentialHasher,
        verification_ttl: timedelta = timedelta(hours=24),
        expose_verification_token: bool = False,
    ):
        self.uow = uow
        self.hasher = hasher
        self.verification_ttl = verification_ttl
        self.expose_verification_token = expose_verification_token

    async def execute(self, command: RegisterCommand) -> Result[RegisterResponse]:
        """
        Execute register use case

        Args:
            command: RegisterCommand with validated email, password, name

        Returns:
            Result[RegisterResponse] with the new user,
            or Error(DUPLICATE_USER) if email exists,
            or Error(INVALID_PASSWORD) if the password exceeds 72 bytes
        """
        async with self.uow:
            existing_user = await self.uow.users.get_by_email(command.email)
            if existing_user:
                return Return.err(
                    Error("DUPLICATE_USER", "User with this email already exists")
                )

            if len(command.password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
                return Return.err(
                    Error("INVALID_PASSWORD", "Password must be at most 72 bytes")
                )

            password_hash = await asyncio.to_thread(self.hasher.hash, command.password)

            verification_token = secrets.token_hex(32)

            user = User(
                email=command.email,
                password_hash=password_hash,
                name=command.name,
                phone=command.phone,
                role=UserRole.attendee,
                verified=False,
                verification_token=verification_token,
                verification_expires=utcnow() + self.verification_ttl,
            )
            user = await self.uow.users.create(user)

            await self.uow.commit()

            # Delivery is external; the token only leaves through it in production
            if self.expose_verification_token:
                logger.info(
                    "Verification token for %s: %s", user.email, verification_token
                )
            else:
                logger.info("Verification token issued for user %s", user.id)

            response = RegisterResponse(
                user=UserInfo.from_user(user),
                message="Registration successful. Please check your email for verification.",
                verification_token=(
                    verification_token if self.expose_verification_token else None
                ),
            )

            await AuditLog(self.uow).record(
                AuditAction.register,
                AuditResource.user,
                user_id=user.id,
                details="User registered",
                ip_address=command.ip_address,
                user_agent=command.user_agent,
            )

            return Return.ok(response)
