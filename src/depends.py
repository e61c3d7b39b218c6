from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, Optional

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app.services.auth_service import AuthService
from src.app.services.bearer_token_codec import BearerTokenCodec
from src.app.services.credential_hasher import CredentialHasher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User, UserRole
from src.domain.lockout import LockoutPolicy

TOKEN_COOKIE = "token"
SESSION_COOKIE = "session_token"

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)

# Process-wide collaborators, built once from configuration
token_codec = BearerTokenCodec(
    ApplicationConfig.JWT_SECRET,
    algorithm=ApplicationConfig.JWT_ALGORITHM,
    ttl=timedelta(days=ApplicationConfig.BEARER_TOKEN_TTL_DAYS),
)
credential_hasher = CredentialHasher(rounds=ApplicationConfig.BCRYPT_ROUNDS)
lockout_policy = LockoutPolicy(
    threshold=ApplicationConfig.LOCK_THRESHOLD,
    lock_duration=timedelta(minutes=ApplicationConfig.LOCK_DURATION_MINUTES),
)


@dataclass(frozen=True)
class ClientInfo:
    ip_address: Optional[str]
    user_agent: Optional[str]


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_auth_service(uow: UnitOfWork = Depends(get_unit_of_work)) -> AuthService:
    return AuthService(
        uow,
        token_codec,
        hasher=credential_hasher,
        lockout=lockout_policy,
        session_ttl=timedelta(days=ApplicationConfig.SESSION_TTL_DAYS),
        verification_ttl=timedelta(hours=ApplicationConfig.VERIFICATION_TTL_HOURS),
        expose_verification_token=not ApplicationConfig.is_production(),
    )


def get_client_info(request: Request) -> ClientInfo:
    forwarded = request.headers.get("x-forwarded-for")
    ip_address = (
        forwarded.split(",")[0].strip()
        if forwarded
        else request.headers.get("x-real-ip")
        or (request.client.host if request.client else None)
    )
    return ClientInfo(ip_address=ip_address, user_agent=request.headers.get("user-agent"))


async def get_presented_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    """
    Credential presented by the caller.

    Authorization header first, then the bearer cookie, then the session cookie.
    """
    if credentials is not None:
        return credentials.credentials
    return request.cookies.get(TOKEN_COOKIE) or request.cookies.get(SESSION_COOKIE)


async def get_current_user(
    token: Optional[str] = Depends(get_presented_token),
    auth: AuthService = Depends(get_auth_service),
) -> User:
    """
    Dependency resolving the authenticated user.

    Raises:
        ClientError: 401 if no credential resolves to an existing user
    """
    result = await auth.require_auth(token)
    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_401_UNAUTHORIZED)
    return result.value


def require_role(role: UserRole) -> Callable:
    """Dependency factory: the current user, who must hold role."""

    async def dependency(current_user: User = Depends(get_current_user)) -> User:
        result = AuthService.require_role(current_user, role)
        if result.is_err():
            raise ClientError(result.error, status_code=status.HTTP_403_FORBIDDEN)
        return result.value

    return dependency

