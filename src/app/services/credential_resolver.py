"""
Credential Resolver

Single entry point for turning a presented credential, either a signed
bearer token or an opaque session token, into a user.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from src.app.services.bearer_token_codec import BearerClaims, BearerTokenCodec
from src.app.services.session_store import SessionStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Session, User


class CredentialKind(str, Enum):
    bearer = "bearer"
    session = "session"


@dataclass(frozen=True)
class PresentedCredential:
    kind: CredentialKind
    value: str

    @classmethod
    def from_token(cls, token: str) -> "PresentedCredential":
        # JWTs are three dot-separated segments; session tokens are plain hex
        if token.count(".") == 2:
            return cls(CredentialKind.bearer, token)
        return cls(CredentialKind.session, token)


@dataclass
class ResolvedIdentity:
    user: User
    credential: PresentedCredential
    claims: Optional[BearerClaims] = None
    session: Optional[Session] = None


class CredentialResolver:
    """
    Resolves identities inside the caller's unit of work.

    Anything that does not lead to an existing user resolves to None:
    bad signature, expired token, unknown or expired session, deleted user.
    """

    def __init__(self, uow: UnitOfWork, codec: BearerTokenCodec, session_store: SessionStore):
        self.uow = uow
        self.codec = codec
        self.session_store = session_store

    async def resolve(
        self, token: Optional[str], now: Optional[datetime] = None
    ) -> Optional[ResolvedIdentity]:
        if not token:
            return None
        credential = PresentedCredential.from_token(token)

        if credential.kind == CredentialKind.bearer:
            claims = self.codec.decode(credential.value)
            if claims is None:
                return None
            try:
                user_id = UUID(claims.user_id)
            except ValueError:
                return None
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return None
            return ResolvedIdentity(user=user, credential=credential, claims=claims)

        session = await self.session_store.validate(credential.value, now=now)
        if session is None:
            return None
        user = await self.uow.users.get_by_id(session.user_id)
        if user is None:
            return None
        return ResolvedIdentity(user=user, credential=credential, session=session)
