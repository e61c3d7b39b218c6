"""
Bearer Token Codec

Stateless HS256 JWTs carrying the caller's identity.
"""

from datetime import UTC, datetime, timedelta
from typing import Optional

from jose import JWTError, jwt
from pydantic import BaseModel, ValidationError

from src.domain.base import utcnow


class TokenClaims(BaseModel):
    """Identity asserted by a bearer token"""

    user_id: str
    email: str
    role: str


class BearerClaims(TokenClaims):
    """Verified claims, with the token's validity window"""

    issued_at: datetime
    expires_at: datetime

    def identity(self) -> TokenClaims:
        return TokenClaims(user_id=self.user_id, email=self.email, role=self.role)


class BearerTokenCodec:
    """
    Signs and verifies bearer tokens with a shared secret.

    The secret comes from process configuration and is passed in; the codec
    never reads it from a global.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(days=7),
    ):
        if not secret:
            raise ValueError("Bearer token secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def encode(self, claims: TokenClaims, now: Optional[datetime] = None) -> str:
        """
        Generate a signed token

        Args:
            claims: user_id, email and role to embed
            now: issue time (naive UTC), defaults to the current time

        Returns:
            JWT token string expiring ttl after now
        """
        issued_at = now or utcnow()
        payload = {
            "user_id": claims.user_id,
            "email": claims.email,
            "role": claims.role,
            "iat": _to_epoch(issued_at),
            "exp": _to_epoch(issued_at + self.ttl),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def decode(self, token: str) -> Optional[BearerClaims]:
        """
        Verify and decode a token

        Returns:
            BearerClaims, or None for any failure (bad signature, malformed,
            expired, missing claims). Failures are deliberately not told apart.
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
            return BearerClaims(
                user_id=payload["user_id"],
                email=payload["email"],
                role=payload["role"],
                issued_at=_from_epoch(payload["iat"]),
                expires_at=_from_epoch(payload["exp"]),
            )
        except (JWTError, KeyError, TypeError, ValueError, ValidationError):
            return None


def _to_epoch(naive_utc: datetime) -> int:
    return int(naive_utc.replace(tzinfo=UTC).timestamp())


def _from_epoch(seconds: int) -> datetime:
    return datetime.fromtimestamp(seconds, UTC).replace(tzinfo=None)
