"""
Credential Hasher

bcrypt password hashing. Stateless apart from a cached dummy hash; safe to
share across requests.
"""

from typing import Optional

import bcrypt

# bcrypt only looks at the first 72 bytes and newer releases refuse longer input
BCRYPT_MAX_PASSWORD_BYTES = 72


class CredentialHasher:
    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self._dummy_hash: Optional[str] = None

    def hash(self, password: str) -> str:
        """
        Hash a password with a fresh salt.

        Raises:
            ValueError: password longer than 72 bytes once encoded
        """
        encoded = password.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError("Password must be at most 72 bytes")
        return bcrypt.hashpw(encoded, bcrypt.gensalt(self.rounds)).decode("utf-8")

    def verify(self, password: str, password_hash: Optional[str]) -> bool:
        """Constant-time check. Malformed or missing hashes verify as False."""
        if not password_hash:
            return False
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    def dummy_verify(self, password: str) -> bool:
        """Spend one bcrypt check when there is no real hash. Always False."""
        if self._dummy_hash is None:
            self._dummy_hash = self.hash("dummy_password")
        self.verify(password, self._dummy_hash)
        return False
