"""
Resolve Current User Use Case

Loads the user behind a presented bearer or session token.
"""

from typing import Optional

from libs.result import Result, Return
from src.app.services.credential_resolver import CredentialResolver, ResolvedIdentity
from src.app.services.unit_of_work import UnitOfWork


class ResolveCurrentUserUseCase:
    """
    Use case for "who am I".

    Business Rules:
    - Bearer tokens are verified by signature and expiry
    - Session tokens are looked up and must not be expired
    - A valid credential for a deleted user is anonymous, not an error
    - Never fails: the value is None for anonymous callers
    """

    def __init__(self, uow: UnitOfWork, resolver: CredentialResolver):
        self.uow = uow
        self.resolver = resolver

    async def execute(self, token: Optional[str]) -> Result[Optional[ResolvedIdentity]]:
        async with self.uow:
            return Return.ok(await self.resolver.resolve(token))
