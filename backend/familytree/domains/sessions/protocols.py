"""Protocols for the sessions domain."""

from typing import Optional, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.domains.sessions.types import IssuedSession, ResolvedSession


class SessionServiceProtocol(Protocol):
    """Signs session tokens and resolves them back to an identity."""

    def issue_owner_session(self, user: schemas.User) -> IssuedSession:
        """Sign a session for a signed-in owner."""
        ...

    async def start_guest_session(
        self, db: AsyncSession, *, access_code: Optional[str]
    ) -> tuple[IssuedSession, schemas.GuestRedeemResult]:
        """Redeem an access code and sign a guest session for it."""
        ...

    async def resolve(self, db: AsyncSession, token: Optional[str]) -> Optional[ResolvedSession]:
        """Identity behind a token, or None if the caller is unauthenticated."""
        ...
