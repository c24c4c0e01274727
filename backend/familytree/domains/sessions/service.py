"""Session service: signed session tokens for owners and guests.

Tokens are HS256 JWTs. Resolving a token always re-reads the identity, so a
deleted user or a guest whose code has expired is unauthenticated even while
the token signature is still valid.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.core.config import settings
from familytree.core.datetime_utils import utc_now
from familytree.core.logging import logger
from familytree.core.security import create_session_token, decode_session_token
from familytree.core.shared_models import SessionRole
from familytree.domains.guest_access.protocols import GuestAccessServiceProtocol
from familytree.domains.guest_access.service import code_expires_at
from familytree.domains.sessions.protocols import SessionServiceProtocol
from familytree.domains.sessions.types import IssuedSession, ResolvedSession
from familytree.domains.users.protocols import UserRepositoryProtocol


class SessionService(SessionServiceProtocol):
    """Issues and resolves session tokens."""

    def __init__(
        self,
        user_repo: UserRepositoryProtocol,
        guest_access_service: GuestAccessServiceProtocol,
    ) -> None:
        """Initialize with injected dependencies."""
        self._user_repo = user_repo
        self._guest_access_service = guest_access_service

    def issue_owner_session(self, user: schemas.User) -> IssuedSession:
        """Sign a session for a signed-in owner."""
        expires_at = utc_now() + timedelta(hours=settings.SESSION_TTL_HOURS)
        token = create_session_token(
            str(user.id), {"role": SessionRole.OWNER.value}, expires_at=expires_at
        )
        return IssuedSession(token=token, expires_at=expires_at)

    async def start_guest_session(
        self, db: AsyncSession, *, access_code: Optional[str]
    ) -> tuple[IssuedSession, schemas.GuestRedeemResult]:
        """Redeem an access code and sign a guest session for it.

        The session ends when the code expires, or after ``SESSION_TTL_HOURS``
        if that comes first.
        """
        guest_editor = await self._guest_access_service.redeem(db, access_code=access_code)
        expires_at = min(
            code_expires_at(guest_editor.created_at),
            utc_now() + timedelta(hours=settings.SESSION_TTL_HOURS),
        )
        token = create_session_token(
            str(guest_editor.id),
            {
                "role": SessionRole.GUEST.value,
                "guest_member_id": guest_editor.family_member_id,
                "guest_family_tree_id": guest_editor.family_tree_id,
                "guest_editor_id": guest_editor.id,
            },
            expires_at=expires_at,
        )
        result = schemas.GuestRedeemResult(
            redirect_url=f"/family-trees/{guest_editor.family_tree_id}",
            guest_info=schemas.GuestInfo(
                member_name=guest_editor.family_member.full_name,
                family_tree_name=guest_editor.family_tree.family_name,
                family_tree_id=guest_editor.family_tree_id,
            ),
        )
        logger.info(f"Guest editor {guest_editor.id} redeemed an access code")
        return IssuedSession(token=token, expires_at=expires_at), result

    async def resolve(self, db: AsyncSession, token: Optional[str]) -> Optional[ResolvedSession]:
        """Identity behind a token, or None if the caller is unauthenticated."""
        if not token:
            return None
        claims = decode_session_token(token)
        if claims is None:
            return None
        try:
            subject_id = int(claims["sub"])
        except (TypeError, ValueError):
            return None
        expires_at = datetime.fromtimestamp(claims["exp"], tz=timezone.utc)

        role = claims.get("role")
        if role == SessionRole.OWNER.value:
            return await self._resolve_owner(db, subject_id, expires_at)
        if role == SessionRole.GUEST.value:
            return await self._resolve_guest(db, subject_id, claims, expires_at)
        return None

    async def _resolve_owner(
        self, db: AsyncSession, user_id: int, expires_at: datetime
    ) -> Optional[ResolvedSession]:
        user = await self._user_repo.get(db, user_id)
        if user is None:
            return None
        return ResolvedSession(
            role=SessionRole.OWNER,
            expires_at=expires_at,
            user=schemas.User.model_validate(user),
        )

    async def _resolve_guest(
        self,
        db: AsyncSession,
        guest_editor_id: int,
        claims: dict[str, Any],
        expires_at: datetime,
    ) -> Optional[ResolvedSession]:
        guest_editor = await self._guest_access_service.get_active(db, guest_editor_id)
        if guest_editor is None:
            return None
        if (
            claims.get("guest_member_id") != guest_editor.family_member_id
            or claims.get("guest_family_tree_id") != guest_editor.family_tree_id
        ):
            return None
        return ResolvedSession(
            role=SessionRole.GUEST,
            expires_at=expires_at,
            guest_member_id=guest_editor.family_member_id,
            guest_family_tree_id=guest_editor.family_tree_id,
            guest_editor_id=guest_editor.id,
        )
