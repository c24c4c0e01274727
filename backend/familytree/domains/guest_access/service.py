"""Guest access service: access-code issuance and redemption.

Each (tree, member) pair has at most one guest editor row. A code is active
for ``GUEST_CODE_TTL_HOURS`` after it was minted. Issuing while a code is
active returns that code; issuing after it expired rotates the row to a new
code. Redemption only succeeds while the code is active.
"""

from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.api.context import ApiContext
from familytree.core.config import settings
from familytree.core.datetime_utils import ensure_utc, utc_now
from familytree.core.messages import message
from familytree.core.security import ACCESS_CODE_LENGTH, generate_access_code
from familytree.db.unit_of_work import UnitOfWork
from familytree.domains.guest_access.exceptions import (
    AccessCodeExpiredError,
    AccessCodeNotFoundError,
    AccessCodeRequiredError,
    InvalidAccessCodeError,
)
from familytree.domains.guest_access.protocols import (
    GuestAccessServiceProtocol,
    GuestEditorRepositoryProtocol,
)
from familytree.domains.members.exceptions import FamilyMemberNotFoundError
from familytree.domains.members.protocols import FamilyMemberRepositoryProtocol
from familytree.models.family_tree import FamilyTree
from familytree.models.guest_editor import GuestEditor


def code_expires_at(created_at: datetime) -> datetime:
    """When a code minted at ``created_at`` stops working."""
    return ensure_utc(created_at) + timedelta(hours=settings.GUEST_CODE_TTL_HOURS)


def is_code_expired(created_at: datetime, now: Optional[datetime] = None) -> bool:
    """Whether a code minted at ``created_at`` is past its time to live."""
    return (now or utc_now()) > code_expires_at(created_at)


class GuestAccessService(GuestAccessServiceProtocol):
    """Domain service for guest access codes."""

    def __init__(
        self,
        guest_editor_repo: GuestEditorRepositoryProtocol,
        member_repo: FamilyMemberRepositoryProtocol,
    ) -> None:
        """Initialize with injected dependencies."""
        self._guest_editor_repo = guest_editor_repo
        self._member_repo = member_repo

    async def issue(
        self,
        db: AsyncSession,
        *,
        tree: FamilyTree,
        invite_in: schemas.GuestInviteCreate,
        ctx: ApiContext,
    ) -> schemas.GuestInviteIssued:
        """Return the active code of a member, minting one if needed.

        Concurrent first issuances race on the (tree, member) unique
        constraint, and concurrent rotations race on the code the row held.
        The loser re-reads the row and returns the winner's code.
        """
        member = await self._member_repo.get_in_tree(db, tree.id, invite_in.family_member_id)
        if member is None:
            raise FamilyMemberNotFoundError(invite_in.family_member_id)
        # A failed insert rolls the session back and expires tree and member.
        tree_id, member_id = tree.id, member.id

        existing = await self._guest_editor_repo.get_for_member(db, tree_id, member_id)
        now = utc_now()
        if existing is not None and not is_code_expired(existing.created_at, now):
            return self._issued(existing, is_new=False)

        access_code = generate_access_code()
        guest_editor = None
        try:
            async with UnitOfWork(db):
                if existing is None:
                    guest_editor = await self._guest_editor_repo.create(
                        db,
                        obj_in={
                            "family_tree_id": tree_id,
                            "family_member_id": member_id,
                            "family_tree": tree,
                            "family_member": member,
                            "access_code": access_code,
                            "created_at": now,
                        },
                    )
                else:
                    guest_editor = await self._guest_editor_repo.rotate(
                        db, db_obj=existing, access_code=access_code, created_at=now
                    )
        except IntegrityError:
            ctx.logger.warning(f"Concurrent access-code issuance for member {member_id}")
            guest_editor = None

        if guest_editor is None:
            winner = await self._guest_editor_repo.get_for_member(db, tree_id, member_id)
            if winner is None:
                raise RuntimeError(f"Guest editor for member {member_id} vanished during issuance")
            return self._issued(winner, is_new=False)

        ctx.logger.info(f"Issued access code for member {member_id} in tree {tree_id}")
        return self._issued(guest_editor, is_new=True)

    async def list(self, db: AsyncSession, *, tree: FamilyTree) -> List[schemas.GuestInvite]:
        """Codes issued for a tree, newest first."""
        now = utc_now()
        rows = await self._guest_editor_repo.list_for_tree(db, tree.id)
        return [
            schemas.GuestInvite(
                id=row.id,
                access_code=row.access_code,
                family_member=schemas.MemberRef.model_validate(row.family_member),
                created_at=ensure_utc(row.created_at),
                expires_at=code_expires_at(row.created_at),
                is_expired=is_code_expired(row.created_at, now),
            )
            for row in rows
        ]

    async def redeem(self, db: AsyncSession, *, access_code: Optional[str]) -> GuestEditor:
        """Check a code and return the guest editor it belongs to.

        Raises:
            AccessCodeRequiredError: No code was given.
            InvalidAccessCodeError: The code is not 45 characters long.
            AccessCodeNotFoundError: No guest editor holds the code.
            AccessCodeExpiredError: The code is past its time to live.
        """
        code = (access_code or "").strip()
        if not code:
            raise AccessCodeRequiredError()
        if len(code) != ACCESS_CODE_LENGTH:
            raise InvalidAccessCodeError()
        guest_editor = await self._guest_editor_repo.get_by_code(db, code)
        if guest_editor is None:
            raise AccessCodeNotFoundError()
        if is_code_expired(guest_editor.created_at):
            raise AccessCodeExpiredError()
        return guest_editor

    async def get_active(self, db: AsyncSession, guest_editor_id: int) -> Optional[GuestEditor]:
        """The guest editor if it still exists and its code has not expired."""
        guest_editor = await self._guest_editor_repo.get(db, guest_editor_id)
        if guest_editor is None or is_code_expired(guest_editor.created_at):
            return None
        return guest_editor

    @staticmethod
    def _issued(guest_editor: GuestEditor, *, is_new: bool) -> schemas.GuestInviteIssued:
        return schemas.GuestInviteIssued(
            access_code=guest_editor.access_code,
            family_member=schemas.MemberRef.model_validate(guest_editor.family_member),
            expires_at=code_expires_at(guest_editor.created_at),
            message=message("access_code_issued" if is_new else "access_code_active"),
            is_new=is_new,
        )
