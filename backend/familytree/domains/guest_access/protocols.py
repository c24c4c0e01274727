"""Protocols for guest access codes."""

from datetime import datetime
from typing import Any, List, Optional, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.api.context import ApiContext
from familytree.models.family_tree import FamilyTree
from familytree.models.guest_editor import GuestEditor


class GuestEditorRepositoryProtocol(Protocol):
    """Data access for guest editor rows."""

    async def get(self, db: AsyncSession, id: int) -> Optional[GuestEditor]:
        """Get a guest editor by ID."""
        ...

    async def get_by_code(self, db: AsyncSession, access_code: str) -> Optional[GuestEditor]:
        """Get the guest editor holding a code."""
        ...

    async def get_for_member(
        self, db: AsyncSession, family_tree_id: int, family_member_id: int
    ) -> Optional[GuestEditor]:
        """Get the guest editor of a (tree, member) pair."""
        ...

    async def list_for_tree(self, db: AsyncSession, family_tree_id: int) -> List[GuestEditor]:
        """Guest editors of a tree, newest first."""
        ...

    async def create(self, db: AsyncSession, *, obj_in: dict[str, Any]) -> GuestEditor:
        """Create a guest editor."""
        ...

    async def rotate(
        self, db: AsyncSession, *, db_obj: GuestEditor, access_code: str, created_at: datetime
    ) -> Optional[GuestEditor]:
        """Replace the code of an expired row.

        Returns None if another request rotated the row first.
        """
        ...


class GuestAccessServiceProtocol(Protocol):
    """Issues, lists and redeems guest access codes."""

    async def issue(
        self,
        db: AsyncSession,
        *,
        tree: FamilyTree,
        invite_in: schemas.GuestInviteCreate,
        ctx: ApiContext,
    ) -> schemas.GuestInviteIssued:
        """Return the active code of a member, minting one if needed."""
        ...

    async def list(self, db: AsyncSession, *, tree: FamilyTree) -> List[schemas.GuestInvite]:
        """Codes issued for a tree, newest first."""
        ...

    async def redeem(self, db: AsyncSession, *, access_code: Optional[str]) -> GuestEditor:
        """Check a code and return the guest editor it belongs to."""
        ...

    async def get_active(self, db: AsyncSession, guest_editor_id: int) -> Optional[GuestEditor]:
        """The guest editor if it still exists and its code has not expired."""
        ...
