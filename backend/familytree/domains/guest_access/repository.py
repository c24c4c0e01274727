"""Guest editor repository."""

from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import set_committed_value

from familytree.domains.guest_access.protocols import GuestEditorRepositoryProtocol
from familytree.models.guest_editor import GuestEditor


class GuestEditorRepository(GuestEditorRepositoryProtocol):
    """SQLAlchemy access to ``guest_editor`` rows."""

    async def get(self, db: AsyncSession, id: int) -> Optional[GuestEditor]:
        """Get a guest editor by ID."""
        return await db.get(GuestEditor, id)

    async def get_by_code(self, db: AsyncSession, access_code: str) -> Optional[GuestEditor]:
        """Get the guest editor holding a code."""
        result = await db.execute(
            select(GuestEditor).where(GuestEditor.access_code == access_code)
        )
        return result.unique().scalar_one_or_none()

    async def get_for_member(
        self, db: AsyncSession, family_tree_id: int, family_member_id: int
    ) -> Optional[GuestEditor]:
        """Get the guest editor of a (tree, member) pair."""
        result = await db.execute(
            select(GuestEditor)
            .where(
                GuestEditor.family_tree_id == family_tree_id,
                GuestEditor.family_member_id == family_member_id,
            )
            .execution_options(populate_existing=True)
        )
        return result.unique().scalar_one_or_none()

    async def list_for_tree(self, db: AsyncSession, family_tree_id: int) -> List[GuestEditor]:
        """Guest editors of a tree, newest first."""
        result = await db.execute(
            select(GuestEditor)
            .where(GuestEditor.family_tree_id == family_tree_id)
            .order_by(GuestEditor.created_at.desc(), GuestEditor.id.desc())
        )
        return list(result.unique().scalars().all())

    async def create(self, db: AsyncSession, *, obj_in: dict[str, Any]) -> GuestEditor:
        """Create a guest editor."""
        guest_editor = GuestEditor(**obj_in)
        db.add(guest_editor)
        await db.flush()
        return guest_editor

    async def rotate(
        self, db: AsyncSession, *, db_obj: GuestEditor, access_code: str, created_at: datetime
    ) -> Optional[GuestEditor]:
        """Replace the code of a row, guarded by the code the caller saw."""
        result = await db.execute(
            update(GuestEditor)
            .where(GuestEditor.id == db_obj.id, GuestEditor.access_code == db_obj.access_code)
            .values(access_code=access_code, created_at=created_at)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return None
        set_committed_value(db_obj, "access_code", access_code)
        set_committed_value(db_obj, "created_at", created_at)
        return db_obj
