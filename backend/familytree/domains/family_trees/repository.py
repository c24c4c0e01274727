"""Family tree repository.

Ownership is resolved with a join through ``tree_owner`` so a tree owned by
someone else looks the same as a missing one.
"""

from typing import Any, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from familytree.domains.family_trees.protocols import FamilyTreeRepositoryProtocol
from familytree.models.family_tree import FamilyTree
from familytree.models.user import TreeOwner


class FamilyTreeRepository(FamilyTreeRepositoryProtocol):
    """SQLAlchemy access to ``family_tree`` rows."""

    async def get(self, db: AsyncSession, id: int) -> Optional[FamilyTree]:
        """Get a tree by ID, regardless of owner."""
        return await db.get(FamilyTree, id)

    async def get_for_owner(
        self, db: AsyncSession, id: int, user_id: int
    ) -> Optional[FamilyTree]:
        """Get a tree by ID only if ``user_id`` owns it."""
        result = await db.execute(
            select(FamilyTree)
            .join(TreeOwner, FamilyTree.tree_owner_id == TreeOwner.id)
            .where(FamilyTree.id == id, TreeOwner.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def list_for_owner(self, db: AsyncSession, user_id: int) -> List[FamilyTree]:
        """Trees owned by a user, newest first."""
        result = await db.execute(
            select(FamilyTree)
            .join(TreeOwner, FamilyTree.tree_owner_id == TreeOwner.id)
            .where(TreeOwner.user_id == user_id)
            .order_by(FamilyTree.created_at.desc(), FamilyTree.id.desc())
        )
        return list(result.scalars().all())

    async def count_for_owner(self, db: AsyncSession, user_id: int) -> int:
        """Number of trees owned by a user."""
        result = await db.execute(
            select(func.count(FamilyTree.id))
            .join(TreeOwner, FamilyTree.tree_owner_id == TreeOwner.id)
            .where(TreeOwner.user_id == user_id)
        )
        return result.scalar_one()

    async def create(self, db: AsyncSession, *, obj_in: dict[str, Any]) -> FamilyTree:
        """Create a tree."""
        tree = FamilyTree(**obj_in)
        db.add(tree)
        await db.flush()
        return tree

    async def update(
        self, db: AsyncSession, *, db_obj: FamilyTree, obj_in: dict[str, Any]
    ) -> FamilyTree:
        """Update a tree."""
        for field, value in obj_in.items():
            setattr(db_obj, field, value)
        db.add(db_obj)
        await db.flush()
        return db_obj

    async def remove(self, db: AsyncSession, *, db_obj: FamilyTree) -> None:
        """Delete a tree and everything in it."""
        await db.delete(db_obj)
        await db.flush()
