"""Spouse relationship repository."""

from typing import Any, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from familytree.domains.life_events.protocols import SpouseRelationshipRepositoryProtocol
from familytree.models.family_member import FamilyMember
from familytree.models.spouse_relationship import SpouseRelationship


class SpouseRelationshipRepository(SpouseRelationshipRepositoryProtocol):
    """SQLAlchemy access to ``spouse_relationship`` rows.

    Tree membership is resolved through the first member; both members of a
    couple always belong to the same tree.
    """

    def _in_tree(self, family_tree_id: int):
        member1 = aliased(FamilyMember)
        return (
            select(SpouseRelationship)
            .join(member1, SpouseRelationship.family_member1_id == member1.id)
            .where(member1.family_tree_id == family_tree_id)
        )

    async def get_in_tree(
        self, db: AsyncSession, family_tree_id: int, id: int
    ) -> Optional[SpouseRelationship]:
        """Get a relationship by ID only if its members belong to the tree."""
        result = await db.execute(
            self._in_tree(family_tree_id).where(SpouseRelationship.id == id)
        )
        return result.unique().scalar_one_or_none()

    async def get_pair(
        self, db: AsyncSession, member1_id: int, member2_id: int
    ) -> Optional[SpouseRelationship]:
        """Get the relationship between two members, in either order."""
        first, second = sorted((member1_id, member2_id))
        result = await db.execute(
            select(SpouseRelationship).where(
                SpouseRelationship.family_member1_id == first,
                SpouseRelationship.family_member2_id == second,
            )
        )
        return result.unique().scalar_one_or_none()

    async def list_for_tree(
        self, db: AsyncSession, family_tree_id: int, *, open_only: bool = False
    ) -> List[SpouseRelationship]:
        """Relationships in a tree, most recent marriage first."""
        query = self._in_tree(family_tree_id)
        if open_only:
            query = query.where(SpouseRelationship.divorce_date.is_(None))
        result = await db.execute(
            query.order_by(SpouseRelationship.marriage_date.desc(), SpouseRelationship.id.desc())
        )
        return list(result.unique().scalars().all())

    async def create(self, db: AsyncSession, *, obj_in: dict[str, Any]) -> SpouseRelationship:
        """Create a relationship."""
        relationship = SpouseRelationship(**obj_in)
        db.add(relationship)
        await db.flush()
        return relationship

    async def update(
        self, db: AsyncSession, *, db_obj: SpouseRelationship, obj_in: dict[str, Any]
    ) -> SpouseRelationship:
        """Update a relationship."""
        for field, value in obj_in.items():
            setattr(db_obj, field, value)
        db.add(db_obj)
        await db.flush()
        return db_obj
