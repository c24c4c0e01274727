"""Passing record repository."""

from typing import Any, List, Optional

from sqlalchemy import extract, select
from sqlalchemy.ext.asyncio import AsyncSession

from familytree.domains.passings.protocols import PassingRecordRepositoryProtocol
from familytree.models.family_member import FamilyMember
from familytree.models.passing_record import BuriedPlace, CauseOfDeath, PassingRecord


class PassingRecordRepository(PassingRecordRepositoryProtocol):
    """SQLAlchemy access to ``passing_record`` rows and their children."""

    def _in_tree(self, family_tree_id: int):
        return (
            select(PassingRecord)
            .join(FamilyMember, PassingRecord.family_member_id == FamilyMember.id)
            .where(FamilyMember.family_tree_id == family_tree_id)
        )

    async def get_in_tree(
        self, db: AsyncSession, family_tree_id: int, id: int
    ) -> Optional[PassingRecord]:
        """Get a record by ID only if its member belongs to the tree."""
        result = await db.execute(self._in_tree(family_tree_id).where(PassingRecord.id == id))
        return result.unique().scalar_one_or_none()

    async def get_by_member(self, db: AsyncSession, member_id: int) -> Optional[PassingRecord]:
        """The record of one member, if any."""
        result = await db.execute(
            select(PassingRecord).where(PassingRecord.family_member_id == member_id)
        )
        return result.unique().scalar_one_or_none()

    async def list_for_tree(
        self, db: AsyncSession, family_tree_id: int, *, year: Optional[int] = None
    ) -> List[PassingRecord]:
        """Records in a tree, latest passing first, optionally for one year."""
        query = self._in_tree(family_tree_id)
        if year is not None:
            query = query.where(extract("year", PassingRecord.date_of_passing) == year)
        result = await db.execute(
            query.order_by(PassingRecord.date_of_passing.desc(), PassingRecord.id.desc())
        )
        return list(result.unique().scalars().all())

    async def create(
        self,
        db: AsyncSession,
        *,
        obj_in: dict[str, Any],
        causes: List[str],
        buried_places: List[dict[str, Any]],
    ) -> PassingRecord:
        """Create a record with its causes and burial places."""
        record = PassingRecord(**obj_in)
        record.causes_of_death = [CauseOfDeath(cause_name=c) for c in causes]
        record.buried_places = [BuriedPlace(**p) for p in buried_places]
        db.add(record)
        await db.flush()
        return record

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: PassingRecord,
        obj_in: dict[str, Any],
        causes: Optional[List[str]] = None,
        buried_places: Optional[List[dict[str, Any]]] = None,
    ) -> PassingRecord:
        """Update a record. Given lists replace the stored ones."""
        for field, value in obj_in.items():
            setattr(db_obj, field, value)
        if causes is not None:
            db_obj.causes_of_death = [CauseOfDeath(cause_name=c) for c in causes]
        if buried_places is not None:
            db_obj.buried_places = [BuriedPlace(**p) for p in buried_places]
        db.add(db_obj)
        await db.flush()
        return db_obj

    async def remove(self, db: AsyncSession, *, db_obj: PassingRecord) -> None:
        """Delete a record with its causes and burial places."""
        await db.delete(db_obj)
        await db.flush()
