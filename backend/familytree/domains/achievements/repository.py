"""Achievement and achievement type repositories."""

from typing import Any, List, Optional

from sqlalchemy import extract, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from familytree.domains.achievements.protocols import (
    AchievementRepositoryProtocol,
    AchievementTypeRepositoryProtocol,
)
from familytree.models.achievement import Achievement, AchievementType
from familytree.models.family_member import FamilyMember


class AchievementTypeRepository(AchievementTypeRepositoryProtocol):
    """SQLAlchemy access to ``achievement_type`` rows."""

    async def get_in_tree(
        self, db: AsyncSession, family_tree_id: int, id: int
    ) -> Optional[AchievementType]:
        """Get a type by ID only if it belongs to the tree."""
        result = await db.execute(
            select(AchievementType).where(
                AchievementType.id == id, AchievementType.family_tree_id == family_tree_id
            )
        )
        return result.scalar_one_or_none()

    async def get_by_name(
        self, db: AsyncSession, family_tree_id: int, type_name: str
    ) -> Optional[AchievementType]:
        """Get a type of the tree by name, case-insensitively."""
        result = await db.execute(
            select(AchievementType).where(
                AchievementType.family_tree_id == family_tree_id,
                func.lower(AchievementType.type_name) == type_name.lower(),
            )
        )
        return result.scalars().first()

    async def list_for_tree(self, db: AsyncSession, family_tree_id: int) -> List[AchievementType]:
        """Types of a tree ordered by name."""
        result = await db.execute(
            select(AchievementType)
            .where(AchievementType.family_tree_id == family_tree_id)
            .order_by(AchievementType.type_name)
        )
        return list(result.scalars().all())

    async def create(self, db: AsyncSession, *, obj_in: dict[str, Any]) -> AchievementType:
        """Create a type."""
        achievement_type = AchievementType(**obj_in)
        db.add(achievement_type)
        await db.flush()
        return achievement_type


class AchievementRepository(AchievementRepositoryProtocol):
    """SQLAlchemy access to ``achievement`` rows."""

    def _in_tree(self, family_tree_id: int):
        return (
            select(Achievement)
            .join(FamilyMember, Achievement.family_member_id == FamilyMember.id)
            .where(FamilyMember.family_tree_id == family_tree_id)
        )

    async def get_in_tree(
        self, db: AsyncSession, family_tree_id: int, id: int
    ) -> Optional[Achievement]:
        """Get an achievement by ID only if its member belongs to the tree."""
        result = await db.execute(self._in_tree(family_tree_id).where(Achievement.id == id))
        return result.unique().scalar_one_or_none()

    async def list_for_tree(
        self, db: AsyncSession, family_tree_id: int, *, year: Optional[int] = None
    ) -> List[Achievement]:
        """Achievements in a tree, latest first, optionally for one year."""
        query = self._in_tree(family_tree_id)
        if year is not None:
            query = query.where(extract("year", Achievement.achieve_date) == year)
        result = await db.execute(
            query.order_by(Achievement.achieve_date.desc(), Achievement.id.desc())
        )
        return list(result.unique().scalars().all())

    async def create(self, db: AsyncSession, *, obj_in: dict[str, Any]) -> Achievement:
        """Create an achievement."""
        achievement = Achievement(**obj_in)
        db.add(achievement)
        await db.flush()
        return achievement

    async def update(
        self, db: AsyncSession, *, db_obj: Achievement, obj_in: dict[str, Any]
    ) -> Achievement:
        """Update an achievement."""
        for field, value in obj_in.items():
            setattr(db_obj, field, value)
        db.add(db_obj)
        await db.flush()
        return db_obj

    async def remove(self, db: AsyncSession, *, db_obj: Achievement) -> None:
        """Delete an achievement."""
        await db.delete(db_obj)
        await db.flush()
