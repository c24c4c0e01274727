"""Family member repository."""

from typing import Any, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from familytree.domains.members.protocols import FamilyMemberRepositoryProtocol
from familytree.models.family_member import FamilyMember, Occupation, PlaceOfOrigin


class FamilyMemberRepository(FamilyMemberRepositoryProtocol):
    """SQLAlchemy access to ``family_member`` rows."""

    async def get(self, db: AsyncSession, id: int) -> Optional[FamilyMember]:
        """Get a member by ID in any tree."""
        return await db.get(FamilyMember, id)

    async def get_in_tree(
        self, db: AsyncSession, family_tree_id: int, id: int
    ) -> Optional[FamilyMember]:
        """Get a member by ID only if it belongs to the tree."""
        result = await db.execute(
            select(FamilyMember).where(
                FamilyMember.id == id, FamilyMember.family_tree_id == family_tree_id
            )
        )
        return result.scalar_one_or_none()

    async def list_for_tree(self, db: AsyncSession, family_tree_id: int) -> List[FamilyMember]:
        """Members of a tree ordered by name."""
        result = await db.execute(
            select(FamilyMember)
            .where(FamilyMember.family_tree_id == family_tree_id)
            .order_by(FamilyMember.full_name, FamilyMember.id)
        )
        return list(result.scalars().all())

    async def count_for_tree(self, db: AsyncSession, family_tree_id: int) -> int:
        """Number of members in a tree."""
        result = await db.execute(
            select(func.count(FamilyMember.id)).where(
                FamilyMember.family_tree_id == family_tree_id
            )
        )
        return result.scalar_one()

    async def create(
        self,
        db: AsyncSession,
        *,
        obj_in: dict[str, Any],
        occupations: List[dict[str, Any]],
        places_of_origin: List[dict[str, Any]],
    ) -> FamilyMember:
        """Create a member with its occupations and places of origin."""
        member = FamilyMember(**obj_in)
        member.occupations = [Occupation(**o) for o in occupations]
        member.places_of_origin = [PlaceOfOrigin(**p) for p in places_of_origin]
        db.add(member)
        await db.flush()
        return member

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: FamilyMember,
        obj_in: dict[str, Any],
        occupations: Optional[List[dict[str, Any]]] = None,
        places_of_origin: Optional[List[dict[str, Any]]] = None,
    ) -> FamilyMember:
        """Update a member. Given lists replace the stored ones."""
        for field, value in obj_in.items():
            setattr(db_obj, field, value)
        if occupations is not None:
            db_obj.occupations = [Occupation(**o) for o in occupations]
        if places_of_origin is not None:
            db_obj.places_of_origin = [PlaceOfOrigin(**p) for p in places_of_origin]
        db.add(db_obj)
        await db.flush()
        return db_obj

    async def remove(self, db: AsyncSession, *, db_obj: FamilyMember) -> None:
        """Delete a member."""
        await db.delete(db_obj)
        await db.flush()

    async def get_profile_picture(
        self, db: AsyncSession, id: int
    ) -> Optional[tuple[bytes, str]]:
        """Picture bytes and content type, if one is stored."""
        result = await db.execute(
            select(FamilyMember.profile_picture, FamilyMember.profile_picture_content_type).where(
                FamilyMember.id == id
            )
        )
        row = result.one_or_none()
        if row is None or row.profile_picture is None:
            return None
        return row.profile_picture, row.profile_picture_content_type or "application/octet-stream"

    async def set_profile_picture(
        self, db: AsyncSession, *, db_obj: FamilyMember, data: bytes, content_type: str
    ) -> FamilyMember:
        """Store a new picture for a member."""
        db_obj.profile_picture = data
        db_obj.profile_picture_content_type = content_type
        db.add(db_obj)
        await db.flush()
        return db_obj
