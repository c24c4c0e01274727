"""Fake family member repository for testing."""

from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from familytree.core.datetime_utils import utc_now
from familytree.models.family_member import FamilyMember, Occupation, PlaceOfOrigin


class FakeFamilyMemberRepository:
    """In-memory fake for FamilyMemberRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize with an empty store."""
        self._store: dict[int, FamilyMember] = {}
        self._pictures: dict[int, tuple[bytes, str]] = {}
        self._calls: list[tuple[Any, ...]] = []
        self._next_id = 1

    def seed(self, **fields: Any) -> FamilyMember:
        """Store a member directly and return it."""
        fields.setdefault("is_root_person", False)
        member = FamilyMember(
            id=fields.pop("id", self._next_id),
            created_at=utc_now(),
            modified_at=utc_now(),
            **fields,
        )
        member.occupations = []
        member.places_of_origin = []
        self._store[member.id] = member
        self._next_id = max(self._next_id, member.id) + 1
        return member

    async def get(self, db: AsyncSession, id: int) -> Optional[FamilyMember]:
        """Get a member by ID in any tree."""
        self._calls.append(("get", db, id))
        return self._store.get(id)

    async def get_in_tree(
        self, db: AsyncSession, family_tree_id: int, id: int
    ) -> Optional[FamilyMember]:
        """Get a member by ID only if it belongs to the tree."""
        self._calls.append(("get_in_tree", db, family_tree_id, id))
        member = self._store.get(id)
        if member is None or member.family_tree_id != family_tree_id:
            return None
        return member

    async def list_for_tree(self, db: AsyncSession, family_tree_id: int) -> List[FamilyMember]:
        """Members of a tree ordered by name."""
        self._calls.append(("list_for_tree", db, family_tree_id))
        members = [m for m in self._store.values() if m.family_tree_id == family_tree_id]
        return sorted(members, key=lambda m: (m.full_name, m.id))

    async def count_for_tree(self, db: AsyncSession, family_tree_id: int) -> int:
        """Number of members in a tree."""
        self._calls.append(("count_for_tree", db, family_tree_id))
        return sum(1 for m in self._store.values() if m.family_tree_id == family_tree_id)

    async def create(
        self,
        db: AsyncSession,
        *,
        obj_in: dict[str, Any],
        occupations: List[dict[str, Any]],
        places_of_origin: List[dict[str, Any]],
    ) -> FamilyMember:
        """Store a new member with its child rows."""
        self._calls.append(("create", db, obj_in))
        member = self.seed(**obj_in)
        member.occupations = [
            Occupation(id=i + 1, family_member_id=member.id, **o)
            for i, o in enumerate(occupations)
        ]
        member.places_of_origin = [
            PlaceOfOrigin(id=i + 1, family_member_id=member.id, **p)
            for i, p in enumerate(places_of_origin)
        ]
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
        """Apply field changes in place."""
        self._calls.append(("update", db, db_obj.id, obj_in))
        for field, value in obj_in.items():
            setattr(db_obj, field, value)
        if occupations is not None:
            db_obj.occupations = [
                Occupation(id=i + 1, family_member_id=db_obj.id, **o)
                for i, o in enumerate(occupations)
            ]
        if places_of_origin is not None:
            db_obj.places_of_origin = [
                PlaceOfOrigin(id=i + 1, family_member_id=db_obj.id, **p)
                for i, p in enumerate(places_of_origin)
            ]
        db_obj.modified_at = utc_now()
        return db_obj

    async def remove(self, db: AsyncSession, *, db_obj: FamilyMember) -> None:
        """Drop a member from the store."""
        self._calls.append(("remove", db, db_obj.id))
        self._store.pop(db_obj.id, None)
        self._pictures.pop(db_obj.id, None)

    async def get_profile_picture(
        self, db: AsyncSession, id: int
    ) -> Optional[tuple[bytes, str]]:
        """Stored picture bytes and content type."""
        self._calls.append(("get_profile_picture", db, id))
        return self._pictures.get(id)

    async def set_profile_picture(
        self, db: AsyncSession, *, db_obj: FamilyMember, data: bytes, content_type: str
    ) -> FamilyMember:
        """Store a picture for a member."""
        self._calls.append(("set_profile_picture", db, db_obj.id, len(data)))
        self._pictures[db_obj.id] = (data, content_type)
        db_obj.profile_picture_content_type = content_type
        return db_obj
