"""Fake spouse relationship repository for testing."""

from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from familytree.models.spouse_relationship import SpouseRelationship


class FakeSpouseRelationshipRepository:
    """In-memory fake for SpouseRelationshipRepositoryProtocol.

    Tree membership is read off ``family_member1``, so stored rows must carry
    their member objects.
    """

    def __init__(self) -> None:
        """Initialize with an empty store."""
        self._store: dict[int, SpouseRelationship] = {}
        self._calls: list[tuple[Any, ...]] = []
        self._next_id = 1

    def seed(self, member1, member2, **fields: Any) -> SpouseRelationship:
        """Store a relationship between two member objects."""
        first, second = sorted([member1, member2], key=lambda m: m.id)
        relationship = SpouseRelationship(
            id=self._next_id,
            family_member1_id=first.id,
            family_member2_id=second.id,
            family_member1=first,
            family_member2=second,
            **fields,
        )
        self._store[relationship.id] = relationship
        self._next_id += 1
        return relationship

    async def get_in_tree(
        self, db: AsyncSession, family_tree_id: int, id: int
    ) -> Optional[SpouseRelationship]:
        """Get a relationship if its members belong to the tree."""
        self._calls.append(("get_in_tree", db, family_tree_id, id))
        relationship = self._store.get(id)
        if relationship is None or relationship.family_member1.family_tree_id != family_tree_id:
            return None
        return relationship

    async def get_pair(
        self, db: AsyncSession, member1_id: int, member2_id: int
    ) -> Optional[SpouseRelationship]:
        """Get the relationship between two members, in either order."""
        self._calls.append(("get_pair", db, member1_id, member2_id))
        first, second = sorted((member1_id, member2_id))
        for relationship in self._store.values():
            if (relationship.family_member1_id, relationship.family_member2_id) == (first, second):
                return relationship
        return None

    async def list_for_tree(
        self, db: AsyncSession, family_tree_id: int, *, open_only: bool = False
    ) -> List[SpouseRelationship]:
        """Relationships in a tree, most recent marriage first."""
        self._calls.append(("list_for_tree", db, family_tree_id, open_only))
        rows = [
            r
            for r in self._store.values()
            if r.family_member1.family_tree_id == family_tree_id
            and (not open_only or r.divorce_date is None)
        ]
        return sorted(rows, key=lambda r: (r.marriage_date, r.id), reverse=True)

    async def create(self, db: AsyncSession, *, obj_in: dict[str, Any]) -> SpouseRelationship:
        """Store a new relationship."""
        self._calls.append(("create", db, obj_in))
        relationship = SpouseRelationship(id=self._next_id, **obj_in)
        self._store[relationship.id] = relationship
        self._next_id += 1
        return relationship

    async def update(
        self, db: AsyncSession, *, db_obj: SpouseRelationship, obj_in: dict[str, Any]
    ) -> SpouseRelationship:
        """Apply field changes in place."""
        self._calls.append(("update", db, db_obj.id, obj_in))
        for field, value in obj_in.items():
            setattr(db_obj, field, value)
        return db_obj
