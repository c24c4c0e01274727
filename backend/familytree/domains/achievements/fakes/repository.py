"""Fake achievement repositories for testing."""

from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from familytree.models.achievement import Achievement, AchievementType


class FakeAchievementTypeRepository:
    """In-memory fake for AchievementTypeRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize with an empty store."""
        self._store: dict[int, AchievementType] = {}
        self._calls: list[tuple[Any, ...]] = []
        self._next_id = 1

    def seed(self, **fields: Any) -> AchievementType:
        """Store a type directly and return it."""
        achievement_type = AchievementType(id=self._next_id, **fields)
        self._store[achievement_type.id] = achievement_type
        self._next_id += 1
        return achievement_type

    async def get_in_tree(
        self, db: AsyncSession, family_tree_id: int, id: int
    ) -> Optional[AchievementType]:
        """Get a type only if it belongs to the tree."""
        self._calls.append(("get_in_tree", db, family_tree_id, id))
        achievement_type = self._store.get(id)
        if achievement_type is None or achievement_type.family_tree_id != family_tree_id:
            return None
        return achievement_type

    async def get_by_name(
        self, db: AsyncSession, family_tree_id: int, type_name: str
    ) -> Optional[AchievementType]:
        """Get a type of the tree by name, ignoring case."""
        self._calls.append(("get_by_name", db, family_tree_id, type_name))
        for achievement_type in self._store.values():
            if (
                achievement_type.family_tree_id == family_tree_id
                and achievement_type.type_name.lower() == type_name.lower()
            ):
                return achievement_type
        return None

    async def list_for_tree(self, db: AsyncSession, family_tree_id: int) -> List[AchievementType]:
        """Types of a tree ordered by name."""
        self._calls.append(("list_for_tree", db, family_tree_id))
        types = [t for t in self._store.values() if t.family_tree_id == family_tree_id]
        return sorted(types, key=lambda t: t.type_name)

    async def create(self, db: AsyncSession, *, obj_in: dict[str, Any]) -> AchievementType:
        """Store a new type."""
        self._calls.append(("create", db, obj_in))
        return self.seed(**obj_in)


class FakeAchievementRepository:
    """In-memory fake for AchievementRepositoryProtocol.

    Achievements must carry their ``family_member`` so tree scoping can be
    resolved.
    """

    def __init__(self) -> None:
        """Initialize with an empty store."""
        self._store: dict[int, Achievement] = {}
        self._calls: list[tuple[Any, ...]] = []
        self._next_id = 1

    async def get_in_tree(
        self, db: AsyncSession, family_tree_id: int, id: int
    ) -> Optional[Achievement]:
        """Get an achievement if its member belongs to the tree."""
        self._calls.append(("get_in_tree", db, family_tree_id, id))
        achievement = self._store.get(id)
        if achievement is None or achievement.family_member.family_tree_id != family_tree_id:
            return None
        return achievement

    async def list_for_tree(
        self, db: AsyncSession, family_tree_id: int, *, year: Optional[int] = None
    ) -> List[Achievement]:
        """Achievements in a tree, latest first."""
        self._calls.append(("list_for_tree", db, family_tree_id, year))
        achievements = [
            a
            for a in self._store.values()
            if a.family_member.family_tree_id == family_tree_id
            and (year is None or a.achieve_date.year == year)
        ]
        return sorted(achievements, key=lambda a: (a.achieve_date, a.id), reverse=True)

    async def create(self, db: AsyncSession, *, obj_in: dict[str, Any]) -> Achievement:
        """Store a new achievement."""
        self._calls.append(("create", db, obj_in))
        achievement = Achievement(id=self._next_id, **obj_in)
        self._store[achievement.id] = achievement
        self._next_id += 1
        return achievement

    async def update(
        self, db: AsyncSession, *, db_obj: Achievement, obj_in: dict[str, Any]
    ) -> Achievement:
        """Apply field changes in place."""
        self._calls.append(("update", db, db_obj.id, obj_in))
        for field, value in obj_in.items():
            setattr(db_obj, field, value)
        return db_obj

    async def remove(self, db: AsyncSession, *, db_obj: Achievement) -> None:
        """Drop an achievement from the store."""
        self._calls.append(("remove", db, db_obj.id))
        self._store.pop(db_obj.id, None)
