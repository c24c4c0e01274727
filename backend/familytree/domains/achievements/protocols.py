"""Protocols for the achievements domain."""

from typing import Any, List, Optional, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.api.context import ApiContext
from familytree.models.achievement import Achievement, AchievementType
from familytree.models.family_tree import FamilyTree


class AchievementTypeRepositoryProtocol(Protocol):
    """Data access for tree-specific achievement types."""

    async def get_in_tree(
        self, db: AsyncSession, family_tree_id: int, id: int
    ) -> Optional[AchievementType]:
        """Get a type by ID only if it belongs to the tree."""
        ...

    async def get_by_name(
        self, db: AsyncSession, family_tree_id: int, type_name: str
    ) -> Optional[AchievementType]:
        """Get a type of the tree by name, case-insensitively."""
        ...

    async def list_for_tree(self, db: AsyncSession, family_tree_id: int) -> List[AchievementType]:
        """Types of a tree ordered by name."""
        ...

    async def create(self, db: AsyncSession, *, obj_in: dict[str, Any]) -> AchievementType:
        """Create a type."""
        ...


class AchievementRepositoryProtocol(Protocol):
    """Data access for achievements."""

    async def get_in_tree(
        self, db: AsyncSession, family_tree_id: int, id: int
    ) -> Optional[Achievement]:
        """Get an achievement by ID only if its member belongs to the tree."""
        ...

    async def list_for_tree(
        self, db: AsyncSession, family_tree_id: int, *, year: Optional[int] = None
    ) -> List[Achievement]:
        """Achievements in a tree, latest first, optionally for one year."""
        ...

    async def create(self, db: AsyncSession, *, obj_in: dict[str, Any]) -> Achievement:
        """Create an achievement."""
        ...

    async def update(
        self, db: AsyncSession, *, db_obj: Achievement, obj_in: dict[str, Any]
    ) -> Achievement:
        """Update an achievement."""
        ...

    async def remove(self, db: AsyncSession, *, db_obj: Achievement) -> None:
        """Delete an achievement."""
        ...


class AchievementServiceProtocol(Protocol):
    """Achievement types and achievements of a tree."""

    async def list_types(
        self, db: AsyncSession, *, tree: FamilyTree
    ) -> List[schemas.AchievementType]:
        """Types of a tree ordered by name."""
        ...

    async def create_type(
        self,
        db: AsyncSession,
        *,
        tree: FamilyTree,
        type_in: schemas.AchievementTypeCreate,
        ctx: ApiContext,
    ) -> schemas.AchievementType:
        """Add a type to a tree."""
        ...

    async def list(
        self, db: AsyncSession, *, tree: FamilyTree, year: Optional[int] = None
    ) -> List[schemas.Achievement]:
        """Achievements in a tree, latest first."""
        ...

    async def get(
        self, db: AsyncSession, *, tree: FamilyTree, achievement_id: int
    ) -> schemas.Achievement:
        """One achievement in a tree."""
        ...

    async def create(
        self,
        db: AsyncSession,
        *,
        tree: FamilyTree,
        achievement_in: schemas.AchievementCreate,
        ctx: ApiContext,
    ) -> schemas.Achievement:
        """Record an achievement for a member."""
        ...

    async def update(
        self,
        db: AsyncSession,
        *,
        tree: FamilyTree,
        achievement_id: int,
        achievement_in: schemas.AchievementUpdate,
        ctx: ApiContext,
    ) -> schemas.Achievement:
        """Edit an achievement."""
        ...

    async def delete(
        self, db: AsyncSession, *, tree: FamilyTree, achievement_id: int, ctx: ApiContext
    ) -> schemas.Achievement:
        """Delete an achievement."""
        ...
