"""Protocols for the family tree domain."""

from typing import Any, List, Optional, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.api.context import ApiContext
from familytree.models.family_tree import FamilyTree


class FamilyTreeRepositoryProtocol(Protocol):
    """Data access for family trees."""

    async def get(self, db: AsyncSession, id: int) -> Optional[FamilyTree]:
        """Get a tree by ID, regardless of owner."""
        ...

    async def get_for_owner(
        self, db: AsyncSession, id: int, user_id: int
    ) -> Optional[FamilyTree]:
        """Get a tree by ID only if ``user_id`` owns it."""
        ...

    async def list_for_owner(self, db: AsyncSession, user_id: int) -> List[FamilyTree]:
        """Trees owned by a user, newest first."""
        ...

    async def count_for_owner(self, db: AsyncSession, user_id: int) -> int:
        """Number of trees owned by a user."""
        ...

    async def create(self, db: AsyncSession, *, obj_in: dict[str, Any]) -> FamilyTree:
        """Create a tree."""
        ...

    async def update(
        self, db: AsyncSession, *, db_obj: FamilyTree, obj_in: dict[str, Any]
    ) -> FamilyTree:
        """Update a tree."""
        ...

    async def remove(self, db: AsyncSession, *, db_obj: FamilyTree) -> None:
        """Delete a tree and everything in it."""
        ...


class FamilyTreeServiceProtocol(Protocol):
    """Family tree lifecycle. Callers pass trees already cleared by the access guard."""

    async def list(self, db: AsyncSession, *, ctx: ApiContext) -> List[schemas.FamilyTree]:
        """Trees visible to the caller."""
        ...

    async def create(
        self, db: AsyncSession, *, tree_in: schemas.FamilyTreeCreate, ctx: ApiContext
    ) -> schemas.FamilyTree:
        """Create a tree owned by the caller."""
        ...

    async def update(
        self,
        db: AsyncSession,
        *,
        tree: FamilyTree,
        tree_in: schemas.FamilyTreeUpdate,
        ctx: ApiContext,
    ) -> schemas.FamilyTree:
        """Update tree settings."""
        ...

    async def delete(
        self, db: AsyncSession, *, tree: FamilyTree, ctx: ApiContext
    ) -> schemas.FamilyTree:
        """Delete a tree and everything in it."""
        ...
