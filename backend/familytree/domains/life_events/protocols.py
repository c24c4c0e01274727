"""Protocols for marriages, divorces and birth records."""

from typing import Any, List, Optional, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.api.context import ApiContext
from familytree.models.family_tree import FamilyTree
from familytree.models.spouse_relationship import SpouseRelationship


class SpouseRelationshipRepositoryProtocol(Protocol):
    """Data access for spouse relationships."""

    async def get_in_tree(
        self, db: AsyncSession, family_tree_id: int, id: int
    ) -> Optional[SpouseRelationship]:
        """Get a relationship by ID only if its members belong to the tree."""
        ...

    async def get_pair(
        self, db: AsyncSession, member1_id: int, member2_id: int
    ) -> Optional[SpouseRelationship]:
        """Get the relationship between two members, in either order."""
        ...

    async def list_for_tree(
        self, db: AsyncSession, family_tree_id: int, *, open_only: bool = False
    ) -> List[SpouseRelationship]:
        """Relationships in a tree, most recent marriage first."""
        ...

    async def create(self, db: AsyncSession, *, obj_in: dict[str, Any]) -> SpouseRelationship:
        """Create a relationship."""
        ...

    async def update(
        self, db: AsyncSession, *, db_obj: SpouseRelationship, obj_in: dict[str, Any]
    ) -> SpouseRelationship:
        """Update a relationship."""
        ...


class LifeEventServiceProtocol(Protocol):
    """Marriages, divorces and birth records within a tree."""

    async def list_marriages(
        self, db: AsyncSession, *, tree: FamilyTree
    ) -> List[schemas.SpouseRelationship]:
        """All marriages in a tree, most recent first."""
        ...

    async def get_marriage(
        self, db: AsyncSession, *, tree: FamilyTree, relationship_id: int
    ) -> schemas.SpouseRelationship:
        """One marriage in a tree."""
        ...

    async def record_marriage(
        self,
        db: AsyncSession,
        *,
        tree: FamilyTree,
        marriage_in: schemas.MarriageCreate,
        ctx: ApiContext,
    ) -> schemas.SpouseRelationship:
        """Marry two members of the tree."""
        ...

    async def list_divorce_candidates(
        self, db: AsyncSession, *, tree: FamilyTree
    ) -> List[schemas.SpouseRelationship]:
        """Marriages in a tree that have no divorce recorded."""
        ...

    async def record_divorce(
        self,
        db: AsyncSession,
        *,
        tree: FamilyTree,
        divorce_in: schemas.DivorceCreate,
        ctx: ApiContext,
    ) -> schemas.SpouseRelationship:
        """Close a marriage with a divorce date."""
        ...

    async def get_birth_record(
        self, db: AsyncSession, *, tree: FamilyTree, child_id: int
    ) -> schemas.BirthRecord:
        """Parent and birth date of a child."""
        ...

    async def update_birth_record(
        self,
        db: AsyncSession,
        *,
        tree: FamilyTree,
        child_id: int,
        birth_in: schemas.BirthRecordUpdate,
        ctx: ApiContext,
    ) -> schemas.BirthRecord:
        """Change the recorded birth date of a child."""
        ...
