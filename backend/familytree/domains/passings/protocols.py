"""Protocols for the passing records domain."""

from typing import Any, List, Optional, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.api.context import ApiContext
from familytree.models.family_tree import FamilyTree
from familytree.models.passing_record import PassingRecord


class PassingRecordRepositoryProtocol(Protocol):
    """Data access for passing records and their causes and burial places."""

    async def get_in_tree(
        self, db: AsyncSession, family_tree_id: int, id: int
    ) -> Optional[PassingRecord]:
        """Get a record by ID only if its member belongs to the tree."""
        ...

    async def get_by_member(self, db: AsyncSession, member_id: int) -> Optional[PassingRecord]:
        """The record of one member, if any."""
        ...

    async def list_for_tree(
        self, db: AsyncSession, family_tree_id: int, *, year: Optional[int] = None
    ) -> List[PassingRecord]:
        """Records in a tree, latest passing first, optionally for one year."""
        ...

    async def create(
        self,
        db: AsyncSession,
        *,
        obj_in: dict[str, Any],
        causes: List[str],
        buried_places: List[dict[str, Any]],
    ) -> PassingRecord:
        """Create a record with its causes and burial places."""
        ...

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
        ...

    async def remove(self, db: AsyncSession, *, db_obj: PassingRecord) -> None:
        """Delete a record with its causes and burial places."""
        ...


class PassingRecordServiceProtocol(Protocol):
    """Passing records of the members of a tree."""

    async def list(
        self, db: AsyncSession, *, tree: FamilyTree, year: Optional[int] = None
    ) -> List[schemas.PassingRecord]:
        """Records in a tree, latest passing first."""
        ...

    async def get(
        self, db: AsyncSession, *, tree: FamilyTree, record_id: int
    ) -> schemas.PassingRecord:
        """One record in a tree."""
        ...

    async def check(
        self, db: AsyncSession, *, tree: FamilyTree, member_id: int
    ) -> schemas.PassingRecordCheck:
        """Whether a member already has a record."""
        ...

    async def create(
        self,
        db: AsyncSession,
        *,
        tree: FamilyTree,
        record_in: schemas.PassingRecordCreate,
        ctx: ApiContext,
    ) -> schemas.PassingRecord:
        """Record the passing of a member."""
        ...

    async def update(
        self,
        db: AsyncSession,
        *,
        tree: FamilyTree,
        record_id: int,
        record_in: schemas.PassingRecordUpdate,
        ctx: ApiContext,
    ) -> schemas.PassingRecord:
        """Edit a record."""
        ...

    async def delete(
        self, db: AsyncSession, *, tree: FamilyTree, record_id: int, ctx: ApiContext
    ) -> schemas.PassingRecord:
        """Delete a record."""
        ...
