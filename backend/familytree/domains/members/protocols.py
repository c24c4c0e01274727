"""Protocols for the family member domain."""

from typing import Any, List, Optional, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.api.context import ApiContext
from familytree.models.family_member import FamilyMember
from familytree.models.family_tree import FamilyTree


class FamilyMemberRepositoryProtocol(Protocol):
    """Data access for family members."""

    async def get(self, db: AsyncSession, id: int) -> Optional[FamilyMember]:
        """Get a member by ID in any tree."""
        ...

    async def get_in_tree(
        self, db: AsyncSession, family_tree_id: int, id: int
    ) -> Optional[FamilyMember]:
        """Get a member by ID only if it belongs to the tree."""
        ...

    async def list_for_tree(self, db: AsyncSession, family_tree_id: int) -> List[FamilyMember]:
        """Members of a tree ordered by name."""
        ...

    async def count_for_tree(self, db: AsyncSession, family_tree_id: int) -> int:
        """Number of members in a tree."""
        ...

    async def create(
        self,
        db: AsyncSession,
        *,
        obj_in: dict[str, Any],
        occupations: List[dict[str, Any]],
        places_of_origin: List[dict[str, Any]],
    ) -> FamilyMember:
        """Create a member with its occupations and places of origin."""
        ...

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
        ...

    async def remove(self, db: AsyncSession, *, db_obj: FamilyMember) -> None:
        """Delete a member."""
        ...

    async def get_profile_picture(
        self, db: AsyncSession, id: int
    ) -> Optional[tuple[bytes, str]]:
        """Picture bytes and content type, if one is stored."""
        ...

    async def set_profile_picture(
        self, db: AsyncSession, *, db_obj: FamilyMember, data: bytes, content_type: str
    ) -> FamilyMember:
        """Store a new picture for a member."""
        ...


class FamilyMemberServiceProtocol(Protocol):
    """Member lifecycle. Callers pass trees and members cleared by the access guard."""

    async def list_for_tree(
        self, db: AsyncSession, *, tree: FamilyTree
    ) -> List[schemas.FamilyMemberSummary]:
        """Members of a tree ordered by name."""
        ...

    async def list_details_for_tree(
        self, db: AsyncSession, *, tree: FamilyTree
    ) -> List[schemas.FamilyMember]:
        """Members of a tree with occupations and places of origin."""
        ...

    async def get(self, db: AsyncSession, *, member: FamilyMember) -> schemas.FamilyMember:
        """Full member record."""
        ...

    async def create(
        self,
        db: AsyncSession,
        *,
        tree: FamilyTree,
        member_in: schemas.FamilyMemberCreate,
        ctx: ApiContext,
    ) -> schemas.FamilyMember:
        """Add a member, deriving generation and links from the related member."""
        ...

    async def update(
        self,
        db: AsyncSession,
        *,
        member: FamilyMember,
        member_in: schemas.FamilyMemberUpdate,
        ctx: ApiContext,
    ) -> schemas.FamilyMember:
        """Edit a member profile."""
        ...

    async def delete(
        self, db: AsyncSession, *, member: FamilyMember, ctx: ApiContext
    ) -> schemas.FamilyMember:
        """Delete a member other than the root person."""
        ...

    async def get_profile_picture(
        self, db: AsyncSession, *, member: FamilyMember
    ) -> tuple[bytes, str]:
        """Picture bytes and content type."""
        ...

    async def set_profile_picture(
        self,
        db: AsyncSession,
        *,
        member: FamilyMember,
        data: bytes,
        content_type: str,
        ctx: ApiContext,
    ) -> schemas.FamilyMember:
        """Replace a member's picture."""
        ...
