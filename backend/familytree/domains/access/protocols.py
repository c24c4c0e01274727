"""Protocols for the access guard."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from familytree.api.context import ApiContext
from familytree.core.shared_models import AccessLevel
from familytree.models.family_member import FamilyMember
from familytree.models.family_tree import FamilyTree


class AccessGuardProtocol(Protocol):
    """Decides whether a session may act on a tree or a member."""

    async def authorize_tree(
        self,
        db: AsyncSession,
        ctx: ApiContext,
        family_tree_id: int,
        level: AccessLevel = AccessLevel.READ,
    ) -> FamilyTree:
        """Return the tree if the caller may act on it at ``level``."""
        ...

    async def authorize_member(
        self,
        db: AsyncSession,
        ctx: ApiContext,
        member_id: int,
        level: AccessLevel = AccessLevel.READ,
    ) -> FamilyMember:
        """Return the member if the caller may act on it at ``level``."""
        ...
