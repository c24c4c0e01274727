"""Protocols for the change log domain."""

from typing import Any, List, Optional, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.api.context import ApiContext
from familytree.core.shared_models import ChangeAction, EntityType
from familytree.models.change_log import ChangeLog


class ChangeLogRepositoryProtocol(Protocol):
    """Append-only data access for change log rows."""

    async def create(self, db: AsyncSession, *, obj_in: dict[str, Any]) -> ChangeLog:
        """Insert a change log row."""
        ...

    async def list_for_tree(
        self, db: AsyncSession, family_tree_id: int, *, limit: int = 100
    ) -> List[ChangeLog]:
        """Newest rows first for one tree."""
        ...


class ChangeLoggerProtocol(Protocol):
    """Records audit rows for mutations and reads them back."""

    async def record(
        self,
        db: AsyncSession,
        ctx: ApiContext,
        *,
        entity_type: EntityType,
        entity_id: int,
        action: ChangeAction,
        family_tree_id: int,
        old_values: Optional[dict[str, Any]] = None,
        new_values: Optional[dict[str, Any]] = None,
    ) -> None:
        """Append one audit row. Never raises."""
        ...

    async def list_for_tree(
        self, db: AsyncSession, family_tree_id: int, *, limit: int = 100
    ) -> List[schemas.ChangeLog]:
        """Newest audit rows first for one tree."""
        ...
