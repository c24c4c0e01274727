"""Fake change logger for testing other domains."""

from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.api.context import ApiContext
from familytree.core.datetime_utils import utc_now
from familytree.core.shared_models import ChangeAction, EntityType


class FakeChangeLogger:
    """In-memory fake for ChangeLoggerProtocol that keeps every recorded entry."""

    def __init__(self) -> None:
        """Initialize with no entries."""
        self.entries: list[dict[str, Any]] = []
        self._calls: list[tuple[Any, ...]] = []

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
        """Keep the entry in memory."""
        self._calls.append(("record", db, ctx, entity_type, entity_id, action))
        self.entries.append(
            {
                "entity_type": entity_type,
                "entity_id": entity_id,
                "action": action,
                "family_tree_id": family_tree_id,
                "user_id": ctx.user_id,
                "guest_editor_id": ctx.guest_editor_id,
                "old_values": old_values,
                "new_values": new_values,
            }
        )

    async def list_for_tree(
        self, db: AsyncSession, family_tree_id: int, *, limit: int = 100
    ) -> List[schemas.ChangeLog]:
        """Return recorded entries for a tree as schemas, newest first."""
        self._calls.append(("list_for_tree", db, family_tree_id, limit))
        rows = [
            schemas.ChangeLog(
                id=i + 1,
                entity_type=e["entity_type"].value,
                entity_id=e["entity_id"],
                action=e["action"].value,
                family_tree_id=e["family_tree_id"],
                user_id=e["user_id"],
                guest_editor_id=e["guest_editor_id"],
                old_values=e["old_values"],
                new_values=e["new_values"],
                created_at=utc_now(),
            )
            for i, e in enumerate(self.entries)
            if e["family_tree_id"] == family_tree_id
        ]
        return list(reversed(rows))[:limit]

    def actions_for(self, entity_type: EntityType) -> list[ChangeAction]:
        """Recorded actions for one entity type, in order."""
        return [e["action"] for e in self.entries if e["entity_type"] == entity_type]
