"""Change logger: best-effort audit trail for mutations."""

from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.api.context import ApiContext
from familytree.core.shared_models import ChangeAction, EntityType
from familytree.domains.change_logs.protocols import (
    ChangeLoggerProtocol,
    ChangeLogRepositoryProtocol,
)


class ChangeLogger(ChangeLoggerProtocol):
    """Writes one audit row per mutation after the mutation has committed.

    The row is inserted inside a savepoint. A failure rolls back only that
    savepoint and is logged. The caller's mutation stays committed and the
    objects it loaded stay usable.
    """

    def __init__(self, change_log_repo: ChangeLogRepositoryProtocol) -> None:
        """Initialize with injected dependencies."""
        self._change_log_repo = change_log_repo

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
        obj_in = {
            "entity_type": entity_type.value,
            "entity_id": entity_id,
            "action": action.value,
            "family_tree_id": family_tree_id,
            "user_id": ctx.user_id,
            "guest_editor_id": ctx.guest_editor_id,
            "old_values": old_values,
            "new_values": new_values,
        }
        try:
            async with db.begin_nested():
                await self._change_log_repo.create(db, obj_in=obj_in)
            await db.commit()
        except Exception as e:
            ctx.logger.exception(
                f"Failed to write change log for {entity_type.value} {entity_id} "
                f"({action.value}): {e}"
            )

    async def list_for_tree(
        self, db: AsyncSession, family_tree_id: int, *, limit: int = 100
    ) -> List[schemas.ChangeLog]:
        """Newest audit rows first for one tree."""
        rows = await self._change_log_repo.list_for_tree(db, family_tree_id, limit=limit)
        return [schemas.ChangeLog.model_validate(r) for r in rows]
