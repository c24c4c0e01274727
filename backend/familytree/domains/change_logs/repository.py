"""Change log repository."""

from typing import Any, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from familytree.domains.change_logs.protocols import ChangeLogRepositoryProtocol
from familytree.models.change_log import ChangeLog


class ChangeLogRepository(ChangeLogRepositoryProtocol):
    """Insert and list change log rows. There is no update or delete path."""

    async def create(self, db: AsyncSession, *, obj_in: dict[str, Any]) -> ChangeLog:
        """Insert a change log row."""
        row = ChangeLog(**obj_in)
        db.add(row)
        await db.flush()
        return row

    async def list_for_tree(
        self, db: AsyncSession, family_tree_id: int, *, limit: int = 100
    ) -> List[ChangeLog]:
        """Newest rows first for one tree."""
        result = await db.execute(
            select(ChangeLog)
            .where(ChangeLog.family_tree_id == family_tree_id)
            .order_by(ChangeLog.created_at.desc(), ChangeLog.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
