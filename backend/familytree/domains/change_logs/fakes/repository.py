"""Fake change log repository for testing."""

from typing import Any, List

from sqlalchemy.ext.asyncio import AsyncSession

from familytree.core.datetime_utils import utc_now
from familytree.models.change_log import ChangeLog


class FakeChangeLogRepository:
    """In-memory fake for ChangeLogRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize with an empty store."""
        self._store: list[ChangeLog] = []
        self._calls: list[tuple[Any, ...]] = []
        self._next_id = 1
        self._fail_with: Exception | None = None

    def fail_with(self, exc: Exception) -> None:
        """Make every subsequent create raise ``exc``."""
        self._fail_with = exc

    @property
    def rows(self) -> list[ChangeLog]:
        """Rows written so far, oldest first."""
        return list(self._store)

    async def create(self, db: AsyncSession, *, obj_in: dict[str, Any]) -> ChangeLog:
        """Store a change log row."""
        self._calls.append(("create", db, obj_in))
        if self._fail_with is not None:
            raise self._fail_with
        row = ChangeLog(id=self._next_id, created_at=utc_now(), **obj_in)
        self._next_id += 1
        self._store.append(row)
        return row

    async def list_for_tree(
        self, db: AsyncSession, family_tree_id: int, *, limit: int = 100
    ) -> List[ChangeLog]:
        """Return stored rows for a tree, newest first."""
        self._calls.append(("list_for_tree", db, family_tree_id, limit))
        rows = [r for r in self._store if r.family_tree_id == family_tree_id]
        return list(reversed(rows))[:limit]
