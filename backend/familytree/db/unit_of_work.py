"""Unit of work for compound writes.

Wraps an ``AsyncSession`` so a group of repository calls commits together, or
not at all.

Usage:
    async with UnitOfWork(db):
        user = await user_repo.create(db, obj_in=...)
        await tree_owner_repo.create(db, obj_in={"user_id": user.id, ...})
    # committed here; rolled back if the block raised
"""

from types import TracebackType
from typing import Optional, Type

from sqlalchemy.ext.asyncio import AsyncSession


class UnitOfWork:
    """Commit on clean exit, roll back on error."""

    def __init__(self, session: AsyncSession) -> None:
        """Bind to the request session."""
        self.session = session
        self.committed = False

    async def __aenter__(self) -> "UnitOfWork":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> bool:
        if exc_type is not None:
            await self.rollback()
            return False
        if not self.committed:
            await self.commit()
        return False

    async def commit(self) -> None:
        """Commit the pending changes."""
        await self.session.commit()
        self.committed = True

    async def rollback(self) -> None:
        """Discard the pending changes."""
        await self.session.rollback()
