"""User and tree owner repositories."""

from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from familytree.domains.users.protocols import (
    TreeOwnerRepositoryProtocol,
    UserRepositoryProtocol,
)
from familytree.models.user import TreeOwner, User


class UserRepository(UserRepositoryProtocol):
    """SQLAlchemy access to ``user`` rows."""

    async def get(self, db: AsyncSession, id: int) -> Optional[User]:
        """Get a user by ID."""
        return await db.get(User, id)

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        """Get a user by email, case-insensitively."""
        result = await db.execute(select(User).where(func.lower(User.email) == email.lower()))
        return result.scalar_one_or_none()

    async def create(self, db: AsyncSession, *, obj_in: dict[str, Any]) -> User:
        """Create a user."""
        user = User(**obj_in)
        db.add(user)
        await db.flush()
        return user

    async def update(self, db: AsyncSession, *, db_obj: User, obj_in: dict[str, Any]) -> User:
        """Update a user."""
        for field, value in obj_in.items():
            setattr(db_obj, field, value)
        db.add(db_obj)
        await db.flush()
        return db_obj

    async def remove(self, db: AsyncSession, *, db_obj: User) -> None:
        """Delete a user; owned trees go with it."""
        await db.delete(db_obj)
        await db.flush()


class TreeOwnerRepository(TreeOwnerRepositoryProtocol):
    """SQLAlchemy access to ``tree_owner`` rows."""

    async def get_by_user_id(self, db: AsyncSession, user_id: int) -> Optional[TreeOwner]:
        """Get the owner profile of a user."""
        result = await db.execute(select(TreeOwner).where(TreeOwner.user_id == user_id))
        return result.scalar_one_or_none()

    async def create(self, db: AsyncSession, *, obj_in: dict[str, Any]) -> TreeOwner:
        """Create an owner profile."""
        owner = TreeOwner(**obj_in)
        db.add(owner)
        await db.flush()
        return owner

    async def update(
        self, db: AsyncSession, *, db_obj: TreeOwner, obj_in: dict[str, Any]
    ) -> TreeOwner:
        """Update an owner profile."""
        for field, value in obj_in.items():
            setattr(db_obj, field, value)
        db.add(db_obj)
        await db.flush()
        return db_obj
