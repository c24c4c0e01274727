"""Protocols for the users domain."""

from typing import Any, Optional, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.api.context import ApiContext
from familytree.models.user import TreeOwner, User


class UserRepositoryProtocol(Protocol):
    """Data access for user records."""

    async def get(self, db: AsyncSession, id: int) -> Optional[User]:
        """Get a user by ID."""
        ...

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        """Get a user by email, case-insensitively."""
        ...

    async def create(self, db: AsyncSession, *, obj_in: dict[str, Any]) -> User:
        """Create a user."""
        ...

    async def update(self, db: AsyncSession, *, db_obj: User, obj_in: dict[str, Any]) -> User:
        """Update a user."""
        ...

    async def remove(self, db: AsyncSession, *, db_obj: User) -> None:
        """Delete a user; owned trees go with it."""
        ...


class TreeOwnerRepositoryProtocol(Protocol):
    """Data access for tree owner profiles."""

    async def get_by_user_id(self, db: AsyncSession, user_id: int) -> Optional[TreeOwner]:
        """Get the owner profile of a user."""
        ...

    async def create(self, db: AsyncSession, *, obj_in: dict[str, Any]) -> TreeOwner:
        """Create an owner profile."""
        ...

    async def update(
        self, db: AsyncSession, *, db_obj: TreeOwner, obj_in: dict[str, Any]
    ) -> TreeOwner:
        """Update an owner profile."""
        ...


class UserServiceProtocol(Protocol):
    """Registration, sign-in and account management."""

    async def register(self, db: AsyncSession, *, user_in: schemas.UserCreate) -> schemas.User:
        """Create a user together with their tree owner profile."""
        ...

    async def authenticate(
        self, db: AsyncSession, *, credentials: schemas.LoginRequest
    ) -> schemas.User:
        """Verify email and password."""
        ...

    async def get_account(self, db: AsyncSession, *, ctx: ApiContext) -> schemas.Account:
        """Account view of the signed-in owner."""
        ...

    async def update_account(
        self, db: AsyncSession, *, account_in: schemas.AccountUpdate, ctx: ApiContext
    ) -> schemas.Account:
        """Rename the user and their owner profile together."""
        ...

    async def change_password(
        self, db: AsyncSession, *, password_in: schemas.PasswordChange, ctx: ApiContext
    ) -> None:
        """Replace the password after checking the current one."""
        ...

    async def delete_account(
        self, db: AsyncSession, *, delete_in: schemas.AccountDelete, ctx: ApiContext
    ) -> schemas.AccountDeleteResult:
        """Delete the user and every tree they own."""
        ...
