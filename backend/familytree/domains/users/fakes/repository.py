"""Fake user and tree owner repositories for testing."""

from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from familytree.core.datetime_utils import utc_now
from familytree.models.user import TreeOwner, User


class FakeUserRepository:
    """In-memory fake for UserRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize with an empty store."""
        self._store: dict[int, User] = {}
        self._calls: list[tuple[Any, ...]] = []
        self._next_id = 1

    def seed(self, **fields: Any) -> User:
        """Store a user directly and return it."""
        user = User(
            id=fields.pop("id", self._next_id),
            created_at=utc_now(),
            modified_at=utc_now(),
            **fields,
        )
        self._store[user.id] = user
        self._next_id = max(self._next_id, user.id) + 1
        return user

    async def get(self, db: AsyncSession, id: int) -> Optional[User]:
        """Get a user by ID."""
        self._calls.append(("get", db, id))
        return self._store.get(id)

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        """Get a user by email, case-insensitively."""
        self._calls.append(("get_by_email", db, email))
        for user in self._store.values():
            if user.email.lower() == email.lower():
                return user
        return None

    async def create(self, db: AsyncSession, *, obj_in: dict[str, Any]) -> User:
        """Store a new user."""
        self._calls.append(("create", db, obj_in))
        return self.seed(**obj_in)

    async def update(self, db: AsyncSession, *, db_obj: User, obj_in: dict[str, Any]) -> User:
        """Apply field changes in place."""
        self._calls.append(("update", db, db_obj.id, obj_in))
        for field, value in obj_in.items():
            setattr(db_obj, field, value)
        return db_obj

    async def remove(self, db: AsyncSession, *, db_obj: User) -> None:
        """Drop a user from the store."""
        self._calls.append(("remove", db, db_obj.id))
        self._store.pop(db_obj.id, None)


class FakeTreeOwnerRepository:
    """In-memory fake for TreeOwnerRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize with an empty store."""
        self._store: dict[int, TreeOwner] = {}
        self._calls: list[tuple[Any, ...]] = []
        self._next_id = 1

    def seed(self, **fields: Any) -> TreeOwner:
        """Store an owner profile directly and return it."""
        owner = TreeOwner(
            id=fields.pop("id", self._next_id),
            created_at=utc_now(),
            modified_at=utc_now(),
            **fields,
        )
        self._store[owner.id] = owner
        self._next_id = max(self._next_id, owner.id) + 1
        return owner

    async def get_by_user_id(self, db: AsyncSession, user_id: int) -> Optional[TreeOwner]:
        """Get the owner profile of a user."""
        self._calls.append(("get_by_user_id", db, user_id))
        for owner in self._store.values():
            if owner.user_id == user_id:
                return owner
        return None

    async def create(self, db: AsyncSession, *, obj_in: dict[str, Any]) -> TreeOwner:
        """Store a new owner profile."""
        self._calls.append(("create", db, obj_in))
        return self.seed(**obj_in)

    async def update(
        self, db: AsyncSession, *, db_obj: TreeOwner, obj_in: dict[str, Any]
    ) -> TreeOwner:
        """Apply field changes in place."""
        self._calls.append(("update", db, db_obj.id, obj_in))
        for field, value in obj_in.items():
            setattr(db_obj, field, value)
        return db_obj
