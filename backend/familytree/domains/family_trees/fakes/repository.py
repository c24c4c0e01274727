"""Fake family tree repository for testing."""

from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from familytree.core.datetime_utils import utc_now
from familytree.domains.users.fakes.repository import FakeTreeOwnerRepository
from familytree.models.family_tree import FamilyTree


class FakeFamilyTreeRepository:
    """In-memory fake for FamilyTreeRepositoryProtocol.

    Ownership is resolved through ``owners``, a map of tree owner id to user
    id, falling back to the owner profiles of an optional fake tree owner
    repository.
    """

    def __init__(self, tree_owner_repo: Optional[FakeTreeOwnerRepository] = None) -> None:
        """Initialize with an empty store."""
        self._tree_owner_repo = tree_owner_repo
        self._store: dict[int, FamilyTree] = {}
        self._calls: list[tuple[Any, ...]] = []
        self._next_id = 1
        self.owners: dict[int, int] = {}

    def seed(self, *, user_id: Optional[int] = None, **fields: Any) -> FamilyTree:
        """Store a tree directly. ``user_id`` registers who owns it."""
        fields.setdefault("tree_owner_id", user_id or 1)
        tree = FamilyTree(
            id=fields.pop("id", self._next_id),
            created_at=utc_now(),
            modified_at=utc_now(),
            **fields,
        )
        self._store[tree.id] = tree
        self._next_id = max(self._next_id, tree.id) + 1
        if user_id is not None:
            self.owners[tree.tree_owner_id] = user_id
        return tree

    def _owned_by(self, tree: FamilyTree, user_id: int) -> bool:
        if tree.tree_owner_id in self.owners:
            return self.owners[tree.tree_owner_id] == user_id
        if self._tree_owner_repo is not None:
            owner = self._tree_owner_repo._store.get(tree.tree_owner_id)
            return owner is not None and owner.user_id == user_id
        return False

    async def get(self, db: AsyncSession, id: int) -> Optional[FamilyTree]:
        """Get a tree by ID, regardless of owner."""
        self._calls.append(("get", db, id))
        return self._store.get(id)

    async def get_for_owner(
        self, db: AsyncSession, id: int, user_id: int
    ) -> Optional[FamilyTree]:
        """Get a tree only if ``user_id`` owns it."""
        self._calls.append(("get_for_owner", db, id, user_id))
        tree = self._store.get(id)
        if tree is None or not self._owned_by(tree, user_id):
            return None
        return tree

    async def list_for_owner(self, db: AsyncSession, user_id: int) -> List[FamilyTree]:
        """Trees owned by a user, newest first."""
        self._calls.append(("list_for_owner", db, user_id))
        trees = [t for t in self._store.values() if self._owned_by(t, user_id)]
        return sorted(trees, key=lambda t: t.id, reverse=True)

    async def count_for_owner(self, db: AsyncSession, user_id: int) -> int:
        """Number of trees owned by a user."""
        self._calls.append(("count_for_owner", db, user_id))
        return sum(1 for t in self._store.values() if self._owned_by(t, user_id))

    async def create(self, db: AsyncSession, *, obj_in: dict[str, Any]) -> FamilyTree:
        """Store a new tree."""
        self._calls.append(("create", db, obj_in))
        return self.seed(**obj_in)

    async def update(
        self, db: AsyncSession, *, db_obj: FamilyTree, obj_in: dict[str, Any]
    ) -> FamilyTree:
        """Apply field changes in place."""
        self._calls.append(("update", db, db_obj.id, obj_in))
        for field, value in obj_in.items():
            setattr(db_obj, field, value)
        return db_obj

    async def remove(self, db: AsyncSession, *, db_obj: FamilyTree) -> None:
        """Drop a tree from the store."""
        self._calls.append(("remove", db, db_obj.id))
        self._store.pop(db_obj.id, None)
