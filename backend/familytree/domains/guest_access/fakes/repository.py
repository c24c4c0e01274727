"""Fake guest editor repository for testing."""

from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from familytree.models.guest_editor import GuestEditor


class FakeGuestEditorRepository:
    """In-memory fake for GuestEditorRepositoryProtocol.

    ``lose_next_race`` simulates a concurrent request winning the next write:
    the fake stores ``winner`` and then raises like a unique violation would.
    """

    def __init__(self) -> None:
        """Initialize with an empty store."""
        self._store: dict[int, GuestEditor] = {}
        self._calls: list[tuple[Any, ...]] = []
        self._next_id = 1
        self._race: Optional[tuple[dict[str, Any], Exception]] = None

    def seed(self, **fields: Any) -> GuestEditor:
        """Store a guest editor directly and return it."""
        guest_editor = GuestEditor(id=self._next_id, **fields)
        self._store[guest_editor.id] = guest_editor
        self._next_id += 1
        return guest_editor

    def lose_next_race(self, winner: dict[str, Any], exc: Exception) -> None:
        """Make the next create store ``winner`` instead and raise ``exc``."""
        self._race = (winner, exc)

    async def get(self, db: AsyncSession, id: int) -> Optional[GuestEditor]:
        """Get a guest editor by ID."""
        self._calls.append(("get", db, id))
        return self._store.get(id)

    async def get_by_code(self, db: AsyncSession, access_code: str) -> Optional[GuestEditor]:
        """Get the guest editor holding a code."""
        self._calls.append(("get_by_code", db, access_code))
        for guest_editor in self._store.values():
            if guest_editor.access_code == access_code:
                return guest_editor
        return None

    async def get_for_member(
        self, db: AsyncSession, family_tree_id: int, family_member_id: int
    ) -> Optional[GuestEditor]:
        """Get the guest editor of a (tree, member) pair."""
        self._calls.append(("get_for_member", db, family_tree_id, family_member_id))
        for guest_editor in self._store.values():
            if (
                guest_editor.family_tree_id == family_tree_id
                and guest_editor.family_member_id == family_member_id
            ):
                return guest_editor
        return None

    async def list_for_tree(self, db: AsyncSession, family_tree_id: int) -> List[GuestEditor]:
        """Guest editors of a tree, newest first."""
        self._calls.append(("list_for_tree", db, family_tree_id))
        rows = [g for g in self._store.values() if g.family_tree_id == family_tree_id]
        return sorted(rows, key=lambda g: (g.created_at, g.id), reverse=True)

    async def create(self, db: AsyncSession, *, obj_in: dict[str, Any]) -> GuestEditor:
        """Store a new guest editor."""
        self._calls.append(("create", db, obj_in))
        if self._race is not None:
            winner, exc = self._race
            self._race = None
            self.seed(**winner)
            raise exc
        return self.seed(**obj_in)

    async def rotate(
        self, db: AsyncSession, *, db_obj: GuestEditor, access_code: str, created_at: datetime
    ) -> Optional[GuestEditor]:
        """Replace the code of a row in place."""
        self._calls.append(("rotate", db, db_obj.id, access_code))
        db_obj.access_code = access_code
        db_obj.created_at = created_at
        return db_obj
