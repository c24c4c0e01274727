"""Fake passing record repository for testing."""

from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from familytree.models.passing_record import BuriedPlace, CauseOfDeath, PassingRecord


class FakePassingRecordRepository:
    """In-memory fake for PassingRecordRepositoryProtocol.

    Records must carry their ``family_member`` so tree scoping can be resolved.
    """

    def __init__(self) -> None:
        """Initialize with an empty store."""
        self._store: dict[int, PassingRecord] = {}
        self._calls: list[tuple[Any, ...]] = []
        self._next_id = 1
        self._child_id = 1

    def _children(self, causes: List[str], buried_places: List[dict[str, Any]]):
        cause_rows = []
        for cause in causes:
            cause_rows.append(CauseOfDeath(id=self._child_id, cause_name=cause))
            self._child_id += 1
        place_rows = []
        for place in buried_places:
            place_rows.append(BuriedPlace(id=self._child_id, **place))
            self._child_id += 1
        return cause_rows, place_rows

    async def get_in_tree(
        self, db: AsyncSession, family_tree_id: int, id: int
    ) -> Optional[PassingRecord]:
        """Get a record if its member belongs to the tree."""
        self._calls.append(("get_in_tree", db, family_tree_id, id))
        record = self._store.get(id)
        if record is None or record.family_member.family_tree_id != family_tree_id:
            return None
        return record

    async def get_by_member(self, db: AsyncSession, member_id: int) -> Optional[PassingRecord]:
        """The record of one member, if any."""
        self._calls.append(("get_by_member", db, member_id))
        for record in self._store.values():
            if record.family_member_id == member_id:
                return record
        return None

    async def list_for_tree(
        self, db: AsyncSession, family_tree_id: int, *, year: Optional[int] = None
    ) -> List[PassingRecord]:
        """Records in a tree, latest passing first."""
        self._calls.append(("list_for_tree", db, family_tree_id, year))
        records = [
            r
            for r in self._store.values()
            if r.family_member.family_tree_id == family_tree_id
            and (year is None or r.date_of_passing.year == year)
        ]
        return sorted(records, key=lambda r: (r.date_of_passing, r.id), reverse=True)

    async def create(
        self,
        db: AsyncSession,
        *,
        obj_in: dict[str, Any],
        causes: List[str],
        buried_places: List[dict[str, Any]],
    ) -> PassingRecord:
        """Store a new record with its children."""
        self._calls.append(("create", db, obj_in))
        record = PassingRecord(id=self._next_id, **obj_in)
        record.causes_of_death, record.buried_places = self._children(causes, buried_places)
        self._store[record.id] = record
        self._next_id += 1
        return record

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: PassingRecord,
        obj_in: dict[str, Any],
        causes: Optional[List[str]] = None,
        buried_places: Optional[List[dict[str, Any]]] = None,
    ) -> PassingRecord:
        """Apply changes in place. Given lists replace the stored ones."""
        self._calls.append(("update", db, db_obj.id, obj_in))
        for field, value in obj_in.items():
            setattr(db_obj, field, value)
        if causes is not None:
            db_obj.causes_of_death, _ = self._children(causes, [])
        if buried_places is not None:
            _, db_obj.buried_places = self._children([], buried_places)
        return db_obj

    async def remove(self, db: AsyncSession, *, db_obj: PassingRecord) -> None:
        """Drop a record from the store."""
        self._calls.append(("remove", db, db_obj.id))
        self._store.pop(db_obj.id, None)
