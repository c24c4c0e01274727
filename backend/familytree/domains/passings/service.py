"""Passing record service."""

from datetime import date
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.api.context import ApiContext
from familytree.core.datetime_utils import today
from familytree.core.shared_models import ChangeAction, EntityType
from familytree.db.unit_of_work import UnitOfWork
from familytree.domains.change_logs.protocols import ChangeLoggerProtocol
from familytree.domains.change_logs.snapshots import passing_record_snapshot
from familytree.domains.members.exceptions import FamilyMemberNotFoundError
from familytree.domains.members.protocols import FamilyMemberRepositoryProtocol
from familytree.domains.passings.exceptions import (
    DuplicatePassingRecordError,
    InvalidPassingDateError,
    PassingRecordNotFoundError,
)
from familytree.domains.passings.protocols import (
    PassingRecordRepositoryProtocol,
    PassingRecordServiceProtocol,
)
from familytree.models.family_member import FamilyMember
from familytree.models.family_tree import FamilyTree
from familytree.models.passing_record import PassingRecord


class PassingRecordService(PassingRecordServiceProtocol):
    """Domain service for passing records.

    A member has at most one record. The uniqueness check runs before the
    insert and the ``family_member_id`` unique constraint backs it up when two
    requests race.
    """

    def __init__(
        self,
        passing_repo: PassingRecordRepositoryProtocol,
        member_repo: FamilyMemberRepositoryProtocol,
        change_logger: ChangeLoggerProtocol,
    ) -> None:
        """Initialize with injected dependencies."""
        self._passing_repo = passing_repo
        self._member_repo = member_repo
        self._change_logger = change_logger

    async def list(
        self, db: AsyncSession, *, tree: FamilyTree, year: Optional[int] = None
    ) -> List[schemas.PassingRecord]:
        """Records in a tree, latest passing first."""
        records = await self._passing_repo.list_for_tree(db, tree.id, year=year)
        return [schemas.PassingRecord.model_validate(r) for r in records]

    async def get(
        self, db: AsyncSession, *, tree: FamilyTree, record_id: int
    ) -> schemas.PassingRecord:
        """One record in a tree."""
        return schemas.PassingRecord.model_validate(await self._get(db, tree, record_id))

    async def check(
        self, db: AsyncSession, *, tree: FamilyTree, member_id: int
    ) -> schemas.PassingRecordCheck:
        """Whether a member already has a record."""
        await self._member_in_tree(db, tree, member_id)
        record = await self._passing_repo.get_by_member(db, member_id)
        if record is None:
            return schemas.PassingRecordCheck(has_record=False)
        return schemas.PassingRecordCheck(
            has_record=True, passing_record=schemas.PassingRecordRef.model_validate(record)
        )

    async def create(
        self,
        db: AsyncSession,
        *,
        tree: FamilyTree,
        record_in: schemas.PassingRecordCreate,
        ctx: ApiContext,
    ) -> schemas.PassingRecord:
        """Record the passing of a member."""
        member = await self._member_in_tree(db, tree, record_in.family_member_id)
        # A failed insert rolls the session back and expires member.
        member_id = member.id
        if await self._passing_repo.get_by_member(db, member_id) is not None:
            raise DuplicatePassingRecordError(member_id)
        self._check_date(member, record_in.date_of_passing)

        try:
            async with UnitOfWork(db):
                record = await self._passing_repo.create(
                    db,
                    obj_in={
                        "family_member_id": member_id,
                        "family_member": member,
                        "date_of_passing": record_in.date_of_passing,
                    },
                    causes=record_in.causes_of_death,
                    buried_places=[p.model_dump() for p in record_in.buried_places],
                )
        except IntegrityError as e:
            raise DuplicatePassingRecordError(member_id) from e

        await self._change_logger.record(
            db,
            ctx,
            entity_type=EntityType.PASSING_RECORD,
            entity_id=record.id,
            action=ChangeAction.CREATE,
            family_tree_id=tree.id,
            new_values=passing_record_snapshot(record),
        )
        ctx.logger.info(f"Recorded passing of member {member_id}")
        return schemas.PassingRecord.model_validate(record)

    async def update(
        self,
        db: AsyncSession,
        *,
        tree: FamilyTree,
        record_id: int,
        record_in: schemas.PassingRecordUpdate,
        ctx: ApiContext,
    ) -> schemas.PassingRecord:
        """Edit a record."""
        record = await self._get(db, tree, record_id)
        changes = {}
        if record_in.date_of_passing is not None:
            self._check_date(record.family_member, record_in.date_of_passing)
            changes["date_of_passing"] = record_in.date_of_passing

        old_values = passing_record_snapshot(record)
        async with UnitOfWork(db):
            record = await self._passing_repo.update(
                db,
                db_obj=record,
                obj_in=changes,
                causes=record_in.causes_of_death,
                buried_places=(
                    [p.model_dump() for p in record_in.buried_places]
                    if record_in.buried_places is not None
                    else None
                ),
            )

        await self._change_logger.record(
            db,
            ctx,
            entity_type=EntityType.PASSING_RECORD,
            entity_id=record.id,
            action=ChangeAction.UPDATE,
            family_tree_id=tree.id,
            old_values=old_values,
            new_values=passing_record_snapshot(record),
        )
        return schemas.PassingRecord.model_validate(record)

    async def delete(
        self, db: AsyncSession, *, tree: FamilyTree, record_id: int, ctx: ApiContext
    ) -> schemas.PassingRecord:
        """Delete a record."""
        record = await self._get(db, tree, record_id)
        result = schemas.PassingRecord.model_validate(record)
        old_values = passing_record_snapshot(record)
        async with UnitOfWork(db):
            await self._passing_repo.remove(db, db_obj=record)

        await self._change_logger.record(
            db,
            ctx,
            entity_type=EntityType.PASSING_RECORD,
            entity_id=result.id,
            action=ChangeAction.DELETE,
            family_tree_id=tree.id,
            old_values=old_values,
        )
        ctx.logger.info(f"Deleted passing record {result.id}")
        return result

    async def _get(self, db: AsyncSession, tree: FamilyTree, record_id: int) -> PassingRecord:
        record = await self._passing_repo.get_in_tree(db, tree.id, record_id)
        if record is None:
            raise PassingRecordNotFoundError(record_id)
        return record

    async def _member_in_tree(
        self, db: AsyncSession, tree: FamilyTree, member_id: int
    ) -> FamilyMember:
        member = await self._member_repo.get_in_tree(db, tree.id, member_id)
        if member is None:
            raise FamilyMemberNotFoundError(member_id)
        return member

    @staticmethod
    def _check_date(member: FamilyMember, date_of_passing: date) -> None:
        if date_of_passing > today():
            raise InvalidPassingDateError("Date of passing cannot be in the future")
        if member.birthday is not None and date_of_passing < member.birthday:
            raise InvalidPassingDateError("Date of passing cannot be before the birthday")
