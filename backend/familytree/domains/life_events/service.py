"""Life event service: marriages, divorces and birth records."""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.api.context import ApiContext
from familytree.core.datetime_utils import today
from familytree.core.shared_models import ChangeAction, EntityType
from familytree.db.unit_of_work import UnitOfWork
from familytree.domains.change_logs.protocols import ChangeLoggerProtocol
from familytree.domains.change_logs.snapshots import (
    family_member_snapshot,
    spouse_relationship_snapshot,
)
from familytree.domains.life_events.exceptions import (
    AlreadyDivorcedError,
    AlreadyMarriedError,
    InvalidLifeEventDateError,
    MarriageNotFoundError,
    MissingParentError,
)
from familytree.domains.life_events.protocols import (
    LifeEventServiceProtocol,
    SpouseRelationshipRepositoryProtocol,
)
from familytree.domains.members.exceptions import FamilyMemberNotFoundError
from familytree.domains.members.protocols import FamilyMemberRepositoryProtocol
from familytree.models.family_member import FamilyMember
from familytree.models.family_tree import FamilyTree


class LifeEventService(LifeEventServiceProtocol):
    """Domain service for marriages, divorces and birth records."""

    def __init__(
        self,
        spouse_repo: SpouseRelationshipRepositoryProtocol,
        member_repo: FamilyMemberRepositoryProtocol,
        change_logger: ChangeLoggerProtocol,
    ) -> None:
        """Initialize with injected dependencies."""
        self._spouse_repo = spouse_repo
        self._member_repo = member_repo
        self._change_logger = change_logger

    # -- marriages -----------------------------------------------------------

    async def list_marriages(
        self, db: AsyncSession, *, tree: FamilyTree
    ) -> List[schemas.SpouseRelationship]:
        """All marriages in a tree, most recent first."""
        rows = await self._spouse_repo.list_for_tree(db, tree.id)
        return [schemas.SpouseRelationship.model_validate(r) for r in rows]

    async def get_marriage(
        self, db: AsyncSession, *, tree: FamilyTree, relationship_id: int
    ) -> schemas.SpouseRelationship:
        """One marriage in a tree."""
        relationship = await self._spouse_repo.get_in_tree(db, tree.id, relationship_id)
        if relationship is None:
            raise MarriageNotFoundError("Marriage not found")
        return schemas.SpouseRelationship.model_validate(relationship)

    async def record_marriage(
        self,
        db: AsyncSession,
        *,
        tree: FamilyTree,
        marriage_in: schemas.MarriageCreate,
        ctx: ApiContext,
    ) -> schemas.SpouseRelationship:
        """Marry two members of the tree."""
        if marriage_in.marriage_date > today():
            raise InvalidLifeEventDateError("Marriage date cannot be in the future")
        first, second = await self._couple_in_tree(db, tree, *marriage_in.ordered_ids)
        if await self._spouse_repo.get_pair(db, first.id, second.id) is not None:
            raise AlreadyMarriedError()

        async with UnitOfWork(db):
            relationship = await self._spouse_repo.create(
                db,
                obj_in={
                    "family_member1_id": first.id,
                    "family_member2_id": second.id,
                    "family_member1": first,
                    "family_member2": second,
                    "marriage_date": marriage_in.marriage_date,
                },
            )

        await self._change_logger.record(
            db,
            ctx,
            entity_type=EntityType.SPOUSE_RELATIONSHIP,
            entity_id=relationship.id,
            action=ChangeAction.CREATE,
            family_tree_id=tree.id,
            new_values=spouse_relationship_snapshot(relationship),
        )
        ctx.logger.info(f"Recorded marriage {relationship.id} in family tree {tree.id}")
        return schemas.SpouseRelationship.model_validate(relationship)

    # -- divorces ------------------------------------------------------------

    async def list_divorce_candidates(
        self, db: AsyncSession, *, tree: FamilyTree
    ) -> List[schemas.SpouseRelationship]:
        """Marriages in a tree that have no divorce recorded."""
        rows = await self._spouse_repo.list_for_tree(db, tree.id, open_only=True)
        return [schemas.SpouseRelationship.model_validate(r) for r in rows]

    async def record_divorce(
        self,
        db: AsyncSession,
        *,
        tree: FamilyTree,
        divorce_in: schemas.DivorceCreate,
        ctx: ApiContext,
    ) -> schemas.SpouseRelationship:
        """Close a marriage with a divorce date.

        Raises:
            FamilyMemberNotFoundError: Either member is outside the tree.
            MarriageNotFoundError: The couple has no marriage on record.
            AlreadyDivorcedError: The marriage already has a divorce date.
            InvalidLifeEventDateError: The divorce is not after the marriage.
        """
        first, second = await self._couple_in_tree(db, tree, *divorce_in.ordered_ids)
        relationship = await self._spouse_repo.get_pair(db, first.id, second.id)
        if relationship is None:
            raise MarriageNotFoundError()
        if relationship.divorce_date is not None:
            raise AlreadyDivorcedError()
        if divorce_in.divorce_date <= relationship.marriage_date:
            raise InvalidLifeEventDateError("Divorce date must be after the marriage date")

        old_values = spouse_relationship_snapshot(relationship)
        async with UnitOfWork(db):
            relationship = await self._spouse_repo.update(
                db, db_obj=relationship, obj_in={"divorce_date": divorce_in.divorce_date}
            )

        await self._change_logger.record(
            db,
            ctx,
            entity_type=EntityType.SPOUSE_RELATIONSHIP,
            entity_id=relationship.id,
            action=ChangeAction.UPDATE,
            family_tree_id=tree.id,
            old_values=old_values,
            new_values=spouse_relationship_snapshot(relationship),
        )
        ctx.logger.info(f"Recorded divorce for relationship {relationship.id}")
        return schemas.SpouseRelationship.model_validate(relationship)

    # -- birth records -------------------------------------------------------

    async def get_birth_record(
        self, db: AsyncSession, *, tree: FamilyTree, child_id: int
    ) -> schemas.BirthRecord:
        """Parent and birth date of a child."""
        child, parent = await self._child_and_parent(db, tree, child_id)
        return self._birth_record(child, parent)

    async def update_birth_record(
        self,
        db: AsyncSession,
        *,
        tree: FamilyTree,
        child_id: int,
        birth_in: schemas.BirthRecordUpdate,
        ctx: ApiContext,
    ) -> schemas.BirthRecord:
        """Change the recorded birth date of a child."""
        child, parent = await self._child_and_parent(db, tree, child_id)
        if birth_in.birth_date > today():
            raise InvalidLifeEventDateError("Birth date cannot be in the future")
        if parent.birthday is not None and birth_in.birth_date < parent.birthday:
            raise InvalidLifeEventDateError("Birth date cannot be before the parent's birthday")

        old_values = family_member_snapshot(child)
        async with UnitOfWork(db):
            child = await self._member_repo.update(
                db,
                db_obj=child,
                obj_in={"relationship_established_date": birth_in.birth_date},
            )

        await self._change_logger.record(
            db,
            ctx,
            entity_type=EntityType.FAMILY_MEMBER,
            entity_id=child.id,
            action=ChangeAction.UPDATE,
            family_tree_id=tree.id,
            old_values=old_values,
            new_values=family_member_snapshot(child),
        )
        return self._birth_record(child, parent)

    # -- helpers -------------------------------------------------------------

    async def _couple_in_tree(
        self, db: AsyncSession, tree: FamilyTree, member1_id: int, member2_id: int
    ) -> tuple[FamilyMember, FamilyMember]:
        members = []
        for member_id in (member1_id, member2_id):
            member = await self._member_repo.get_in_tree(db, tree.id, member_id)
            if member is None:
                raise FamilyMemberNotFoundError(member_id)
            members.append(member)
        return members[0], members[1]

    async def _child_and_parent(
        self, db: AsyncSession, tree: FamilyTree, child_id: int
    ) -> tuple[FamilyMember, FamilyMember]:
        child = await self._member_repo.get_in_tree(db, tree.id, child_id)
        if child is None:
            raise FamilyMemberNotFoundError(child_id)
        if child.parent_id is None:
            raise MissingParentError(child_id)
        parent = await self._member_repo.get_in_tree(db, tree.id, child.parent_id)
        if parent is None:
            raise MissingParentError(child_id)
        return child, parent

    @staticmethod
    def _birth_record(child: FamilyMember, parent: FamilyMember) -> schemas.BirthRecord:
        return schemas.BirthRecord(
            child=schemas.MemberRef.model_validate(child),
            parent=schemas.MemberRef.model_validate(parent),
            birth_date=child.relationship_established_date,
        )
