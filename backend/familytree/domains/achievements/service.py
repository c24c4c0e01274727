"""Achievement service: tree-specific types and member achievements."""

from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.api.context import ApiContext
from familytree.core.shared_models import ChangeAction, EntityType
from familytree.db.unit_of_work import UnitOfWork
from familytree.domains.achievements.exceptions import (
    AchievementNotFoundError,
    AchievementTypeNotFoundError,
    DuplicateAchievementTypeError,
)
from familytree.domains.achievements.protocols import (
    AchievementRepositoryProtocol,
    AchievementServiceProtocol,
    AchievementTypeRepositoryProtocol,
)
from familytree.domains.change_logs.protocols import ChangeLoggerProtocol
from familytree.domains.change_logs.snapshots import achievement_snapshot
from familytree.domains.members.exceptions import FamilyMemberNotFoundError
from familytree.domains.members.protocols import FamilyMemberRepositoryProtocol
from familytree.models.achievement import Achievement, AchievementType
from familytree.models.family_member import FamilyMember
from familytree.models.family_tree import FamilyTree


class AchievementService(AchievementServiceProtocol):
    """Domain service for achievements.

    The member and the type of an achievement must both belong to the tree
    the request was authorized for.
    """

    def __init__(
        self,
        achievement_repo: AchievementRepositoryProtocol,
        achievement_type_repo: AchievementTypeRepositoryProtocol,
        member_repo: FamilyMemberRepositoryProtocol,
        change_logger: ChangeLoggerProtocol,
    ) -> None:
        """Initialize with injected dependencies."""
        self._achievement_repo = achievement_repo
        self._achievement_type_repo = achievement_type_repo
        self._member_repo = member_repo
        self._change_logger = change_logger

    # -- types ---------------------------------------------------------------

    async def list_types(
        self, db: AsyncSession, *, tree: FamilyTree
    ) -> List[schemas.AchievementType]:
        """Types of a tree ordered by name."""
        types = await self._achievement_type_repo.list_for_tree(db, tree.id)
        return [schemas.AchievementType.model_validate(t) for t in types]

    async def create_type(
        self,
        db: AsyncSession,
        *,
        tree: FamilyTree,
        type_in: schemas.AchievementTypeCreate,
        ctx: ApiContext,
    ) -> schemas.AchievementType:
        """Add a type to a tree. Names are unique per tree, ignoring case."""
        if await self._achievement_type_repo.get_by_name(db, tree.id, type_in.type_name):
            raise DuplicateAchievementTypeError(type_in.type_name)
        try:
            async with UnitOfWork(db):
                achievement_type = await self._achievement_type_repo.create(
                    db, obj_in={"family_tree_id": tree.id, "type_name": type_in.type_name}
                )
        except IntegrityError as e:
            raise DuplicateAchievementTypeError(type_in.type_name) from e
        ctx.logger.info(f"Added achievement type {achievement_type.id} to tree {tree.id}")
        return schemas.AchievementType.model_validate(achievement_type)

    # -- achievements --------------------------------------------------------

    async def list(
        self, db: AsyncSession, *, tree: FamilyTree, year: Optional[int] = None
    ) -> List[schemas.Achievement]:
        """Achievements in a tree, latest first."""
        achievements = await self._achievement_repo.list_for_tree(db, tree.id, year=year)
        return [schemas.Achievement.model_validate(a) for a in achievements]

    async def get(
        self, db: AsyncSession, *, tree: FamilyTree, achievement_id: int
    ) -> schemas.Achievement:
        """One achievement in a tree."""
        return schemas.Achievement.model_validate(await self._get(db, tree, achievement_id))

    async def create(
        self,
        db: AsyncSession,
        *,
        tree: FamilyTree,
        achievement_in: schemas.AchievementCreate,
        ctx: ApiContext,
    ) -> schemas.Achievement:
        """Record an achievement for a member."""
        member = await self._member_in_tree(db, tree, achievement_in.family_member_id)
        achievement_type = await self._type_in_tree(db, tree, achievement_in.achievement_type_id)

        async with UnitOfWork(db):
            achievement = await self._achievement_repo.create(
                db,
                obj_in={
                    **achievement_in.model_dump(),
                    "family_member": member,
                    "achievement_type": achievement_type,
                },
            )

        await self._change_logger.record(
            db,
            ctx,
            entity_type=EntityType.ACHIEVEMENT,
            entity_id=achievement.id,
            action=ChangeAction.CREATE,
            family_tree_id=tree.id,
            new_values=achievement_snapshot(achievement),
        )
        return schemas.Achievement.model_validate(achievement)

    async def update(
        self,
        db: AsyncSession,
        *,
        tree: FamilyTree,
        achievement_id: int,
        achievement_in: schemas.AchievementUpdate,
        ctx: ApiContext,
    ) -> schemas.Achievement:
        """Edit an achievement. Only the description can be cleared."""
        achievement = await self._get(db, tree, achievement_id)
        changes = {
            field: value
            for field, value in achievement_in.model_dump(exclude_unset=True).items()
            if value is not None or field == "description"
        }
        if "family_member_id" in changes:
            changes["family_member"] = await self._member_in_tree(
                db, tree, changes["family_member_id"]
            )
        if "achievement_type_id" in changes:
            changes["achievement_type"] = await self._type_in_tree(
                db, tree, changes["achievement_type_id"]
            )

        old_values = achievement_snapshot(achievement)
        async with UnitOfWork(db):
            achievement = await self._achievement_repo.update(
                db, db_obj=achievement, obj_in=changes
            )

        await self._change_logger.record(
            db,
            ctx,
            entity_type=EntityType.ACHIEVEMENT,
            entity_id=achievement.id,
            action=ChangeAction.UPDATE,
            family_tree_id=tree.id,
            old_values=old_values,
            new_values=achievement_snapshot(achievement),
        )
        return schemas.Achievement.model_validate(achievement)

    async def delete(
        self, db: AsyncSession, *, tree: FamilyTree, achievement_id: int, ctx: ApiContext
    ) -> schemas.Achievement:
        """Delete an achievement."""
        achievement = await self._get(db, tree, achievement_id)
        result = schemas.Achievement.model_validate(achievement)
        old_values = achievement_snapshot(achievement)
        async with UnitOfWork(db):
            await self._achievement_repo.remove(db, db_obj=achievement)

        await self._change_logger.record(
            db,
            ctx,
            entity_type=EntityType.ACHIEVEMENT,
            entity_id=result.id,
            action=ChangeAction.DELETE,
            family_tree_id=tree.id,
            old_values=old_values,
        )
        return result

    # -- helpers -------------------------------------------------------------

    async def _get(self, db: AsyncSession, tree: FamilyTree, achievement_id: int) -> Achievement:
        achievement = await self._achievement_repo.get_in_tree(db, tree.id, achievement_id)
        if achievement is None:
            raise AchievementNotFoundError(achievement_id)
        return achievement

    async def _member_in_tree(
        self, db: AsyncSession, tree: FamilyTree, member_id: int
    ) -> FamilyMember:
        member = await self._member_repo.get_in_tree(db, tree.id, member_id)
        if member is None:
            raise FamilyMemberNotFoundError(member_id)
        return member

    async def _type_in_tree(
        self, db: AsyncSession, tree: FamilyTree, achievement_type_id: int
    ) -> AchievementType:
        achievement_type = await self._achievement_type_repo.get_in_tree(
            db, tree.id, achievement_type_id
        )
        if achievement_type is None:
            raise AchievementTypeNotFoundError(achievement_type_id)
        return achievement_type
