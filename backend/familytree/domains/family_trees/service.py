"""Family tree service: tree lifecycle for owners."""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.api.context import ApiContext
from familytree.core.shared_models import ChangeAction, EntityType
from familytree.db.unit_of_work import UnitOfWork
from familytree.domains.change_logs.protocols import ChangeLoggerProtocol
from familytree.domains.change_logs.snapshots import family_tree_snapshot
from familytree.domains.family_trees.protocols import (
    FamilyTreeRepositoryProtocol,
    FamilyTreeServiceProtocol,
)
from familytree.domains.users.exceptions import UserNotFoundError
from familytree.domains.users.protocols import (
    TreeOwnerRepositoryProtocol,
    UserRepositoryProtocol,
)
from familytree.models.family_tree import FamilyTree


class FamilyTreeService(FamilyTreeServiceProtocol):
    """Domain service for family trees."""

    def __init__(
        self,
        family_tree_repo: FamilyTreeRepositoryProtocol,
        tree_owner_repo: TreeOwnerRepositoryProtocol,
        user_repo: UserRepositoryProtocol,
        change_logger: ChangeLoggerProtocol,
    ) -> None:
        """Initialize with injected dependencies."""
        self._family_tree_repo = family_tree_repo
        self._tree_owner_repo = tree_owner_repo
        self._user_repo = user_repo
        self._change_logger = change_logger

    async def list(self, db: AsyncSession, *, ctx: ApiContext) -> List[schemas.FamilyTree]:
        """Owners see their trees; a guest sees only the tree it is bound to."""
        if ctx.is_guest:
            tree = await self._family_tree_repo.get(db, ctx.guest_family_tree_id)
            trees = [tree] if tree is not None else []
        else:
            trees = await self._family_tree_repo.list_for_owner(db, ctx.user_id)
        return [schemas.FamilyTree.model_validate(t) for t in trees]

    async def create(
        self, db: AsyncSession, *, tree_in: schemas.FamilyTreeCreate, ctx: ApiContext
    ) -> schemas.FamilyTree:
        """Create a tree owned by the caller, creating their owner profile if needed."""
        async with UnitOfWork(db):
            owner = await self._tree_owner_repo.get_by_user_id(db, ctx.user_id)
            if owner is None:
                user = await self._user_repo.get(db, ctx.user_id)
                if user is None:
                    raise UserNotFoundError(ctx.user_id)
                owner = await self._tree_owner_repo.create(
                    db,
                    obj_in={"user_id": user.id, "full_name": user.full_name, "email": user.email},
                )
            tree = await self._family_tree_repo.create(
                db, obj_in={**tree_in.model_dump(), "tree_owner_id": owner.id}
            )

        await self._change_logger.record(
            db,
            ctx,
            entity_type=EntityType.FAMILY_TREE,
            entity_id=tree.id,
            action=ChangeAction.CREATE,
            family_tree_id=tree.id,
            new_values=family_tree_snapshot(tree),
        )
        ctx.logger.info(f"Created family tree {tree.id}")
        return schemas.FamilyTree.model_validate(tree)

    async def update(
        self,
        db: AsyncSession,
        *,
        tree: FamilyTree,
        tree_in: schemas.FamilyTreeUpdate,
        ctx: ApiContext,
    ) -> schemas.FamilyTree:
        """Update tree settings."""
        old_values = family_tree_snapshot(tree)
        changes = tree_in.model_dump(exclude_unset=True)
        async with UnitOfWork(db):
            tree = await self._family_tree_repo.update(db, db_obj=tree, obj_in=changes)

        await self._change_logger.record(
            db,
            ctx,
            entity_type=EntityType.FAMILY_TREE,
            entity_id=tree.id,
            action=ChangeAction.UPDATE,
            family_tree_id=tree.id,
            old_values=old_values,
            new_values=family_tree_snapshot(tree),
        )
        return schemas.FamilyTree.model_validate(tree)

    async def delete(
        self, db: AsyncSession, *, tree: FamilyTree, ctx: ApiContext
    ) -> schemas.FamilyTree:
        """Delete a tree and everything in it.

        The tree's change log goes with it, so the deletion itself is only
        written to the server log.
        """
        result = schemas.FamilyTree.model_validate(tree)
        async with UnitOfWork(db):
            await self._family_tree_repo.remove(db, db_obj=tree)
        ctx.logger.info(f"Deleted family tree {result.id}")
        return result
