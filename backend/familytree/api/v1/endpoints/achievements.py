"""Achievement and achievement-type endpoints."""

from typing import List, Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.api import deps
from familytree.api.context import ApiContext
from familytree.api.deps import Inject
from familytree.api.router import TrailingSlashRouter
from familytree.core.shared_models import AccessLevel
from familytree.domains.achievements.protocols import AchievementServiceProtocol
from familytree.models.family_tree import FamilyTree

router = TrailingSlashRouter()


@router.get(
    "/{family_tree_id}/achievement-types", response_model=List[schemas.AchievementType]
)
async def list_achievement_types(
    tree: FamilyTree = deps.TreeAccess(AccessLevel.READ),
    db: AsyncSession = Depends(deps.get_db),
    achievement_service: AchievementServiceProtocol = Inject(AchievementServiceProtocol),
) -> List[schemas.AchievementType]:
    """Achievement types defined for the tree, by name."""
    return await achievement_service.list_types(db, tree=tree)


@router.post(
    "/{family_tree_id}/achievement-types",
    response_model=schemas.AchievementType,
    status_code=201,
)
async def create_achievement_type(
    type_in: schemas.AchievementTypeCreate,
    tree: FamilyTree = deps.TreeAccess(AccessLevel.OWNER_WRITE),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    achievement_service: AchievementServiceProtocol = Inject(AchievementServiceProtocol),
) -> schemas.AchievementType:
    """Define a new achievement type. Names are unique per tree."""
    return await achievement_service.create_type(db, tree=tree, type_in=type_in, ctx=ctx)


@router.get("/{family_tree_id}/achievements", response_model=List[schemas.Achievement])
async def list_achievements(
    year: Optional[int] = deps.OptionalQueryInt("year"),
    tree: FamilyTree = deps.TreeAccess(AccessLevel.READ),
    db: AsyncSession = Depends(deps.get_db),
    achievement_service: AchievementServiceProtocol = Inject(AchievementServiceProtocol),
) -> List[schemas.Achievement]:
    """Achievements of the tree, optionally limited to one year."""
    return await achievement_service.list(db, tree=tree, year=year)


@router.post(
    "/{family_tree_id}/achievements", response_model=schemas.Achievement, status_code=201
)
async def create_achievement(
    achievement_in: schemas.AchievementCreate,
    tree: FamilyTree = deps.TreeAccess(AccessLevel.OWNER_WRITE),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    achievement_service: AchievementServiceProtocol = Inject(AchievementServiceProtocol),
) -> schemas.Achievement:
    """Record an achievement for a member."""
    return await achievement_service.create(
        db, tree=tree, achievement_in=achievement_in, ctx=ctx
    )


@router.get(
    "/{family_tree_id}/achievements/{achievement_id}", response_model=schemas.Achievement
)
async def read_achievement(
    achievement_id: int = deps.PathId("achievement_id"),
    tree: FamilyTree = deps.TreeAccess(AccessLevel.READ),
    db: AsyncSession = Depends(deps.get_db),
    achievement_service: AchievementServiceProtocol = Inject(AchievementServiceProtocol),
) -> schemas.Achievement:
    """One achievement."""
    return await achievement_service.get(db, tree=tree, achievement_id=achievement_id)


@router.put(
    "/{family_tree_id}/achievements/{achievement_id}", response_model=schemas.Achievement
)
async def update_achievement(
    achievement_in: schemas.AchievementUpdate,
    achievement_id: int = deps.PathId("achievement_id"),
    tree: FamilyTree = deps.TreeAccess(AccessLevel.OWNER_WRITE),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    achievement_service: AchievementServiceProtocol = Inject(AchievementServiceProtocol),
) -> schemas.Achievement:
    """Edit an achievement."""
    return await achievement_service.update(
        db,
        tree=tree,
        achievement_id=achievement_id,
        achievement_in=achievement_in,
        ctx=ctx,
    )


@router.delete(
    "/{family_tree_id}/achievements/{achievement_id}", response_model=schemas.Achievement
)
async def delete_achievement(
    achievement_id: int = deps.PathId("achievement_id"),
    tree: FamilyTree = deps.TreeAccess(AccessLevel.OWNER_WRITE),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    achievement_service: AchievementServiceProtocol = Inject(AchievementServiceProtocol),
) -> schemas.Achievement:
    """Delete an achievement."""
    return await achievement_service.delete(db, tree=tree, achievement_id=achievement_id, ctx=ctx)
