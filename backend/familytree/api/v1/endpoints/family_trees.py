"""Family tree endpoints."""

from typing import List

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.api import deps
from familytree.api.context import ApiContext
from familytree.api.deps import Inject
from familytree.api.router import TrailingSlashRouter
from familytree.core.shared_models import AccessLevel
from familytree.domains.family_trees.protocols import FamilyTreeServiceProtocol
from familytree.models.family_tree import FamilyTree

router = TrailingSlashRouter()


@router.get("", response_model=List[schemas.FamilyTree])
async def list_family_trees(
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    family_tree_service: FamilyTreeServiceProtocol = Inject(FamilyTreeServiceProtocol),
) -> List[schemas.FamilyTree]:
    """List the owner's trees, or the single tree a guest was let into."""
    return await family_tree_service.list(db, ctx=ctx)


@router.post("", response_model=schemas.FamilyTree, status_code=201)
async def create_family_tree(
    tree_in: schemas.FamilyTreeCreate,
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.require_owner),
    family_tree_service: FamilyTreeServiceProtocol = Inject(FamilyTreeServiceProtocol),
) -> schemas.FamilyTree:
    """Create a tree owned by the caller."""
    return await family_tree_service.create(db, tree_in=tree_in, ctx=ctx)


@router.get("/{family_tree_id}", response_model=schemas.FamilyTree)
async def read_family_tree(
    tree: FamilyTree = deps.TreeAccess(AccessLevel.READ),
) -> schemas.FamilyTree:
    """Get a tree the caller can read."""
    return schemas.FamilyTree.model_validate(tree)


@router.put("/{family_tree_id}", response_model=schemas.FamilyTree)
async def update_family_tree(
    tree_in: schemas.FamilyTreeUpdate,
    tree: FamilyTree = deps.TreeAccess(AccessLevel.OWNER_WRITE),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    family_tree_service: FamilyTreeServiceProtocol = Inject(FamilyTreeServiceProtocol),
) -> schemas.FamilyTree:
    """Change tree settings."""
    return await family_tree_service.update(db, tree=tree, tree_in=tree_in, ctx=ctx)


@router.delete("/{family_tree_id}", response_model=schemas.FamilyTree)
async def delete_family_tree(
    tree: FamilyTree = deps.TreeAccess(AccessLevel.OWNER_WRITE),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    family_tree_service: FamilyTreeServiceProtocol = Inject(FamilyTreeServiceProtocol),
) -> schemas.FamilyTree:
    """Delete a tree with every record in it."""
    return await family_tree_service.delete(db, tree=tree, ctx=ctx)
