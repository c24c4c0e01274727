"""Tree member endpoints.

Members are listed and created under their tree. Reading and editing a single
member lives under ``/family-members/{member_id}``.
"""

from typing import List, Union

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.api import deps
from familytree.api.context import ApiContext
from familytree.api.deps import Inject
from familytree.api.router import TrailingSlashRouter
from familytree.core.shared_models import AccessLevel
from familytree.domains.members.protocols import FamilyMemberServiceProtocol
from familytree.models.family_tree import FamilyTree

router = TrailingSlashRouter()


@router.get(
    "/{family_tree_id}/members",
    response_model=Union[List[schemas.FamilyMember], List[schemas.FamilyMemberSummary]],
)
async def list_members(
    detailed: bool = Query(False, description="Return full member records"),
    tree: FamilyTree = deps.TreeAccess(AccessLevel.READ),
    db: AsyncSession = Depends(deps.get_db),
    member_service: FamilyMemberServiceProtocol = Inject(FamilyMemberServiceProtocol),
) -> Union[List[schemas.FamilyMember], List[schemas.FamilyMemberSummary]]:
    """List the members of a tree by name."""
    if detailed:
        return await member_service.list_details_for_tree(db, tree=tree)
    return await member_service.list_for_tree(db, tree=tree)


@router.post("/{family_tree_id}/members", response_model=schemas.FamilyMember, status_code=201)
async def create_member(
    member_in: schemas.FamilyMemberCreate,
    tree: FamilyTree = deps.TreeAccess(AccessLevel.OWNER_WRITE),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    member_service: FamilyMemberServiceProtocol = Inject(FamilyMemberServiceProtocol),
) -> schemas.FamilyMember:
    """Add a member as the child or spouse of an existing one."""
    return await member_service.create(db, tree=tree, member_in=member_in, ctx=ctx)
