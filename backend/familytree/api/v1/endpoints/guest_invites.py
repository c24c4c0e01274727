"""Guest invite endpoints: issue and list access codes for tree members."""

from typing import List

from fastapi import Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.api import deps
from familytree.api.context import ApiContext
from familytree.api.deps import Inject
from familytree.api.router import TrailingSlashRouter
from familytree.core.shared_models import AccessLevel
from familytree.domains.guest_access.protocols import GuestAccessServiceProtocol
from familytree.models.family_tree import FamilyTree

router = TrailingSlashRouter()


@router.get("/{family_tree_id}/guest-invites", response_model=List[schemas.GuestInvite])
async def list_guest_invites(
    tree: FamilyTree = deps.TreeAccess(AccessLevel.OWNER_WRITE),
    db: AsyncSession = Depends(deps.get_db),
    guest_access_service: GuestAccessServiceProtocol = Inject(GuestAccessServiceProtocol),
) -> List[schemas.GuestInvite]:
    """Access codes issued for the tree, newest first."""
    return await guest_access_service.list(db, tree=tree)


@router.post(
    "/{family_tree_id}/guest-invites",
    response_model=schemas.GuestInviteIssued,
    status_code=201,
    responses={200: {"model": schemas.GuestInviteIssued, "description": "Existing code"}},
)
async def issue_guest_invite(
    invite_in: schemas.GuestInviteCreate,
    response: Response,
    tree: FamilyTree = deps.TreeAccess(AccessLevel.OWNER_WRITE),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    guest_access_service: GuestAccessServiceProtocol = Inject(GuestAccessServiceProtocol),
) -> schemas.GuestInviteIssued:
    """Issue an access code for a member.

    A member whose code is still active gets the same code back with 200.
    Otherwise a new code is minted and the response is 201.
    """
    issued = await guest_access_service.issue(db, tree=tree, invite_in=invite_in, ctx=ctx)
    if not issued.is_new:
        response.status_code = 200
    return issued
