"""Single-member endpoints: profile, deletion and profile picture.

Guests may edit only the member their access code was issued for.
"""

from typing import Optional

from fastapi import Depends, Header, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.api import deps
from familytree.api.context import ApiContext
from familytree.api.deps import Inject
from familytree.api.router import TrailingSlashRouter
from familytree.core.shared_models import AccessLevel
from familytree.domains.members.protocols import FamilyMemberServiceProtocol
from familytree.models.family_member import FamilyMember

router = TrailingSlashRouter()


@router.get("/{member_id}", response_model=schemas.FamilyMember)
async def read_member(
    member: FamilyMember = deps.MemberAccess(AccessLevel.READ),
    db: AsyncSession = Depends(deps.get_db),
    member_service: FamilyMemberServiceProtocol = Inject(FamilyMemberServiceProtocol),
) -> schemas.FamilyMember:
    """Get a member with occupations and places of origin."""
    return await member_service.get(db, member=member)


@router.put("/{member_id}", response_model=schemas.FamilyMember)
async def update_member(
    member_in: schemas.FamilyMemberUpdate,
    member: FamilyMember = deps.MemberAccess(AccessLevel.PROFILE_WRITE),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    member_service: FamilyMemberServiceProtocol = Inject(FamilyMemberServiceProtocol),
) -> schemas.FamilyMember:
    """Edit a member profile."""
    return await member_service.update(db, member=member, member_in=member_in, ctx=ctx)


@router.delete("/{member_id}", response_model=schemas.FamilyMember)
async def delete_member(
    member: FamilyMember = deps.MemberAccess(AccessLevel.OWNER_WRITE),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    member_service: FamilyMemberServiceProtocol = Inject(FamilyMemberServiceProtocol),
) -> schemas.FamilyMember:
    """Delete a member. The root person cannot be deleted."""
    return await member_service.delete(db, member=member, ctx=ctx)


@router.get(
    "/{member_id}/profile-picture",
    response_class=Response,
    responses={200: {"content": {"image/*": {}}}},
)
async def read_profile_picture(
    member: FamilyMember = deps.MemberAccess(AccessLevel.READ),
    db: AsyncSession = Depends(deps.get_db),
    member_service: FamilyMemberServiceProtocol = Inject(FamilyMemberServiceProtocol),
) -> Response:
    """Raw picture bytes with their stored content type."""
    data, content_type = await member_service.get_profile_picture(db, member=member)
    return Response(content=data, media_type=content_type)


@router.put("/{member_id}/profile-picture", response_model=schemas.FamilyMember)
async def upload_profile_picture(
    request: Request,
    member: FamilyMember = deps.MemberAccess(AccessLevel.PROFILE_WRITE),
    content_type: Optional[str] = Header(None),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    member_service: FamilyMemberServiceProtocol = Inject(FamilyMemberServiceProtocol),
) -> schemas.FamilyMember:
    """Replace the picture. The request body is the raw image."""
    media_type = (content_type or "").split(";")[0].strip().lower()
    data = await request.body()
    return await member_service.set_profile_picture(
        db, member=member, data=data, content_type=media_type, ctx=ctx
    )
