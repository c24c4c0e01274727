"""Passing record endpoints."""

from typing import List, Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.api import deps
from familytree.api.context import ApiContext
from familytree.api.deps import Inject
from familytree.api.router import TrailingSlashRouter
from familytree.core.shared_models import AccessLevel
from familytree.domains.passings.protocols import PassingRecordServiceProtocol
from familytree.models.family_tree import FamilyTree

router = TrailingSlashRouter()


@router.get("/{family_tree_id}/passing-records", response_model=List[schemas.PassingRecord])
async def list_passing_records(
    year: Optional[int] = deps.OptionalQueryInt("year"),
    tree: FamilyTree = deps.TreeAccess(AccessLevel.READ),
    db: AsyncSession = Depends(deps.get_db),
    passing_service: PassingRecordServiceProtocol = Inject(PassingRecordServiceProtocol),
) -> List[schemas.PassingRecord]:
    """Passing records of the tree, optionally limited to one year."""
    return await passing_service.list(db, tree=tree, year=year)


@router.post(
    "/{family_tree_id}/passing-records", response_model=schemas.PassingRecord, status_code=201
)
async def create_passing_record(
    record_in: schemas.PassingRecordCreate,
    tree: FamilyTree = deps.TreeAccess(AccessLevel.OWNER_WRITE),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    passing_service: PassingRecordServiceProtocol = Inject(PassingRecordServiceProtocol),
) -> schemas.PassingRecord:
    """Record a member's passing. A member has at most one record."""
    return await passing_service.create(db, tree=tree, record_in=record_in, ctx=ctx)


@router.get(
    "/{family_tree_id}/passing-records/check/{member_id}",
    response_model=schemas.PassingRecordCheck,
)
async def check_passing_record(
    member_id: int = deps.PathId("member_id"),
    tree: FamilyTree = deps.TreeAccess(AccessLevel.READ),
    db: AsyncSession = Depends(deps.get_db),
    passing_service: PassingRecordServiceProtocol = Inject(PassingRecordServiceProtocol),
) -> schemas.PassingRecordCheck:
    """Whether the member already has a passing record."""
    return await passing_service.check(db, tree=tree, member_id=member_id)


@router.get(
    "/{family_tree_id}/passing-records/{record_id}", response_model=schemas.PassingRecord
)
async def read_passing_record(
    record_id: int = deps.PathId("record_id"),
    tree: FamilyTree = deps.TreeAccess(AccessLevel.READ),
    db: AsyncSession = Depends(deps.get_db),
    passing_service: PassingRecordServiceProtocol = Inject(PassingRecordServiceProtocol),
) -> schemas.PassingRecord:
    """One passing record with causes and burial places."""
    return await passing_service.get(db, tree=tree, record_id=record_id)


@router.put(
    "/{family_tree_id}/passing-records/{record_id}", response_model=schemas.PassingRecord
)
async def update_passing_record(
    record_in: schemas.PassingRecordUpdate,
    record_id: int = deps.PathId("record_id"),
    tree: FamilyTree = deps.TreeAccess(AccessLevel.OWNER_WRITE),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    passing_service: PassingRecordServiceProtocol = Inject(PassingRecordServiceProtocol),
) -> schemas.PassingRecord:
    """Edit a passing record. Lists given in the body replace the stored ones."""
    return await passing_service.update(
        db, tree=tree, record_id=record_id, record_in=record_in, ctx=ctx
    )


@router.delete(
    "/{family_tree_id}/passing-records/{record_id}", response_model=schemas.PassingRecord
)
async def delete_passing_record(
    record_id: int = deps.PathId("record_id"),
    tree: FamilyTree = deps.TreeAccess(AccessLevel.OWNER_WRITE),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    passing_service: PassingRecordServiceProtocol = Inject(PassingRecordServiceProtocol),
) -> schemas.PassingRecord:
    """Delete a passing record."""
    return await passing_service.delete(db, tree=tree, record_id=record_id, ctx=ctx)
