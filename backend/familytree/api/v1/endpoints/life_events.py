"""Life event endpoints: marriages, divorces and birth records.

All routes sit under a tree. Recording a marriage, a divorce or a birth date
is reserved to the tree owner.
"""

from typing import List

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.api import deps
from familytree.api.context import ApiContext
from familytree.api.deps import Inject
from familytree.api.router import TrailingSlashRouter
from familytree.core.shared_models import AccessLevel
from familytree.domains.life_events.protocols import LifeEventServiceProtocol
from familytree.models.family_tree import FamilyTree

router = TrailingSlashRouter()


@router.get("/{family_tree_id}/life-events", response_model=List[schemas.SpouseRelationship])
async def list_life_events(
    tree: FamilyTree = deps.TreeAccess(AccessLevel.READ),
    db: AsyncSession = Depends(deps.get_db),
    life_event_service: LifeEventServiceProtocol = Inject(LifeEventServiceProtocol),
) -> List[schemas.SpouseRelationship]:
    """Spouse relationships of the tree, newest marriage first."""
    return await life_event_service.list_marriages(db, tree=tree)


@router.get(
    "/{family_tree_id}/life-events/{relationship_id}",
    response_model=schemas.SpouseRelationship,
)
async def read_life_event(
    relationship_id: int = deps.PathId("relationship_id"),
    tree: FamilyTree = deps.TreeAccess(AccessLevel.READ),
    db: AsyncSession = Depends(deps.get_db),
    life_event_service: LifeEventServiceProtocol = Inject(LifeEventServiceProtocol),
) -> schemas.SpouseRelationship:
    """One spouse relationship."""
    return await life_event_service.get_marriage(db, tree=tree, relationship_id=relationship_id)


@router.post(
    "/{family_tree_id}/marriages", response_model=schemas.SpouseRelationship, status_code=201
)
async def record_marriage(
    marriage_in: schemas.MarriageCreate,
    tree: FamilyTree = deps.TreeAccess(AccessLevel.OWNER_WRITE),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    life_event_service: LifeEventServiceProtocol = Inject(LifeEventServiceProtocol),
) -> schemas.SpouseRelationship:
    """Marry two members of the tree."""
    return await life_event_service.record_marriage(
        db, tree=tree, marriage_in=marriage_in, ctx=ctx
    )


@router.get("/{family_tree_id}/divorces", response_model=List[schemas.SpouseRelationship])
async def list_divorce_candidates(
    tree: FamilyTree = deps.TreeAccess(AccessLevel.READ),
    db: AsyncSession = Depends(deps.get_db),
    life_event_service: LifeEventServiceProtocol = Inject(LifeEventServiceProtocol),
) -> List[schemas.SpouseRelationship]:
    """Couples that are still married."""
    return await life_event_service.list_divorce_candidates(db, tree=tree)


@router.patch("/{family_tree_id}/divorces", response_model=schemas.SpouseRelationship)
async def record_divorce(
    divorce_in: schemas.DivorceCreate,
    tree: FamilyTree = deps.TreeAccess(AccessLevel.OWNER_WRITE),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    life_event_service: LifeEventServiceProtocol = Inject(LifeEventServiceProtocol),
) -> schemas.SpouseRelationship:
    """Close a marriage with a divorce date."""
    return await life_event_service.record_divorce(db, tree=tree, divorce_in=divorce_in, ctx=ctx)


@router.get("/{family_tree_id}/birth-records/{child_id}", response_model=schemas.BirthRecord)
async def read_birth_record(
    child_id: int = deps.PathId("child_id"),
    tree: FamilyTree = deps.TreeAccess(AccessLevel.READ),
    db: AsyncSession = Depends(deps.get_db),
    life_event_service: LifeEventServiceProtocol = Inject(LifeEventServiceProtocol),
) -> schemas.BirthRecord:
    """A child, its parent and the recorded birth date."""
    return await life_event_service.get_birth_record(db, tree=tree, child_id=child_id)


@router.put("/{family_tree_id}/birth-records/{child_id}", response_model=schemas.BirthRecord)
async def update_birth_record(
    birth_in: schemas.BirthRecordUpdate,
    child_id: int = deps.PathId("child_id"),
    tree: FamilyTree = deps.TreeAccess(AccessLevel.OWNER_WRITE),
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.get_context),
    life_event_service: LifeEventServiceProtocol = Inject(LifeEventServiceProtocol),
) -> schemas.BirthRecord:
    """Set the child's birth date."""
    return await life_event_service.update_birth_record(
        db, tree=tree, child_id=child_id, birth_in=birth_in, ctx=ctx
    )
