"""Change log endpoint: the audit trail of a tree."""

from typing import List

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.api import deps
from familytree.api.deps import Inject
from familytree.api.router import TrailingSlashRouter
from familytree.core.shared_models import AccessLevel
from familytree.domains.change_logs.protocols import ChangeLoggerProtocol
from familytree.models.family_tree import FamilyTree

router = TrailingSlashRouter()

CHANGE_LOG_PAGE_SIZE = 100


@router.get("/{family_tree_id}/change-logs", response_model=List[schemas.ChangeLog])
async def list_change_logs(
    tree: FamilyTree = deps.TreeAccess(AccessLevel.READ),
    db: AsyncSession = Depends(deps.get_db),
    change_logger: ChangeLoggerProtocol = Inject(ChangeLoggerProtocol),
) -> List[schemas.ChangeLog]:
    """The most recent changes to the tree, newest first."""
    return await change_logger.list_for_tree(db, tree.id, limit=CHANGE_LOG_PAGE_SIZE)
