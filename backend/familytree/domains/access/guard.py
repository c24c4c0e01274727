"""Access guard: tree visibility and role checks for every tree-scoped request.

Resolution order is fixed:

1. The tree (or member) must exist and be readable by the session, otherwise
   404. Owners read the trees they own; guests read the one tree their access
   code is bound to.
2. Owner-only actions are refused to guests with 403.
3. Own-profile actions are refused to guests whose bound member is not the
   target, with 403.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from familytree.api.context import ApiContext
from familytree.core.messages import message
from familytree.core.shared_models import AccessLevel
from familytree.domains.access.exceptions import ActionForbiddenError, OwnProfileOnlyError
from familytree.domains.access.protocols import AccessGuardProtocol
from familytree.domains.family_trees.exceptions import FamilyTreeNotFoundError
from familytree.domains.family_trees.protocols import FamilyTreeRepositoryProtocol
from familytree.domains.members.exceptions import FamilyMemberNotFoundError
from familytree.domains.members.protocols import FamilyMemberRepositoryProtocol
from familytree.models.family_member import FamilyMember
from familytree.models.family_tree import FamilyTree


class AccessGuard(AccessGuardProtocol):
    """Applies the tree access policy for owner and guest sessions."""

    def __init__(
        self,
        family_tree_repo: FamilyTreeRepositoryProtocol,
        member_repo: FamilyMemberRepositoryProtocol,
    ) -> None:
        """Initialize with injected dependencies."""
        self._family_tree_repo = family_tree_repo
        self._member_repo = member_repo

    async def authorize_tree(
        self,
        db: AsyncSession,
        ctx: ApiContext,
        family_tree_id: int,
        level: AccessLevel = AccessLevel.READ,
    ) -> FamilyTree:
        """Return the tree if the caller may act on it at ``level``.

        Raises:
            FamilyTreeNotFoundError: The tree does not exist or is not visible.
            ActionForbiddenError: A guest asked for an owner-only action.
        """
        tree = await self._readable_tree(db, ctx, family_tree_id)
        if level == AccessLevel.OWNER_WRITE and ctx.is_guest:
            ctx.logger.warning(f"Guest denied owner-only action on family tree {tree.id}")
            raise ActionForbiddenError(message("forbidden"))
        return tree

    async def authorize_member(
        self,
        db: AsyncSession,
        ctx: ApiContext,
        member_id: int,
        level: AccessLevel = AccessLevel.READ,
    ) -> FamilyMember:
        """Return the member if the caller may act on it at ``level``.

        Raises:
            FamilyMemberNotFoundError: The member does not exist or its tree is
                not visible.
            ActionForbiddenError: A guest asked for an owner-only action.
            OwnProfileOnlyError: A guest asked to edit another member.
        """
        member = await self._member_repo.get(db, member_id)
        if member is None:
            raise FamilyMemberNotFoundError(member_id)
        try:
            await self._readable_tree(db, ctx, member.family_tree_id)
        except FamilyTreeNotFoundError:
            raise FamilyMemberNotFoundError(member_id) from None

        if ctx.is_guest:
            if level == AccessLevel.OWNER_WRITE:
                ctx.logger.warning(f"Guest denied owner-only action on member {member_id}")
                raise ActionForbiddenError(message("forbidden"))
            if level == AccessLevel.PROFILE_WRITE and member.id != ctx.guest_member_id:
                ctx.logger.warning(f"Guest denied edit of member {member_id}")
                raise OwnProfileOnlyError(message("own_profile_only"))
        return member

    async def _readable_tree(
        self, db: AsyncSession, ctx: ApiContext, family_tree_id: int
    ) -> FamilyTree:
        if ctx.is_guest:
            tree = None
            if family_tree_id == ctx.guest_family_tree_id:
                tree = await self._family_tree_repo.get(db, family_tree_id)
        else:
            tree = await self._family_tree_repo.get_for_owner(db, family_tree_id, ctx.user_id)
        if tree is None:
            raise FamilyTreeNotFoundError(family_tree_id)
        return tree
