"""Unit tests for AccessGuard.

Covers the uniform policy: unreadable means 404 for every role, a guest on an
owner-only action gets 403, and a guest may only write its own member.
"""

import pytest

from familytree.core.messages import message
from familytree.core.shared_models import AccessLevel
from familytree.domains.access.exceptions import ActionForbiddenError, OwnProfileOnlyError
from familytree.domains.access.guard import AccessGuard
from familytree.domains.family_trees.exceptions import FamilyTreeNotFoundError
from familytree.domains.members.exceptions import FamilyMemberNotFoundError


@pytest.fixture
def guard(fake_family_tree_repo, fake_member_repo):
    return AccessGuard(family_tree_repo=fake_family_tree_repo, member_repo=fake_member_repo)


@pytest.fixture
def own_tree(fake_family_tree_repo):
    return fake_family_tree_repo.seed(user_id=1, tree_owner_id=1, family_name="Nguyễn")


@pytest.fixture
def foreign_tree(fake_family_tree_repo):
    return fake_family_tree_repo.seed(user_id=2, tree_owner_id=2, family_name="Trần")


@pytest.fixture
def guest_member(fake_member_repo, own_tree):
    return fake_member_repo.seed(family_tree_id=own_tree.id, full_name="Guest Member")


@pytest.fixture
def other_member(fake_member_repo, own_tree):
    return fake_member_repo.seed(family_tree_id=own_tree.id, full_name="Other Member")


@pytest.fixture
def guest_ctx(make_guest_ctx, guest_member, own_tree):
    return make_guest_ctx(member_id=guest_member.id, family_tree_id=own_tree.id)


class TestAuthorizeTree:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("level", list(AccessLevel))
    async def test_owner_may_act_on_own_tree(self, guard, db, owner_ctx, own_tree, level):
        tree = await guard.authorize_tree(db, owner_ctx, own_tree.id, level=level)
        assert tree.id == own_tree.id

    @pytest.mark.asyncio
    async def test_foreign_tree_is_not_found_for_owner(self, guard, db, owner_ctx, foreign_tree):
        with pytest.raises(FamilyTreeNotFoundError):
            await guard.authorize_tree(db, owner_ctx, foreign_tree.id)

    @pytest.mark.asyncio
    async def test_missing_tree_is_not_found(self, guard, db, owner_ctx):
        with pytest.raises(FamilyTreeNotFoundError):
            await guard.authorize_tree(db, owner_ctx, 999)

    @pytest.mark.asyncio
    async def test_guest_reads_bound_tree(self, guard, db, guest_ctx, own_tree):
        tree = await guard.authorize_tree(db, guest_ctx, own_tree.id)
        assert tree.id == own_tree.id

    @pytest.mark.asyncio
    async def test_guest_cannot_see_other_tree(self, guard, db, guest_ctx, foreign_tree):
        with pytest.raises(FamilyTreeNotFoundError):
            await guard.authorize_tree(db, guest_ctx, foreign_tree.id, level=AccessLevel.OWNER_WRITE)

    @pytest.mark.asyncio
    async def test_guest_owner_only_action_is_forbidden(self, guard, db, guest_ctx, own_tree):
        with pytest.raises(ActionForbiddenError) as exc_info:
            await guard.authorize_tree(db, guest_ctx, own_tree.id, level=AccessLevel.OWNER_WRITE)
        assert exc_info.value.message == message("forbidden")


class TestAuthorizeMember:
    @pytest.mark.asyncio
    async def test_owner_may_edit_any_member_of_own_tree(self, guard, db, owner_ctx, other_member):
        member = await guard.authorize_member(
            db, owner_ctx, other_member.id, level=AccessLevel.PROFILE_WRITE
        )
        assert member.id == other_member.id

    @pytest.mark.asyncio
    async def test_member_of_foreign_tree_is_not_found(
        self, guard, db, owner_ctx, fake_member_repo, foreign_tree
    ):
        stranger = fake_member_repo.seed(family_tree_id=foreign_tree.id, full_name="Stranger")

        with pytest.raises(FamilyMemberNotFoundError):
            await guard.authorize_member(db, owner_ctx, stranger.id)

    @pytest.mark.asyncio
    async def test_missing_member_is_not_found(self, guard, db, owner_ctx):
        with pytest.raises(FamilyMemberNotFoundError):
            await guard.authorize_member(db, owner_ctx, 999)

    @pytest.mark.asyncio
    async def test_guest_edits_own_profile(self, guard, db, guest_ctx, guest_member):
        member = await guard.authorize_member(
            db, guest_ctx, guest_member.id, level=AccessLevel.PROFILE_WRITE
        )
        assert member.id == guest_member.id

    @pytest.mark.asyncio
    async def test_guest_reads_other_member(self, guard, db, guest_ctx, other_member):
        member = await guard.authorize_member(db, guest_ctx, other_member.id)
        assert member.id == other_member.id

    @pytest.mark.asyncio
    async def test_guest_cannot_edit_other_member(self, guard, db, guest_ctx, other_member):
        with pytest.raises(OwnProfileOnlyError) as exc_info:
            await guard.authorize_member(
                db, guest_ctx, other_member.id, level=AccessLevel.PROFILE_WRITE
            )
        assert exc_info.value.message == message("own_profile_only")

    @pytest.mark.asyncio
    async def test_guest_cannot_delete_even_own_member(self, guard, db, guest_ctx, guest_member):
        with pytest.raises(ActionForbiddenError):
            await guard.authorize_member(
                db, guest_ctx, guest_member.id, level=AccessLevel.OWNER_WRITE
            )
