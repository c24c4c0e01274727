"""Unit tests for GuestAccessService."""

from datetime import timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from familytree import schemas
from familytree.core.config import settings
from familytree.core.datetime_utils import utc_now
from familytree.core.messages import message
from familytree.core.security import ACCESS_CODE_LENGTH
from familytree.domains.guest_access.exceptions import (
    AccessCodeExpiredError,
    AccessCodeNotFoundError,
    AccessCodeRequiredError,
    InvalidAccessCodeError,
)
from familytree.domains.guest_access.service import GuestAccessService, is_code_expired
from familytree.domains.members.exceptions import FamilyMemberNotFoundError

TTL = timedelta(hours=settings.GUEST_CODE_TTL_HOURS)


@pytest.fixture
def service(fake_guest_editor_repo, fake_member_repo):
    return GuestAccessService(
        guest_editor_repo=fake_guest_editor_repo, member_repo=fake_member_repo
    )


@pytest.fixture
def tree(fake_family_tree_repo):
    return fake_family_tree_repo.seed(user_id=1, family_name="Vũ")


@pytest.fixture
def member(fake_member_repo, tree):
    return fake_member_repo.seed(family_tree_id=tree.id, full_name="Vũ Thị H")


def _seed_editor(repo, tree, member, *, code="x" * ACCESS_CODE_LENGTH, age=timedelta(0)):
    return repo.seed(
        family_tree_id=tree.id,
        family_member_id=member.id,
        family_tree=tree,
        family_member=member,
        access_code=code,
        created_at=utc_now() - age,
    )


def test_code_expiry_boundary():
    minted = utc_now()

    assert is_code_expired(minted, minted + TTL) is False
    assert is_code_expired(minted, minted + TTL + timedelta(seconds=1)) is True


class TestIssue:
    @pytest.mark.asyncio
    async def test_first_issue_mints_code(self, service, db, tree, member, owner_ctx):
        issued = await service.issue(
            db,
            tree=tree,
            invite_in=schemas.GuestInviteCreate(family_member_id=member.id),
            ctx=owner_ctx,
        )

        assert issued.is_new is True
        assert len(issued.access_code) == ACCESS_CODE_LENGTH
        assert issued.family_member.id == member.id
        assert issued.message == message("access_code_issued")

    @pytest.mark.asyncio
    async def test_reissue_within_ttl_returns_same_code(
        self, service, db, tree, member, owner_ctx
    ):
        invite_in = schemas.GuestInviteCreate(family_member_id=member.id)
        first = await service.issue(db, tree=tree, invite_in=invite_in, ctx=owner_ctx)
        second = await service.issue(db, tree=tree, invite_in=invite_in, ctx=owner_ctx)

        assert second.is_new is False
        assert second.access_code == first.access_code
        assert second.expires_at == first.expires_at
        assert second.message == message("access_code_active")

    @pytest.mark.asyncio
    async def test_issue_after_expiry_rotates_code(
        self, service, db, tree, member, owner_ctx, fake_guest_editor_repo
    ):
        stale = _seed_editor(
            fake_guest_editor_repo, tree, member, age=TTL + timedelta(minutes=1)
        )
        old_code = stale.access_code

        issued = await service.issue(
            db,
            tree=tree,
            invite_in=schemas.GuestInviteCreate(family_member_id=member.id),
            ctx=owner_ctx,
        )

        assert issued.is_new is True
        assert issued.access_code != old_code
        assert stale.access_code == issued.access_code
        assert issued.expires_at > utc_now() + TTL - timedelta(minutes=1)

    @pytest.mark.asyncio
    async def test_lost_race_returns_winner_code(
        self, service, db, tree, member, owner_ctx, fake_guest_editor_repo
    ):
        winner_code = "w" * ACCESS_CODE_LENGTH
        fake_guest_editor_repo.lose_next_race(
            winner={
                "family_tree_id": tree.id,
                "family_member_id": member.id,
                "family_tree": tree,
                "family_member": member,
                "access_code": winner_code,
                "created_at": utc_now(),
            },
            exc=IntegrityError("INSERT INTO guest_editor", {}, Exception("unique")),
        )

        issued = await service.issue(
            db,
            tree=tree,
            invite_in=schemas.GuestInviteCreate(family_member_id=member.id),
            ctx=owner_ctx,
        )

        assert issued.access_code == winner_code
        assert issued.is_new is False
        db.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_member_from_other_tree_is_not_found(
        self, service, db, tree, owner_ctx, fake_member_repo
    ):
        outsider = fake_member_repo.seed(family_tree_id=tree.id + 1, full_name="Outsider")

        with pytest.raises(FamilyMemberNotFoundError):
            await service.issue(
                db,
                tree=tree,
                invite_in=schemas.GuestInviteCreate(family_member_id=outsider.id),
                ctx=owner_ctx,
            )


class TestRedeem:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("code", [None, "", "   "])
    async def test_missing_code(self, service, db, code):
        with pytest.raises(AccessCodeRequiredError):
            await service.redeem(db, access_code=code)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("length", [ACCESS_CODE_LENGTH - 1, ACCESS_CODE_LENGTH + 1])
    async def test_wrong_length(self, service, db, length):
        with pytest.raises(InvalidAccessCodeError):
            await service.redeem(db, access_code="a" * length)

    @pytest.mark.asyncio
    async def test_unknown_code(self, service, db):
        with pytest.raises(AccessCodeNotFoundError):
            await service.redeem(db, access_code="a" * ACCESS_CODE_LENGTH)

    @pytest.mark.asyncio
    async def test_expired_code(self, service, db, tree, member, fake_guest_editor_repo):
        stale = _seed_editor(fake_guest_editor_repo, tree, member, age=TTL + timedelta(hours=1))

        with pytest.raises(AccessCodeExpiredError):
            await service.redeem(db, access_code=stale.access_code)

    @pytest.mark.asyncio
    async def test_active_code_strips_whitespace(
        self, service, db, tree, member, fake_guest_editor_repo
    ):
        editor = _seed_editor(fake_guest_editor_repo, tree, member)

        redeemed = await service.redeem(db, access_code=f" {editor.access_code}\n")

        assert redeemed is editor

    @pytest.mark.asyncio
    async def test_get_active_drops_expired_editor(
        self, service, db, tree, member, fake_guest_editor_repo
    ):
        editor = _seed_editor(fake_guest_editor_repo, tree, member, age=TTL * 2)

        assert await service.get_active(db, editor.id) is None
        assert await service.get_active(db, editor.id + 100) is None


class TestList:
    @pytest.mark.asyncio
    async def test_list_flags_expired_codes(
        self, service, db, tree, member, fake_member_repo, fake_guest_editor_repo
    ):
        other = fake_member_repo.seed(family_tree_id=tree.id, full_name="Vũ Văn I")
        fresh = _seed_editor(fake_guest_editor_repo, tree, member)
        stale = _seed_editor(
            fake_guest_editor_repo, tree, other, code="s" * ACCESS_CODE_LENGTH, age=TTL * 2
        )

        invites = await service.list(db, tree=tree)

        assert [(i.id, i.is_expired) for i in invites] == [(fresh.id, False), (stale.id, True)]
        assert invites[1].expires_at < utc_now()
