"""Unit tests for SessionService."""

from datetime import timedelta

import pytest

from familytree import schemas
from familytree.core.config import settings
from familytree.core.datetime_utils import utc_now
from familytree.core.security import ACCESS_CODE_LENGTH, create_session_token, hash_password
from familytree.core.shared_models import SessionRole
from familytree.domains.guest_access.exceptions import AccessCodeExpiredError
from familytree.domains.guest_access.service import GuestAccessService
from familytree.domains.sessions.service import SessionService

CODE = "c" * ACCESS_CODE_LENGTH


@pytest.fixture
def service(fake_user_repo, fake_guest_editor_repo, fake_member_repo):
    return SessionService(
        user_repo=fake_user_repo,
        guest_access_service=GuestAccessService(
            guest_editor_repo=fake_guest_editor_repo, member_repo=fake_member_repo
        ),
    )


@pytest.fixture
def user(fake_user_repo):
    return fake_user_repo.seed(
        email="owner@example.com", full_name="Owner", password_hash=hash_password("pw-long-enough")
    )


@pytest.fixture
def guest_editor(fake_family_tree_repo, fake_member_repo, fake_guest_editor_repo):
    tree = fake_family_tree_repo.seed(user_id=1, family_name="Bùi")
    member = fake_member_repo.seed(family_tree_id=tree.id, full_name="Bùi Văn K")
    return fake_guest_editor_repo.seed(
        family_tree_id=tree.id,
        family_member_id=member.id,
        family_tree=tree,
        family_member=member,
        access_code=CODE,
        created_at=utc_now() - timedelta(hours=1),
    )


class TestOwnerSessions:
    @pytest.mark.asyncio
    async def test_issue_and_resolve(self, service, db, user):
        issued = service.issue_owner_session(schemas.User.model_validate(user))

        resolved = await service.resolve(db, issued.token)

        assert resolved.role == SessionRole.OWNER
        assert resolved.user.id == user.id
        assert resolved.to_schema().email == "owner@example.com"
        assert abs(resolved.expires_at - issued.expires_at) < timedelta(seconds=1)

    @pytest.mark.asyncio
    async def test_deleted_user_is_unauthenticated(self, service, db, user, fake_user_repo):
        issued = service.issue_owner_session(schemas.User.model_validate(user))
        fake_user_repo._store.clear()

        assert await service.resolve(db, issued.token) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "token",
        [
            None,
            "",
            "not-a-jwt",
            create_session_token("1", {"role": "owner"}, secret="another-secret-" * 3),
            create_session_token("1", {"role": "admin"}),
            create_session_token("abc", {"role": "owner"}),
            create_session_token(
                "1", {"role": "owner"}, expires_at=utc_now() - timedelta(minutes=1)
            ),
        ],
        ids=["none", "empty", "garbage", "foreign-secret", "unknown-role", "bad-sub", "expired"],
    )
    async def test_invalid_tokens_resolve_to_none(self, service, db, user, token):
        assert await service.resolve(db, token) is None


class TestGuestSessions:
    @pytest.mark.asyncio
    async def test_redeem_scopes_session_to_member(self, service, db, guest_editor):
        issued, result = await service.start_guest_session(db, access_code=CODE)

        resolved = await service.resolve(db, issued.token)

        assert result.redirect_url == f"/family-trees/{guest_editor.family_tree_id}"
        assert result.guest_info.member_name == "Bùi Văn K"
        assert result.guest_info.family_tree_name == "Bùi"
        assert resolved.role == SessionRole.GUEST
        assert resolved.user is None
        assert resolved.guest_member_id == guest_editor.family_member_id
        assert resolved.guest_family_tree_id == guest_editor.family_tree_id
        assert resolved.guest_editor_id == guest_editor.id

    @pytest.mark.asyncio
    async def test_session_ends_no_later_than_code(self, service, db, guest_editor):
        issued, _ = await service.start_guest_session(db, access_code=CODE)

        code_expiry = guest_editor.created_at + timedelta(hours=settings.GUEST_CODE_TTL_HOURS)
        assert issued.expires_at <= code_expiry

    @pytest.mark.asyncio
    async def test_expired_code_cannot_start_session(self, service, db, guest_editor):
        guest_editor.created_at = utc_now() - timedelta(hours=settings.GUEST_CODE_TTL_HOURS + 1)

        with pytest.raises(AccessCodeExpiredError):
            await service.start_guest_session(db, access_code=CODE)

    @pytest.mark.asyncio
    async def test_code_expiring_after_sign_in_ends_session(self, service, db, guest_editor):
        issued, _ = await service.start_guest_session(db, access_code=CODE)
        guest_editor.created_at = utc_now() - timedelta(hours=settings.GUEST_CODE_TTL_HOURS + 1)

        assert await service.resolve(db, issued.token) is None

    @pytest.mark.asyncio
    async def test_rescoped_guest_editor_invalidates_token(self, service, db, guest_editor):
        issued, _ = await service.start_guest_session(db, access_code=CODE)
        guest_editor.family_member_id += 100

        assert await service.resolve(db, issued.token) is None
