"""Unit tests for UserService."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError

from familytree import schemas
from familytree.core.security import hash_password, verify_password
from familytree.domains.users.exceptions import (
    EmailAlreadyInUseError,
    IncorrectPasswordError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from familytree.domains.users.service import UserService


@pytest.fixture
def service(fake_user_repo, fake_tree_owner_repo, fake_family_tree_repo):
    return UserService(
        user_repo=fake_user_repo,
        tree_owner_repo=fake_tree_owner_repo,
        family_tree_repo=fake_family_tree_repo,
    )


@pytest.fixture
def seeded_user(fake_user_repo, fake_tree_owner_repo):
    user = fake_user_repo.seed(
        id=1,
        email="owner@example.com",
        full_name="Owner",
        password_hash=hash_password("correct-horse"),
    )
    fake_tree_owner_repo.seed(user_id=user.id, full_name="Owner", email=user.email)
    return user


class TestRegister:
    @pytest.mark.asyncio
    async def test_creates_user_and_owner_profile_together(
        self, service, db, fake_user_repo, fake_tree_owner_repo
    ):
        user_in = schemas.UserCreate(
            email="New.Person@Example.com", full_name="  New Person ", password="longenough"
        )

        user = await service.register(db, user_in=user_in)

        assert user.email == "new.person@example.com"
        assert user.full_name == "New Person"
        owner = await fake_tree_owner_repo.get_by_user_id(db, user.id)
        assert owner is not None
        assert owner.email == "new.person@example.com"
        stored = await fake_user_repo.get(db, user.id)
        assert verify_password(stored.password_hash, "longenough")
        db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_duplicate_email_is_conflict(self, service, db, seeded_user):
        user_in = schemas.UserCreate(
            email="OWNER@example.com", full_name="Someone", password="longenough"
        )

        with pytest.raises(EmailAlreadyInUseError):
            await service.register(db, user_in=user_in)
        db.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_lost_race_on_unique_email_is_conflict(self, service, db, fake_user_repo):
        fake_user_repo.create = AsyncMock(
            side_effect=IntegrityError("INSERT INTO user", {}, Exception("unique"))
        )
        user_in = schemas.UserCreate(
            email="race@example.com", full_name="Racer", password="longenough"
        )

        with pytest.raises(EmailAlreadyInUseError):
            await service.register(db, user_in=user_in)
        db.rollback.assert_awaited_once()


class TestAuthenticate:
    @pytest.mark.asyncio
    async def test_valid_credentials(self, service, db, seeded_user):
        user = await service.authenticate(
            db,
            credentials=schemas.LoginRequest(email="owner@example.com", password="correct-horse"),
        )
        assert user.id == seeded_user.id

    @pytest.mark.asyncio
    async def test_wrong_password(self, service, db, seeded_user):
        with pytest.raises(InvalidCredentialsError):
            await service.authenticate(
                db,
                credentials=schemas.LoginRequest(email="owner@example.com", password="nope"),
            )

    @pytest.mark.asyncio
    async def test_unknown_email(self, service, db):
        with pytest.raises(InvalidCredentialsError):
            await service.authenticate(
                db,
                credentials=schemas.LoginRequest(email="ghost@example.com", password="whatever"),
            )


class TestAccount:
    @pytest.mark.asyncio
    async def test_get_account(self, service, db, seeded_user, owner_ctx):
        account = await service.get_account(db, ctx=owner_ctx)

        assert account.id == 1
        assert account.name == "Owner"
        assert account.has_password is True

    @pytest.mark.asyncio
    async def test_missing_user_is_not_found(self, service, db, make_owner_ctx):
        with pytest.raises(UserNotFoundError):
            await service.get_account(db, ctx=make_owner_ctx(user_id=404))

    @pytest.mark.asyncio
    async def test_rename_updates_owner_profile(
        self, service, db, seeded_user, owner_ctx, fake_tree_owner_repo
    ):
        account = await service.update_account(
            db, account_in=schemas.AccountUpdate(name=" Renamed "), ctx=owner_ctx
        )

        assert account.name == "Renamed"
        owner = await fake_tree_owner_repo.get_by_user_id(db, seeded_user.id)
        assert owner.full_name == "Renamed"
        db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_change_password(self, service, db, seeded_user, owner_ctx):
        await service.change_password(
            db,
            password_in=schemas.PasswordChange(
                current_password="correct-horse", new_password="battery-staple"
            ),
            ctx=owner_ctx,
        )

        assert verify_password(seeded_user.password_hash, "battery-staple")
        assert not verify_password(seeded_user.password_hash, "correct-horse")

    @pytest.mark.asyncio
    async def test_change_password_rejects_wrong_current(self, service, db, seeded_user, owner_ctx):
        with pytest.raises(IncorrectPasswordError):
            await service.change_password(
                db,
                password_in=schemas.PasswordChange(
                    current_password="wrong", new_password="battery-staple"
                ),
                ctx=owner_ctx,
            )
        db.commit.assert_not_awaited()


class TestDeleteAccount:
    @pytest.mark.asyncio
    async def test_reports_deleted_tree_count(
        self, service, db, seeded_user, owner_ctx, fake_user_repo, fake_family_tree_repo
    ):
        fake_family_tree_repo.seed(user_id=seeded_user.id, family_name="Nguyễn")
        fake_family_tree_repo.seed(user_id=seeded_user.id, family_name="Trần")
        fake_family_tree_repo.seed(user_id=99, tree_owner_id=50, family_name="Lê")

        result = await service.delete_account(
            db, delete_in=schemas.AccountDelete(password="correct-horse"), ctx=owner_ctx
        )

        assert result.success is True
        assert result.deleted_trees_count == 2
        assert await fake_user_repo.get(db, seeded_user.id) is None

    @pytest.mark.asyncio
    async def test_requires_password(self, service, db, seeded_user, owner_ctx, fake_user_repo):
        with pytest.raises(IncorrectPasswordError):
            await service.delete_account(
                db, delete_in=schemas.AccountDelete(password="wrong"), ctx=owner_ctx
            )
        assert await fake_user_repo.get(db, seeded_user.id) is not None
