"""Unit tests for LifeEventService: marriages, divorces and birth records."""

from datetime import date, timedelta

import pytest

from familytree import schemas
from familytree.core.datetime_utils import today
from familytree.core.shared_models import ChangeAction, EntityType
from familytree.domains.life_events.exceptions import (
    AlreadyDivorcedError,
    AlreadyMarriedError,
    InvalidLifeEventDateError,
    MarriageNotFoundError,
    MissingParentError,
)
from familytree.domains.life_events.service import LifeEventService
from familytree.domains.members.exceptions import FamilyMemberNotFoundError


@pytest.fixture
def service(fake_spouse_repo, fake_member_repo, fake_change_logger):
    return LifeEventService(
        spouse_repo=fake_spouse_repo,
        member_repo=fake_member_repo,
        change_logger=fake_change_logger,
    )


@pytest.fixture
def tree(fake_family_tree_repo):
    return fake_family_tree_repo.seed(user_id=1, family_name="Nguyễn")


@pytest.fixture
def husband(fake_member_repo, tree):
    return fake_member_repo.seed(
        family_tree_id=tree.id, full_name="Nguyễn Văn A", birthday=date(1920, 1, 1)
    )


@pytest.fixture
def wife(fake_member_repo, tree):
    return fake_member_repo.seed(family_tree_id=tree.id, full_name="Trần Thị B")


@pytest.fixture
def marriage(fake_spouse_repo, husband, wife):
    return fake_spouse_repo.seed(husband, wife, marriage_date=date(1945, 6, 1))


class TestMarriages:
    @pytest.mark.asyncio
    async def test_record_marriage_orders_pair_and_logs(
        self, service, db, tree, husband, wife, owner_ctx, fake_change_logger
    ):
        result = await service.record_marriage(
            db,
            tree=tree,
            marriage_in=schemas.MarriageCreate(
                member1_id=wife.id, member2_id=husband.id, marriage_date=date(1945, 6, 1)
            ),
            ctx=owner_ctx,
        )

        assert result.family_member1.id == husband.id
        assert result.family_member2.id == wife.id
        assert result.divorce_date is None
        [entry] = fake_change_logger.entries
        assert entry["entity_type"] == EntityType.SPOUSE_RELATIONSHIP
        assert entry["action"] == ChangeAction.CREATE
        assert entry["new_values"]["marriage_date"] == "1945-06-01"

    @pytest.mark.asyncio
    async def test_existing_marriage_is_conflict(
        self, service, db, tree, husband, wife, marriage, owner_ctx
    ):
        with pytest.raises(AlreadyMarriedError):
            await service.record_marriage(
                db,
                tree=tree,
                marriage_in=schemas.MarriageCreate(
                    member1_id=husband.id, member2_id=wife.id, marriage_date=date(1950, 1, 1)
                ),
                ctx=owner_ctx,
            )

    @pytest.mark.asyncio
    async def test_future_marriage_is_rejected(self, service, db, tree, husband, wife, owner_ctx):
        with pytest.raises(InvalidLifeEventDateError):
            await service.record_marriage(
                db,
                tree=tree,
                marriage_in=schemas.MarriageCreate(
                    member1_id=husband.id,
                    member2_id=wife.id,
                    marriage_date=today() + timedelta(days=1),
                ),
                ctx=owner_ctx,
            )

    @pytest.mark.asyncio
    async def test_member_outside_tree_is_not_found(
        self, service, db, tree, husband, owner_ctx, fake_member_repo
    ):
        outsider = fake_member_repo.seed(family_tree_id=tree.id + 1, full_name="Outsider")

        with pytest.raises(FamilyMemberNotFoundError):
            await service.record_marriage(
                db,
                tree=tree,
                marriage_in=schemas.MarriageCreate(
                    member1_id=husband.id, member2_id=outsider.id, marriage_date=date(1950, 1, 1)
                ),
                ctx=owner_ctx,
            )

    def test_same_member_twice_is_invalid_payload(self):
        with pytest.raises(ValueError):
            schemas.MarriageCreate(member1_id=1, member2_id=1, marriage_date=date(1950, 1, 1))

    @pytest.mark.asyncio
    async def test_list_and_get(self, service, db, tree, marriage):
        rows = await service.list_marriages(db, tree=tree)
        one = await service.get_marriage(db, tree=tree, relationship_id=marriage.id)

        assert [r.id for r in rows] == [marriage.id]
        assert one.marriage_date == date(1945, 6, 1)

    @pytest.mark.asyncio
    async def test_get_from_other_tree_is_not_found(self, service, db, fake_family_tree_repo, marriage):
        other_tree = fake_family_tree_repo.seed(user_id=1, family_name="Lê")

        with pytest.raises(MarriageNotFoundError):
            await service.get_marriage(db, tree=other_tree, relationship_id=marriage.id)


class TestDivorces:
    @pytest.mark.asyncio
    async def test_record_divorce_logs_update(
        self, service, db, tree, husband, wife, marriage, owner_ctx, fake_change_logger
    ):
        result = await service.record_divorce(
            db,
            tree=tree,
            divorce_in=schemas.DivorceCreate(
                member1_id=wife.id, member2_id=husband.id, divorce_date=date(1960, 3, 1)
            ),
            ctx=owner_ctx,
        )

        assert result.divorce_date == date(1960, 3, 1)
        [entry] = fake_change_logger.entries
        assert entry["action"] == ChangeAction.UPDATE
        assert entry["old_values"]["divorce_date"] is None
        assert entry["new_values"]["divorce_date"] == "1960-03-01"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("divorce_date", [date(1945, 6, 1), date(1940, 1, 1)])
    async def test_divorce_not_after_marriage_is_rejected(
        self, service, db, tree, husband, wife, marriage, owner_ctx, divorce_date
    ):
        with pytest.raises(InvalidLifeEventDateError) as exc_info:
            await service.record_divorce(
                db,
                tree=tree,
                divorce_in=schemas.DivorceCreate(
                    member1_id=husband.id, member2_id=wife.id, divorce_date=divorce_date
                ),
                ctx=owner_ctx,
            )
        assert exc_info.value.message == "Divorce date must be after the marriage date"
        assert marriage.divorce_date is None

    @pytest.mark.asyncio
    async def test_already_divorced_is_conflict(
        self, service, db, tree, husband, wife, marriage, owner_ctx
    ):
        marriage.divorce_date = date(1955, 1, 1)

        with pytest.raises(AlreadyDivorcedError):
            await service.record_divorce(
                db,
                tree=tree,
                divorce_in=schemas.DivorceCreate(
                    member1_id=husband.id, member2_id=wife.id, divorce_date=date(1960, 1, 1)
                ),
                ctx=owner_ctx,
            )

    @pytest.mark.asyncio
    async def test_unmarried_couple_is_not_found(self, service, db, tree, husband, wife, owner_ctx):
        with pytest.raises(MarriageNotFoundError) as exc_info:
            await service.record_divorce(
                db,
                tree=tree,
                divorce_in=schemas.DivorceCreate(
                    member1_id=husband.id, member2_id=wife.id, divorce_date=date(1960, 1, 1)
                ),
                ctx=owner_ctx,
            )
        assert exc_info.value.message == "No marriage found between these members"

    @pytest.mark.asyncio
    async def test_candidates_exclude_divorced_couples(
        self, service, db, tree, husband, wife, marriage, fake_member_repo, fake_spouse_repo
    ):
        c = fake_member_repo.seed(family_tree_id=tree.id, full_name="C")
        d = fake_member_repo.seed(family_tree_id=tree.id, full_name="D")
        fake_spouse_repo.seed(c, d, marriage_date=date(1970, 1, 1), divorce_date=date(1980, 1, 1))

        rows = await service.list_divorce_candidates(db, tree=tree)

        assert [r.id for r in rows] == [marriage.id]


class TestBirthRecords:
    @pytest.fixture
    def child(self, fake_member_repo, tree, husband):
        return fake_member_repo.seed(
            family_tree_id=tree.id,
            full_name="Nguyễn Văn C",
            parent_id=husband.id,
            relationship_established_date=date(1950, 2, 2),
        )

    @pytest.mark.asyncio
    async def test_get_birth_record(self, service, db, tree, husband, child):
        record = await service.get_birth_record(db, tree=tree, child_id=child.id)

        assert record.child.id == child.id
        assert record.parent.id == husband.id
        assert record.birth_date == date(1950, 2, 2)

    @pytest.mark.asyncio
    async def test_member_without_parent_is_bad_request(self, service, db, tree, wife):
        with pytest.raises(MissingParentError):
            await service.get_birth_record(db, tree=tree, child_id=wife.id)

    @pytest.mark.asyncio
    async def test_update_logs_member_update(
        self, service, db, tree, child, owner_ctx, fake_change_logger
    ):
        record = await service.update_birth_record(
            db,
            tree=tree,
            child_id=child.id,
            birth_in=schemas.BirthRecordUpdate(birth_date=date(1951, 3, 3)),
            ctx=owner_ctx,
        )

        assert record.birth_date == date(1951, 3, 3)
        [entry] = fake_change_logger.entries
        assert entry["entity_type"] == EntityType.FAMILY_MEMBER
        assert entry["old_values"]["relationship_established_date"] == "1950-02-02"
        assert entry["new_values"]["relationship_established_date"] == "1951-03-03"

    @pytest.mark.asyncio
    async def test_birth_before_parent_birthday_is_rejected(
        self, service, db, tree, child, owner_ctx
    ):
        with pytest.raises(InvalidLifeEventDateError):
            await service.update_birth_record(
                db,
                tree=tree,
                child_id=child.id,
                birth_in=schemas.BirthRecordUpdate(birth_date=date(1919, 12, 31)),
                ctx=owner_ctx,
            )

    @pytest.mark.asyncio
    async def test_future_birth_is_rejected(self, service, db, tree, child, owner_ctx):
        with pytest.raises(InvalidLifeEventDateError):
            await service.update_birth_record(
                db,
                tree=tree,
                child_id=child.id,
                birth_in=schemas.BirthRecordUpdate(birth_date=today() + timedelta(days=1)),
                ctx=owner_ctx,
            )
