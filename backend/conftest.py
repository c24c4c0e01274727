"""Root conftest for pytest configuration and shared fixtures.

This conftest is loaded before the colocated tests under familytree/, making
its fixtures available to domain, core and API tests alike.
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

# Register pytest-asyncio plugin at the root level
pytest_plugins = ("pytest_asyncio",)

# ---------------------------------------------------------------------------
# Environment variables. These must be set before any familytree module import.
# Uses setdefault so real env vars (CI) are never overridden.
# ---------------------------------------------------------------------------
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SESSION_SECRET", "test-session-secret-minimum-32-characters-long")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOCALE", "en")


# ---------------------------------------------------------------------------
# Sessions and contexts
# ---------------------------------------------------------------------------


@pytest.fixture
def db():
    """Stand-in AsyncSession. Repositories are faked, so only commit/rollback are hit."""
    return AsyncMock()


@pytest.fixture
def make_owner_ctx():
    """Build an owner ApiContext for a given user id."""
    from familytree import schemas
    from familytree.api.context import ApiContext
    from familytree.core.shared_models import SessionRole

    def _make(user_id: int = 1, email: str = "owner@example.com") -> ApiContext:
        user = schemas.User(
            id=user_id,
            email=email,
            full_name="Owner",
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
        return ApiContext(role=SessionRole.OWNER, request_id="test-req", user=user)

    return _make


@pytest.fixture
def make_guest_ctx():
    """Build a guest ApiContext bound to one member of one tree."""
    from familytree.api.context import ApiContext
    from familytree.core.shared_models import SessionRole

    def _make(member_id: int, family_tree_id: int, guest_editor_id: int = 1) -> ApiContext:
        return ApiContext(
            role=SessionRole.GUEST,
            request_id="test-req",
            guest_member_id=member_id,
            guest_family_tree_id=family_tree_id,
            guest_editor_id=guest_editor_id,
        )

    return _make


@pytest.fixture
def owner_ctx(make_owner_ctx):
    """Owner context for user 1."""
    return make_owner_ctx()


# ---------------------------------------------------------------------------
# Real datastore: a fresh SQLite file per test
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def sqlite_engine(tmp_path):
    """Engine over a temporary SQLite file with every table created.

    Built the same way as the application engine, so foreign keys, savepoints
    and rollbacks behave as they do in a deployment.
    """
    from familytree.db.init_db import create_tables
    from familytree.db.session import build_engine

    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'familytree.db'}")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def sqlite_sessions(sqlite_engine):
    """Session factory bound to ``sqlite_engine``."""
    from familytree.db.session import build_session_factory

    return build_session_factory(sqlite_engine)


@pytest_asyncio.fixture
async def sqlite_db(sqlite_sessions):
    """One real AsyncSession for repository tests."""
    async with sqlite_sessions() as session:
        yield session


@pytest_asyncio.fixture
async def sqlite_member(sqlite_db):
    """A committed user, tree owner, tree and root member."""
    from familytree.models import FamilyMember, FamilyTree, TreeOwner, User

    user = User(email="seed@example.com", full_name="Nguyễn Văn Chủ")
    sqlite_db.add(user)
    await sqlite_db.flush()
    tree_owner = TreeOwner(user_id=user.id, full_name=user.full_name, email=user.email)
    sqlite_db.add(tree_owner)
    await sqlite_db.flush()
    tree = FamilyTree(tree_owner_id=tree_owner.id, family_name="Nguyễn")
    sqlite_db.add(tree)
    await sqlite_db.flush()
    member = FamilyMember(
        family_tree_id=tree.id, full_name="Nguyễn Văn Tổ", generation="1", is_root_person=True
    )
    sqlite_db.add(member)
    await sqlite_db.commit()
    return member


# ---------------------------------------------------------------------------
# Shared fake fixtures: individual repository and service fakes
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_user_repo():
    """In-memory UserRepository."""
    from familytree.domains.users.fakes.repository import FakeUserRepository

    return FakeUserRepository()


@pytest.fixture
def fake_tree_owner_repo():
    """In-memory TreeOwnerRepository."""
    from familytree.domains.users.fakes.repository import FakeTreeOwnerRepository

    return FakeTreeOwnerRepository()


@pytest.fixture
def fake_family_tree_repo(fake_tree_owner_repo):
    """In-memory FamilyTreeRepository resolving ownership through the owner fake."""
    from familytree.domains.family_trees.fakes.repository import FakeFamilyTreeRepository

    return FakeFamilyTreeRepository(tree_owner_repo=fake_tree_owner_repo)


@pytest.fixture
def fake_member_repo():
    """In-memory FamilyMemberRepository."""
    from familytree.domains.members.fakes.repository import FakeFamilyMemberRepository

    return FakeFamilyMemberRepository()


@pytest.fixture
def fake_spouse_repo():
    """In-memory SpouseRelationshipRepository."""
    from familytree.domains.life_events.fakes.repository import (
        FakeSpouseRelationshipRepository,
    )

    return FakeSpouseRelationshipRepository()


@pytest.fixture
def fake_passing_repo():
    """In-memory PassingRecordRepository."""
    from familytree.domains.passings.fakes.repository import FakePassingRecordRepository

    return FakePassingRecordRepository()


@pytest.fixture
def fake_achievement_repo():
    """In-memory AchievementRepository."""
    from familytree.domains.achievements.fakes.repository import FakeAchievementRepository

    return FakeAchievementRepository()


@pytest.fixture
def fake_achievement_type_repo():
    """In-memory AchievementTypeRepository."""
    from familytree.domains.achievements.fakes.repository import (
        FakeAchievementTypeRepository,
    )

    return FakeAchievementTypeRepository()


@pytest.fixture
def fake_guest_editor_repo():
    """In-memory GuestEditorRepository."""
    from familytree.domains.guest_access.fakes.repository import FakeGuestEditorRepository

    return FakeGuestEditorRepository()


@pytest.fixture
def fake_change_logger():
    """ChangeLogger fake that keeps every entry in memory."""
    from familytree.domains.change_logs.fakes.service import FakeChangeLogger

    return FakeChangeLogger()


@pytest.fixture
def fake_health_service():
    """HealthService fake that reports ready."""
    from familytree.core.health.fakes import FakeHealthService

    return FakeHealthService()


# ---------------------------------------------------------------------------
# Test container: real services over in-memory repositories
# ---------------------------------------------------------------------------


@pytest.fixture
def test_container(
    fake_user_repo,
    fake_tree_owner_repo,
    fake_family_tree_repo,
    fake_member_repo,
    fake_spouse_repo,
    fake_passing_repo,
    fake_achievement_repo,
    fake_achievement_type_repo,
    fake_guest_editor_repo,
    fake_change_logger,
    fake_health_service,
):
    """A Container whose services run over the repository fakes.

    The guard and services are the real ones, so API tests exercise the
    access policy and domain rules end to end without a database.

    For partial overrides, use container.replace():
        modified = test_container.replace(change_logger=FakeChangeLogger())
    """
    from familytree.core.container import Container
    from familytree.domains.access.guard import AccessGuard
    from familytree.domains.achievements.service import AchievementService
    from familytree.domains.family_trees.service import FamilyTreeService
    from familytree.domains.guest_access.service import GuestAccessService
    from familytree.domains.life_events.service import LifeEventService
    from familytree.domains.members.service import FamilyMemberService
    from familytree.domains.passings.service import PassingRecordService
    from familytree.domains.sessions.service import SessionService
    from familytree.domains.users.service import UserService

    guest_access_service = GuestAccessService(
        guest_editor_repo=fake_guest_editor_repo, member_repo=fake_member_repo
    )
    return Container(
        health=fake_health_service,
        change_logger=fake_change_logger,
        access_guard=AccessGuard(
            family_tree_repo=fake_family_tree_repo, member_repo=fake_member_repo
        ),
        user_service=UserService(
            user_repo=fake_user_repo,
            tree_owner_repo=fake_tree_owner_repo,
            family_tree_repo=fake_family_tree_repo,
        ),
        session_service=SessionService(
            user_repo=fake_user_repo, guest_access_service=guest_access_service
        ),
        guest_access_service=guest_access_service,
        family_tree_service=FamilyTreeService(
            family_tree_repo=fake_family_tree_repo,
            tree_owner_repo=fake_tree_owner_repo,
            user_repo=fake_user_repo,
            change_logger=fake_change_logger,
        ),
        member_service=FamilyMemberService(
            member_repo=fake_member_repo,
            spouse_repo=fake_spouse_repo,
            change_logger=fake_change_logger,
        ),
        life_event_service=LifeEventService(
            spouse_repo=fake_spouse_repo,
            member_repo=fake_member_repo,
            change_logger=fake_change_logger,
        ),
        passing_service=PassingRecordService(
            passing_repo=fake_passing_repo,
            member_repo=fake_member_repo,
            change_logger=fake_change_logger,
        ),
        achievement_service=AchievementService(
            achievement_repo=fake_achievement_repo,
            achievement_type_repo=fake_achievement_type_repo,
            member_repo=fake_member_repo,
            change_logger=fake_change_logger,
        ),
    )
