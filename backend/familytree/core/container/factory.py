"""Container Factory.

All construction logic lives here. The factory reads settings and builds
the container from the SQLAlchemy-backed repositories.

Design principles:
- Single place for all wiring decisions
- Fail fast: broken wiring crashes at startup, not at 3am
- Repositories are stateless, so one instance is shared by every service
"""

from familytree.adapters.health import DatabaseHealthProbe
from familytree.core.config import Settings
from familytree.core.container.container import Container
from familytree.core.health.service import HealthService
from familytree.db.session import async_engine
from familytree.domains.access.guard import AccessGuard
from familytree.domains.achievements.repository import (
    AchievementRepository,
    AchievementTypeRepository,
)
from familytree.domains.achievements.service import AchievementService
from familytree.domains.change_logs.repository import ChangeLogRepository
from familytree.domains.change_logs.service import ChangeLogger
from familytree.domains.family_trees.repository import FamilyTreeRepository
from familytree.domains.family_trees.service import FamilyTreeService
from familytree.domains.guest_access.repository import GuestEditorRepository
from familytree.domains.guest_access.service import GuestAccessService
from familytree.domains.life_events.repository import SpouseRelationshipRepository
from familytree.domains.life_events.service import LifeEventService
from familytree.domains.members.repository import FamilyMemberRepository
from familytree.domains.members.service import FamilyMemberService
from familytree.domains.passings.repository import PassingRecordRepository
from familytree.domains.passings.service import PassingRecordService
from familytree.domains.sessions.service import SessionService
from familytree.domains.users.repository import TreeOwnerRepository, UserRepository
from familytree.domains.users.service import UserService


def create_container(settings: Settings) -> Container:
    """Build container with all dependencies wired.

    Args:
        settings: Application settings

    Returns:
        Fully constructed Container
    """
    user_repo = UserRepository()
    tree_owner_repo = TreeOwnerRepository()
    family_tree_repo = FamilyTreeRepository()
    member_repo = FamilyMemberRepository()
    spouse_repo = SpouseRelationshipRepository()
    passing_repo = PassingRecordRepository()
    achievement_repo = AchievementRepository()
    achievement_type_repo = AchievementTypeRepository()
    guest_editor_repo = GuestEditorRepository()

    change_logger = ChangeLogger(change_log_repo=ChangeLogRepository())
    guest_access_service = GuestAccessService(
        guest_editor_repo=guest_editor_repo,
        member_repo=member_repo,
    )

    return Container(
        health=_create_health_service(settings),
        change_logger=change_logger,
        access_guard=AccessGuard(
            family_tree_repo=family_tree_repo,
            member_repo=member_repo,
        ),
        user_service=UserService(
            user_repo=user_repo,
            tree_owner_repo=tree_owner_repo,
            family_tree_repo=family_tree_repo,
        ),
        session_service=SessionService(
            user_repo=user_repo,
            guest_access_service=guest_access_service,
        ),
        guest_access_service=guest_access_service,
        family_tree_service=FamilyTreeService(
            family_tree_repo=family_tree_repo,
            tree_owner_repo=tree_owner_repo,
            user_repo=user_repo,
            change_logger=change_logger,
        ),
        member_service=FamilyMemberService(
            member_repo=member_repo,
            spouse_repo=spouse_repo,
            change_logger=change_logger,
        ),
        life_event_service=LifeEventService(
            spouse_repo=spouse_repo,
            member_repo=member_repo,
            change_logger=change_logger,
        ),
        passing_service=PassingRecordService(
            passing_repo=passing_repo,
            member_repo=member_repo,
            change_logger=change_logger,
        ),
        achievement_service=AchievementService(
            achievement_repo=achievement_repo,
            achievement_type_repo=achievement_type_repo,
            member_repo=member_repo,
            change_logger=change_logger,
        ),
    )


def _create_health_service(settings: Settings) -> HealthService:
    """Create the health service with the database probe.

    The datastore is the only dependency, so it is the only probe and it
    gates readiness.
    """
    return HealthService(
        probes=[DatabaseHealthProbe(async_engine)],
        timeout=settings.HEALTH_CHECK_TIMEOUT,
    )
