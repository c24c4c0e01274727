"""Dependency Injection Container.

The container is a simple immutable dataclass that holds protocol implementations.
It has no construction logic; that belongs in the factory.

Design principles:
- Container serves, factory builds
- Fail fast: all construction at startup
- Type safety: fields are protocol types
- Testing: construct directly with fakes
"""

from dataclasses import dataclass, replace
from typing import Any

from familytree.core.health.protocols import HealthServiceProtocol
from familytree.domains.access.protocols import AccessGuardProtocol
from familytree.domains.achievements.protocols import AchievementServiceProtocol
from familytree.domains.change_logs.protocols import ChangeLoggerProtocol
from familytree.domains.family_trees.protocols import FamilyTreeServiceProtocol
from familytree.domains.guest_access.protocols import GuestAccessServiceProtocol
from familytree.domains.life_events.protocols import LifeEventServiceProtocol
from familytree.domains.members.protocols import FamilyMemberServiceProtocol
from familytree.domains.passings.protocols import PassingRecordServiceProtocol
from familytree.domains.sessions.protocols import SessionServiceProtocol
from familytree.domains.users.protocols import UserServiceProtocol


@dataclass(frozen=True)
class Container:
    """Immutable container holding all protocol implementations.

    Usage:
        # In FastAPI endpoints (via Inject)
        @router.get("/")
        async def list_trees(
            family_tree_service: FamilyTreeServiceProtocol = Inject(FamilyTreeServiceProtocol),
        ):
            return await family_tree_service.list(db, ctx=ctx)

        # In tests
        container = Container(
            health=FakeHealthService(),
            change_logger=FakeChangeLogger(),
            ...
        )
    """

    # Readiness probes
    health: HealthServiceProtocol

    # Audit trail, written after each committed mutation
    change_logger: ChangeLoggerProtocol

    # Tree visibility and role checks
    access_guard: AccessGuardProtocol

    # Accounts and sessions
    user_service: UserServiceProtocol
    session_service: SessionServiceProtocol
    guest_access_service: GuestAccessServiceProtocol

    # Genealogical records
    family_tree_service: FamilyTreeServiceProtocol
    member_service: FamilyMemberServiceProtocol
    life_event_service: LifeEventServiceProtocol
    passing_service: PassingRecordServiceProtocol
    achievement_service: AchievementServiceProtocol

    def replace(self, **changes: Any) -> "Container":
        """Create a new container with some dependencies replaced.

        Useful for partial overrides in tests:

            modified = container.replace(change_logger=FakeChangeLogger())

        Args:
            **changes: Dependency name -> new implementation

        Returns:
            New Container with specified dependencies replaced
        """
        return replace(self, **changes)
