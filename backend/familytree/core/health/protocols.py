"""Health protocols for dependency injection."""

from typing import Protocol, runtime_checkable

from familytree.schemas.health import DependencyCheck, ReadinessResponse


@runtime_checkable
class HealthProbe(Protocol):
    """A single dependency check.

    Implementations return a ``DependencyCheck`` on success and raise on
    failure. The service applies the timeout and hides error details.
    """

    @property
    def name(self) -> str:
        """Identifier surfaced in the readiness response."""
        ...

    async def check(self) -> DependencyCheck:
        """Probe the dependency and return its status."""
        ...


@runtime_checkable
class HealthServiceProtocol(Protocol):
    """Runs the readiness probes and tracks shutdown."""

    @property
    def shutting_down(self) -> bool:
        """Whether the application is shutting down."""
        ...

    @shutting_down.setter
    def shutting_down(self, value: bool) -> None: ...

    async def check_readiness(self, *, debug: bool) -> ReadinessResponse:
        """Probe every dependency concurrently."""
        ...
