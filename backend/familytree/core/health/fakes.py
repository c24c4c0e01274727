"""Fake health service and probes for tests."""

import asyncio

from familytree.core.health.protocols import HealthProbe, HealthServiceProtocol
from familytree.schemas.health import CheckStatus, DependencyCheck, ReadinessResponse


class FakeHealthService(HealthServiceProtocol):
    """Returns a canned readiness response and records calls."""

    def __init__(self) -> None:
        """Initialize with a ``ready`` response."""
        self._shutting_down = False
        self._response = ReadinessResponse(
            status="ready", checks={"database": DependencyCheck(status=CheckStatus.up)}
        )
        self.check_readiness_calls: list[dict[str, bool]] = []

    @property
    def shutting_down(self) -> bool:
        """Whether the application is shutting down."""
        return self._shutting_down

    @shutting_down.setter
    def shutting_down(self, value: bool) -> None:
        self._shutting_down = value

    async def check_readiness(self, *, debug: bool) -> ReadinessResponse:
        """Return the canned response."""
        self.check_readiness_calls.append({"debug": debug})
        return self._response

    def set_response(self, response: ReadinessResponse) -> None:
        """Replace the canned response."""
        self._response = response


class FakeProbe(HealthProbe):
    """Probe that reports ``up``."""

    def __init__(self, name: str, *, latency_ms: float = 1.0) -> None:
        self._name = name
        self._latency_ms = latency_ms

    @property
    def name(self) -> str:
        return self._name

    async def check(self) -> DependencyCheck:
        return DependencyCheck(status=CheckStatus.up, latency_ms=self._latency_ms)


class FakeFailingProbe(HealthProbe):
    """Probe that raises ``exc``."""

    def __init__(self, name: str, exc: Exception) -> None:
        self._name = name
        self._exc = exc

    @property
    def name(self) -> str:
        return self._name

    async def check(self) -> DependencyCheck:
        raise self._exc


class FakeSlowProbe(HealthProbe):
    """Probe that outlives the service timeout."""

    def __init__(self, name: str, delay: float = 10.0) -> None:
        self._name = name
        self._delay = delay

    @property
    def name(self) -> str:
        return self._name

    async def check(self) -> DependencyCheck:
        await asyncio.sleep(self._delay)
        return DependencyCheck(status=CheckStatus.up)
