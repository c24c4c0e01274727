"""Readiness check service."""

import asyncio
import errno
from collections.abc import Sequence

from familytree.core.health.protocols import HealthProbe, HealthServiceProtocol
from familytree.schemas.health import CheckStatus, DependencyCheck, ReadinessResponse


class HealthService(HealthServiceProtocol):
    """Runs every probe with a timeout. Any failing probe makes the app not ready."""

    def __init__(self, *, probes: Sequence[HealthProbe], timeout: float = 5.0) -> None:
        """Initialize with the probes to run."""
        self._probes = probes
        self._timeout = timeout
        self._shutting_down = False

    @property
    def shutting_down(self) -> bool:
        """Whether the application is shutting down."""
        return self._shutting_down

    @shutting_down.setter
    def shutting_down(self, value: bool) -> None:
        self._shutting_down = value

    async def check_readiness(self, *, debug: bool) -> ReadinessResponse:
        """Probe every dependency concurrently.

        While shutting down, probes are skipped and the app reports not ready
        so load balancers drain it.
        """
        if self._shutting_down:
            skipped = DependencyCheck(status=CheckStatus.skipped)
            return ReadinessResponse(
                status="not_ready", checks={p.name: skipped for p in self._probes}
            )

        results = await asyncio.gather(*(self._run_probe(p) for p in self._probes))

        checks: dict[str, DependencyCheck] = {}
        ready = True
        for name, outcome in results:
            if isinstance(outcome, Exception):
                checks[name] = DependencyCheck(
                    status=CheckStatus.down,
                    error=self._sanitize_error(outcome, debug=debug),
                )
                ready = False
            else:
                checks[name] = outcome

        return ReadinessResponse(status="ready" if ready else "not_ready", checks=checks)

    async def _run_probe(self, probe: HealthProbe) -> tuple[str, DependencyCheck | Exception]:
        try:
            result = await asyncio.wait_for(probe.check(), timeout=self._timeout)
        except Exception as exc:
            return probe.name, exc
        return probe.name, result

    @staticmethod
    def _sanitize_error(exc: Exception, *, debug: bool) -> str:
        """Error text safe to return to callers.

        Outside debug mode only a category is returned, never hostnames or
        driver messages.
        """
        if debug:
            return str(exc)
        if isinstance(exc, asyncio.TimeoutError):
            return "timeout"
        os_err = getattr(exc, "errno", None) or (
            getattr(exc.__cause__, "errno", None) if exc.__cause__ else None
        )
        if os_err == errno.ECONNREFUSED:
            return "connection_refused"
        return "unavailable"
