"""Readiness probes and their orchestration."""

from familytree.core.health.protocols import HealthProbe, HealthServiceProtocol
from familytree.core.health.service import HealthService

__all__ = ["HealthProbe", "HealthService", "HealthServiceProtocol"]
